"""
外部引擎 Protocol

- MorphologicalAnalyzerProtocol: 只分析「開頭的第一個詞素」
- StatisticalSegmenterProtocol: 對整段文字做統計分詞，回傳有序的 surface 列表
"""

from typing import List, NamedTuple, Optional, Protocol, runtime_checkable


class Morpheme(NamedTuple):
    surface: str
    reading: Optional[str] = None
    part_of_speech: Optional[str] = None


@runtime_checkable
class MorphologicalAnalyzerProtocol(Protocol):
    def analyze_one(self, text: str) -> Optional[Morpheme]:
        """分析 text 開頭的第一個詞素；無法解析任何前綴時回傳 None"""
        ...


@runtime_checkable
class StatisticalSegmenterProtocol(Protocol):
    def segment_all(self, text: str) -> List[str]:
        """回傳涵蓋整段輸入的有序 surface 列表；引擎不可用時拋例外"""
        ...
