"""
日文形態分析器 (Morphological Analyzer)

字典查不到時的第二層：只取輸入開頭的第一個詞素。
"""

from typing import Any, Optional

from polyseg.core.protocols import Morpheme
from polyseg.utils.lazy_imports import JAPANESE_INSTALL_HINT, LazyResource
from polyseg.utils.logger import get_logger

from .utils import create_fugashi_tagger, extract_part_of_speech, extract_reading

logger = get_logger("japanese.analyzer")


class FugashiAnalyzer:
    """
    以 fugashi 實作 MorphologicalAnalyzerProtocol

    Args:
        tagger: 共用的 LazyResource handle；未提供時自行建立一個
    """

    def __init__(self, tagger: Optional[LazyResource[Any]] = None):
        self._tagger = tagger or LazyResource("fugashi", create_fugashi_tagger, JAPANESE_INSTALL_HINT)

    @property
    def resource(self) -> LazyResource[Any]:
        return self._tagger

    def analyze_one(self, text: str) -> Optional[Morpheme]:
        """
        分析 text 開頭的第一個詞素

        Raises:
            StrategyUnavailableError: Tagger 無法初始化
        """
        if not text:
            return None

        tagger = self._tagger.get()
        for word in tagger(text):
            surface = word.surface
            if not surface:
                continue
            return Morpheme(surface, extract_reading(word), extract_part_of_speech(word))
        return None
