"""
測試用的假元件

讓整個測試套件不需要安裝 fugashi / jieba 也能執行。
"""

import importlib.util
from typing import Callable, Iterable, List, Optional

from polyseg.core.exceptions import LexiconError, StrategyUnavailableError
from polyseg.core.protocols import Morpheme

HAS_JAPANESE_DEPS = importlib.util.find_spec("fugashi") is not None
HAS_CHINESE_DEPS = importlib.util.find_spec("jieba") is not None


class FakeAnalyzer:
    """回傳開頭最長的已知詞；都不認得時回傳 None"""

    def __init__(self, words: Iterable[str] = (), readings: Optional[dict] = None):
        self.words = sorted(set(words), key=len, reverse=True)
        self.readings = readings or {}
        self.calls: List[str] = []

    def analyze_one(self, text: str) -> Optional[Morpheme]:
        self.calls.append(text)
        for word in self.words:
            if text.startswith(word):
                return Morpheme(word, self.readings.get(word), "名詞")
        return None


class RaisingAnalyzer:
    def __init__(self, exc: BaseException):
        self.exc = exc
        self.calls = 0

    def analyze_one(self, text: str) -> Optional[Morpheme]:
        self.calls += 1
        raise self.exc


class FakeStatisticalEngine:
    """以固定函式模擬 jieba.lcut"""

    def __init__(self, fn: Callable[[str], List[str]]):
        self.fn = fn
        self.calls = 0

    def segment_all(self, text: str) -> List[str]:
        self.calls += 1
        return self.fn(text)


class BrokenLexicon:
    def __init__(self):
        self.calls = 0

    def lookup(self, candidate: str):
        self.calls += 1
        raise LexiconError("database is locked")


def unavailable(resource: str = "fugashi") -> StrategyUnavailableError:
    return StrategyUnavailableError(resource, f"{resource} 無法使用")


# 性質測試用的語料：空字串、純空白、純標點、三種以上文字系統混合、重複詞、組合字元
TRICKY_CORPUS = [
    "",
    " ",
    "\t\n  ",
    "!!!",
    "。、！？",
    "I love 猫と犬。",
    "Hello, world! Hello, world!",
    "東京タワーはどこですか？ Where is it? 도쿄타워",
    "猫猫猫 猫",
    "123 ４５６ 3.14",
    "naïve café — résumé",
    "שלום עולם مرحبا",
    "नमस्ते दुनिया",
    "สวัสดีครับ",
    "我爱北京天安门，天安门上太阳升。",
    "中文English混合日本語テキスト",
    "😀 emoji 🎉 test",
    "áb́",
    "ー・ー",
    "'quoted' \"double\" (paren) [bracket]",
]
