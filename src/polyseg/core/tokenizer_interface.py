"""
分詞策略抽象基類

所有分詞策略（中文統計分詞、日文字典分詞、預設空白分詞…）都實作同一個介面：

- supports(language): 是否處理此語言代碼
- segment(text, language): 回傳 SegmentResult（草稿 + 失敗種類），不應拋例外

UnifiedTokenizer 依註冊順序挑選第一個 supports() 為 True 的策略。
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable

from .result import SegmentResult


def normalize_language_tag(language: str) -> str:
    """
    正規化語言代碼，只保留主要子標籤

    >>> normalize_language_tag("ja-JP")
    'ja'
    >>> normalize_language_tag("zh_Hant")
    'zh'
    >>> normalize_language_tag("  EN ")
    'en'
    """
    if not language:
        return ""
    return str(language).strip().lower().replace("_", "-").split("-", 1)[0]


class Tokenizer(ABC):
    """
    分詞策略抽象基類

    子類別設定 name 與 languages 即可使用預設的 supports()；
    需要更複雜的判斷時覆寫 supports()。
    """

    name: str = "base"
    languages: FrozenSet[str] = frozenset()

    def supports(self, language: str) -> bool:
        return normalize_language_tag(language) in self.languages

    @abstractmethod
    def segment(self, text: str, language: str) -> SegmentResult:
        """
        對 text 分詞

        Args:
            text: 原始輸入（非空）
            language: 呼叫端指定的語言代碼（已通過 supports 檢查）

        Returns:
            SegmentResult: drafts 的 offset 若有提供，必須是相對於 text 的座標
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, languages={sorted(self.languages)})"


def describe(tokenizers: Iterable[Tokenizer]) -> list:
    """列出策略名稱（日誌用）"""
    return [t.name for t in tokenizers]
