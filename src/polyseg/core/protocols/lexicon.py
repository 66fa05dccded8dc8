"""
Lexicon Protocol

字典分詞器需要的最小介面：以確切的 surface form 或讀音查詢最佳詞條。
"""

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from polyseg.languages.japanese.lexicon import LexiconEntry


@runtime_checkable
class LexiconProtocol(Protocol):
    def lookup(self, candidate: str) -> Optional["LexiconEntry"]:
        """回傳 surface form 或讀音完全等於 candidate 的最佳詞條，沒有則回傳 None"""
        ...
