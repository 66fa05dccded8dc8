"""
Offset 校正模組 (Offset Reconciler)

分詞策略可能只回傳 surface 字串（外部引擎）、或在子字串/重排後的視圖上運作，
這裡負責把每個 surface 對回原始文本中的 [start, end)。

規則:
- 從游標往後搜尋；找不到時再從文本開頭搜尋一次（locate）
- 游標單調前進，重複出現的相同 surface 會依序對到不同的出現位置
- 找不到、或只能找到會與已放置 token 重疊的位置時，回傳 None（該 token 會被丟棄，
  絕不以猜測的 offset 輸出）
"""

from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from polyseg.core.token import TokenDraft


class Span(NamedTuple):
    start: int
    end: int


def locate(text: str, surface: str, search_from: int = 0) -> Optional[Span]:
    """
    在 text 中尋找 surface

    Args:
        text: 原始文本
        surface: 要尋找的字串
        search_from: 起始搜尋位置

    Returns:
        Span 或 None（完全找不到）
    """
    if not surface or not text:
        return None

    search_from = max(0, min(search_from, len(text)))
    start = text.find(surface, search_from)
    if start == -1 and search_from > 0:
        start = text.find(surface)
    if start == -1:
        return None
    return Span(start, start + len(surface))


class OffsetReconciler:
    """
    在一整串 token 上維持單調前進的游標

    使用範例:
        >>> reconciler = OffsetReconciler("a b a")
        >>> reconciler.place("a"), reconciler.place("a")
        (Span(start=0, end=1), Span(start=4, end=5))
    """

    def __init__(self, text: str, cursor: int = 0):
        self.text = text
        self.cursor = cursor
        self.dropped: List[str] = []

    def place(self, surface: str, hint: Optional[int] = None) -> Optional[Span]:
        """
        放置一個 token

        Args:
            surface: token 文字
            hint: 策略自行回報的起始 offset；若確實對得上且不重疊則直接採用

        Returns:
            Span，或 None（無法定位，游標不動）
        """
        if not surface:
            return None

        if hint is not None and hint >= self.cursor and self.text.startswith(surface, hint):
            span = Span(hint, hint + len(surface))
        else:
            span = locate(self.text, surface, self.cursor)
            if span is not None and span.start < self.cursor:
                # 只在游標之前找得到：放置會與前面的 token 重疊
                span = None

        if span is None:
            self.dropped.append(surface)
            return None

        self.cursor = span.end
        return span

    def place_all(self, drafts: Iterable[TokenDraft]) -> Iterator[Tuple[TokenDraft, Span]]:
        """依序放置草稿，只產出成功定位的 (draft, span)"""
        for draft in drafts:
            span = self.place(draft.surface, draft.start)
            if span is not None:
                yield draft, span
