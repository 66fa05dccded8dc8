"""
Offset 校正測試
"""

from polyseg.core.token import TokenDraft, TokenSource
from polyseg.utils.offsets import OffsetReconciler, Span, locate


class TestLocate:
    def test_forward_search(self):
        assert locate("abcabc", "abc", 1) == Span(3, 6)

    def test_retry_from_start(self):
        """游標之後找不到時，從頭再找一次"""
        assert locate("abcdef", "abc", 4) == Span(0, 3)

    def test_not_found(self):
        assert locate("abc", "xyz") is None
        assert locate("abc", "") is None
        assert locate("", "a") is None


class TestOffsetReconciler:
    def test_repeated_surfaces_map_to_distinct_occurrences(self):
        reconciler = OffsetReconciler("猫 猫 猫")
        spans = [reconciler.place("猫") for _ in range(3)]
        assert spans == [Span(0, 1), Span(2, 3), Span(4, 5)]

    def test_valid_hint_is_used(self):
        reconciler = OffsetReconciler("ab ab")
        assert reconciler.place("ab", hint=3) == Span(3, 5)

    def test_wrong_hint_falls_back_to_search(self):
        reconciler = OffsetReconciler("xx ab")
        assert reconciler.place("ab", hint=0) == Span(3, 5)

    def test_hint_behind_cursor_is_ignored(self):
        reconciler = OffsetReconciler("ab ab")
        reconciler.place("ab")
        assert reconciler.place("ab", hint=0) == Span(3, 5)

    def test_unlocatable_is_dropped(self):
        """找不到的 surface 回傳 None，游標不動"""
        reconciler = OffsetReconciler("hello world")
        reconciler.place("hello")
        assert reconciler.place("ｈｅｌｌｏ") is None
        assert reconciler.dropped == ["ｈｅｌｌｏ"]
        assert reconciler.cursor == 5

    def test_only_before_cursor_is_dropped(self):
        """只能對到已放置區域時丟棄（避免重疊）"""
        reconciler = OffsetReconciler("ab cd")
        reconciler.place("cd")
        assert reconciler.place("ab") is None

    def test_place_all(self):
        reconciler = OffsetReconciler("a b c")
        drafts = [TokenDraft(s, TokenSource.FALLBACK) for s in ("a", "zz", "c")]
        placed = [(d.surface, span) for d, span in reconciler.place_all(drafts)]
        assert placed == [("a", Span(0, 1)), ("c", Span(4, 5))]
        assert reconciler.dropped == ["zz"]
