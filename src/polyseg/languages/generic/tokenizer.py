"""
通用分詞器

- WhitespaceTokenizer: 預設分詞器（Fallback Word Splitter），任何語言、任何輸入都會成功
- CharacterTokenizer: 不以空白分詞、又沒有專用引擎的語言（例如泰文），逐字輸出
"""

import unicodedata
from typing import FrozenSet, Iterable, List

from polyseg.core.result import SegmentResult
from polyseg.core.token import TokenDraft, TokenSource
from polyseg.core.tokenizer_interface import Tokenizer
from polyseg.router.script_classifier import is_punctuation, is_word_char
from polyseg.utils.offsets import OffsetReconciler


def trim_word(word: str) -> str:
    """
    去除前後非字母、非數字的字元

    >>> trim_word('"hello,"')
    'hello'
    >>> trim_word("---")
    ''
    """
    start = 0
    end = len(word)
    while start < end and not is_word_char(word[start]):
        start += 1
    while end > start and not is_word_char(word[end - 1]):
        end -= 1
    return word[start:end]


class WhitespaceTokenizer(Tokenizer):
    """
    空白分詞器

    以空白切分，去掉每個詞前後的標點，再由 OffsetReconciler 對回原文。
    被去掉的字元留在 token 之間的間隙裡，不會遺失。
    只剩標點的「詞」不輸出。
    """

    name = "whitespace"

    def __init__(self, languages: Iterable[str] = ()):
        self.languages: FrozenSet[str] = frozenset(languages)

    def supports(self, language: str) -> bool:
        # 預設分詞器接受所有語言
        return True

    def segment(self, text: str, language: str) -> SegmentResult:
        reconciler = OffsetReconciler(text)
        drafts: List[TokenDraft] = []
        for word in text.split():
            surface = trim_word(word)
            if not surface:
                continue
            span = reconciler.place(surface)
            if span is not None:
                drafts.append(TokenDraft(surface, TokenSource.FALLBACK, start=span.start))
        return SegmentResult.ok(drafts)


class CharacterTokenizer(Tokenizer):
    """
    逐字分詞器

    每個非空白字元輸出一個 token；標點字元標記為 punctuation。
    結合字元（例如泰文母音符號）併入前一個 token，避免切出孤立的符號。
    """

    name = "character"

    def __init__(self, languages: Iterable[str] = ("th",)):
        self.languages = frozenset(languages)

    def segment(self, text: str, language: str) -> SegmentResult:
        drafts: List[TokenDraft] = []
        for i, char in enumerate(text):
            if char.isspace():
                continue
            if is_punctuation(char):
                drafts.append(TokenDraft(char, TokenSource.PUNCTUATION, start=i))
                continue
            prev = drafts[-1] if drafts else None
            if (
                prev is not None
                and prev.source is TokenSource.SCRIPT_RUN
                and prev.end == i
                and unicodedata.category(char).startswith("M")
            ):
                prev.surface += char
                continue
            drafts.append(TokenDraft(char, TokenSource.SCRIPT_RUN, start=i))
        return SegmentResult.ok(drafts)
