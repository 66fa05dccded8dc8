"""
渲染輔助

給 UI 把分詞結果轉成可點擊的單字：

- 保留 token 之間的原文間隙（空白、被去掉的標點）
- 兩個漢字 token 之間不插入任何東西
- punctuation token 不可互動
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from polyseg.core.token import Token


def iter_segments(text: str, tokens: Sequence[Token]) -> Iterator[Tuple[str, Optional[Token]]]:
    """
    依序產出 (gap, token)

    gap 是前一個 token 結尾到此 token 開頭之間的原文；
    最後一組為 (結尾 gap, None)，範圍只到最後一個 token 的 end 為止時 gap 為空字串。

    >>> from polyseg.core.token import TokenSource
    >>> toks = [Token("a", 0, 1, "en", TokenSource.FALLBACK), Token("b", 2, 3, "en", TokenSource.FALLBACK)]
    >>> list((gap, t.surface if t else None) for gap, t in iter_segments("a b!", toks))
    [('', 'a'), (' ', 'b'), ('!', None)]
    """
    cursor = 0
    for token in tokens:
        yield text[cursor : token.start], token
        cursor = token.end
    yield text[cursor:], None


def reconstruct(text: str, tokens: Sequence[Token]) -> str:
    """
    以 token 與間隙重新組出 text[tokens[0].start : tokens[-1].end]

    用來驗證 round-trip：結果必須與原文切片完全相同。
    """
    if not tokens:
        return ""
    parts: List[str] = []
    prev_end = tokens[0].start
    for token in tokens:
        parts.append(text[prev_end : token.start])
        parts.append(token.surface)
        prev_end = token.end
    return "".join(parts)


def join_for_display(text: str, tokens: Sequence[Token], whitespace_separator: Optional[str] = None) -> str:
    """
    組出顯示用字串

    - token 之間原本有間隙：原樣保留原文間隙
    - 沒有間隙：直接相接，漢字 token 之間絕不插入空白
    - whitespace_separator 不為 None 時，只含空白的間隙改用它取代（選用）

    >>> from polyseg.core.token import TokenSource
    >>> toks = [Token("I", 0, 1, "ja", TokenSource.SCRIPT_RUN), Token("love", 3, 7, "ja", TokenSource.SCRIPT_RUN)]
    >>> join_for_display("I  love", toks)
    'I  love'
    >>> join_for_display("I  love", toks, whitespace_separator=" | ")
    'I | love'
    """
    parts: List[str] = []
    prev: Optional[Token] = None
    for gap, token in iter_segments(text, tokens):
        if token is None:
            break
        if prev is not None and gap:
            if whitespace_separator is not None and gap.isspace():
                parts.append(whitespace_separator)
            else:
                parts.append(gap)
        parts.append(token.surface)
        prev = token
    return "".join(parts)


def interactive_tokens(tokens: Sequence[Token]) -> List[Token]:
    """可點擊查詢的 token（去掉標點）"""
    return [token for token in tokens if not token.is_punctuation]
