"""
分詞結果統計

用於分析字典覆蓋率：有多少 token 來自詞典、多少要靠形態分析器補上。
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from polyseg.core.token import Token, TokenSource


def get_token_stats(tokens: Sequence[Token]) -> Dict[str, Any]:
    """
    取得 token 統計

    Returns:
        Dict: total, by_source（各來源數量）, dictionary_percentage,
              average_frequency（字典 token 的平均詞頻）
    """
    counts = Counter(token.source.value for token in tokens)
    dictionary = [t for t in tokens if t.source is TokenSource.DICTIONARY]
    total = len(tokens)
    return {
        "total": total,
        "by_source": {source.value: counts.get(source.value, 0) for source in TokenSource},
        "dictionary_percentage": round(len(dictionary) / total * 100) if total else 0,
        "average_frequency": (
            round(sum(t.frequency_rank or 0 for t in dictionary) / len(dictionary)) if dictionary else 0
        ),
    }


def filter_by_frequency(tokens: Sequence[Token], min_rank: int, max_rank: Optional[int] = None) -> List[Token]:
    """保留 min_rank <= frequency_rank (<= max_rank) 的 token；沒有詞頻的 token 一律排除"""
    result = []
    for token in tokens:
        if token.frequency_rank is None or token.frequency_rank < min_rank:
            continue
        if max_rank is not None and token.frequency_rank > max_rank:
            continue
        result.append(token)
    return result


def get_unknown_words(tokens: Sequence[Token]) -> List[Token]:
    """詞典沒有收錄、由形態分析器切出的詞"""
    return [t for t in tokens if t.source is TokenSource.MORPHOLOGICAL_ANALYZER]


def get_known_words(tokens: Sequence[Token]) -> List[Token]:
    return [t for t in tokens if t.source is TokenSource.DICTIONARY]
