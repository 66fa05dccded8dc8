"""
日文字典分詞配置模組

定義最長匹配分詞器的候選長度與否決規則。
這些門檻是經驗調整的結果，只適用於日文，請視為可調整的配置而非保證正確的演算法。
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from polyseg.router.script_classifier import CJK_PUNCTUATION

# 平假名（U+3041 - U+3096）
HIRAGANA_CHARS = frozenset(chr(code) for code in range(0x3041, 0x3097))


@dataclass
class JapaneseSegmenterConfig:
    """
    日文字典分詞配置

    Attributes:
        max_candidate_length: 每個位置嘗試的最長候選長度
        skip_single_candidates: 不做字典查詢的單字元候選（常見助詞），
            交給形態分析器處理
        continuation_chars: 單字元命中後，若下一個字元屬於此集合，
            代表該字元很可能是更長單字的一部分，否決此命中
        short_match_max_length: 「短命中」的長度上限
        short_match_min_remaining: 剩餘字元數 >= 此值時否決短命中；None 表示停用
            （由長到短的候選順序已經讓長詞優先）
        punctuation: 直接輸出為 punctuation token 的字元
        analyzer_window: 交給形態分析器的最大字元數；None 表示整段剩餘文字
    """

    max_candidate_length: int = 10
    skip_single_candidates: FrozenSet[str] = frozenset("はがをにでへとからまでよりのやかわ")
    continuation_chars: FrozenSet[str] = HIRAGANA_CHARS
    short_match_max_length: int = 2
    short_match_min_remaining: Optional[int] = None
    punctuation: FrozenSet[str] = field(default_factory=lambda: CJK_PUNCTUATION)
    analyzer_window: Optional[int] = 64

    def __post_init__(self):
        if self.max_candidate_length < 1:
            raise ValueError(f"max_candidate_length must be >= 1, got {self.max_candidate_length}")
        if self.analyzer_window is not None and self.analyzer_window < 1:
            raise ValueError(f"analyzer_window must be >= 1, got {self.analyzer_window}")

    @classmethod
    def original_thresholds(cls) -> "JapaneseSegmenterConfig":
        """舊版行為：剩餘超過 3 個字元時否決長度 <= 2 的命中"""
        return cls(short_match_min_remaining=4)
