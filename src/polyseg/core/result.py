"""
分層結果型別 (Tiered Result)

每個分詞策略都回傳 SegmentResult，而不是把例外一路拋到 Dispatcher：

- failure is None                 -> 正常完成
- drafts 非空且 failure 有值      -> 局部降級（例如分析器失效，改用單字元輸出），結果可用
- drafts is None                  -> 整層失敗，由 UnifiedTokenizer 走下一層
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .token import TokenDraft


class FailureKind(Enum):
    STRATEGY_UNAVAILABLE = "strategy_unavailable"  # 外部引擎初始化失敗
    NO_MATCH = "no_match"  # 某位置無法由任何特定策略解析
    OFFSET_UNLOCATABLE = "offset_unlocatable"  # surface 在原文中找不到
    STRATEGY_ERROR = "strategy_error"  # 策略執行期拋出未預期的例外


@dataclass
class SegmentResult:
    drafts: Optional[List[TokenDraft]]
    failure: Optional[FailureKind] = None
    detail: str = ""
    # 本層內部發生的降級（可能不只一種）
    degradations: List[FailureKind] = field(default_factory=list)

    @classmethod
    def ok(cls, drafts: List[TokenDraft]) -> "SegmentResult":
        return cls(drafts=drafts)

    @classmethod
    def degraded(cls, drafts: List[TokenDraft], failure: FailureKind, detail: str = "") -> "SegmentResult":
        return cls(drafts=drafts, failure=failure, detail=detail, degradations=[failure])

    @classmethod
    def failed(cls, failure: FailureKind, detail: str = "") -> "SegmentResult":
        return cls(drafts=None, failure=failure, detail=detail)

    @property
    def is_failed(self) -> bool:
        return self.drafts is None

    @property
    def is_degraded(self) -> bool:
        return self.drafts is not None and (self.failure is not None or bool(self.degradations))
