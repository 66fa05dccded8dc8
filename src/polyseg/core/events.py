"""
事件模型（Event Model）

分詞引擎不直接輸出到 stdout。
若需要知道「這次走了哪個策略、在哪一層降級」，請使用事件回呼（event handler）。

設計原則：
- 允許降級，但不允許「默默」降級：每一次 fallback 都會發出事件並記錄 WARNING。
- 回呼本身拋出的例外只會被記錄，不會影響分詞結果。
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class TokenizeEvent(TypedDict, total=False):
    type: Literal["strategy_selected", "degraded", "fallback", "offset_dropped", "cache_hit"]
    trace_id: str
    strategy: str
    language: str

    # degraded / fallback
    failure_kind: str
    next_strategy: str
    detail: str
    exception_type: str
    exception_message: str

    # offset_dropped
    surface: str


TokenizeEventHandler = Callable[[TokenizeEvent], None]
