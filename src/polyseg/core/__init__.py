"""
核心抽象層

定義語言無關的資料結構、結果型別與策略介面。
"""

from .engine_interface import SegmenterEngine
from .events import TokenizeEvent, TokenizeEventHandler
from .exceptions import LexiconError, PolysegError, StrategyUnavailableError, TokenizeTimeoutError
from .result import FailureKind, SegmentResult
from .token import ScriptFlag, Token, TokenDraft, TokenSource, script_flags_for
from .tokenizer_interface import Tokenizer, normalize_language_tag

__all__ = [
    "SegmenterEngine",
    "Tokenizer",
    "normalize_language_tag",
    "Token",
    "TokenDraft",
    "TokenSource",
    "ScriptFlag",
    "script_flags_for",
    "SegmentResult",
    "FailureKind",
    "TokenizeEvent",
    "TokenizeEventHandler",
    "PolysegError",
    "StrategyUnavailableError",
    "LexiconError",
    "TokenizeTimeoutError",
]
