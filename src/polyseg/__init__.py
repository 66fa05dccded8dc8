"""
polyseg - 多語言分詞引擎 (Multilingual Lexical Segmentation Engine)

核心概念：
- 輸入任意語言的文字與語言代碼，輸出帶有原文 offset 的 token 序列
- 依語言挑選分詞策略（中文 jieba、日文字典最長匹配 + fugashi、泰文逐字、其他以空白切分）
- 任何一層失敗都會降級到下一層，tokenize() 永遠不會拋例外
- token 與原文間隙可以完整還原輸入 (round-trip)

官方入口（穩定 API）：
- `polyseg.tokenize`
- `polyseg.tokenize_async`
- `polyseg.TokenizerEngine`
"""

# =============================================================================
# 模組層級 API（官方入口）
# =============================================================================
from polyseg.api import get_default_engine, set_default_engine, shutdown, tokenize, tokenize_async

# =============================================================================
# Engine 層
# =============================================================================
from polyseg.config import DEFAULT_CONFIG, SegmenterConfig
from polyseg.engine import TokenizerEngine
from polyseg.languages.japanese.config import JapaneseSegmenterConfig
from polyseg.tokenization import TokenizeOptions, UnifiedTokenizer

# =============================================================================
# 資料結構
# =============================================================================
from polyseg.core.exceptions import LexiconError, PolysegError, StrategyUnavailableError, TokenizeTimeoutError
from polyseg.core.token import ScriptFlag, Token, TokenSource

# =============================================================================
# 日誌工具
# =============================================================================
from polyseg.utils.logger import enable_debug_logging, enable_timing_logging, get_logger

# =============================================================================
# 依賴檢查工具
# =============================================================================
from polyseg.utils.lazy_imports import (
    check_chinese_dependencies,
    check_japanese_dependencies,
    is_chinese_available,
    is_japanese_available,
)

# =============================================================================
# 文字系統偵測
# =============================================================================
from polyseg.router.script_classifier import contains_kana, contains_logographic

__all__ = [
    # API
    "tokenize",
    "tokenize_async",
    "get_default_engine",
    "set_default_engine",
    "shutdown",
    # Engine
    "TokenizerEngine",
    "UnifiedTokenizer",
    "TokenizeOptions",
    "SegmenterConfig",
    "JapaneseSegmenterConfig",
    "DEFAULT_CONFIG",
    # Data
    "Token",
    "TokenSource",
    "ScriptFlag",
    # Errors
    "PolysegError",
    "StrategyUnavailableError",
    "LexiconError",
    "TokenizeTimeoutError",
    # Logging
    "get_logger",
    "enable_debug_logging",
    "enable_timing_logging",
    # Dependency checks
    "is_chinese_available",
    "is_japanese_available",
    "check_chinese_dependencies",
    "check_japanese_dependencies",
    # Script detection
    "contains_kana",
    "contains_logographic",
]

__version__ = "0.1.0"
