"""
工具模組

提供日誌、計時、延遲導入、offset 校正與結果快取等通用工具。
"""

from .lazy_imports import (
    CHINESE_INSTALL_HINT,
    JAPANESE_INSTALL_HINT,
    LazyResource,
    check_chinese_dependencies,
    check_japanese_dependencies,
    is_chinese_available,
    is_japanese_available,
)
from .logger import (
    TimingContext,
    enable_debug_logging,
    enable_timing_logging,
    get_logger,
    log_timing,
    setup_logger,
)

__all__ = [
    # 日誌工具
    "get_logger",
    "setup_logger",
    "log_timing",
    "TimingContext",
    "enable_debug_logging",
    "enable_timing_logging",

    # 依賴檢查
    "LazyResource",
    "is_chinese_available",
    "is_japanese_available",
    "check_chinese_dependencies",
    "check_japanese_dependencies",
    "CHINESE_INSTALL_HINT",
    "JAPANESE_INSTALL_HINT",
]
