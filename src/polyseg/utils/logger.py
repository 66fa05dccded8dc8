"""
日誌與計時工具

所有 logger 都掛在 "polyseg" 命名空間下，預設不主動輸出，
讓使用者可以透過標準 logging 控制:

    import logging
    logging.getLogger("polyseg").setLevel(logging.DEBUG)

或直接:

    from polyseg import enable_debug_logging
    enable_debug_logging()
"""

import functools
import logging
import time
from typing import Any, Callable, Optional

ROOT_LOGGER_NAME = "polyseg"

_DEFAULT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

# 預設掛 NullHandler，避免函式庫在使用者未設定時輸出
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得 polyseg 命名空間下的 logger

    Args:
        name: 子 logger 名稱，例如 "tokenizer.unified"；
              若已經是 "polyseg." 開頭則直接使用

    Returns:
        logging.Logger
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = _DEFAULT_FORMAT) -> logging.Logger:
    """
    為 polyseg 根 logger 安裝單一 StreamHandler

    重複呼叫不會疊加 handler，只會更新等級。
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    has_stream = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "_polyseg", False)
        for h in logger.handlers
    )
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler._polyseg = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    for h in logger.handlers:
        if getattr(h, "_polyseg", False):
            h.setLevel(level)
    return logger


def enable_debug_logging() -> logging.Logger:
    """開啟 DEBUG 日誌（包含各層的分詞細節）"""
    return setup_logger(level=logging.DEBUG)


def enable_timing_logging() -> logging.Logger:
    """只開啟計時相關日誌"""
    setup_logger(level=logging.INFO)
    timing_logger = get_logger("timing")
    timing_logger.setLevel(logging.DEBUG)
    return timing_logger


class TimingContext:
    """
    計時上下文管理器

    使用範例:
        with TimingContext("JapaneseTokenizer.segment", logger):
            ...

    離開時以指定等級記錄耗時，並呼叫 callback(operation, elapsed_seconds)。
    callback 本身拋出的例外會被記錄但不會中斷主流程。
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger("timing")
        self.level = level
        self.callback = callback
        self.elapsed: float = 0.0
        self._start: float = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        if self.logger.isEnabledFor(self.level):
            self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms")
        if self.callback is not None:
            try:
                self.callback(self.operation, self.elapsed)
            except Exception:
                self.logger.exception("on_timing 回呼執行失敗")
        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG) -> Callable:
    """
    計時裝飾器

    Args:
        operation: 記錄用的操作名稱，預設為函式的 __qualname__
        level: 日誌等級
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with TimingContext(name, get_logger("timing"), level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
