"""
延遲載入 (Lazy Loading) 與依賴檢查

重量級外部引擎（fugashi/MeCab、jieba）只在第一次實際使用時初始化，
且整個行程最多初始化一次。

與「模組層級 global 單例」不同，LazyResource 是一個明確的 handle，
由 TokenizerEngine 建立後注入各分詞策略，測試時可以直接換成假的 handle。
"""

import importlib.util
import threading
from typing import Callable, Generic, Optional, TypeVar

from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.utils.logger import TimingContext, get_logger

logger = get_logger("lazy")

T = TypeVar("T")

JAPANESE_INSTALL_HINT = (
    "缺少日文依賴。請執行:\n"
    "  pip install \"polyseg[ja]\"\n"
    "或安裝完整版本:\n"
    "  pip install \"polyseg[all]\""
)

CHINESE_INSTALL_HINT = (
    "缺少中文依賴。請執行:\n"
    "  pip install \"polyseg[zh]\"\n"
    "或安裝完整版本:\n"
    "  pip install \"polyseg[all]\""
)


class LazyResource(Generic[T]):
    """
    以鎖保護、最多初始化一次的延遲資源

    - get(): 第一次呼叫時執行 factory（double-checked locking），之後直接回傳
    - factory 失敗會被記住，後續呼叫直接拋 StrategyUnavailableError，
      不會每個請求都重試一次昂貴的初始化
    - reset(): 清空狀態（測試用）
    """

    def __init__(self, name: str, factory: Callable[[], T], install_hint: str = ""):
        self.name = name
        self._factory = factory
        self._install_hint = install_hint
        self._lock = threading.Lock()
        self._value: Optional[T] = None
        self._initialized = False
        self._error: Optional[BaseException] = None
        self.init_seconds: Optional[float] = None

    def get(self) -> T:
        if self._initialized:
            return self._value  # type: ignore[return-value]
        if self._error is not None:
            raise self._unavailable()

        with self._lock:
            if self._initialized:
                return self._value  # type: ignore[return-value]
            if self._error is not None:
                raise self._unavailable()

            try:
                with TimingContext(f"LazyResource.init({self.name})", logger) as timing:
                    value = self._factory()
            except Exception as exc:
                self._error = exc
                logger.warning(f"{self.name} 初始化失敗: {type(exc).__name__}: {exc}")
                raise self._unavailable() from exc

            self._value = value
            self.init_seconds = timing.elapsed
            self._initialized = True
            logger.info(f"{self.name} initialized ({timing.elapsed * 1000:.1f}ms)")
            return value

    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def failed(self) -> bool:
        return self._error is not None

    def reset(self) -> None:
        with self._lock:
            self._value = None
            self._initialized = False
            self._error = None
            self.init_seconds = None

    def _unavailable(self) -> StrategyUnavailableError:
        err = self._error
        message = f"{self.name} 無法使用: {type(err).__name__}: {err}" if err else ""
        return StrategyUnavailableError(self.name, message, self._install_hint)

    def __repr__(self) -> str:
        state = "ready" if self._initialized else ("failed" if self._error else "pending")
        return f"LazyResource({self.name!r}, {state})"


def is_japanese_available() -> bool:
    """檢查 fugashi 與其字典是否可匯入"""
    return importlib.util.find_spec("fugashi") is not None


def is_chinese_available() -> bool:
    """檢查 jieba 是否可匯入"""
    return importlib.util.find_spec("jieba") is not None


def check_japanese_dependencies() -> None:
    if not is_japanese_available():
        raise StrategyUnavailableError("fugashi", "找不到 fugashi", JAPANESE_INSTALL_HINT)


def check_chinese_dependencies() -> None:
    if not is_chinese_available():
        raise StrategyUnavailableError("jieba", "找不到 jieba", CHINESE_INSTALL_HINT)
