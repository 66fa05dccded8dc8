"""
分詞引擎抽象基類

定義分詞引擎必須實作的介面。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from polyseg.utils.logger import TimingContext, get_logger, setup_logger

if TYPE_CHECKING:
    from polyseg.core.token import Token


class SegmenterEngine(ABC):
    """
    分詞引擎抽象基類 (Abstract Base Class)

    職責:
    - 持有延遲初始化的重量級資源（形態分析器、統計分詞引擎）與詞典
    - 持有結果快取與配置
    - 提供日誌與計時功能

    生命週期:
    - Engine 應在應用程式啟動時建立一次，之後在多個執行緒間共用
    """

    _engine_name: str = "base"

    def _init_logger(
        self,
        verbose: bool = False,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        self._verbose = verbose
        self._timing_callback = on_timing

        if verbose:
            setup_logger(level=logging.DEBUG)

        self._logger = get_logger(f"engine.{self._engine_name}")

    def _log_timing(self, operation: str) -> TimingContext:
        return TimingContext(
            operation=operation,
            logger=self._logger,
            level=logging.DEBUG,
            callback=self._timing_callback,
        )

    @abstractmethod
    def tokenize(self, text: str, language: str, options: Any = None) -> List["Token"]:
        pass

    @abstractmethod
    def is_initialized(self) -> bool:
        pass

    @abstractmethod
    def get_backend_stats(self) -> Dict[str, Any]:
        pass
