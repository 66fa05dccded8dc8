"""
全域配置模組

提供統一的配置類別，控制日誌、計時、快取與各語言分詞器的行為。

使用方式:
    from polyseg import TokenizerEngine

    # 簡單開啟 verbose 模式
    engine = TokenizerEngine(verbose=True)

    # 進階: 使用標準 logging 控制
    import logging
    logging.getLogger("polyseg").setLevel(logging.DEBUG)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .languages.japanese.config import JapaneseSegmenterConfig
from .utils.cache import DEFAULT_CAPACITY
from .utils.logger import setup_logger


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)
    else:
        # 不主動設定，讓使用者可以透過標準 logging 控制
        pass


@dataclass
class SegmenterConfig:
    """
    分詞引擎配置類別 (進階用途)

    一般使用者只需要使用 verbose=True 即可。

    屬性:
        verbose: 是否開啟詳細日誌
        on_timing: 計時回呼函數 (operation: str, elapsed: float) -> None
        enable_cache: 是否快取分詞結果
        cache_capacity: 快取容量
        cache_ttl: 快取存活秒數，None 表示不過期
        mixed_script_language: 日文文本中夾雜的非日文片段所使用的語言標記
        japanese: 日文字典分詞配置
        jieba_hmm: jieba 是否啟用 HMM 新詞發現
        jieba_dictionary: jieba 自訂主詞典路徑
        fugashi_args: 傳給 MeCab 的參數字串

    使用範例:
        def my_callback(op, elapsed):
            print(f"{op} took {elapsed:.3f}s")

        engine = TokenizerEngine(config=SegmenterConfig(verbose=True, on_timing=my_callback))
    """

    # 日誌控制
    verbose: bool = False

    # 計時回呼
    on_timing: Optional[Callable[[str, float], None]] = None

    # 快取
    enable_cache: bool = True
    cache_capacity: int = DEFAULT_CAPACITY
    cache_ttl: Optional[float] = None

    # 分詞
    mixed_script_language: str = "und"
    japanese: JapaneseSegmenterConfig = field(default_factory=JapaneseSegmenterConfig)
    jieba_hmm: bool = True
    jieba_dictionary: Optional[str] = None
    fugashi_args: str = ""

    def __post_init__(self):
        """初始化後設定 logger"""
        if self.cache_capacity < 1:
            raise ValueError(f"cache_capacity must be >= 1, got {self.cache_capacity}")
        configure_logging(self.verbose)


# 預設配置實例 (靜默模式)
DEFAULT_CONFIG = SegmenterConfig(verbose=False)
