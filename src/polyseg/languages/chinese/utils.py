"""
中文工具模組

提供 jieba 分詞器的建立函式與 StatisticalSegmenterProtocol 實作。
"""

import logging
from typing import Any, List, Optional

from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.utils.lazy_imports import CHINESE_INSTALL_HINT, LazyResource
from polyseg.utils.logger import get_logger

logger = get_logger("chinese.utils")


def create_jieba_tokenizer(dictionary: Optional[str] = None) -> Any:
    """
    建立並初始化 jieba Tokenizer（載入詞典與前綴表）

    Args:
        dictionary: 自訂主詞典路徑；None 使用 jieba 內建詞典

    Returns:
        jieba.Tokenizer

    Raises:
        StrategyUnavailableError: 未安裝 jieba
    """
    try:
        import jieba
    except ImportError as e:
        logger.error("無法載入 jieba，請確認是否已安裝 'polyseg[zh]'")
        raise StrategyUnavailableError("jieba", "找不到 jieba", CHINESE_INSTALL_HINT) from e

    # jieba 預設在初始化時輸出 DEBUG 訊息到 stderr
    jieba.setLogLevel(logging.WARNING)
    tokenizer = jieba.Tokenizer(dictionary) if dictionary else jieba.Tokenizer()
    tokenizer.initialize()
    return tokenizer


class JiebaSegmenter:
    """
    以 jieba 實作 StatisticalSegmenterProtocol

    Args:
        resource: 共用的 LazyResource handle；未提供時自行建立
        hmm: 是否啟用 HMM 新詞發現
    """

    def __init__(self, resource: Optional[LazyResource[Any]] = None, hmm: bool = True):
        self._resource = resource or LazyResource("jieba", create_jieba_tokenizer, CHINESE_INSTALL_HINT)
        self.hmm = hmm

    @property
    def resource(self) -> LazyResource[Any]:
        return self._resource

    def segment_all(self, text: str) -> List[str]:
        if not text:
            return []
        return self._resource.get().lcut(text, HMM=self.hmm)
