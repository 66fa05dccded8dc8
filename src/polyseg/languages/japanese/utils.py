"""
日文工具模組

提供 fugashi (MeCab) Tagger 的建立函式與詞素欄位擷取。
Tagger 的生命週期由 LazyResource 管理，這裡不持有任何全域狀態。
"""

from typing import Any, Optional

from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.utils.lazy_imports import JAPANESE_INSTALL_HINT
from polyseg.utils.logger import get_logger

logger = get_logger("japanese.utils")

# UniDic 以 "*" 表示欄位缺值
_MISSING = ("", "*")


def create_fugashi_tagger(args: str = "") -> Any:
    """
    建立 Fugashi Tagger

    Args:
        args: 傳給 MeCab 的參數（例如指定字典路徑），預設使用 unidic-lite

    Returns:
        fugashi.Tagger

    Raises:
        StrategyUnavailableError: 未安裝 fugashi 或字典
    """
    try:
        import fugashi
    except ImportError as e:
        logger.error("無法載入 fugashi，請確認是否已安裝 'polyseg[ja]'")
        raise StrategyUnavailableError("fugashi", "找不到 fugashi", JAPANESE_INSTALL_HINT) from e
    return fugashi.Tagger(args)


def _feature_value(word: Any, *names: str) -> Optional[str]:
    feature = getattr(word, "feature", None)
    if feature is None:
        return None
    for name in names:
        value = getattr(feature, name, None)
        if value not in _MISSING and value is not None:
            return str(value)
    return None


def extract_reading(word: Any) -> Optional[str]:
    """取得詞素讀音（片假名）；字典沒有提供時回傳 None"""
    return _feature_value(word, "kana", "reading", "pron")


def extract_part_of_speech(word: Any) -> Optional[str]:
    """取得詞性大類（例如 名詞、助詞）"""
    return _feature_value(word, "pos1", "pos")
