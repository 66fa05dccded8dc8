"""
模組層級 API

- tokenize(): 使用行程共用的預設引擎（第一次呼叫時建立）
- tokenize_async(): 在共用執行緒池上執行 tokenize，可指定整體時限
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Union

from polyseg.core.exceptions import TokenizeTimeoutError
from polyseg.core.token import Token
from polyseg.engine.tokenizer_engine import TokenizerEngine
from polyseg.tokenization.unified_tokenizer import TokenizeOptions

OptionsInput = Optional[Union[TokenizeOptions, Dict[str, Any]]]

_default_engine: Optional[TokenizerEngine] = None
_engine_lock = threading.Lock()

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_default_engine() -> TokenizerEngine:
    """取得（必要時建立）預設引擎"""
    global _default_engine
    if _default_engine is None:
        with _engine_lock:
            if _default_engine is None:
                _default_engine = TokenizerEngine()
    return _default_engine


def set_default_engine(engine: Optional[TokenizerEngine]) -> None:
    """替換預設引擎；傳入 None 則下次呼叫時重新建立"""
    global _default_engine
    with _engine_lock:
        _default_engine = engine


def tokenize(text: str, language: str, options: OptionsInput = None) -> List[Token]:
    """
    分詞

    Args:
        text: 原始輸入
        language: 語言代碼（"ja", "zh-TW", "en", ...）
        options: TokenizeOptions 或 {"preferred_script_hints": [...]}

    Returns:
        List[Token]: 依 start 排序、互不重疊的 token；不會拋例外

    Example:
        >>> [t.surface for t in tokenize("Hello, world!", "en")]
        ['Hello', 'world']
    """
    return get_default_engine().tokenize(text, language, options)


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="polyseg")
    return _executor


async def tokenize_async(
    text: str,
    language: str,
    options: OptionsInput = None,
    timeout: Optional[float] = None,
) -> List[Token]:
    """
    非同步分詞

    Args:
        timeout: 整體時限（秒），None 表示不限制

    Raises:
        TokenizeTimeoutError: 超過 timeout
    """
    loop = asyncio.get_running_loop()
    future = loop.run_in_executor(_get_executor(), tokenize, text, language, options)
    try:
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise TokenizeTimeoutError(f"Tokenization timed out after {timeout}s")


def shutdown() -> None:
    """關閉執行緒池"""
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=False)
            _executor = None
