"""
分詞引擎 (TokenizerEngine)

負責持有共享的延遲資源（fugashi Tagger、jieba Tokenizer）、詞典、結果快取與配置，
並把這些 handle 明確注入各分詞策略，組出 UnifiedTokenizer。

使用方式:
    from polyseg import TokenizerEngine

    engine = TokenizerEngine(lexicon_path="japanese_tokens.db")
    tokens = engine.tokenize("I love 猫と犬。", "ja")
"""

from functools import partial
from typing import Any, Callable, Dict, List, Optional, Union

from polyseg.config import SegmenterConfig
from polyseg.core.engine_interface import SegmenterEngine
from polyseg.core.events import TokenizeEventHandler
from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.core.protocols import LexiconProtocol, MorphologicalAnalyzerProtocol, StatisticalSegmenterProtocol
from polyseg.core.token import Token
from polyseg.languages.chinese import ChineseTokenizer, JiebaSegmenter, create_jieba_tokenizer
from polyseg.languages.generic import CharacterTokenizer, WhitespaceTokenizer
from polyseg.languages.japanese import DictionarySegmenter, FugashiAnalyzer, JapaneseTokenizer, load_lexicon
from polyseg.languages.japanese.utils import create_fugashi_tagger
from polyseg.tokenization.unified_tokenizer import TokenizeOptions, UnifiedTokenizer
from polyseg.utils.cache import ResultCache
from polyseg.utils.lazy_imports import CHINESE_INSTALL_HINT, JAPANESE_INSTALL_HINT, LazyResource


class TokenizerEngine(SegmenterEngine):
    """
    多語言分詞引擎

    Args:
        config: 引擎配置，預設為 SegmenterConfig()
        lexicon: 已建立的日文詞典
        lexicon_path: 日文詞典檔案（.jsonl / .tsv / .db），lexicon 未提供時使用
        analyzer: 自訂形態分析器（測試或替換 fugashi 用）
        statistical_engine: 自訂統計分詞引擎（測試或替換 jieba 用）
        on_event: 分詞事件回呼
        verbose: 是否開啟詳細日誌（覆寫 config.verbose）
        on_timing: 計時回呼（覆寫 config.on_timing）
    """

    _engine_name = "tokenizer"

    def __init__(
        self,
        config: Optional[SegmenterConfig] = None,
        *,
        lexicon: Optional[LexiconProtocol] = None,
        lexicon_path: Optional[str] = None,
        analyzer: Optional[MorphologicalAnalyzerProtocol] = None,
        statistical_engine: Optional[StatisticalSegmenterProtocol] = None,
        on_event: Optional[TokenizeEventHandler] = None,
        verbose: Optional[bool] = None,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ):
        self._config = config or SegmenterConfig()
        self._init_logger(
            verbose=self._config.verbose if verbose is None else verbose,
            on_timing=on_timing or self._config.on_timing,
        )

        with self._log_timing("TokenizerEngine.__init__"):
            cfg = self._config
            self._fugashi: LazyResource[Any] = LazyResource(
                "fugashi", partial(create_fugashi_tagger, cfg.fugashi_args), JAPANESE_INSTALL_HINT
            )
            self._jieba: LazyResource[Any] = LazyResource(
                "jieba", partial(create_jieba_tokenizer, cfg.jieba_dictionary), CHINESE_INSTALL_HINT
            )

            if lexicon is None and lexicon_path:
                with self._log_timing(f"load_lexicon({lexicon_path})"):
                    lexicon = load_lexicon(lexicon_path)
            self._lexicon = lexicon

            self._cache = ResultCache(cfg.cache_capacity, cfg.cache_ttl) if cfg.enable_cache else None

            self._segmenter = DictionarySegmenter(
                lexicon=self._lexicon,
                analyzer=analyzer or FugashiAnalyzer(self._fugashi),
                config=cfg.japanese,
            )
            strategies = [
                ChineseTokenizer(statistical_engine or JiebaSegmenter(self._jieba, hmm=cfg.jieba_hmm)),
                JapaneseTokenizer(self._segmenter, mixed_script_language=cfg.mixed_script_language),
                CharacterTokenizer(("th",)),
            ]
            self._tokenizer = UnifiedTokenizer(
                strategies,
                fallback=WhitespaceTokenizer(),
                cache=self._cache,
                on_event=on_event,
                logger=self._logger,
            )

            # 只記錄實際注入策略的 handle
            self._handles: Dict[str, LazyResource[Any]] = {}
            if analyzer is None:
                self._handles["fugashi"] = self._fugashi
            if statistical_engine is None:
                self._handles["jieba"] = self._jieba

            self._initialized = True
            self._logger.info("TokenizerEngine initialized")

    @property
    def config(self) -> SegmenterConfig:
        return self._config

    @property
    def tokenizer(self) -> UnifiedTokenizer:
        return self._tokenizer

    @property
    def lexicon(self) -> Optional[LexiconProtocol]:
        return self._lexicon

    @property
    def cache(self) -> Optional[ResultCache]:
        return self._cache

    @property
    def handles(self) -> Dict[str, LazyResource[Any]]:
        return dict(self._handles)

    def is_initialized(self) -> bool:
        return getattr(self, "_initialized", False)

    def tokenize(
        self,
        text: str,
        language: str,
        options: Optional[Union[TokenizeOptions, Dict[str, Any]]] = None,
        *,
        trace_id: Optional[str] = None,
    ) -> List[Token]:
        """
        分詞（永遠不會拋例外）

        Args:
            text: 原始輸入
            language: 語言代碼
            options: TokenizeOptions，或 {"preferred_script_hints": [...]}
            trace_id: 事件追蹤 ID
        """
        if isinstance(options, dict):
            options = self._options_from_dict(options)
        with self._log_timing("TokenizerEngine.tokenize"):
            return self._tokenizer.tokenize(text, language, options, trace_id=trace_id)

    def _options_from_dict(self, options: Dict[str, Any]) -> TokenizeOptions:
        """dict -> TokenizeOptions；未知欄位與無效值記錄 WARNING 後忽略"""
        known = {name: value for name, value in options.items() if name in TokenizeOptions.__dataclass_fields__}
        unknown = sorted(str(name) for name in options if name not in known)
        if unknown:
            self._logger.warning(f"忽略未知的分詞選項: {', '.join(unknown)}")
        try:
            return TokenizeOptions(**known)
        except (TypeError, ValueError) as exc:
            self._logger.warning(f"分詞選項無效，改用預設值: {type(exc).__name__}: {exc}")
            return TokenizeOptions()

    def warm_up(self) -> Dict[str, Optional[float]]:
        """
        預先初始化重量級資源，避免第一個請求承擔載入時間

        Returns:
            Dict: 資源名稱 -> 初始化秒數（無法使用時為 None）
        """
        timings: Dict[str, Optional[float]] = {}
        for name, handle in self.handles.items():
            try:
                handle.get()
            except StrategyUnavailableError as exc:
                self._logger.warning(f"warm_up: {name} 無法使用: {exc.resource}")
                timings[name] = None
                continue
            timings[name] = handle.init_seconds or 0.0
        return timings

    def get_backend_stats(self) -> Dict[str, Any]:
        return {
            "engine": self._engine_name,
            "initialized": self.is_initialized(),
            "strategies": [s.name for s in self._tokenizer.strategies],
            "fallback": self._tokenizer.fallback.name,
            "handles": {
                name: {
                    "initialized": handle.is_initialized(),
                    "failed": handle.failed,
                    "init_seconds": handle.init_seconds,
                }
                for name, handle in self.handles.items()
            },
            "lexicon": type(self._lexicon).__name__ if self._lexicon is not None else None,
            "cache": self._cache.stats() if self._cache is not None else None,
        }
