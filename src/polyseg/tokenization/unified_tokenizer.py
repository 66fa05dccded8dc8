"""
統一分詞入口 (Dispatcher / Registry)

所有外部呼叫者都透過 UnifiedTokenizer.tokenize(text, language)：

1. 快取命中 -> 直接回傳
2. 依註冊順序挑選第一個 supports(language) 的策略
   （都不支援時，依 options.preferred_script_hints 再找一次）
3. 逐層執行：選中的策略 -> 預設分詞器 (fallback) -> script run 緊急切分
   - 策略拋例外、回傳整層失敗、或非空白輸入卻回傳空結果 -> 走下一層
   - 每次降級都會記錄 WARNING 並發出事件
4. OffsetReconciler 對所有草稿做最後一次定位：
   策略自帶的 offset 對得上就採用，否則依 surface 重新搜尋；找不到的 token 丟棄

tokenize() 不會拋出任何例外。
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from polyseg.core.events import TokenizeEvent, TokenizeEventHandler
from polyseg.core.result import FailureKind, SegmentResult
from polyseg.core.token import Token, TokenDraft
from polyseg.core.tokenizer_interface import Tokenizer, describe, normalize_language_tag
from polyseg.languages.generic import WhitespaceTokenizer
from polyseg.router.script_runs import runs_to_drafts
from polyseg.utils.cache import ResultCache
from polyseg.utils.logger import TimingContext, get_logger
from polyseg.utils.offsets import OffsetReconciler

UNDETERMINED = "und"
EMERGENCY_STRATEGY = "script_run"


@dataclass(frozen=True)
class TokenizeOptions:
    """
    分詞選項

    Attributes:
        preferred_script_hints: 語言代碼序列；只有在沒有任何策略支援指定語言時才會參考，
            依序採用第一個有策略支援的代碼
    """

    preferred_script_hints: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.preferred_script_hints, str):
            object.__setattr__(self, "preferred_script_hints", (self.preferred_script_hints,))
        else:
            object.__setattr__(self, "preferred_script_hints", tuple(self.preferred_script_hints))

    def cache_key(self) -> Hashable:
        return tuple(normalize_language_tag(tag) for tag in self.preferred_script_hints)


class UnifiedTokenizer:
    """
    分詞策略的有序註冊表與分派器

    Args:
        strategies: 依優先順序排列的分詞策略
        fallback: 預設分詞器，預設為 WhitespaceTokenizer
        cache: 結果快取；None 表示不快取
        on_event: 事件回呼
        logger: 自訂 logger
    """

    def __init__(
        self,
        strategies: Iterable[Tokenizer] = (),
        fallback: Optional[Tokenizer] = None,
        cache: Optional[ResultCache] = None,
        on_event: Optional[TokenizeEventHandler] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._strategies: List[Tokenizer] = list(strategies)
        self.fallback = fallback or WhitespaceTokenizer()
        self.cache = cache
        self.on_event = on_event
        self._logger = logger or get_logger("tokenizer.unified")
        self._logger.debug(f"UnifiedTokenizer strategies={describe(self._strategies)} fallback={self.fallback.name}")

    @property
    def strategies(self) -> Tuple[Tokenizer, ...]:
        return tuple(self._strategies)

    def register(self, strategy: Tokenizer, index: Optional[int] = None) -> None:
        """註冊策略；index 為 None 時加在最後（優先順序最低）"""
        if index is None:
            self._strategies.append(strategy)
        else:
            self._strategies.insert(index, strategy)
        if self.cache is not None:
            self.cache.clear()

    def select(
        self,
        language: str,
        options: Optional[TokenizeOptions] = None,
        *,
        trace_id: str = "",
    ) -> Tuple[Optional[Tokenizer], str]:
        """
        挑選策略

        supports() 拋例外的策略視為不支援（記錄 WARNING 並發出 fallback 事件）。

        Returns:
            (策略, 實際使用的語言代碼)；沒有任何策略支援時策略為 None
        """
        tag = normalize_language_tag(language) or UNDETERMINED
        for strategy in self._strategies:
            if self._supports(strategy, tag, trace_id):
                return strategy, tag

        if options is not None:
            for hint in options.preferred_script_hints:
                hint_tag = normalize_language_tag(hint)
                if not hint_tag:
                    continue
                for strategy in self._strategies:
                    if self._supports(strategy, hint_tag, trace_id):
                        return strategy, hint_tag
        return None, tag

    def _supports(self, strategy: Tokenizer, tag: str, trace_id: str) -> bool:
        try:
            return bool(strategy.supports(tag))
        except Exception as exc:
            self._logger.warning(
                f"[{strategy.name}] supports({tag!r}) 失敗，略過此策略: {type(exc).__name__}: {exc}"
            )
            self._emit(
                {
                    "type": "fallback",
                    "trace_id": trace_id,
                    "strategy": strategy.name,
                    "language": tag,
                    "failure_kind": FailureKind.STRATEGY_ERROR.value,
                    "detail": "supports() raised",
                    "exception_type": type(exc).__name__,
                    "exception_message": str(exc),
                }
            )
            return False

    def tokenize(
        self,
        text: str,
        language: str,
        options: Optional[TokenizeOptions] = None,
        *,
        trace_id: Optional[str] = None,
    ) -> List[Token]:
        """
        對 text 分詞

        Args:
            text: 原始輸入
            language: 語言代碼（例如 "ja", "zh-TW", "en"）
            options: 分詞選項
            trace_id: 事件追蹤 ID，預設自動產生

        Returns:
            List[Token]: 依 start 排序、互不重疊的 token
        """
        if not text:
            return []

        options = options or TokenizeOptions()
        trace_id_value = trace_id or uuid.uuid4().hex
        tag = normalize_language_tag(language) or UNDETERMINED

        with TimingContext("UnifiedTokenizer.tokenize", self._logger, logging.DEBUG):
            key = ResultCache.make_key(text, tag, options.cache_key())
            if self.cache is not None:
                cached = self.cache.get(key)
                if cached is not None:
                    self._emit({"type": "cache_hit", "trace_id": trace_id_value, "language": tag})
                    return cached

            tokens = self._dispatch(text, language, options, trace_id_value)

            if self.cache is not None:
                self.cache.put(key, tokens)
            return tokens

    def _dispatch(self, text: str, language: str, options: TokenizeOptions, trace_id: str) -> List[Token]:
        strategy, tag = self.select(language, options, trace_id=trace_id)
        tiers: List[Tokenizer] = [strategy] if strategy is not None else []
        if self.fallback is not strategy:
            tiers.append(self.fallback)

        self._emit(
            {
                "type": "strategy_selected",
                "trace_id": trace_id,
                "strategy": tiers[0].name,
                "language": tag,
            }
        )

        for i, tier in enumerate(tiers):
            is_last = i == len(tiers) - 1
            next_name = EMERGENCY_STRATEGY if is_last else tiers[i + 1].name

            try:
                result = tier.segment(text, tag)
            except Exception as exc:
                self._logger.warning(
                    f"[{tier.name}] 分詞失敗，改用 {next_name}: {type(exc).__name__}: {exc}"
                )
                self._emit_fallback(trace_id, tier, tag, next_name, FailureKind.STRATEGY_ERROR, exc=exc)
                continue

            if result is None or result.is_failed:
                failure = result.failure if result is not None else FailureKind.STRATEGY_ERROR
                detail = result.detail if result is not None else "no result"
                self._logger.warning(f"[{tier.name}] 整層失敗 ({failure.value})，改用 {next_name}")
                self._emit_fallback(trace_id, tier, tag, next_name, failure, detail=detail)
                continue

            tokens = self._finalize(text, result.drafts, tag, tier.name, trace_id)
            if not tokens and text.strip() and not is_last:
                self._logger.warning(f"[{tier.name}] 非空白輸入卻沒有輸出，改用 {next_name}")
                self._emit_fallback(trace_id, tier, tag, next_name, FailureKind.NO_MATCH, detail="empty result")
                continue

            if result.is_degraded:
                self._emit_degraded(trace_id, tier, tag, result)
            return tokens

        self._logger.warning(f"所有分詞策略都失敗，改用 {EMERGENCY_STRATEGY}")
        return self._finalize(text, runs_to_drafts(text), tag, EMERGENCY_STRATEGY, trace_id)

    def _finalize(
        self,
        text: str,
        drafts: Sequence[TokenDraft],
        language: str,
        strategy_name: str,
        trace_id: str,
    ) -> List[Token]:
        reconciler = OffsetReconciler(text)
        tokens = [draft.to_token(span.start, language) for draft, span in reconciler.place_all(drafts)]

        for surface in reconciler.dropped:
            self._logger.warning(f"[{strategy_name}] 無法定位 {surface!r}，丟棄此 token")
            self._emit(
                {
                    "type": "offset_dropped",
                    "trace_id": trace_id,
                    "strategy": strategy_name,
                    "language": language,
                    "failure_kind": FailureKind.OFFSET_UNLOCATABLE.value,
                    "surface": surface,
                }
            )
        return tokens

    def _emit_fallback(
        self,
        trace_id: str,
        tier: Tokenizer,
        language: str,
        next_name: str,
        failure: FailureKind,
        *,
        exc: Optional[BaseException] = None,
        detail: str = "",
    ) -> None:
        event: TokenizeEvent = {
            "type": "fallback",
            "trace_id": trace_id,
            "strategy": tier.name,
            "language": language,
            "failure_kind": failure.value,
            "next_strategy": next_name,
            "detail": detail,
        }
        if exc is not None:
            event["exception_type"] = type(exc).__name__
            event["exception_message"] = str(exc)
        self._emit(event)

    def _emit_degraded(self, trace_id: str, tier: Tokenizer, language: str, result: SegmentResult) -> None:
        kinds = result.degradations or [result.failure]
        self._logger.warning(
            f"[{tier.name}] 降級輸出 ({', '.join(k.value for k in kinds)}): {result.detail}"
        )
        for kind in kinds:
            self._emit(
                {
                    "type": "degraded",
                    "trace_id": trace_id,
                    "strategy": tier.name,
                    "language": language,
                    "failure_kind": kind.value,
                    "detail": result.detail,
                }
            )

    def _emit(self, event: TokenizeEvent) -> None:
        try:
            if self.on_event is not None:
                self.on_event(event)
        except Exception:
            self._logger.exception("on_event 回呼執行失敗")
