"""
中文分詞器實作模組

統計分詞引擎 (jieba) 的轉接層。引擎只回傳 surface 列表，
offset 由 OffsetReconciler 依序對回原文。

引擎無法使用或執行失敗時，改為字元粒度的 script run 切分：
每個漢字一個 token、每段連續標點一個 token。
"""

from typing import List, Optional

from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.core.protocols import StatisticalSegmenterProtocol
from polyseg.core.result import FailureKind, SegmentResult
from polyseg.core.token import TokenDraft, TokenSource
from polyseg.core.tokenizer_interface import Tokenizer
from polyseg.router.script_classifier import ScriptClass, is_punctuation
from polyseg.router.script_runs import runs_to_drafts
from polyseg.utils.logger import get_logger
from polyseg.utils.offsets import OffsetReconciler

from .utils import JiebaSegmenter

logger = get_logger("chinese.tokenizer")


def character_fallback(text: str) -> List[TokenDraft]:
    """漢字逐字、其餘依 script run 切分"""
    return runs_to_drafts(text, character_scripts=frozenset({ScriptClass.LOGOGRAPHIC}))


class ChineseTokenizer(Tokenizer):
    """
    中文分詞器

    功能:
    - 將中文文本分割為詞語
    - 空白不輸出；全為標點的詞輸出為 punctuation token
    - 引擎回傳的詞若在原文中找不到，丟棄並記錄（不猜測 offset）

    Args:
        engine: 統計分詞引擎，預設為 JiebaSegmenter
    """

    name = "chinese"
    languages = frozenset({"zh"})

    def __init__(self, engine: Optional[StatisticalSegmenterProtocol] = None):
        self.engine = engine or JiebaSegmenter()

    def segment(self, text: str, language: str) -> SegmentResult:
        if not text:
            return SegmentResult.ok([])

        try:
            words = self.engine.segment_all(text)
        except StrategyUnavailableError as exc:
            logger.warning(f"統計分詞引擎無法使用，改為逐字切分: {exc.resource}")
            return SegmentResult.degraded(character_fallback(text), FailureKind.STRATEGY_UNAVAILABLE, exc.resource)
        except Exception as exc:
            logger.warning(f"統計分詞失敗，改為逐字切分: {type(exc).__name__}: {exc}")
            return SegmentResult.degraded(
                character_fallback(text), FailureKind.STRATEGY_ERROR, f"{type(exc).__name__}: {exc}"
            )

        reconciler = OffsetReconciler(text)
        drafts: List[TokenDraft] = []
        for word in words:
            if not word or word.isspace():
                continue
            # 引擎可能把前後空白黏在詞上
            surface = word.strip()
            span = reconciler.place(surface)
            if span is None:
                continue
            source = (
                TokenSource.PUNCTUATION
                if all(is_punctuation(ch) for ch in surface)
                else TokenSource.STATISTICAL_ENGINE
            )
            drafts.append(TokenDraft(surface, source, start=span.start))

        if reconciler.dropped:
            detail = f"unlocatable: {reconciler.dropped[:5]}"
            logger.warning(f"統計分詞結果有 {len(reconciler.dropped)} 個詞無法定位")
            return SegmentResult.degraded(drafts, FailureKind.OFFSET_UNLOCATABLE, detail)
        return SegmentResult.ok(drafts)
