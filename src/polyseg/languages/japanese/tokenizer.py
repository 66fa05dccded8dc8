"""
日文分詞器實作模組

先以 script run 切段，把相鄰的漢字/假名 run 合併成一段日文，交給字典最長匹配分詞器；
其他片段：

- 拉丁字母等以空白分詞的文字系統 -> 一個 run 一個 scriptRun token（語言標記為 mixed_script_language）
- 標點 -> punctuation token
- 數字 -> scriptRun token
- 空白 -> 不產生 token
"""

from typing import List, Optional

from polyseg.core.result import FailureKind, SegmentResult
from polyseg.core.token import TokenDraft, TokenSource
from polyseg.core.tokenizer_interface import Tokenizer
from polyseg.router.script_classifier import ScriptClass
from polyseg.router.script_runs import merge_runs, runs_to_drafts, split_other_run, split_runs
from polyseg.utils.logger import get_logger

from .segmenter import DictionarySegmenter

logger = get_logger("japanese.tokenizer")

_JAPANESE_SCRIPTS = frozenset(script for script in ScriptClass if script.is_japanese)


class JapaneseTokenizer(Tokenizer):
    """
    日文分詞器

    功能:
    - 將日文文本分割為單詞，offset 對應原始輸入
    - 漢字/假名片段：字典最長匹配 -> fugashi 形態分析 -> 單字元
    - 夾雜的英文等片段：保留為獨立 token，不送進字典分詞器

    Args:
        segmenter: 字典分詞器（已注入詞典與形態分析器）
        mixed_script_language: 非日文片段 token 的語言標記
    """

    name = "japanese"
    languages = frozenset({"ja"})

    def __init__(self, segmenter: Optional[DictionarySegmenter] = None, mixed_script_language: str = "und"):
        self.segmenter = segmenter or DictionarySegmenter()
        self.mixed_script_language = mixed_script_language

    def segment(self, text: str, language: str) -> SegmentResult:
        if not text:
            return SegmentResult.ok([])

        try:
            return self._segment_runs(text)
        except Exception as exc:
            # 分詞器本身失效：退回 run 粒度的切分
            logger.warning(f"日文分詞失敗，改用 script run 切分: {type(exc).__name__}: {exc}")
            return SegmentResult.degraded(
                runs_to_drafts(text),
                FailureKind.STRATEGY_ERROR,
                f"{type(exc).__name__}: {exc}",
            )

    def _segment_runs(self, text: str) -> SegmentResult:
        drafts: List[TokenDraft] = []
        degradations: List[FailureKind] = []
        details: List[str] = []

        runs = merge_runs(list(split_runs(text)), _JAPANESE_SCRIPTS, merged_as=ScriptClass.LOGOGRAPHIC)
        for run in runs:
            if run.script is ScriptClass.LOGOGRAPHIC:
                result = self.segmenter.segment(run.text)
                drafts.extend(draft.shifted(run.start) for draft in result.drafts or [])
                for kind in result.degradations:
                    if kind not in degradations:
                        degradations.append(kind)
                if result.detail:
                    details.append(result.detail)
            elif run.script is ScriptClass.OTHER:
                drafts.extend(split_other_run(run))
            else:
                drafts.append(
                    TokenDraft(
                        run.text,
                        TokenSource.SCRIPT_RUN,
                        start=run.start,
                        language=self.mixed_script_language,
                    )
                )

        if not degradations:
            return SegmentResult.ok(drafts)
        return SegmentResult(
            drafts=drafts,
            failure=degradations[0],
            detail="; ".join(details),
            degradations=degradations,
        )
