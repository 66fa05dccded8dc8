"""
字典最長匹配分詞器 (Dictionary-Backed Longest-Match Segmenter)

在游標 position 上逐步推進，直到 position == len(text)：

1. 標點：position 上的字元屬於 config.punctuation -> 輸出長度 1 的 punctuation token
2. 候選：length 由 max_candidate_length 遞減到 1，查詢 text[position:position+length]
   （先比對表記，再比對讀音；同表記多筆時由詞典依 rank_key 挑選）
3. 否決規則：
   (a) 單字元命中且下一個字元屬於 continuation_chars -> 否決
   (b) 長度 <= short_match_max_length 且剩餘字元 >= short_match_min_remaining -> 否決
   被否決時繼續嘗試更短的候選
4. 命中 -> dictionary token，推進 length
5. 未命中 -> 交給形態分析器取一個詞素；分析器無輸出（或失敗）-> 單字元 fallback token

此元件不會把例外拋出自身邊界：分析器與詞典的錯誤都降級為單字元輸出或 no-match。
"""

from typing import List, Optional, Tuple

from polyseg.core.exceptions import LexiconError, StrategyUnavailableError
from polyseg.core.protocols import LexiconProtocol, Morpheme, MorphologicalAnalyzerProtocol
from polyseg.core.result import FailureKind, SegmentResult
from polyseg.core.token import TokenDraft, TokenSource
from polyseg.router.script_classifier import classify
from polyseg.utils.logger import get_logger

from .config import JapaneseSegmenterConfig
from .lexicon import LexiconEntry

logger = get_logger("japanese.segmenter")


class _SegmentState:
    """單次 segment() 呼叫內的降級狀態"""

    def __init__(self):
        self.lexicon_failed = False
        self.analyzer_failed = False
        self.degradations: List[FailureKind] = []
        self.details: List[str] = []

    def degrade(self, kind: FailureKind, detail: str) -> None:
        if kind not in self.degradations:
            self.degradations.append(kind)
            self.details.append(detail)


class DictionarySegmenter:
    """
    字典最長匹配分詞器

    Args:
        lexicon: 詞典；None 表示沒有詞典，所有位置直接交給分析器
        analyzer: 形態分析器；None 表示沒有分析器，未命中時輸出單字元
        config: 分詞配置
    """

    def __init__(
        self,
        lexicon: Optional[LexiconProtocol] = None,
        analyzer: Optional[MorphologicalAnalyzerProtocol] = None,
        config: Optional[JapaneseSegmenterConfig] = None,
    ):
        self.lexicon = lexicon
        self.analyzer = analyzer
        self.config = config or JapaneseSegmenterConfig()
        self._lexicon_warned = False

    def segment(self, text: str) -> SegmentResult:
        """
        對一段日文（漢字/假名）分詞

        Returns:
            SegmentResult: drafts 的 start 相對於 text；有降級時附帶 degradations
        """
        drafts: List[TokenDraft] = []
        if not text:
            return SegmentResult.ok(drafts)

        state = _SegmentState()
        n = len(text)
        position = 0
        while position < n:
            char = text[position]

            if char.isspace():
                position += 1
                continue

            if char in self.config.punctuation:
                drafts.append(TokenDraft(char, TokenSource.PUNCTUATION, start=position))
                position += 1
                continue

            match = self._longest_match(text, position, state)
            if match is not None:
                candidate, entry = match
                drafts.append(self._dictionary_draft(candidate, entry, position))
                position += len(candidate)
                continue

            morpheme = self._analyze(text, position, state)
            if morpheme is not None:
                drafts.append(
                    TokenDraft(
                        morpheme.surface,
                        TokenSource.MORPHOLOGICAL_ANALYZER,
                        start=position,
                        reading=morpheme.reading,
                        part_of_speech=morpheme.part_of_speech,
                    )
                )
                position += len(morpheme.surface)
                continue

            state.degrade(FailureKind.NO_MATCH, f"no match at {position}")
            drafts.append(TokenDraft(char, TokenSource.FALLBACK, start=position))
            position += 1

        if not state.degradations:
            return SegmentResult.ok(drafts)
        return SegmentResult(
            drafts=drafts,
            failure=state.degradations[0],
            detail="; ".join(state.details),
            degradations=state.degradations,
        )

    def _candidate_limit(self, text: str, position: int) -> int:
        # 候選不跨越空白與標點
        limit = min(self.config.max_candidate_length, len(text) - position)
        for offset in range(1, limit):
            char = text[position + offset]
            if char.isspace() or char in self.config.punctuation:
                return offset
        return limit

    def _longest_match(
        self, text: str, position: int, state: _SegmentState
    ) -> Optional[Tuple[str, LexiconEntry]]:
        if self.lexicon is None or state.lexicon_failed:
            return None

        remaining = len(text) - position
        for length in range(self._candidate_limit(text, position), 0, -1):
            candidate = text[position : position + length]
            if length == 1 and candidate in self.config.skip_single_candidates:
                continue

            entry = self._lookup(candidate, state)
            if state.lexicon_failed:
                return None
            if entry is None:
                continue
            if self._is_disqualified(text, position, length, remaining):
                logger.debug(f"否決短命中 {candidate!r} @ {position}")
                continue
            return candidate, entry
        return None

    def _lookup(self, candidate: str, state: _SegmentState) -> Optional[LexiconEntry]:
        try:
            return self.lexicon.lookup(candidate)
        except LexiconError as exc:
            state.lexicon_failed = True
            state.degrade(FailureKind.NO_MATCH, f"lexicon: {exc}")
            if not self._lexicon_warned:
                self._lexicon_warned = True
                logger.warning(f"詞典查詢失敗，改用形態分析器: {type(exc).__name__}: {exc}")
            return None

    def _is_disqualified(self, text: str, position: int, length: int, remaining: int) -> bool:
        cfg = self.config
        if length == 1 and remaining > 1 and text[position + 1] in cfg.continuation_chars:
            return True
        if (
            cfg.short_match_min_remaining is not None
            and length <= cfg.short_match_max_length
            and remaining >= cfg.short_match_min_remaining
        ):
            return True
        return False

    @staticmethod
    def _dictionary_draft(candidate: str, entry: LexiconEntry, position: int) -> TokenDraft:
        reading = entry.reading
        if reading is None and all(classify(c).is_kana for c in candidate):
            reading = candidate
        return TokenDraft(
            candidate,
            TokenSource.DICTIONARY,
            start=position,
            reading=reading,
            part_of_speech=entry.part_of_speech,
            frequency_rank=entry.frequency_rank,
        )

    def _analyze(self, text: str, position: int, state: _SegmentState) -> Optional[Morpheme]:
        if self.analyzer is None or state.analyzer_failed:
            return None

        window = self.config.analyzer_window
        view = text[position:] if window is None else text[position : position + window]
        try:
            morpheme = self.analyzer.analyze_one(view)
        except StrategyUnavailableError as exc:
            state.analyzer_failed = True
            state.degrade(FailureKind.STRATEGY_UNAVAILABLE, f"analyzer: {exc.resource}")
            logger.warning(f"形態分析器無法使用，改為單字元輸出: {exc.resource}")
            return None
        except Exception as exc:
            state.degrade(FailureKind.STRATEGY_ERROR, f"analyzer: {type(exc).__name__}: {exc}")
            logger.warning(f"形態分析器執行失敗 @ {position}: {type(exc).__name__}: {exc}")
            return None

        if morpheme is None or not morpheme.surface:
            return None
        if not text.startswith(morpheme.surface, position):
            logger.debug(f"分析器輸出 {morpheme.surface!r} 與原文不符 @ {position}")
            return None
        return morpheme
