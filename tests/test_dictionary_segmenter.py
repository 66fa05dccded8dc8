"""
字典最長匹配分詞器測試
"""

import pytest

from polyseg.core.result import FailureKind
from polyseg.core.token import TokenSource
from polyseg.languages.japanese.config import JapaneseSegmenterConfig
from polyseg.languages.japanese.lexicon import InMemoryLexicon, LexiconEntry
from polyseg.languages.japanese.segmenter import DictionarySegmenter

from fakes import BrokenLexicon, FakeAnalyzer, RaisingAnalyzer, unavailable


def _surfaces(result):
    return [d.surface for d in result.drafts]


def _no_heuristics(**kwargs) -> JapaneseSegmenterConfig:
    return JapaneseSegmenterConfig(continuation_chars=frozenset(), skip_single_candidates=frozenset(), **kwargs)


class TestLongestMatch:
    def test_prefers_longest_candidate(self):
        """詞典同時有 ab 與 abc 時，abcd 應切成 abc + d"""
        lexicon = InMemoryLexicon([LexiconEntry("ab", None, 10), LexiconEntry("abc", None, 10)])
        segmenter = DictionarySegmenter(lexicon, FakeAnalyzer(["d"]), _no_heuristics())
        result = segmenter.segment("abcd")
        assert _surfaces(result) == ["abc", "d"]
        assert result.drafts[0].source is TokenSource.DICTIONARY
        assert result.drafts[1].source is TokenSource.MORPHOLOGICAL_ANALYZER

    def test_japanese_compound(self, japanese_lexicon):
        segmenter = DictionarySegmenter(japanese_lexicon, FakeAnalyzer(["を", "する"]))
        result = segmenter.segment("日本語を勉強する")
        assert _surfaces(result) == ["日本語", "を", "勉強", "する"]
        first = result.drafts[0]
        assert first.reading == "にほんご"
        assert first.frequency_rank == 900
        assert first.part_of_speech == "noun"

    def test_reading_match_keeps_original_surface(self, japanese_lexicon):
        """以讀音命中時 surface 仍為原文"""
        segmenter = DictionarySegmenter(japanese_lexicon, None, _no_heuristics())
        result = segmenter.segment("ねこ")
        assert _surfaces(result) == ["ねこ"]
        assert result.drafts[0].reading == "ねこ"

    def test_max_candidate_length(self):
        lexicon = InMemoryLexicon([LexiconEntry("abcd", None, 1), LexiconEntry("ab", None, 1)])
        config = _no_heuristics(max_candidate_length=3)
        result = DictionarySegmenter(lexicon, None, config).segment("abcd")
        assert _surfaces(result)[0] == "ab"

    def test_offsets_are_relative(self, japanese_lexicon):
        result = DictionarySegmenter(japanese_lexicon, FakeAnalyzer(["と"])).segment("猫と犬")
        assert [(d.surface, d.start) for d in result.drafts] == [("猫", 0), ("と", 1), ("犬", 2)]


class TestHeuristics:
    def test_single_char_before_hiragana_is_rejected(self, japanese_lexicon):
        """單字元命中且下一字為平假名 -> 否決，交給形態分析器"""
        analyzer = FakeAnalyzer(["猫", "と"], readings={"猫": "ネコ"})
        result = DictionarySegmenter(japanese_lexicon, analyzer).segment("猫と")
        assert result.drafts[0].source is TokenSource.MORPHOLOGICAL_ANALYZER
        assert result.drafts[0].reading == "ネコ"

    def test_single_char_at_end_is_accepted(self, japanese_lexicon):
        result = DictionarySegmenter(japanese_lexicon, FakeAnalyzer()).segment("犬")
        assert result.drafts[0].source is TokenSource.DICTIONARY

    def test_particles_are_never_probed(self):
        lexicon = InMemoryLexicon([LexiconEntry("は", None, 9999)])
        analyzer = FakeAnalyzer(["は"])
        result = DictionarySegmenter(lexicon, analyzer).segment("は")
        assert result.drafts[0].source is TokenSource.MORPHOLOGICAL_ANALYZER

    def test_short_match_threshold_is_configurable(self):
        """舊版門檻：剩餘 >= 4 字時否決長度 <= 2 的命中"""
        lexicon = InMemoryLexicon([LexiconEntry("日本", "にほん", 1)])
        analyzer = FakeAnalyzer(["日本"])
        text = "日本人学校"

        default = DictionarySegmenter(lexicon, analyzer).segment(text)
        assert default.drafts[0].source is TokenSource.DICTIONARY

        legacy = DictionarySegmenter(lexicon, analyzer, JapaneseSegmenterConfig.original_thresholds()).segment(text)
        assert legacy.drafts[0].source is TokenSource.MORPHOLOGICAL_ANALYZER

    def test_rejected_hit_lets_shorter_candidates_win(self):
        lexicon = InMemoryLexicon([LexiconEntry("abc", None, 1), LexiconEntry("ab", None, 1)])
        config = JapaneseSegmenterConfig(short_match_max_length=3, short_match_min_remaining=5)
        result = DictionarySegmenter(lexicon, None, config).segment("abcdef")
        # abc、ab 都被否決 -> 逐字 fallback
        assert _surfaces(result)[:3] == ["a", "b", "c"]

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            JapaneseSegmenterConfig(max_candidate_length=0)


class TestFallbacks:
    def test_punctuation(self, japanese_lexicon):
        result = DictionarySegmenter(japanese_lexicon, None).segment("猫。犬")
        assert [(d.surface, d.source) for d in result.drafts] == [
            ("猫", TokenSource.DICTIONARY),
            ("。", TokenSource.PUNCTUATION),
            ("犬", TokenSource.DICTIONARY),
        ]

    def test_never_stalls_without_sources(self):
        """沒有詞典也沒有分析器：每個字元一個 fallback token"""
        text = "東京タワー"
        result = DictionarySegmenter(None, None).segment(text)
        assert _surfaces(result) == list(text)
        assert all(d.source is TokenSource.FALLBACK for d in result.drafts)
        assert result.degradations == [FailureKind.NO_MATCH]

    def test_analyzer_unavailable(self):
        analyzer = RaisingAnalyzer(unavailable())
        result = DictionarySegmenter(None, analyzer).segment("東京")
        assert _surfaces(result) == ["東", "京"]
        assert FailureKind.STRATEGY_UNAVAILABLE in result.degradations
        # 不可用後不再重試
        assert analyzer.calls == 1

    def test_analyzer_error_is_contained(self):
        result = DictionarySegmenter(None, RaisingAnalyzer(RuntimeError("boom"))).segment("東京")
        assert _surfaces(result) == ["東", "京"]
        assert FailureKind.STRATEGY_ERROR in result.degradations

    def test_analyzer_output_not_matching_text_is_ignored(self):
        class Normalizing:
            def analyze_one(self, text):
                from polyseg.core.protocols import Morpheme

                return Morpheme("ﾈｺ" if text.startswith("ネ") else text[0])

        result = DictionarySegmenter(None, Normalizing()).segment("ネコ")
        assert _surfaces(result) == ["ネ", "コ"]
        assert result.drafts[0].source is TokenSource.FALLBACK

    def test_lexicon_error_degrades_to_analyzer(self, caplog):
        lexicon = BrokenLexicon()
        analyzer = FakeAnalyzer(["猫", "犬"])
        segmenter = DictionarySegmenter(lexicon, analyzer)
        with caplog.at_level("WARNING", logger="polyseg"):
            result = segmenter.segment("猫犬")
            segmenter.segment("猫犬")
        assert _surfaces(result) == ["猫", "犬"]
        assert all(d.source is TokenSource.MORPHOLOGICAL_ANALYZER for d in result.drafts)
        assert FailureKind.NO_MATCH in result.degradations
        assert sum("詞典查詢失敗" in r.getMessage() for r in caplog.records) == 1

    def test_empty(self):
        assert DictionarySegmenter().segment("").drafts == []
