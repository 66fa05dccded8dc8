"""
渲染輔助與 token 統計測試
"""

from polyseg.core.token import Token, TokenSource
from polyseg.engine import TokenizerEngine
from polyseg.utils.render import interactive_tokens, iter_segments, join_for_display, reconstruct
from polyseg.utils.token_stats import filter_by_frequency, get_known_words, get_token_stats, get_unknown_words

from fakes import FakeAnalyzer, FakeStatisticalEngine


def _tokenize(lexicon, text, language="ja"):
    engine = TokenizerEngine(
        lexicon=lexicon,
        analyzer=FakeAnalyzer(["と", "を", "する"]),
        statistical_engine=FakeStatisticalEngine(list),
    )
    return engine.tokenize(text, language)


class TestRender:
    def test_no_space_between_logographic_tokens(self, japanese_lexicon):
        text = "I love 猫と犬。"
        tokens = _tokenize(japanese_lexicon, text)
        assert join_for_display(text, tokens) == "I love 猫と犬。"
        assert join_for_display(text, tokens, whitespace_separator="|") == "I|love|猫と犬。"

    def test_gaps_are_preserved(self):
        text = "Hello, world!"
        tokens = _tokenize(None, text, "en")
        assert join_for_display(text, tokens) == "Hello, world"
        assert [gap for gap, _ in iter_segments(text, tokens)] == ["", ", ", "!"]
        assert reconstruct(text, tokens) == "Hello, world"

    def test_whitespace_gaps_are_kept_verbatim(self):
        """多個空白、換行等間隙原樣保留"""
        text = "I  love\ncats"
        tokens = _tokenize(None, text, "en")
        assert [t.surface for t in tokens] == ["I", "love", "cats"]
        assert join_for_display(text, tokens) == "I  love\ncats"
        assert join_for_display(text, tokens, whitespace_separator=" ") == "I love cats"

    def test_reconstruct_empty(self):
        assert reconstruct("abc", []) == ""

    def test_interactive_tokens(self, japanese_lexicon):
        tokens = _tokenize(japanese_lexicon, "猫。犬")
        assert [t.surface for t in interactive_tokens(tokens)] == ["猫", "犬"]


class TestTokenStats:
    def test_stats(self, japanese_lexicon):
        tokens = _tokenize(japanese_lexicon, "日本語を勉強する")
        stats = get_token_stats(tokens)
        assert stats["total"] == 4
        assert stats["by_source"]["dictionary"] == 2
        assert stats["by_source"]["morphologicalAnalyzer"] == 2
        assert stats["dictionary_percentage"] == 50
        assert stats["average_frequency"] == 800

        assert [t.surface for t in get_known_words(tokens)] == ["日本語", "勉強"]
        assert [t.surface for t in get_unknown_words(tokens)] == ["を", "する"]

    def test_empty_stats(self):
        stats = get_token_stats([])
        assert stats["total"] == 0
        assert stats["dictionary_percentage"] == 0
        assert stats["average_frequency"] == 0

    def test_filter_by_frequency(self):
        def tok(surface, rank):
            return Token(surface, 0, len(surface), "ja", TokenSource.DICTIONARY, frequency_rank=rank)

        tokens = [tok("a", 100), tok("b", 500), tok("c", None), tok("d", 900)]
        assert [t.surface for t in filter_by_frequency(tokens, 200)] == ["b", "d"]
        assert [t.surface for t in filter_by_frequency(tokens, 100, 500)] == ["a", "b"]
