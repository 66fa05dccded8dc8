"""
TokenizerEngine 與模組層級 API 測試
"""

import asyncio
import time

import pytest

import polyseg
from polyseg.config import SegmenterConfig
from polyseg.core.exceptions import TokenizeTimeoutError
from polyseg.core.token import ScriptFlag, TokenSource
from polyseg.engine import TokenizerEngine
from polyseg.engine import tokenizer_engine as engine_module
from polyseg.languages.japanese.lexicon import InMemoryLexicon

from fakes import HAS_CHINESE_DEPS, HAS_JAPANESE_DEPS, FakeAnalyzer, FakeStatisticalEngine


class SlowAnalyzer(FakeAnalyzer):
    def analyze_one(self, text):
        time.sleep(0.5)
        return super().analyze_one(text)


@pytest.fixture
def engine(japanese_lexicon):
    return TokenizerEngine(
        lexicon=japanese_lexicon,
        analyzer=FakeAnalyzer(["と", "は"]),
        statistical_engine=FakeStatisticalEngine(lambda t: ["我", "爱", "北京"]),
    )


@pytest.fixture
def default_engine(engine):
    polyseg.set_default_engine(engine)
    yield engine
    polyseg.set_default_engine(None)


class TestTokenizerEngine:
    def test_mixed_script_scenario(self, engine):
        """I love 猫と犬。 -> Latin 片段、日文詞、句點"""
        tokens = engine.tokenize("I love 猫と犬。", "ja")
        assert [t.surface for t in tokens] == ["I", "love", "猫", "と", "犬", "。"]
        assert [t.language for t in tokens] == ["und", "und", "ja", "ja", "ja", "ja"]
        assert tokens[2].is_logographic
        assert ScriptFlag.KANA in tokens[3].script_flags
        assert tokens[4].source is TokenSource.DICTIONARY
        assert tokens[4].reading == "いぬ"
        assert tokens[5].is_punctuation

    def test_chinese_routing(self, engine):
        tokens = engine.tokenize("我爱北京", "zh-CN")
        assert [t.surface for t in tokens] == ["我", "爱", "北京"]
        assert all(t.language == "zh" for t in tokens)

    def test_thai_is_split_per_character(self, engine):
        tokens = engine.tokenize("สวัสดี", "th")
        assert tokens
        assert "".join(t.surface for t in tokens) == "สวัสดี"

    def test_whitespace_languages(self, engine):
        tokens = engine.tokenize("Hello, world!", "en")
        assert [(t.surface, t.start, t.end) for t in tokens] == [("Hello", 0, 5), ("world", 7, 12)]

    def test_dict_options(self, engine):
        tokens = engine.tokenize("猫と犬", "ko", {"preferred_script_hints": ["ja"]})
        assert [t.surface for t in tokens] == ["猫", "と", "犬"]

    def test_dict_options_with_unknown_keys(self, engine, caplog):
        with caplog.at_level("WARNING", logger="polyseg"):
            tokens = engine.tokenize("猫と犬", "ko", {"preferred_script_hints": ["ja"], "stemming": True})
        assert [t.surface for t in tokens] == ["猫", "と", "犬"]
        assert any("stemming" in r.getMessage() for r in caplog.records)

    def test_invalid_dict_options_use_defaults(self, engine):
        tokens = engine.tokenize("hello world", "en", {"preferred_script_hints": None})
        assert [t.surface for t in tokens] == ["hello", "world"]

    def test_lexicon_path(self, tmp_path):
        path = tmp_path / "tokens.tsv"
        path.write_text("日本語\tにほんご\t900\tnoun\n", encoding="utf-8")
        engine = TokenizerEngine(lexicon_path=str(path), analyzer=FakeAnalyzer(), statistical_engine=FakeStatisticalEngine(list))
        assert isinstance(engine.lexicon, InMemoryLexicon)
        token = engine.tokenize("日本語", "ja")[0]
        assert token.source is TokenSource.DICTIONARY
        assert token.frequency_rank == 900

    def test_on_timing(self):
        timings = []
        engine = TokenizerEngine(
            analyzer=FakeAnalyzer(),
            statistical_engine=FakeStatisticalEngine(list),
            on_timing=lambda op, elapsed: timings.append(op),
        )
        engine.tokenize("hi", "en")
        assert "TokenizerEngine.__init__" in timings
        assert "TokenizerEngine.tokenize" in timings

    def test_cache_can_be_disabled(self):
        engine = TokenizerEngine(
            config=SegmenterConfig(enable_cache=False),
            analyzer=FakeAnalyzer(),
            statistical_engine=FakeStatisticalEngine(list),
        )
        assert engine.cache is None
        assert engine.get_backend_stats()["cache"] is None

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            SegmenterConfig(cache_capacity=0)

    def test_backend_stats(self, engine):
        engine.tokenize("hi", "en")
        engine.tokenize("hi", "en")
        stats = engine.get_backend_stats()
        assert stats["engine"] == "tokenizer"
        assert stats["initialized"] is True
        assert stats["strategies"] == ["chinese", "japanese", "character"]
        assert stats["fallback"] == "whitespace"
        assert stats["handles"] == {}
        assert stats["lexicon"] == "InMemoryLexicon"
        assert stats["cache"]["hits"] == 1

    def test_injected_fakes_need_no_warm_up(self, engine):
        assert engine.warm_up() == {}

    def test_warm_up_reports_unavailable_resources(self, monkeypatch):
        def missing(dictionary=None):
            raise ImportError("No module named 'jieba'")

        monkeypatch.setattr(engine_module, "create_fugashi_tagger", lambda args="": object())
        monkeypatch.setattr(engine_module, "create_jieba_tokenizer", missing)
        engine = TokenizerEngine()

        timings = engine.warm_up()
        assert timings["fugashi"] is not None
        assert timings["jieba"] is None

        handles = engine.get_backend_stats()["handles"]
        assert handles["fugashi"]["initialized"]
        assert handles["jieba"]["failed"]

        # jieba 不可用：逐字降級，不拋例外
        assert [t.surface for t in engine.tokenize("北京", "zh")] == ["北", "京"]

    @pytest.mark.skipif(not (HAS_JAPANESE_DEPS and HAS_CHINESE_DEPS), reason="需要安裝 polyseg[all]")
    def test_real_backends(self):
        engine = TokenizerEngine()
        assert all(v is not None for v in engine.warm_up().values())
        assert "北京" in [t.surface for t in engine.tokenize("我爱北京天安门", "zh")]
        assert "".join(t.surface for t in engine.tokenize("私は学生です", "ja")) == "私は学生です"


class TestModuleApi:
    def test_tokenize_uses_default_engine(self, default_engine):
        assert polyseg.get_default_engine() is default_engine
        assert [t.surface for t in polyseg.tokenize("猫と犬", "ja")] == ["猫", "と", "犬"]

    def test_tokenize_async(self, default_engine):
        tokens = asyncio.run(polyseg.tokenize_async("Hello world", "en"))
        assert [t.surface for t in tokens] == ["Hello", "world"]

    def test_tokenize_async_timeout(self):
        slow = TokenizerEngine(
            config=SegmenterConfig(enable_cache=False),
            analyzer=SlowAnalyzer(["猫"]),
            statistical_engine=FakeStatisticalEngine(list),
        )
        polyseg.set_default_engine(slow)
        try:
            with pytest.raises(TokenizeTimeoutError):
                asyncio.run(polyseg.tokenize_async("猫", "ja", timeout=0.05))
        finally:
            polyseg.set_default_engine(None)

    def test_timeout_error_is_a_timeout_error(self):
        assert issubclass(TokenizeTimeoutError, TimeoutError)

    def test_shutdown_is_idempotent(self, default_engine):
        asyncio.run(polyseg.tokenize_async("a", "en"))
        polyseg.shutdown()
        polyseg.shutdown()
        assert [t.surface for t in asyncio.run(polyseg.tokenize_async("b", "en"))] == ["b"]
