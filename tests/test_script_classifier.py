"""
文字系統分類測試
"""

import pytest

from polyseg.core.token import ScriptFlag, script_flags_for
from polyseg.router.script_classifier import (
    ScriptClass,
    classify,
    contains_kana,
    contains_logographic,
    is_punctuation,
    is_word_char,
)


class TestClassify:
    @pytest.mark.parametrize(
        "char, expected",
        [
            ("a", ScriptClass.LATIN),
            ("Z", ScriptClass.LATIN),
            ("é", ScriptClass.LATIN),
            ("Ω", ScriptClass.LATIN),
            ("Ж", ScriptClass.LATIN),
            ("猫", ScriptClass.LOGOGRAPHIC),
            ("々", ScriptClass.LOGOGRAPHIC),
            ("と", ScriptClass.HIRAGANA),
            ("カ", ScriptClass.KATAKANA),
            ("ー", ScriptClass.KATAKANA),
            ("ｶ", ScriptClass.KATAKANA),
            ("한", ScriptClass.HANGUL),
            ("ש", ScriptClass.RTL),
            ("م", ScriptClass.RTL),
            ("न", ScriptClass.BRAHMIC),
            ("ส", ScriptClass.BRAHMIC),
            ("1", ScriptClass.OTHER),
            (" ", ScriptClass.OTHER),
            ("。", ScriptClass.OTHER),
            ("・", ScriptClass.OTHER),
            ("😀", ScriptClass.OTHER),
        ],
    )
    def test_blocks(self, char, expected):
        assert classify(char) is expected

    def test_empty_is_other(self):
        """空字串歸為 OTHER，不拋例外"""
        assert classify("") is ScriptClass.OTHER

    def test_total_over_code_points(self):
        """每個碼位都有分類（抽樣）"""
        for code in range(0, 0x110000, 97):
            if 0xD800 <= code <= 0xDFFF:
                continue
            assert isinstance(classify(chr(code)), ScriptClass)

    def test_properties(self):
        assert ScriptClass.HIRAGANA.is_kana
        assert not ScriptClass.LOGOGRAPHIC.is_kana
        assert ScriptClass.LOGOGRAPHIC.is_japanese
        assert ScriptClass.LATIN.is_spaced
        assert not ScriptClass.OTHER.is_spaced


class TestHelpers:
    def test_is_punctuation(self):
        assert is_punctuation("。")
        assert is_punctuation("!")
        assert is_punctuation("$")
        assert not is_punctuation("a")
        assert not is_punctuation("猫")
        assert not is_punctuation("")

    def test_is_word_char(self):
        assert is_word_char("a")
        assert is_word_char("5")
        assert is_word_char("́")
        assert not is_word_char(",")

    def test_contains(self):
        assert contains_logographic("I love 猫")
        assert not contains_logographic("ねこ")
        assert contains_kana("ねこ")
        assert contains_kana("カレー")
        assert not contains_kana("猫")
        assert not contains_kana("")


class TestScriptFlags:
    def test_flags(self):
        assert script_flags_for("猫") == {ScriptFlag.LOGOGRAPHIC}
        assert script_flags_for("食べる") == {ScriptFlag.LOGOGRAPHIC, ScriptFlag.KANA}
        assert script_flags_for("love") == {ScriptFlag.OTHER_SCRIPT}
        assert script_flags_for("。") == frozenset()
        assert script_flags_for("123") == frozenset()
