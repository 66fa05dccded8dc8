import pytest

from polyseg.languages.japanese.lexicon import InMemoryLexicon, LexiconEntry


@pytest.fixture
def japanese_lexicon() -> InMemoryLexicon:
    return InMemoryLexicon(
        [
            LexiconEntry("猫", "ねこ", 500, "noun"),
            LexiconEntry("犬", "いぬ", 400, "noun"),
            LexiconEntry("日本語", "にほんご", 900, "noun"),
            LexiconEntry("日本", "にほん", 950, "noun"),
            LexiconEntry("勉強", "べんきょう", 700, "noun"),
            LexiconEntry(None, "ありがとう", 800, "interjection"),
        ]
    )
