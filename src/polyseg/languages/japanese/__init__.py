"""
日文語言支援模組

提供日文的字典最長匹配分詞、fugashi 形態分析與詞典。
"""

from .analyzer import FugashiAnalyzer
from .config import JapaneseSegmenterConfig
from .lexicon import InMemoryLexicon, LexiconEntry, SqliteLexicon, load_lexicon
from .segmenter import DictionarySegmenter
from .tokenizer import JapaneseTokenizer

__all__ = [
    "DictionarySegmenter",
    "FugashiAnalyzer",
    "InMemoryLexicon",
    "JapaneseSegmenterConfig",
    "JapaneseTokenizer",
    "LexiconEntry",
    "SqliteLexicon",
    "load_lexicon",
]
