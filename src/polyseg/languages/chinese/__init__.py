"""
中文語言支援模組

提供基於 jieba 的中文統計分詞。
"""

from .tokenizer import ChineseTokenizer, character_fallback
from .utils import JiebaSegmenter, create_jieba_tokenizer

__all__ = [
    "ChineseTokenizer",
    "JiebaSegmenter",
    "character_fallback",
    "create_jieba_tokenizer",
]
