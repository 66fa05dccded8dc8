"""
通用分詞策略（不依賴外部引擎）
"""

from .tokenizer import CharacterTokenizer, WhitespaceTokenizer, trim_word

__all__ = ["CharacterTokenizer", "WhitespaceTokenizer", "trim_word"]
