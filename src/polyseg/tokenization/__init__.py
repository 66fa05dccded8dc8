from .unified_tokenizer import TokenizeOptions, UnifiedTokenizer

__all__ = ["TokenizeOptions", "UnifiedTokenizer"]
