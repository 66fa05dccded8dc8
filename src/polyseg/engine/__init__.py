from .tokenizer_engine import TokenizerEngine

__all__ = ["TokenizerEngine"]
