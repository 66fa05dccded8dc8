from .analyzer import Morpheme, MorphologicalAnalyzerProtocol, StatisticalSegmenterProtocol
from .lexicon import LexiconProtocol

__all__ = [
    "LexiconProtocol",
    "Morpheme",
    "MorphologicalAnalyzerProtocol",
    "StatisticalSegmenterProtocol",
]
