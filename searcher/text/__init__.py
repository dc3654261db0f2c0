"""
Text normalization shared by both index variants.

Components:
- normalizer: lowercase, character filtering, stopword removal
"""

from .normalizer import (
    BM25_NORMALIZER,
    TFIDF_NORMALIZER,
    NormalizerConfig,
    normalize,
    term_frequencies,
)

__all__ = [
    "BM25_NORMALIZER",
    "TFIDF_NORMALIZER",
    "NormalizerConfig",
    "normalize",
    "term_frequencies",
]
