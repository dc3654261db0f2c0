"""
Normalizer for index and query text.

Normalization pipeline:
1. Lowercase conversion
2. Replace every character outside the allowed set with a space
3. Split on whitespace
4. Strip edge characters (apostrophes, TF-IDF preset only)
5. Filter stopwords and too-short tokens
6. Return list of terms in input order

Two presets are built once at import time and shared by every caller:
- BM25_NORMALIZER: letters, digits and spaces (in-memory BM25 index)
- TFIDF_NORMALIZER: letters, digits, spaces and apostrophes, tokens of a
  single character dropped (Redis TF-IDF index)
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Pattern

import stopwordsiso

# English stopwords for the BM25 index (stopwords-iso list)
BM25_STOPWORDS = frozenset(stopwordsiso.stopwords("en"))

# Stopwords for the Redis TF-IDF index
TFIDF_STOPWORDS = frozenset('''
    a able about across after all almost also am among an and any are as at
    be because been but by can cannot could dear did do does either else ever
    every for from get got had has have he her hers him his how however i if
    in into is it its just least let like likely may me might most must my
    neither no nor not of off often on only or other our own rather said say
    says she should since so some than that the their them then there these
    they this tis to too twas us wants was we were what when where which
    while who whom why will with would yet you your
'''.split())


@dataclass(frozen=True)
class NormalizerConfig:
    """Immutable normalization settings, shared by reference"""
    non_words: Pattern[str]       # Characters replaced by a space
    stopwords: FrozenSet[str]     # Tokens dropped after splitting
    strip_chars: str = ""         # Stripped from both ends of each token
    min_length: int = 1           # Shorter tokens are dropped


BM25_NORMALIZER = NormalizerConfig(
    non_words=re.compile(r"[^a-z0-9 ]"),
    stopwords=BM25_STOPWORDS,
)

TFIDF_NORMALIZER = NormalizerConfig(
    non_words=re.compile(r"[^a-z0-9' ]"),
    stopwords=TFIDF_STOPWORDS,
    strip_chars="'",
    min_length=2,
)


def normalize(text: str, config: NormalizerConfig = BM25_NORMALIZER) -> List[str]:
    """
    Normalize text into an ordered list of index terms.

    Args:
        text: Raw document or query text
        config: Normalization preset (BM25_NORMALIZER by default)

    Returns:
        List of terms, in the order they appear in the text

    Examples:
        >>> normalize("Nice, hello world! I like 42.")
        ['nice', '42']

        >>> normalize("'Tis Rust's compiler, isn't it?", TFIDF_NORMALIZER)
        ["rust's", 'compiler', "isn't"]

        >>> normalize("   ")
        []
    """
    if not text:
        return []

    # Lowercase first so the allowed set only needs lowercase letters
    cleaned = config.non_words.sub(" ", text.lower())

    terms = []
    for token in cleaned.split():
        if config.strip_chars:
            token = token.strip(config.strip_chars)
        if len(token) < config.min_length or token in config.stopwords:
            continue
        terms.append(token)

    return terms


def term_frequencies(terms: Iterable[str]) -> Dict[str, int]:
    """
    Count occurrences of each term.

    Example:
        >>> term_frequencies(["pod", "yaml", "pod"])
        {'pod': 2, 'yaml': 1}
    """
    return dict(Counter(terms))
