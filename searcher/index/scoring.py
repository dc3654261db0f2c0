"""
Term weighting for both index variants.

BM25 (Best Match 25) is a probabilistic ranking function used for information retrieval.
The in-memory index scores every posting of a query term with:

    score(term, doc) = idf(term) × (tf × (k1 + 1)) / (k1 × ((1 - b) + b × dl/avdl))

Where:
    tf = term frequency in document
    k1 = term frequency scaling parameter (default: 1.2)
    b = length normalization parameter (default: 0.75)
    dl = document length (number of terms)
    avdl = average document length across the corpus

Smoothed IDF (always >= 0, defined for n_t = 0 and n_t = N):
    idf(term) = ln((N - n_t + 0.5) / (n_t + 0.5) + 1)

The Redis index uses classic TF-IDF instead:
    idf(term) = max(log2(N / df), 0), df = 0 → 0
"""

import math
from dataclasses import dataclass
from typing import Dict, Mapping

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75


@dataclass(frozen=True)
class BM25Parameters:
    """
    BM25 tuning constants.

    Args:
        k1: Term frequency scaling parameter
            Must be > 0
            Default: 1.2 (standard)

        b: Length normalization parameter
            Higher = more penalty for long documents
            Range: 0.0 - 1.0
            Default: 0.75 (standard)
    """
    k1: float = DEFAULT_K1
    b: float = DEFAULT_B

    def __post_init__(self):
        if not self.k1 > 0:
            raise ValueError(f"k1 must be positive, got {self.k1}")
        if not 0.0 <= self.b <= 1.0:
            raise ValueError(f"b must be within [0, 1], got {self.b}")


def smoothed_idf(total_docs: int, docs_with_term: int) -> float:
    """
    Smoothed BM25 IDF.

    Example:
        >>> round(smoothed_idf(3, 1), 4)
        0.9808
    """
    return math.log((total_docs - docs_with_term + 0.5) / (docs_with_term + 0.5) + 1.0)


def classic_idf(total_docs: int, docs_with_term: int) -> float:
    """Classic TF-IDF IDF: log2(N / df), clamped to >= 0, 0 for unseen terms"""
    if docs_with_term <= 0 or total_docs <= 0:
        return 0.0
    return max(math.log2(total_docs / docs_with_term), 0.0)


def bm25_term_scores(
    postings: Mapping[str, int],
    doc_lengths: Mapping[str, int],
    idf: float,
    avdl: float,
    params: BM25Parameters = BM25Parameters(),
) -> Dict[str, float]:
    """
    Compute BM25 contributions of one term for every document containing it.

    Args:
        postings: {doc_id: tf} for the term
        doc_lengths: {doc_id: term_count} for the corpus
        idf: IDF of the term
        avdl: Average document length of the corpus
        params: k1 / b constants

    Returns:
        {doc_id: score}; empty when avdl is 0 (no indexable terms in corpus)
    """
    if avdl <= 0 or not postings:
        return {}

    scores = {}
    for doc_id, tf in postings.items():
        dl = doc_lengths[doc_id]

        numerator = tf * (params.k1 + 1)
        denominator = params.k1 * ((1 - params.b) + params.b * (dl / avdl))

        scores[doc_id] = idf * numerator / denominator

    return scores
