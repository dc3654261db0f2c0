"""
Query-time aggregation of per-term scores.

Each query term produces a {doc_id: score} map. Aggregation sums the maps
(optionally weighted) into one score per document, then ranks:

    score(doc) = Σ weight_t × score_t(doc)

This is the in-process counterpart of Redis ZUNIONSTORE with WEIGHTS, which
the persisted index delegates to the store.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .base import SearchResult


def merge_scores(
    term_scores: Iterable[Mapping[str, float]],
    weights: Optional[Sequence[float]] = None,
) -> Dict[str, float]:
    """
    Merge per-term score maps into one score per document.

    Args:
        term_scores: One {doc_id: score} map per query term
        weights: Optional weight per map (default: 1.0 each)
            Must have the same length as term_scores when given

    Returns:
        {doc_id: total score}; documents absent from every map are absent

    Example:
        >>> merge_scores([{"2": 1.5}, {"2": 0.5, "3": 1.0}])
        {'2': 2.0, '3': 1.0}
    """
    term_scores = list(term_scores)
    if weights is None:
        weights = [1.0] * len(term_scores)
    elif len(weights) != len(term_scores):
        raise ValueError(
            f"Got {len(weights)} weights for {len(term_scores)} score maps"
        )

    totals: Dict[str, float] = {}
    for scores, weight in zip(term_scores, weights):
        for doc_id, score in scores.items():
            totals[doc_id] = totals.get(doc_id, 0.0) + weight * score

    return totals


def rank(
    scores: Mapping[str, float],
    offset: int = 0,
    count: Optional[int] = None,
) -> Tuple[List[SearchResult], int]:
    """
    Order documents by score and return one page.

    Ties are broken by doc_id so the order is deterministic.

    Args:
        scores: {doc_id: score}
        offset: Number of top results to skip
        count: Page size (None = everything after offset)

    Returns:
        (page of SearchResult sorted by score descending, total scored documents)
    """
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")

    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))

    if count is None:
        page = ordered[offset:]
    elif count <= 0:
        page = []
    else:
        page = ordered[offset:offset + count]

    return [SearchResult(doc_id=doc_id, score=score) for doc_id, score in page], len(ordered)
