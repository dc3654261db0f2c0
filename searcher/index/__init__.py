"""
Ranked retrieval indexes.

Usage:
    # Get index (auto-configured from env):
    from searcher.index import get_index

    index = get_index()
    index.add_document("notes.txt", "Redis sorted sets")
    results, total = index.ranked_search("sorted sets", count=5)

    # Or create a specific implementation:
    from searcher.index import InMemoryBM25Index

    index = InMemoryBM25Index()
    scores = index.search("sorted sets")   # {doc_id: score}
"""

from typing import Optional

from .aggregation import merge_scores, rank
from .base import BaseIndex, Document, DocumentExistsError, SearchIndexError, SearchResult
from .factory import IndexFactory
from .memory import InMemoryBM25Index
from .persisted import PersistedTfIdfIndex, normalize_namespace
from .scoring import BM25Parameters


def get_index(backend: Optional[str] = None, **kwargs) -> BaseIndex:
    """Get configured index instance (factory convenience function)."""
    return IndexFactory.create(backend=backend, **kwargs)


__all__ = [
    'BaseIndex',
    'BM25Parameters',
    'Document',
    'DocumentExistsError',
    'InMemoryBM25Index',
    'IndexFactory',
    'PersistedTfIdfIndex',
    'SearchIndexError',
    'SearchResult',
    'get_index',
    'merge_scores',
    'normalize_namespace',
    'rank',
]
