"""
Abstract base class for index implementations.

All indexes must implement this interface to be swappable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass
class SearchResult:
    """Single ranked result with score"""
    doc_id: str     # Caller-supplied document identifier (e.g. file path)
    score: float    # Relevance score (higher = more relevant)


@dataclass
class Document:
    """Indexed document (in-memory index only)"""
    doc_id: str
    content: str
    term_count: int  # Number of terms surviving normalization


class SearchIndexError(Exception):
    """Base class for index errors"""


class DocumentExistsError(SearchIndexError):
    """Document id was already added to an index that cannot re-index"""

    def __init__(self, doc_id: str):
        super().__init__(f"Document already indexed: {doc_id}")
        self.doc_id = doc_id


class BaseIndex(ABC):
    """
    Abstract base class for index implementations.

    Variants:
        - InMemoryBM25Index: in-process postings, Okapi BM25
        - PersistedTfIdfIndex: Redis sorted sets, TF-IDF + ZUNIONSTORE
    """

    @abstractmethod
    def add_document(self, doc_id: str, content: str):
        """
        Normalize content and index it under doc_id.

        Args:
            doc_id: Opaque document identifier
            content: Raw document text
        """
        pass

    @abstractmethod
    def ranked_search(
        self,
        query: str,
        offset: int = 0,
        count: Optional[int] = None
    ) -> Tuple[List[SearchResult], int]:
        """
        Rank documents for a free-text query.

        Args:
            query: Query text
            offset: Number of top results to skip
            count: Page size (None = backend default)

        Returns:
            (results sorted by score descending, total matching documents)
        """
        pass

    @abstractmethod
    def document_count(self) -> int:
        """Number of indexed documents"""
        pass

    def close(self):
        """Optional cleanup (close store connections, etc.)"""
        pass
