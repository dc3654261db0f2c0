"""
In-process inverted index scored with Okapi BM25.

Structure:
    postings:  {term: {doc_id: count}}
    documents: {doc_id: Document(content, term_count)}
    avdl:      running mean of term_count, recomputed on every add

All reads and writes go through one lock, so a search never observes a
half-applied add_document.
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from ..text import BM25_NORMALIZER, NormalizerConfig, normalize, term_frequencies
from .aggregation import merge_scores, rank
from .base import BaseIndex, Document, DocumentExistsError, SearchResult
from .scoring import BM25Parameters, bm25_term_scores, smoothed_idf

logger = logging.getLogger(__name__)


class InMemoryBM25Index(BaseIndex):
    """
    BM25 index held entirely in process memory.

    Not persisted across restarts and documents cannot be removed.
    """

    def __init__(
        self,
        params: BM25Parameters = BM25Parameters(),
        normalizer: NormalizerConfig = BM25_NORMALIZER
    ):
        """
        Initialize an empty index.

        Args:
            params: BM25 k1 / b constants (defaults: 1.2 / 0.75)
            normalizer: Normalization preset for documents and queries
        """
        self.params = params
        self.normalizer = normalizer

        self._postings: Dict[str, Dict[str, int]] = {}
        self._documents: Dict[str, Document] = {}
        self._avdl = 0.0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: str) -> bool:
        return doc_id in self._documents

    @property
    def avdl(self) -> float:
        """Average document length (in terms)"""
        return self._avdl

    def document_count(self) -> int:
        return len(self._documents)

    def get_document(self, doc_id: str) -> Optional[Document]:
        return self._documents.get(doc_id)

    def postings(self, term: str) -> Dict[str, int]:
        """Copy of {doc_id: count} for a term (empty if never indexed)"""
        with self._lock:
            return dict(self._postings.get(term, {}))

    def add_document(self, doc_id: str, content: str):
        """
        Index a document.

        Raises:
            DocumentExistsError: doc_id was already added
        """
        terms = normalize(content, self.normalizer)
        counts = term_frequencies(terms)

        with self._lock:
            if doc_id in self._documents:
                raise DocumentExistsError(doc_id)

            for term, count in counts.items():
                self._postings.setdefault(term, {})[doc_id] = count

            self._documents[doc_id] = Document(
                doc_id=doc_id,
                content=content,
                term_count=len(terms),
            )

            # Running mean over all documents, including this one
            n = len(self._documents)
            self._avdl = (self._avdl * (n - 1) + len(terms)) / n

        logger.debug(f"Indexed {doc_id}: {len(terms)} terms, {len(counts)} unique (avdl={self._avdl:.2f})")

    def idf(self, term: str) -> float:
        """Smoothed IDF of a term (unindexed terms have n_t = 0)"""
        with self._lock:
            return self._idf(term)

    def bm25(self, term: str) -> Dict[str, float]:
        """BM25 contribution of one term for every document containing it"""
        with self._lock:
            return self._bm25(term)

    def search(self, query: str) -> Dict[str, float]:
        """
        Score every document matching at least one query term.

        Args:
            query: Query text

        Returns:
            {doc_id: summed BM25 score}; non-matching documents are absent
        """
        terms = normalize(query, self.normalizer)
        if not terms:
            return {}

        with self._lock:
            scores = merge_scores(self._bm25(term) for term in terms)

        logger.debug(f"Query {terms} matched {len(scores)} documents")
        return scores

    def ranked_search(
        self,
        query: str,
        offset: int = 0,
        count: Optional[int] = None
    ) -> Tuple[List[SearchResult], int]:
        return rank(self.search(query), offset=offset, count=count)

    def _idf(self, term: str) -> float:
        docs_with_term = len(self._postings.get(term, {}))
        return smoothed_idf(len(self._documents), docs_with_term)

    def _bm25(self, term: str) -> Dict[str, float]:
        postings = self._postings.get(term)
        if not postings:
            return {}

        doc_lengths = {doc_id: self._documents[doc_id].term_count for doc_id in postings}
        return bm25_term_scores(
            postings,
            doc_lengths,
            idf=self._idf(term),
            avdl=self._avdl,
            params=self.params,
        )
