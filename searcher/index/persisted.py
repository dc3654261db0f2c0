"""
Inverted index persisted in Redis sorted sets, scored with TF-IDF.

Key layout (namespace "ns:"):
    ns:indexed:         SET   all indexed document ids
    ns:<term>           ZSET  doc_id → tf weight (count / document term total)
    ns:doc:<doc_id>     SET   terms recorded for the document (exact removal)
    ns:temp:<hex>       ZSET  ephemeral query aggregation, deleted after use

Terms never contain ":", so term keys cannot collide with the other keys.

Query flow:
1. Normalize query into distinct terms
2. IDF per term = log2(total_docs / ZCARD term) clamped to >= 0
3. ZUNIONSTORE temp key WEIGHTS idf... over terms with idf > 0
4. ZREVRANGE temp key WITHSCORES for the requested page
5. DEL temp key (always, in finally)

Every document mutation is sent as one pipeline. A failed pipeline can
leave the id set and term sets inconsistent; nothing is rolled back.
"""

import logging
import re
import secrets
from typing import Dict, Iterable, List, Optional, Set, Tuple

import redis

from ..text import TFIDF_NORMALIZER, NormalizerConfig, normalize, term_frequencies
from .base import BaseIndex, SearchResult
from .scoring import classic_idf

logger = logging.getLogger(__name__)

DEFAULT_RESULT_COUNT = 10


def normalize_namespace(namespace: str) -> str:
    """
    Normalize a key namespace: lowercase, trailing separators stripped, ":" appended.

    A ":" inside the namespace is rejected: "books:archive" would share the
    "books:" key space, and "a:doc" term keys would equal "a" document keys.

    Examples:
        >>> normalize_namespace("MyPrefix::")
        'myprefix:'
        >>> normalize_namespace("docs")
        'docs:'
    """
    cleaned = (namespace or "").strip().lower().rstrip(": ")
    if not cleaned:
        raise ValueError("Index namespace must not be empty")
    if ":" in cleaned:
        raise ValueError(f"Index namespace must not contain ':', got {namespace!r}")
    return f"{cleaned}:"


def _decode(value) -> str:
    """Redis replies are bytes unless the client uses decode_responses=True"""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class PersistedTfIdfIndex(BaseIndex):
    """
    TF-IDF index stored in Redis.

    Scores are aggregated by Redis itself (ZUNIONSTORE), so many processes can
    share one index through the same namespace.
    """

    def __init__(
        self,
        client: redis.Redis,
        namespace: str = "searcher",
        default_count: int = DEFAULT_RESULT_COUNT,
        normalizer: NormalizerConfig = TFIDF_NORMALIZER
    ):
        """
        Args:
            client: Connected Redis client
            namespace: Key prefix shared by every key of this index
            default_count: Page size used by ranked_search when none is given
            normalizer: Normalization preset for documents and queries
        """
        self.client = client
        self.prefix = normalize_namespace(namespace)
        self.default_count = default_count
        self.normalizer = normalizer

    @property
    def indexed_key(self) -> str:
        return f"{self.prefix}indexed:"

    def term_key(self, term: str) -> str:
        return f"{self.prefix}{term}"

    def document_key(self, doc_id: str) -> str:
        return f"{self.prefix}doc:{doc_id}"

    def temp_key(self) -> str:
        """Unique ephemeral key for one query's aggregation"""
        return f"{self.prefix}temp:{secrets.token_hex(8)}"

    def term_weights(self, content: str) -> Dict[str, float]:
        """
        TF portion of TF-IDF: term count divided by total term occurrences.

        Example:
            >>> index.term_weights("hello world")
            {'hello': 0.5, 'world': 0.5}
        """
        terms = normalize(content, self.normalizer)
        if not terms:
            return {}

        total = len(terms)
        return {term: count / total for term, count in term_frequencies(terms).items()}

    def handle_content(self, doc_id: str, content: str, add: bool) -> int:
        """
        Add or remove a document in one pipeline.

        Adding an id that is already indexed replaces its previous terms.
        Removal uses the terms recorded at add time; content is only used
        for ids indexed without a recorded term set.

        Args:
            doc_id: Document identifier
            content: Document text
            add: True to index, False to remove

        Returns:
            Number of term keys touched

        Raises:
            redis.exceptions.RedisError: Store command failed
        """
        try:
            if add:
                touched = self._add(doc_id, content)
            else:
                touched = self._remove(doc_id, content)
        except redis.exceptions.RedisError as e:
            action = "index" if add else "remove"
            logger.error(f"Failed to {action} {doc_id} in Redis: {e}")
            raise

        return touched

    def add_document(self, doc_id: str, content: str):
        self.handle_content(doc_id, content, add=True)

    def remove_document(self, doc_id: str, content: Optional[str] = None) -> int:
        return self.handle_content(doc_id, content or "", add=False)

    def document_count(self) -> int:
        return int(self.client.scard(self.indexed_key))

    def search(
        self,
        query: str,
        offset: int = 0,
        count: int = DEFAULT_RESULT_COUNT
    ) -> Tuple[List[Tuple[str, float]], int]:
        """
        Rank documents for a query with TF-IDF weights aggregated in Redis.

        Args:
            query: Query text
            offset: Number of top results to skip
            count: Page size

        Returns:
            ([(doc_id, score), ...] sorted by score descending, known matches)
            ([], 0) when no query term has a positive IDF

        Raises:
            redis.exceptions.RedisError: Store command failed
        """
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")

        terms = list(dict.fromkeys(normalize(query, self.normalizer)))
        if not terms:
            return [], 0

        try:
            return self._search(terms, offset, count)
        except redis.exceptions.RedisError as e:
            logger.error(f"Redis search failed for {terms}: {e}")
            raise

    def ranked_search(
        self,
        query: str,
        offset: int = 0,
        count: Optional[int] = None
    ) -> Tuple[List[SearchResult], int]:
        if count is None:
            count = self.default_count

        rows, known = self.search(query, offset=offset, count=count)
        return [SearchResult(doc_id=doc_id, score=score) for doc_id, score in rows], known

    def clear(self) -> int:
        """Delete every key of this namespace. Returns number of keys deleted."""
        pattern = re.sub(r"([*?\[\]\\])", r"\\\1", self.prefix) + "*"
        deleted = 0
        batch = []

        for key in self.client.scan_iter(match=pattern, count=500):
            batch.append(key)
            if len(batch) >= 500:
                deleted += self.client.delete(*batch)
                batch = []
        if batch:
            deleted += self.client.delete(*batch)

        logger.info(f"Cleared {deleted} keys under namespace {self.prefix!r}")
        return deleted

    def close(self):
        self.client.close()

    def _recorded_terms(self, doc_id: str) -> Set[str]:
        return {_decode(term) for term in self.client.smembers(self.document_key(doc_id))}

    def _add(self, doc_id: str, content: str) -> int:
        weights = self.term_weights(content)
        stale = self._recorded_terms(doc_id) - set(weights)
        doc_key = self.document_key(doc_id)

        with self.client.pipeline() as pipe:
            for term in stale:
                pipe.zrem(self.term_key(term), doc_id)
            pipe.delete(doc_key)

            pipe.sadd(self.indexed_key, doc_id)
            for term, weight in weights.items():
                pipe.zadd(self.term_key(term), {doc_id: weight})
            if weights:
                pipe.sadd(doc_key, *weights.keys())

            pipe.execute()

        logger.debug(f"Indexed {doc_id}: {len(weights)} terms ({len(stale)} stale terms removed)")
        return len(weights)

    def _remove(self, doc_id: str, content: str) -> int:
        terms = self._recorded_terms(doc_id)
        if not terms:
            terms = set(normalize(content, self.normalizer))

        with self.client.pipeline() as pipe:
            pipe.srem(self.indexed_key, doc_id)
            for term in terms:
                pipe.zrem(self.term_key(term), doc_id)
            pipe.delete(self.document_key(doc_id))
            pipe.execute()

        logger.debug(f"Removed {doc_id}: {len(terms)} terms")
        return len(terms)

    def _document_frequencies(self, terms: Iterable[str]) -> List[int]:
        pipe = self.client.pipeline(transaction=False)
        for term in terms:
            pipe.zcard(self.term_key(term))
        return [int(size) for size in pipe.execute()]

    def _search(
        self,
        terms: List[str],
        offset: int,
        count: int
    ) -> Tuple[List[Tuple[str, float]], int]:
        total_docs = max(self.document_count(), 1)
        sizes = self._document_frequencies(terms)

        # Zero-IDF terms add nothing and ZUNIONSTORE needs at least one key
        weights = {}
        for term, size in zip(terms, sizes):
            idf = classic_idf(total_docs, size)
            if idf > 0:
                weights[self.term_key(term)] = idf

        if not weights:
            logger.debug(f"No query term with positive IDF: {terms}")
            return [], 0

        temp_key = self.temp_key()
        try:
            known = int(self.client.zunionstore(temp_key, weights))
            if count > 0:
                rows = self.client.zrevrange(temp_key, offset, offset + count - 1, withscores=True)
            else:
                rows = []
        finally:
            self.client.delete(temp_key)

        results = [(_decode(member), float(score)) for member, score in rows]
        logger.debug(f"Query {terms}: {known} known matches, returning {len(results)} from offset {offset}")
        return results, known
