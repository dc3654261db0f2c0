"""
Factory to create index instances based on configuration.
"""

import logging
from typing import Optional

import redis

from ..config import Settings, get_settings
from .base import BaseIndex
from .memory import InMemoryBM25Index
from .persisted import PersistedTfIdfIndex
from .scoring import BM25Parameters

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "redis")


class IndexFactory:
    """Factory to create index instances based on configuration."""

    @classmethod
    def create(
        cls,
        backend: Optional[str] = None,
        settings: Optional[Settings] = None,
        redis_client: Optional[redis.Redis] = None
    ) -> BaseIndex:
        """
        Create an index for the configured backend.

        Config (env vars, via Settings):
            SEARCH_BACKEND: "memory" | "redis" (default: memory)
            REDIS_URL: Redis connection URL (redis backend)
            SEARCH_NAMESPACE: Key prefix (redis backend)
            BM25_K1, BM25_B: BM25 constants (memory backend)

        Args:
            backend: Overrides SEARCH_BACKEND
            settings: Overrides environment settings
            redis_client: Pre-built client (redis backend); built from
                REDIS_URL when omitted

        Returns:
            InMemoryBM25Index or PersistedTfIdfIndex
        """
        settings = settings or get_settings()
        backend = (backend or settings.backend).lower()

        if backend not in BACKENDS:
            raise ValueError(
                f"Unknown index backend: {backend}. "
                f"Valid options: {', '.join(BACKENDS)}"
            )

        if backend == "memory":
            params = BM25Parameters(k1=settings.k1, b=settings.b)
            logger.info(f"Creating in-memory BM25 index (k1={params.k1}, b={params.b})")
            return InMemoryBM25Index(params=params)

        if redis_client is None:
            logger.info(f"Connecting to Redis: {settings.redis_url}")
            redis_client = redis.Redis.from_url(settings.redis_url, decode_responses=True)

        logger.info(f"Creating Redis TF-IDF index (namespace={settings.namespace})")
        return PersistedTfIdfIndex(
            client=redis_client,
            namespace=settings.namespace,
            default_count=settings.result_count,
        )
