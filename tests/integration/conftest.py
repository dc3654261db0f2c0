"""Shared fixtures for integration tests

Integration tests use a REAL Redis server:
- Sorted-set commands, pipelines and ZUNIONSTORE run against the actual store
- Every test works in its own random namespace, cleared afterwards

NO MOCKS - these tests verify the command protocol against Redis itself.

IMPORTANT: Integration tests FAIL LOUDLY if Redis is unreachable.
They are deselected by default (addopts = -m 'not integration').

To run integration tests:
    docker run --rm -p 6379:6379 redis:7
    export REDIS_URL=redis://127.0.0.1:6379/0
    pytest -m integration tests/integration/
"""

import os
import secrets

import pytest
import redis

from searcher.index import PersistedTfIdfIndex


@pytest.fixture(scope="session")
def redis_client():
    """
    Real Redis client shared across the session.

    FAILS LOUDLY if the server cannot be reached.
    """
    url = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0")
    client = redis.Redis.from_url(url, decode_responses=True)

    try:
        client.ping()
    except redis.exceptions.ConnectionError as e:
        pytest.fail(
            f"\n\nRedis not reachable at {url}: {e}\n"
            "Start one (docker run --rm -p 6379:6379 redis:7) or set REDIS_URL.\n"
            "Skip integration tests with: pytest -m 'not integration'\n"
        )

    yield client
    client.close()


@pytest.fixture
def persisted_index(redis_client):
    """Index in a throwaway namespace, deleted after the test"""
    index = PersistedTfIdfIndex(client=redis_client, namespace=f"it-{secrets.token_hex(4)}")
    yield index
    index.clear()
