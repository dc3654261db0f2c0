"""Unit test configuration - in-process Redis for isolated testing"""

import fakeredis
import pytest

from searcher.index import InMemoryBM25Index, PersistedTfIdfIndex


@pytest.fixture(autouse=True)
def isolated_environment(clean_env):
    """
    Unit tests never read the developer's SEARCH_* / REDIS_URL variables.

    Integration tests use a real Redis at REDIS_URL; unit tests use fakeredis.
    """
    yield


@pytest.fixture
def redis_server():
    """Fresh fake Redis server per test (no state shared between tests)"""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def persisted_index(redis_client):
    return PersistedTfIdfIndex(client=redis_client, namespace="test")


@pytest.fixture
def memory_index(greetings):
    index = InMemoryBM25Index()
    for doc_id, content in greetings.items():
        index.add_document(doc_id, content)
    return index
