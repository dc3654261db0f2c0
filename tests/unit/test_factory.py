"""
Unit tests for index factory and configuration.
"""

from unittest.mock import patch

import pytest

from searcher.config import Settings, get_settings, load_environment
from searcher.index import (
    BaseIndex,
    InMemoryBM25Index,
    IndexFactory,
    PersistedTfIdfIndex,
    get_index,
)


class TestSettings:
    """Test environment-driven settings"""

    def test_defaults(self):
        settings = get_settings()
        assert settings == Settings()
        assert settings.backend == "memory"
        assert settings.k1 == 1.2
        assert settings.b == 0.75
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SEARCH_BACKEND", "Redis")
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/2")
        monkeypatch.setenv("SEARCH_NAMESPACE", "docs")
        monkeypatch.setenv("BM25_K1", "1.5")
        monkeypatch.setenv("BM25_B", "0.5")
        monkeypatch.setenv("SEARCH_RESULT_COUNT", "25")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.backend == "redis"
        assert settings.redis_url == "redis://cache:6379/2"
        assert settings.namespace == "docs"
        assert settings.k1 == 1.5
        assert settings.b == 0.5
        assert settings.result_count == 25
        assert settings.log_level == "DEBUG"

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("SEARCH_RESULT_COUNT", "ten")
        with pytest.raises(ValueError, match="SEARCH_RESULT_COUNT"):
            get_settings()

    def test_blank_number_uses_default(self, monkeypatch):
        monkeypatch.setenv("BM25_K1", " ")
        assert get_settings().k1 == 1.2

    def test_load_environment_prefers_env_local(self, tmp_path, monkeypatch):
        # setenv first so monkeypatch restores the variable after load_dotenv
        monkeypatch.setenv("SEARCH_NAMESPACE", "placeholder")
        (tmp_path / ".env").write_text("SEARCH_NAMESPACE=from-env\n")
        (tmp_path / ".env.local").write_text("SEARCH_NAMESPACE=from-env-local\n")

        loaded = load_environment(tmp_path)

        assert loaded == tmp_path / ".env.local"
        assert get_settings().namespace == "from-env-local"

    def test_load_environment_fallback(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SEARCH_BACKEND", "placeholder")
        (tmp_path / ".env").write_text("SEARCH_BACKEND=redis\n")

        assert load_environment(tmp_path) == tmp_path / ".env"
        assert get_settings().backend == "redis"

    def test_load_environment_missing(self, tmp_path):
        assert load_environment(tmp_path) is None


class TestIndexFactory:
    """Test backend selection"""

    def test_default_memory(self):
        index = IndexFactory.create()
        assert isinstance(index, InMemoryBM25Index)
        assert isinstance(index, BaseIndex)

    def test_shared_interface(self):
        """Test both backends implement the same abstract operations"""
        assert BaseIndex.__abstractmethods__ == {"add_document", "ranked_search", "document_count"}
        with pytest.raises(TypeError):
            BaseIndex()

    def test_memory_parameters_from_settings(self):
        index = IndexFactory.create(settings=Settings(k1=2.0, b=0.3))
        assert index.params.k1 == 2.0
        assert index.params.b == 0.3

    def test_invalid_parameters(self):
        with pytest.raises(ValueError, match="k1"):
            IndexFactory.create(settings=Settings(k1=0))

    def test_backend_from_environment(self, monkeypatch, redis_client):
        monkeypatch.setenv("SEARCH_BACKEND", "redis")
        monkeypatch.setenv("SEARCH_NAMESPACE", "Env")

        index = IndexFactory.create(redis_client=redis_client)

        assert isinstance(index, PersistedTfIdfIndex)
        assert index.prefix == "env:"

    def test_redis_with_client(self, redis_client):
        index = IndexFactory.create(
            backend="redis",
            settings=Settings(namespace="docs", result_count=3),
            redis_client=redis_client,
        )
        assert isinstance(index, PersistedTfIdfIndex)
        assert index.client is redis_client
        assert index.prefix == "docs:"
        assert index.default_count == 3

    def test_redis_client_built_from_url(self, redis_client):
        settings = Settings(redis_url="redis://cache:6380/1")

        with patch("searcher.index.factory.redis.Redis.from_url", return_value=redis_client) as from_url:
            index = IndexFactory.create(backend="redis", settings=settings)

        from_url.assert_called_once_with("redis://cache:6380/1", decode_responses=True)
        assert index.client is redis_client

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown index backend"):
            IndexFactory.create(backend="elasticsearch")

    def test_get_index(self):
        assert isinstance(get_index("memory"), InMemoryBM25Index)

    def test_backends_interchangeable(self, greetings, redis_client):
        """Test both variants rank the scenario the same way"""
        for index in (
            get_index("memory"),
            get_index("redis", redis_client=redis_client),
        ):
            for doc_id, content in greetings.items():
                index.add_document(doc_id, content)

            results, total = index.ranked_search("moon sun", count=10)

            assert total == 2
            assert {r.doc_id for r in results} == {"2", "3"}
            assert all(r.score > 0 for r in results)
