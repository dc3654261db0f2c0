"""Pytest configuration shared by unit and integration tests"""

import sys
from pathlib import Path

import pytest

# Add project root to path for searcher imports (tests also run without install)
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

SEARCH_ENV_VARS = (
    "SEARCH_BACKEND",
    "REDIS_URL",
    "SEARCH_NAMESPACE",
    "BM25_K1",
    "BM25_B",
    "SEARCH_RESULT_COUNT",
    "LOG_LEVEL",
    "LOG_FILE",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every searcher variable so Settings defaults apply"""
    for name in SEARCH_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def greetings():
    """Three one-word documents sharing "hello" """
    return {
        "1": "Hello, world!",
        "2": "Hello, moon!",
        "3": "Hello, sun!",
    }
