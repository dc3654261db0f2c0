"""
Configuration from environment variables.

Load order:
1. .env.local (local dev, highest priority)
2. .env (fallback)
3. System environment variables only

Variables:
    SEARCH_BACKEND       "memory" | "redis" (default: memory)
    REDIS_URL            Redis connection URL (default: redis://127.0.0.1:6379/0)
    SEARCH_NAMESPACE     Key prefix for the Redis index (default: searcher)
    BM25_K1 / BM25_B     BM25 constants (default: 1.2 / 0.75)
    SEARCH_RESULT_COUNT  Default page size (default: 10)
    LOG_LEVEL            Console log level (default: WARNING)
    LOG_FILE             Base log file path (default: logs/searcher.log)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    backend: str = "memory"
    redis_url: str = "redis://127.0.0.1:6379/0"
    namespace: str = "searcher"
    k1: float = 1.2
    b: float = 0.75
    result_count: int = 10
    log_level: str = "WARNING"
    log_file: str = "logs/searcher.log"


def load_environment(root: Optional[Path] = None) -> Optional[Path]:
    """
    Load .env.local or .env (from root, default: working directory) into os.environ.

    Returns:
        Path of the loaded file, or None if neither exists
    """
    root = root or Path.cwd()
    env_local = root / ".env.local"
    env_file = root / ".env"

    for candidate in (env_local, env_file):
        if candidate.exists():
            load_dotenv(candidate, override=True)
            logger.debug(f"Loaded environment from: {candidate}")
            return candidate

    return None


def _env_number(name: str, default, cast):
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a {cast.__name__}, got {value!r}")


def get_settings() -> Settings:
    """Read settings from the current environment"""
    return Settings(
        backend=os.getenv("SEARCH_BACKEND", "memory").lower(),
        redis_url=os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0"),
        namespace=os.getenv("SEARCH_NAMESPACE", "searcher"),
        k1=_env_number("BM25_K1", 1.2, float),
        b=_env_number("BM25_B", 0.75, float),
        result_count=_env_number("SEARCH_RESULT_COUNT", 10, int),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        log_file=os.getenv("LOG_FILE", "logs/searcher.log"),
    )
