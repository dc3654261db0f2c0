"""
Command line entry point.

Usage:
    searcher "moon sun" ./docs
    searcher "moon sun" "notes/**/*.txt" --recursive
    searcher "moon sun" ./docs --backend redis --namespace docs --reset
    searcher "moon sun" --backend redis --namespace docs --no-index

Prints one "doc_id: <id>, score: <score>" line per result and exits with
status 1 when nothing matches or when reading files / talking to Redis fails.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import redis

from .config import get_settings, load_environment
from .index import BaseIndex, IndexFactory, PersistedTfIdfIndex, SearchIndexError
from .loader import InputError, collect_paths, read_documents
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="searcher",
        description="Rank files by relevance to a free-text query",
    )
    parser.add_argument("query", help="Free-text query")
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files, directories or glob patterns to index (default: current directory)",
    )
    parser.add_argument(
        "--backend",
        choices=["memory", "redis"],
        help="Index backend (default: SEARCH_BACKEND or memory)",
    )
    parser.add_argument("--recursive", "-r", action="store_true", help="Walk directories recursively")
    parser.add_argument("--offset", type=int, default=0, help="Number of top results to skip")
    parser.add_argument("--count", "-n", type=int, help="Number of results (default: SEARCH_RESULT_COUNT)")
    parser.add_argument("--namespace", help="Redis key namespace (default: SEARCH_NAMESPACE)")
    parser.add_argument(
        "--no-index",
        action="store_true",
        help="Query an existing Redis index without indexing any files",
    )
    parser.add_argument("--reset", action="store_true", help="Delete the Redis namespace before indexing")
    return parser


def index_paths(index: BaseIndex, targets: List[str], recursive: bool = False) -> int:
    """Add every file resolved from targets to the index. Returns number of documents added."""
    seen = set()
    added = 0

    for target in targets:
        paths = [p for p in collect_paths(target, recursive=recursive) if p not in seen]
        seen.update(paths)

        for doc_id, content in read_documents(paths):
            index.add_document(doc_id, content)
            added += 1

    logger.info(f"Indexed {added} documents from {len(targets)} path(s)")
    return added


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.namespace:
        settings = replace(settings, namespace=args.namespace)

    index = IndexFactory.create(backend=args.backend, settings=settings)
    try:
        persisted = isinstance(index, PersistedTfIdfIndex)

        if (args.no_index or args.reset) and not persisted:
            raise ValueError("--no-index and --reset require the redis backend")

        if args.reset:
            index.clear()
        if not args.no_index:
            index_paths(index, args.paths, recursive=args.recursive)

        count = args.count if args.count is not None else settings.result_count
        results, total = index.ranked_search(args.query, offset=args.offset, count=count)
    finally:
        index.close()

    if not results:
        print(f"No results found for query: {args.query}", file=sys.stderr)
        return 1

    for result in results:
        print(f"doc_id: {result.doc_id}, score: {result.score}")

    logger.info(f"Returned {len(results)} of {total} matching documents")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    load_environment()
    settings = get_settings()
    setup_logging(
        log_file=settings.log_file or None,
        console_level=getattr(logging, settings.log_level, logging.WARNING),
    )

    try:
        return run(args)
    except (InputError, SearchIndexError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except redis.exceptions.RedisError as e:
        print(f"Redis error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
