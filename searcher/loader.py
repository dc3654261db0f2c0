"""
Document loading for the command line.

Accepts a file, a directory (files directly inside, or the whole tree with
recursive=True) or a glob pattern. Symlinks and non-regular files are skipped.
Files that are not valid UTF-8 are skipped with a warning.
"""

import glob
import logging
from pathlib import Path
from typing import Iterator, List, Tuple

logger = logging.getLogger(__name__)

GLOB_CHARS = set("*?[")


class InputError(Exception):
    """Path could not be resolved or a file could not be read"""


def collect_paths(target: str, recursive: bool = False) -> List[Path]:
    """
    Resolve a path argument into a sorted list of regular files.

    Args:
        target: File, directory or glob pattern ("" means current directory)
        recursive: Walk subdirectories of a directory target

    Returns:
        Sorted list of file paths

    Raises:
        InputError: Nothing exists at target / glob matched nothing
    """
    target = target or "."

    if GLOB_CHARS & set(target):
        candidates = [Path(p) for p in glob.glob(target, recursive=recursive)]
        if not candidates:
            raise InputError(f"No files match pattern `{target}`")
    else:
        path = Path(target)
        if not path.exists():
            raise InputError(f"Path does not exist: `{target}`")
        if path.is_dir():
            candidates = path.rglob("*") if recursive else path.iterdir()
        else:
            candidates = [path]

    files = []
    for candidate in candidates:
        if candidate.is_symlink() or not candidate.is_file():
            continue
        files.append(candidate)

    return sorted(files)


def read_documents(paths: List[Path]) -> Iterator[Tuple[str, str]]:
    """
    Read files as (doc_id, content) pairs, doc_id being the path string.

    Raises:
        InputError: File could not be read
    """
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning(f"Skipping non UTF-8 file: {path}")
            continue
        except OSError as e:
            raise InputError(f"Could not read file `{path}`: {e}")

        yield str(path), content
