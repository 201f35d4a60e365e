"""Regular file discovery under a directory tree."""

import logging
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def iter_regular_files(root: Path) -> Iterator[Path]:
    """Yield every regular file under root, recursively.

    Order is whatever the filesystem returns; callers needing a stable order
    must sort. Directories that cannot be listed are skipped.

    Args:
        root: Directory to walk (ABSOLUTE path)

    Yields:
        Absolute paths of regular files
    """
    for file_path in root.rglob("*"):
        try:
            if file_path.is_file():
                yield file_path
        except OSError as e:
            logger.warning(f"Unable to stat {file_path}: {e}")


def is_empty_directory(root: Path) -> bool:
    """Return True if root has no entries at all."""
    return next(root.iterdir(), None) is None
