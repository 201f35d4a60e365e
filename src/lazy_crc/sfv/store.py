"""In-memory result store for one checksum run.

Holds the path -> CRC32 mapping produced while building a manifest and the
append-only log of files that failed verification. All mutations go through
a single lock, so worker threads may insert concurrently; checksum
computation itself never touches the store.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Collection, Dict, List, Optional

from lazy_crc.common import format_crc32

logger = logging.getLogger(__name__)


class BadFileReason(str, Enum):
    """Why a manifest entry failed verification."""
    OPEN_FAILED = "open-failed"
    SIZE_UNAVAILABLE = "size-unavailable"
    CHECKSUM_MISMATCH = "checksum-mismatch"


@dataclass(frozen=True)
class FileEntry:
    """A manifest entry.

    Attributes:
        path: Base name (single file) or path relative to the traversal root
        crc32: CRC32 checksum as unsigned 32-bit integer
    """
    path: str
    crc32: int

    @property
    def crc32_hex(self) -> str:
        return format_crc32(self.crc32)


@dataclass(frozen=True)
class BadFileRecord:
    """A manifest entry that failed verification."""
    path: str
    reason: BadFileReason


class ResultStore:
    """Path -> checksum mapping plus bad-file log for a single run."""

    def __init__(self) -> None:
        self._checksums: Dict[str, int] = {}
        self._bad_files: List[BadFileRecord] = []
        self._lock = threading.Lock()

    def add(self, path: str, crc32: int) -> bool:
        """Insert a checksum; the first value stored for a path wins.

        Returns:
            True if inserted, False if the path was already present
        """
        with self._lock:
            if path in self._checksums:
                logger.debug(f"Duplicate path ignored: {path}")
                return False
            self._checksums[path] = crc32
            return True

    def add_bad_file(self, path: str, reason: BadFileReason) -> BadFileRecord:
        """Append a bad-file record (never deduplicated)."""
        record = BadFileRecord(path=path, reason=reason)
        with self._lock:
            self._bad_files.append(record)
        return record

    def get(self, path: str) -> Optional[int]:
        with self._lock:
            return self._checksums.get(path)

    def entries(self, exclude: Collection[str] = ()) -> List[FileEntry]:
        """Return entries sorted by path.

        Args:
            exclude: Paths to leave out (the store is not modified)
        """
        with self._lock:
            items = sorted(self._checksums.items())
        return [FileEntry(path, crc) for path, crc in items if path not in exclude]

    @property
    def bad_files(self) -> List[BadFileRecord]:
        """Bad-file records in the order they were discovered."""
        with self._lock:
            return list(self._bad_files)

    def __len__(self) -> int:
        with self._lock:
            return len(self._checksums)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._checksums
