"""Manifest building for a single file or a directory tree.

Pipeline: discovery -> CRC32 computation -> result store -> manifest writer.

With ``worker_threads > 1`` checksums are computed by a pool of worker
threads pulling file paths from a bounded work queue. Workers only share
the result store, whose insertion step is locked; the manifest is ordered
by path when written, so completion order never shows in the output.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from queue import Queue
from typing import List, Optional

from lazy_crc.common import (
    FileProcessingError, compute_crc32, format_crc32, relative_manifest_path
)
from lazy_crc.common.config_utils import auto_detect_io_workers

from .context import RunContext
from .discovery import is_empty_directory, iter_regular_files
from .errors import InputNotFoundError, UnsupportedInputKindError
from .manifest import write_manifest
from .verifier import report_path_for

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "checksums"


def manifest_path_for(target: Path, suffix: str = ".sfv") -> Path:
    """Where the manifest for target is written.

    A directory gets its manifest inside itself (``D/D.sfv``), a single file
    gets one next to it (``dir/F.sfv``).
    """
    name = target.name
    if name in ("", "..", "."):
        name = target.resolve().name
    name = name or DEFAULT_MANIFEST_NAME
    if target.is_dir():
        return target / f"{name}{suffix}"
    return target.parent / f"{name}{suffix}"


@dataclass
class BuildResult:
    """Result of a build run.

    Attributes:
        target: File or directory that was checksummed
        manifest_path: Manifest written, or None when there was nothing to write
        entries_written: Number of entries in the manifest
        failed_files: Files skipped because they could not be checksummed
    """
    target: Path
    manifest_path: Optional[Path]
    entries_written: int = 0
    failed_files: List[Path] = field(default_factory=list)


class ManifestBuilder:
    """Computes checksums into the run's store and writes the manifest."""

    def __init__(self, context: RunContext) -> None:
        self.context = context
        self.config = context.config
        self._failed: List[Path] = []
        self._failed_lock = threading.Lock()

    def build(self, target: Path) -> BuildResult:
        """Checksum target and write its manifest.

        Args:
            target: Regular file or directory

        Returns:
            BuildResult describing what was written

        Raises:
            InputNotFoundError: If target does not exist
            UnsupportedInputKindError: If target is neither a file nor a directory
        """
        if not target.exists():
            raise InputNotFoundError(
                f"The specified file '{target}' doesn't exist.", path=str(target)
            )

        # Symlinks are not followed: entry name and manifest location come from the given path
        target = target.absolute()
        manifest_path = manifest_path_for(target, self.config.manifest_suffix)
        excluded = {report_path_for(manifest_path, self.config.report_suffix).name}

        if target.is_dir():
            if is_empty_directory(target):
                logger.info(f"Directory is empty, nothing to checksum: {target}")
            else:
                self._process_directory(target)
        elif target.is_file():
            self.process_file(target)
        else:
            raise UnsupportedInputKindError(
                "The specified item is not a regular file or directory.", path=str(target)
            )

        written = write_manifest(self.context.store, manifest_path, excluded)
        entries_written = (
            len(self.context.store.entries(exclude={manifest_path.name, *excluded})) if written else 0
        )

        return BuildResult(
            target=target,
            manifest_path=manifest_path if written else None,
            entries_written=entries_written,
            failed_files=list(self._failed),
        )

    def process_file(self, file_path: Path, root: Optional[Path] = None) -> bool:
        """Checksum one file and store it.

        The entry is keyed by the path relative to root, or by the base name
        when no root is given. Per-file failures are logged and the file is
        left out of the manifest.

        Returns:
            True if a checksum was stored
        """
        logger.debug(f"Processing '{file_path}'")
        try:
            key = relative_manifest_path(file_path, root) if root is not None else file_path.name
            crc = compute_crc32(file_path, chunk_size=self.config.chunk_size)
        except FileProcessingError as e:
            logger.warning(e.message)
            with self._failed_lock:
                self._failed.append(file_path)
            return False

        inserted = self.context.store.add(key, crc)
        if inserted:
            logger.debug(f"Checksum: {{'path': {key!r}, 'crc32': {format_crc32(crc)!r}}}")
        return inserted

    def _worker_count(self) -> int:
        if self.config.worker_threads == 0:
            return auto_detect_io_workers()
        return self.config.worker_threads

    def _process_directory(self, root: Path) -> None:
        worker_count = self._worker_count()
        if worker_count <= 1:
            for file_path in iter_regular_files(root):
                self.process_file(file_path, root)
            return

        work_queue: Queue = Queue(maxsize=self.config.queue_maxsize)
        threads = []
        for thread_id in range(worker_count):
            thread = threading.Thread(
                target=self._worker_main,
                args=(thread_id, work_queue, root),
                name=f"crc-worker-{thread_id}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

        logger.debug(f"Started {worker_count} checksum worker threads")

        try:
            for file_path in iter_regular_files(root):
                work_queue.put(file_path)
        finally:
            # One sentinel per worker
            for _ in threads:
                work_queue.put(None)
            for thread in threads:
                thread.join()

    def _worker_main(self, thread_id: int, work_queue: Queue, root: Path) -> None:
        processed_count = 0
        while True:
            file_path = work_queue.get()
            try:
                if file_path is None:
                    break
                self.process_file(file_path, root)
                processed_count += 1
            except Exception:
                logger.exception(f"Worker thread {thread_id} failed on {file_path}")
                with self._failed_lock:
                    self._failed.append(file_path)
            finally:
                work_queue.task_done()

        logger.debug(f"Worker thread {thread_id} stopped: {{'processed': {processed_count}}}")
