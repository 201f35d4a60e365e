"""Verification of a directory against an existing SFV manifest."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lazy_crc.common import (
    ChecksumMismatchError, FileProcessingError, LogContext, compute_crc32,
    format_crc32, resolve_manifest_entry
)

from .context import RunContext
from .errors import InputNotFoundError, UnsupportedInputKindError, classify_bad_file
from .manifest import read_manifest, write_bad_file_report
from .store import BadFileRecord, FileEntry

logger = logging.getLogger(__name__)


def report_path_for(manifest_path: Path, suffix: str = ".bad.txt") -> Path:
    """Bad-file report location: next to the manifest, named after it."""
    return manifest_path.with_name(f"{manifest_path.name}{suffix}")


@dataclass
class VerificationResult:
    """Result of verifying a manifest.

    Attributes:
        manifest_path: Manifest that was verified
        good_count: Entries whose checksum matched
        bad_files: Failed entries in manifest order
        report_path: Bad-file report written, or None when nothing failed
    """
    manifest_path: Path
    good_count: int = 0
    bad_files: List[BadFileRecord] = field(default_factory=list)
    report_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return not self.bad_files


class ManifestVerifier:
    """Recomputes every manifest entry and reconciles it with the recorded CRC.

    Every entry is attempted; failures are appended to the run's bad-file
    log and never stop the pass.
    """

    def __init__(self, context: RunContext) -> None:
        self.context = context
        self.config = context.config

    def verify(self, manifest_path: Path) -> VerificationResult:
        """Verify all entries of a manifest.

        Entry paths are resolved against the manifest's directory. When any
        entry fails, a bad-file report is written next to the manifest;
        otherwise a report left by an earlier run is removed.

        Raises:
            InputNotFoundError: If the manifest does not exist
            UnsupportedInputKindError: If the manifest path is not a regular file
            ManifestDecodeError: If the manifest cannot be read or decoded
        """
        if not manifest_path.exists():
            raise InputNotFoundError(
                f"The specified file '{manifest_path}' doesn't exist.", path=str(manifest_path)
            )
        if not manifest_path.is_file():
            raise UnsupportedInputKindError(
                "The specified manifest is not a regular file.", path=str(manifest_path)
            )

        manifest_path = manifest_path.absolute()
        base_dir = manifest_path.parent
        store = self.context.store

        with LogContext(logger, manifest=str(manifest_path)):
            entries = read_manifest(manifest_path)
            logger.info(f"Verifying {len(entries)} entries from '{manifest_path}'")

            good_count = 0
            for entry in entries:
                try:
                    self.verify_entry(base_dir, entry)
                except FileProcessingError as e:
                    reason = classify_bad_file(e)
                    store.add_bad_file(entry.path, reason)
                    logger.warning(f"{entry.path}: {reason.value}")
                else:
                    good_count += 1

        result = VerificationResult(
            manifest_path=manifest_path,
            good_count=good_count,
            bad_files=store.bad_files,
        )

        report_path = report_path_for(manifest_path, self.config.report_suffix)
        if write_bad_file_report(result.bad_files, report_path):
            result.report_path = report_path
        elif report_path.exists():
            logger.info(f"All entries OK, removing previous report '{report_path}'")
            report_path.unlink()

        return result

    def verify_entry(self, base_dir: Path, entry: FileEntry) -> None:
        """Check one entry against the file on disk.

        Raises:
            FileOpenError: If the file cannot be opened or read
            FileSizeError: If its size cannot be determined
            ChecksumMismatchError: If the content no longer matches
        """
        file_path = resolve_manifest_entry(base_dir, entry.path)
        actual = compute_crc32(file_path, chunk_size=self.config.chunk_size)
        if actual != entry.crc32:
            raise ChecksumMismatchError(
                f"CRC32 mismatch for {entry.path}: "
                f"expected {format_crc32(entry.crc32)}, got {format_crc32(actual)}",
                expected=entry.crc32,
                actual=actual,
                file_path=str(file_path),
            )
