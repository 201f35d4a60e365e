"""SFV manifest reading and writing.

Manifest grammar, one item per line:

    ; comment                  (first character is ';')
                               (blank)
    <path> <8 hex digits>      (entry)

Manifests and bad-file reports are always written as UTF-8. Manifests are
read as UTF-8 or UTF-16 since other SFV tools produce both.
"""

import codecs
import logging
from pathlib import Path
from typing import Collection, Iterable, List, Optional

from lazy_crc.common import is_crc32_hex, parse_crc32

from .errors import ManifestDecodeError, ManifestLineError
from .store import BadFileRecord, FileEntry, ResultStore

logger = logging.getLogger(__name__)

MANIFEST_ENCODING = "utf-8"
COMMENT_PREFIX = ";"

_UTF16_BOMS = (codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)


def format_manifest(entries: Iterable[FileEntry]) -> str:
    """Render entries as SFV text, one ``<path> <CRC32>`` line each."""
    return "".join(f"{entry.path} {entry.crc32_hex}\n" for entry in entries)


def build_manifest(
    store: ResultStore, own_output_path: Path, exclude: Collection[str] = ()
) -> Optional[bytes]:
    """
    Serialize a store into manifest bytes.

    The entry whose path equals the manifest's own file name is left out,
    so a manifest never lists itself. The store is not modified.

    Args:
        store: Results of the build run
        own_output_path: Where the manifest will be written
        exclude: Further top-level names to leave out (e.g. the bad-file report)

    Returns:
        UTF-8 encoded manifest, or None if no entries remain
    """
    entries = store.entries(exclude={own_output_path.name, *exclude})
    if not entries:
        return None
    return format_manifest(entries).encode(MANIFEST_ENCODING)


def write_manifest(store: ResultStore, output_path: Path, exclude: Collection[str] = ()) -> bool:
    """
    Write the store's entries to output_path.

    Nothing is written (and no file is created) when there are no entries
    left after exclusions.

    Returns:
        True if a manifest file was written
    """
    data = build_manifest(store, output_path, exclude)
    if data is None:
        logger.debug(f"No entries to write, skipping manifest: {output_path}")
        return False

    output_path.write_bytes(data)
    return True


def decode_manifest(data: bytes) -> str:
    """
    Decode manifest bytes written as UTF-8 or UTF-16.

    A byte order mark selects the codec. Without one, content with NUL bytes
    is taken as UTF-16 (text manifests never contain NUL) and everything
    else as UTF-8.

    Raises:
        ManifestDecodeError: If the content is neither UTF-8 nor UTF-16
    """
    if data.startswith(codecs.BOM_UTF8):
        encoding = "utf-8-sig"
    elif data.startswith(_UTF16_BOMS):
        encoding = "utf-16"
    elif b"\x00" in data and len(data) % 2 == 0:
        # ASCII characters leave NUL in the high byte, which gives away the byte order
        encoding = "utf-16-be" if data[0:1] == b"\x00" else "utf-16-le"
    else:
        encoding = "utf-8"

    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise ManifestDecodeError(
            f"Manifest is not valid {encoding}: {e}", encoding=encoding, position=e.start
        ) from e


def parse_manifest_line(line: str) -> FileEntry:
    """
    Parse one non-comment manifest line.

    The last whitespace-delimited token is the checksum when it is exactly
    8 hex digits; everything before it, with trailing whitespace trimmed,
    is the path. A path that itself ends in whitespace plus 8 hex digits is
    indistinguishable from an entry and is split at its last token.

    Raises:
        ManifestLineError: If the line is not ``<path> <8 hex digits>``
    """
    text = line.rstrip()
    parts = text.rsplit(None, 1)
    if len(parts) != 2:
        raise ManifestLineError(f"Missing path or checksum: {line!r}", line=line)

    path, checksum = parts
    path = path.rstrip()
    if not path or not is_crc32_hex(checksum):
        raise ManifestLineError(f"Not a manifest entry: {line!r}", line=line)

    return FileEntry(path=path, crc32=parse_crc32(checksum))


def parse_manifest(data: bytes | str) -> List[FileEntry]:
    """
    Parse manifest content into entries, in file order.

    Blank lines and ``;`` comments are ignored. Lines that do not match the
    entry grammar are skipped without error.

    Args:
        data: Raw manifest bytes (UTF-8/UTF-16) or already decoded text

    Raises:
        ManifestDecodeError: If bytes cannot be decoded
    """
    text = decode_manifest(data) if isinstance(data, bytes) else data

    entries = []
    # LF only: CR of CRLF is trimmed per line, other splitlines separators can be part of a name
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip() or line.startswith(COMMENT_PREFIX):
            continue
        try:
            entries.append(parse_manifest_line(line))
        except ManifestLineError as e:
            logger.debug(f"Skipping unparsable manifest line {line_number}: {e.message}")

    return entries


def read_manifest(manifest_path: Path) -> List[FileEntry]:
    """Read and parse a manifest file.

    Raises:
        ManifestDecodeError: If the file cannot be read or decoded
    """
    try:
        data = manifest_path.read_bytes()
    except OSError as e:
        raise ManifestDecodeError(
            f"Unable to read manifest {manifest_path}: {e}",
            manifest_path=str(manifest_path),
        ) from e
    return parse_manifest(data)


def format_bad_file_report(records: Iterable[BadFileRecord]) -> str:
    """Render bad-file records as ``<path> <reason>`` lines."""
    return "".join(f"{record.path} {record.reason.value}\n" for record in records)


def write_bad_file_report(records: List[BadFileRecord], report_path: Path) -> bool:
    """Write the bad-file report; nothing is written for an empty list.

    Returns:
        True if a report file was written
    """
    if not records:
        return False

    report_path.write_bytes(format_bad_file_report(records).encode(MANIFEST_ENCODING))
    return True
