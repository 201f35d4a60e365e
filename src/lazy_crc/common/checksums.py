"""CRC32 checksum utilities for file integrity verification."""

import os
import re
import zlib
from pathlib import Path

from .errors import FileOpenError, FileSizeError

# Constants for checksum calculation
CRC32_CHUNK_SIZE = 65536  # 64 KB chunks
CRC32_HEX_DIGITS = 8

_CRC32_HEX_PATTERN = re.compile(r"[0-9A-Fa-f]{8}")


def compute_crc32(file_path: Path, chunk_size: int = CRC32_CHUNK_SIZE) -> int:
    """
    Compute CRC32 checksum of entire file.

    The file is read sequentially from offset 0 in chunks of ``chunk_size``
    bytes, each chunk folded into a running CRC32 state that starts at 0.
    The chunk size only affects memory use and the number of reads; the
    checksum is the same for any positive chunk size. An empty file yields
    0 without a single read.

    Args:
        file_path: Path to the file
        chunk_size: Number of bytes read per iteration

    Returns:
        CRC32 checksum as unsigned 32-bit integer

    Raises:
        ValueError: If chunk_size is not positive
        FileOpenError: If the file cannot be opened or read
        FileSizeError: If the file size cannot be determined
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    try:
        f = open(file_path, 'rb')
    except OSError as e:
        raise FileOpenError(
            f"Unable to open {file_path}: {e}",
            file_path=str(file_path),
        ) from e

    with f:
        try:
            file_size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise FileSizeError(
                f"Unable to obtain the file size for {file_path}: {e}",
                file_path=str(file_path),
            ) from e

        crc = 0
        bytes_processed = 0
        try:
            while bytes_processed < file_size:
                chunk = f.read(min(chunk_size, file_size - bytes_processed))
                if not chunk:
                    # File shrank while reading
                    break
                crc = zlib.crc32(chunk, crc)
                bytes_processed += len(chunk)
        except OSError as e:
            raise FileOpenError(
                f"Unable to read {file_path}: {e}",
                file_path=str(file_path),
                bytes_processed=bytes_processed,
            ) from e

    # Return as unsigned 32-bit integer
    return crc & 0xFFFFFFFF


def compute_crc32_hex(file_path: Path, chunk_size: int = CRC32_CHUNK_SIZE) -> str:
    """
    Compute CRC32 checksum of entire file as hex string.

    Args:
        file_path: Path to the file
        chunk_size: Number of bytes read per iteration

    Returns:
        CRC32 checksum as 8-character uppercase hex string (e.g., "CBF43926")

    Raises:
        FileOpenError: If the file cannot be opened or read
        FileSizeError: If the file size cannot be determined
    """
    return format_crc32(compute_crc32(file_path, chunk_size=chunk_size))


def format_crc32(value: int) -> str:
    """Render a CRC32 value as 8 zero-padded uppercase hex digits."""
    return f"{value & 0xFFFFFFFF:08X}"


def parse_crc32(text: str) -> int:
    """
    Parse an 8-digit hex CRC32 string (any letter case).

    Args:
        text: Hex digits, e.g. "cbf43926" or "CBF43926"

    Returns:
        CRC32 value as unsigned 32-bit integer

    Raises:
        ValueError: If text is not exactly 8 hex digits
    """
    if not _CRC32_HEX_PATTERN.fullmatch(text):
        raise ValueError(f"Not an 8-digit hex CRC32 value: {text!r}")
    return int(text, 16)


def is_crc32_hex(text: str) -> bool:
    """Return True if text is exactly 8 hex digits."""
    return _CRC32_HEX_PATTERN.fullmatch(text) is not None
