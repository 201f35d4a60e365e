"""Common utilities for lazy_crc packages."""

from .config import ConfigLoader
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import (
    LazyCRCError, ConfigurationError, FileProcessingError, FileOpenError,
    FileSizeError, RelativePathError, ChecksumMismatchError
)
from .path_utils import to_manifest_path, relative_manifest_path, resolve_manifest_entry
from .checksums import (
    CRC32_CHUNK_SIZE, compute_crc32, compute_crc32_hex, format_crc32, parse_crc32, is_crc32_hex
)

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'LazyCRCError',
    'ConfigurationError',
    'FileProcessingError',
    'FileOpenError',
    'FileSizeError',
    'RelativePathError',
    'ChecksumMismatchError',
    'to_manifest_path',
    'relative_manifest_path',
    'resolve_manifest_entry',
    'CRC32_CHUNK_SIZE',
    'compute_crc32',
    'compute_crc32_hex',
    'format_crc32',
    'parse_crc32',
    'is_crc32_hex',
]
