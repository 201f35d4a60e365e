"""Base error definitions for lazy_crc packages."""

from typing import Any, Dict


class LazyCRCError(Exception):
    """Base exception for all lazy_crc errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(LazyCRCError):
    """Configuration is invalid or missing."""
    pass


class FileProcessingError(LazyCRCError):
    """Base exception for per-file processing errors."""
    pass


class FileOpenError(FileProcessingError):
    """File could not be opened or read."""
    pass


class FileSizeError(FileProcessingError):
    """File size could not be determined."""
    pass


class RelativePathError(FileProcessingError):
    """Path could not be expressed relative to the traversal root."""
    pass


class ChecksumMismatchError(FileProcessingError):
    """Computed checksum differs from the recorded one."""

    def __init__(self, message: str, expected: int, actual: int, **context: Any) -> None:
        super().__init__(message, expected=expected, actual=actual, **context)
        self.expected = expected
        self.actual = actual
