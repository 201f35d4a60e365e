"""Error classes for SFV manifest building and verification."""

from lazy_crc.common import (
    LazyCRCError, FileOpenError, FileSizeError, ChecksumMismatchError
)

from .store import BadFileReason


class SFVError(LazyCRCError):
    """Base error for SFV operations."""
    pass


class InputNotFoundError(SFVError):
    """The path given to the run does not exist."""
    pass


class UnsupportedInputKindError(SFVError):
    """The path given to the run is neither a regular file nor a directory."""
    pass


class MissingArgumentError(SFVError):
    """No input path was supplied on the command line or in config."""
    pass


class ManifestLineError(SFVError):
    """A manifest line does not match the entry grammar."""
    pass


class ManifestDecodeError(SFVError):
    """Manifest content could not be read or decoded as UTF-8/UTF-16."""
    pass


def classify_bad_file(exception: Exception) -> BadFileReason:
    """
    Classify a verification failure into a bad-file reason.

    Args:
        exception: The exception raised while verifying one entry

    Returns:
        BadFileReason for the report

    Raises:
        TypeError: If the exception is not a verification failure
    """
    if isinstance(exception, FileOpenError):
        return BadFileReason.OPEN_FAILED
    elif isinstance(exception, FileSizeError):
        return BadFileReason.SIZE_UNAVAILABLE
    elif isinstance(exception, ChecksumMismatchError):
        return BadFileReason.CHECKSUM_MISMATCH
    raise TypeError(f"Not a verification failure: {type(exception).__name__}")
