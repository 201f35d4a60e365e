"""LazyCRC: CRC32 checksums and SFV manifests for files and directory trees."""

__version__ = "1.0.0"
