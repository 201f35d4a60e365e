"""Shared fixtures for SFV tests."""

import zlib

import pytest


SAMPLE_FILES = {
    "check.txt": b"123456789",
    "empty.bin": b"",
    "docs/readme.md": b"# LazyCRC\n",
    "docs/nested/deep.bin": bytes(range(256)) * 300,
    "photos/img 001.jpg": b"\xff\xd8\xff\xe0" + b"\x00" * 1000,
}


@pytest.fixture
def sample_tree(tmp_path):
    """Create a directory tree with known contents.

    Returns:
        Tuple of (root directory, {relative path: expected CRC32})
    """
    root = tmp_path / "data"
    root.mkdir()
    expected = {}
    for relative, content in SAMPLE_FILES.items():
        file_path = root / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        expected[relative] = zlib.crc32(content)
    return root, expected
