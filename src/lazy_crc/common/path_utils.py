"""Path utilities for consistent manifest path handling."""

from pathlib import Path, PurePath, PurePosixPath

from .errors import RelativePathError


def to_manifest_path(path: PurePath | str) -> str:
    """
    Convert a relative path to the form stored in a manifest.

    Manifest paths always use forward slashes so a manifest written on one
    platform verifies on another. No Unicode normalization is applied: the
    stored name must still open the same file on disk.

    Args:
        path: Relative path (Path object or string)

    Returns:
        Path string with forward slashes

    Examples:
        >>> to_manifest_path(Path("photos") / "2023" / "image.jpg")
        'photos/2023/image.jpg'
    """
    if isinstance(path, str):
        path = PurePath(path)
    return path.as_posix()


def relative_manifest_path(file_path: Path, root: Path) -> str:
    """
    Express file_path relative to root, in manifest form.

    Args:
        file_path: File found under root
        root: Traversal root

    Returns:
        Relative path string with forward slashes

    Raises:
        RelativePathError: If file_path is not located under root
            (different drive, or outside the tree)
    """
    try:
        relative = file_path.relative_to(root)
    except ValueError as e:
        raise RelativePathError(
            f"Unable to obtain the relative path for {file_path}",
            file_path=str(file_path),
            root=str(root),
        ) from e
    return to_manifest_path(relative)


def resolve_manifest_entry(manifest_dir: Path, entry_path: str) -> Path:
    """Resolve a manifest entry path against the manifest's directory.

    Backslash separators written by Windows tools are accepted too.
    """
    parts = PurePosixPath(entry_path.replace('\\', '/')).parts
    return manifest_dir.joinpath(*parts)
