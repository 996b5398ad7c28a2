"""Atomic file write utilities.

Vendored fragments and published workflow trees are written through these
helpers so a destination file is either completely replaced or left as it
was, even when a copy is interrupted.
"""

from __future__ import annotations

from pathlib import Path

from atomicwrites import atomic_write  # type: ignore[import-untyped]

__all__ = [
    "atomic_write_bytes",
    "atomic_write_text",
]


def atomic_write_bytes(
    path: Path | str,
    content: bytes,
    *,
    mkdir: bool = True,
) -> None:
    """Write raw bytes to a file atomically.

    Writes to a temporary file in the destination directory first, then
    renames it over the target path. If the write fails, the original file
    (if any) is left unchanged.

    Args:
        path: Destination file path (Path or str).
        content: Bytes to write, copied verbatim.
        mkdir: If True, create parent directories if they don't exist.

    Raises:
        OSError: If the write or rename operation fails.
    """
    file_path = Path(path)

    if mkdir:
        file_path.parent.mkdir(parents=True, exist_ok=True)

    with atomic_write(str(file_path), mode="wb", overwrite=True) as f:
        f.write(content)


def atomic_write_text(
    path: Path | str,
    content: str,
    *,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """Write text content to a file atomically.

    Args:
        path: Destination file path (Path or str).
        content: Text content to write.
        encoding: Character encoding to use. Defaults to "utf-8".
        mkdir: If True, create parent directories if they don't exist.

    Raises:
        OSError: If the write or rename operation fails.

    Example:
        >>> atomic_write_text("out/shared/tools.md", "---\\n---\\n# Tools\\n")
    """
    atomic_write_bytes(path, content.encode(encoding), mkdir=mkdir)
