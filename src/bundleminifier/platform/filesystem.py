"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def last_write_time(path: Path) -> float | None:
    """Return the modification timestamp of ``path`` or None when it is missing."""

    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


__all__ = ["ensure_directory", "ensure_parent_directory", "last_write_time"]
