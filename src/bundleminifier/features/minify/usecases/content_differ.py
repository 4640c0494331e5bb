"""Summary: Content comparison deciding whether an output file must be rewritten.
Why: Keep repeated builds idempotent by skipping writes of identical text."""

from __future__ import annotations

from pathlib import Path


def has_file_content_changed(file_name: Path, new_content: str) -> bool:
    """Return True when ``file_name`` is missing or differs from ``new_content``.

    The comparison runs on the UTF-8 bytes so line-ending or BOM differences
    count as changes.
    """

    try:
        old_content = file_name.read_bytes()
    except FileNotFoundError:
        return True

    return old_content != new_content.encode("utf-8")


__all__ = ["has_file_content_changed"]
