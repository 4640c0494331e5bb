"""
Summary: Naming rule for minified output files.
Why: Avoid double ``.min`` suffixes when a bundle already targets a ``.min`` file.
"""

from __future__ import annotations

from pathlib import Path

MIN_SEGMENT = ".min."


def get_min_file_name(file: Path) -> Path:
    """Return the ``.min`` sibling of ``file``.

    ``app.js`` becomes ``app.min.js``; ``app.min.js`` is returned unchanged.
    """

    # A leading ".min." (hidden file) does not count as an existing suffix.
    if file.name.lower().find(MIN_SEGMENT) > 0:
        return file

    return file.with_name(f"{file.stem}.min{file.suffix}")


__all__ = ["MIN_SEGMENT", "get_min_file_name"]
