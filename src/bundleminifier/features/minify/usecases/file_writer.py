"""
Summary: Change-aware writer for minified CSS/HTML output.
Why: Write ``.min`` files only when their content differs and notify observers.
"""

from __future__ import annotations

from bundleminifier.platform.filesystem import ensure_parent_directory
from bundleminifier.shared.bundle import Bundle

from ..domain.file_names import get_min_file_name
from ..domain.results import MinificationResult
from .content_differ import has_file_content_changed
from .events import EventBus


class MinFileWriter:
    """Persist ``MinificationResult.minified_content`` next to the bundle output."""

    def __init__(self, events: EventBus) -> None:
        self._events = events

    def write(self, bundle: Bundle, result: MinificationResult) -> None:
        """Write the trimmed content to the ``.min`` file when it changed.

        ``result.changed`` and ``result.written_file`` are updated in place.
        Filesystem errors propagate to the caller.
        """

        min_file = get_min_file_name(result.file_name)
        content = (result.minified_content or "").strip()
        result.minified_content = content
        result.written_file = min_file

        changed = has_file_content_changed(min_file, content)
        result.changed |= changed
        self._events.before_write(result.file_name, min_file, bundle, changed)

        if not changed:
            return

        _ = ensure_parent_directory(min_file)
        _ = min_file.write_text(content, encoding="utf-8", newline="")
        self._events.after_write(result.file_name, min_file, bundle, changed)


__all__ = ["MinFileWriter"]
