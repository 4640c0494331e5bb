"""Where: platform/logging/handlers.py
What: Rich console handler that renders structured minification events.
Why: Keep build output scannable when many bundles are processed in one run.
"""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text
from typing_extensions import override


class PipelineRichHandler(RichHandler):
    """Rich handler that renders ``minify.*`` records with icons and compact paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "minify.write.before": ("📝", "blue"),
        "minify.write.after": ("✅", "green"),
        "minify.gzip.before": ("🗜️", "blue"),
        "minify.gzip.after": ("📦", "magenta"),
        "minify.error": ("⛔", "red"),
        "minify.batch.complete": ("🏁", "cyan"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "minify.write.before": "Checking ",
        "minify.write.after": "Minified ",
        "minify.gzip.before": "Checking gzip ",
        "minify.gzip.after": "Compressed ",
        "minify.error": "Failed ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        super().__init__(*args, **kwargs)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        """Return a platform-aware ``PurePath`` for the given raw string."""

        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _format_path(self, path: str) -> Text:
        """Render ``path`` keeping only its trailing segments."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        parts = [part for part in pure_path.parts if part and part != pure_path.anchor]

        if len(parts) > self._PATH_SEGMENT_LIMIT:
            display = "…" + separator + separator.join(parts[-self._PATH_SEGMENT_LIMIT:])
        else:
            display = str(pure_path)

        text = Text()
        for char in display:
            if char == separator or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_minify_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured minification events with dedicated styling."""

        event = getattr(record, "minify_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))

        if event == "minify.batch.complete":
            _ = body.append("Bundles complete")
            metrics: list[str] = []
            for name in ("processed", "changed", "failed"):
                value = getattr(record, name, None)
                if isinstance(value, int):
                    metrics.append(f"{name}={value}")
            if metrics:
                _ = body.append(" [" + ", ".join(metrics) + "]")
            _ = text.append_text(body)
            return text

        prefix = self._EVENT_PREFIXES.get(event)
        if prefix:
            _ = body.append(prefix)

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path:
            _ = body.append_text(self._format_path(str(source_path)))
        if target_path:
            _ = body.append(" → ")
            _ = body.append_text(self._format_path(str(target_path)))

        details: list[str] = []
        changed = getattr(record, "changed", None)
        if event in {"minify.write.before", "minify.gzip.before"} and changed is False:
            details.append("unchanged")
        error_message = getattr(record, "error_message", None)
        if error_message:
            details.append(str(error_message))
        if details:
            _ = body.append(" (" + ", ".join(details) + ")")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for minification events."""

        minify_text = self._render_minify_message(record)
        if minify_text is not None:
            return minify_text

        return super().render_message(record, message)


__all__ = ["PipelineRichHandler"]
