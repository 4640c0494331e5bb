"""
Summary: Change-aware writer for gzip siblings of bundle outputs.
Why: Serve precompressed assets without recompressing files that did not move.
"""

from __future__ import annotations

import gzip
from pathlib import Path

from bundleminifier.config.settings import GZIP_COMPRESS_LEVEL
from bundleminifier.platform.filesystem import last_write_time
from bundleminifier.shared.bundle import Bundle

from .events import EventBus

GZIP_SUFFIX = ".gz"


class GzipWriter:
    """Write ``<source>.gz`` when the source or its minified content changed."""

    def __init__(self, events: EventBus, *, compress_level: int = GZIP_COMPRESS_LEVEL) -> None:
        self._events = events
        self._compress_level = compress_level

    @staticmethod
    def gzip_file_name(source_file: Path) -> Path:
        return source_file.with_name(source_file.name + GZIP_SUFFIX)

    @staticmethod
    def _is_stale(gzip_file: Path, source_file: Path) -> bool:
        gzip_time = last_write_time(gzip_file)
        if gzip_time is None:
            return True
        source_time = last_write_time(source_file)
        return source_time is not None and gzip_time < source_time

    def write_gzip(
        self,
        source_file: Path,
        bundle: Bundle,
        minification_changed: bool,
        minified_content: str | None,
    ) -> None:
        """Compress ``minified_content`` (or the raw bundle output) into ``source_file.gz``."""

        gzip_file = self.gzip_file_name(source_file)
        changed = minification_changed or self._is_stale(gzip_file, source_file)

        self._events.before_gzip(source_file, gzip_file, bundle, changed)

        if not changed:
            return

        content = minified_content if minified_content is not None else (bundle.output or "")
        buffer = content.encode("utf-8")

        with open(gzip_file, "wb") as file_stream:
            with gzip.GzipFile(
                filename=source_file.name,
                mode="wb",
                fileobj=file_stream,
                compresslevel=self._compress_level,
            ) as gzip_stream:
                _ = gzip_stream.write(buffer)

        self._events.after_gzip(source_file, gzip_file, bundle, changed)


__all__ = ["GZIP_SUFFIX", "GzipWriter"]
