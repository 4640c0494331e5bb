"""Summary: Use cases orchestrating minification, writes and notifications.
Why: Keep pipeline flow independent from concrete minifier backends.
"""

from __future__ import annotations

from .content_differ import has_file_content_changed
from .dispatch import MinifierDispatch
from .events import EventBus, MinifyEvent, MinifyFileEvent, MinifyHandler
from .file_writer import MinFileWriter
from .gzip_writer import GzipWriter
from .orchestrator import BundleOrchestrator
from .ports import MinifierOutput, MinifierStrategy

__all__ = [
    "BundleOrchestrator",
    "EventBus",
    "GzipWriter",
    "MinFileWriter",
    "MinifierDispatch",
    "MinifierOutput",
    "MinifierStrategy",
    "MinifyEvent",
    "MinifyFileEvent",
    "MinifyHandler",
    "has_file_content_changed",
]
