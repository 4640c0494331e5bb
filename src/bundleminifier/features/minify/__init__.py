# Where: bundleminifier.features.minify.__init__
# What: Expose the minification pipeline, its events and outcome types.
# Why: Provide a cohesive import surface for build tasks and integration layers.

from .domain import MinificationError, MinificationResult, get_min_file_name
from .usecases import (
    BundleOrchestrator,
    EventBus,
    GzipWriter,
    MinFileWriter,
    MinifierDispatch,
    MinifierOutput,
    MinifierStrategy,
    MinifyEvent,
    MinifyFileEvent,
    has_file_content_changed,
)

__all__ = [
    "BundleOrchestrator",
    "EventBus",
    "GzipWriter",
    "MinFileWriter",
    "MinificationError",
    "MinificationResult",
    "MinifierDispatch",
    "MinifierOutput",
    "MinifierStrategy",
    "MinifyEvent",
    "MinifyFileEvent",
    "get_min_file_name",
    "has_file_content_changed",
]
