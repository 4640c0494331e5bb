"""Summary: Public import surface for the bundle minification pipeline.
Why: Let build tasks reach the orchestrator and event types from one place.
"""

from __future__ import annotations

from bundleminifier.features.minify import (
    BundleOrchestrator,
    EventBus,
    MinificationError,
    MinificationResult,
    MinifyEvent,
    MinifyFileEvent,
    get_min_file_name,
)
from bundleminifier.shared.bundle import Bundle

__version__ = "3.2.0"

__all__ = [
    "Bundle",
    "BundleOrchestrator",
    "EventBus",
    "MinificationError",
    "MinificationResult",
    "MinifyEvent",
    "MinifyFileEvent",
    "get_min_file_name",
    "__version__",
]
