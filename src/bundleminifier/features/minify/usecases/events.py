"""
Summary: Lifecycle notifications emitted around every minification write.
Why: Let build tasks and loggers observe writes without the core knowing them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from bundleminifier.shared.bundle import Bundle

from ..domain.results import MinificationResult


class MinifyEvent(StrEnum):
    """Named notification points exposed by the pipeline."""

    BEFORE_WRITE = "minify.write.before"
    AFTER_WRITE = "minify.write.after"
    BEFORE_GZIP = "minify.gzip.before"
    AFTER_GZIP = "minify.gzip.after"
    ERROR = "minify.error"


@dataclass(frozen=True, slots=True)
class MinifyFileEvent:
    """Payload handed to observers; ``result`` is only set for error events."""

    source_file: Path
    destination_file: Path | None
    bundle: Bundle | None
    changed: bool
    result: MinificationResult | None = None


MinifyHandler = Callable[[MinifyFileEvent], None]


class EventBus:
    """Explicit registry of observers for the five lifecycle notifications.

    Handlers run synchronously on the calling thread in registration order.
    Exceptions raised by a handler propagate to whoever triggered the event.
    """

    def __init__(self) -> None:
        self._handlers: dict[MinifyEvent, list[MinifyHandler]] = {
            event: [] for event in MinifyEvent
        }

    def subscribe(self, event: MinifyEvent, handler: MinifyHandler) -> None:
        self._handlers[event].append(handler)

    def unsubscribe(self, event: MinifyEvent, handler: MinifyHandler) -> None:
        """Detach ``handler``; unknown handlers are ignored."""

        handlers = self._handlers[event]
        if handler in handlers:
            handlers.remove(handler)

    def handlers(self, event: MinifyEvent) -> tuple[MinifyHandler, ...]:
        return tuple(self._handlers[event])

    def emit(self, event: MinifyEvent, payload: MinifyFileEvent) -> None:
        for handler in tuple(self._handlers[event]):
            handler(payload)

    def before_write(self, source: Path, destination: Path, bundle: Bundle, changed: bool) -> None:
        self.emit(MinifyEvent.BEFORE_WRITE, MinifyFileEvent(source, destination, bundle, changed))

    def after_write(self, source: Path, destination: Path, bundle: Bundle, changed: bool) -> None:
        self.emit(MinifyEvent.AFTER_WRITE, MinifyFileEvent(source, destination, bundle, changed))

    def before_gzip(self, source: Path, destination: Path, bundle: Bundle, changed: bool) -> None:
        self.emit(MinifyEvent.BEFORE_GZIP, MinifyFileEvent(source, destination, bundle, changed))

    def after_gzip(self, source: Path, destination: Path, bundle: Bundle, changed: bool) -> None:
        self.emit(MinifyEvent.AFTER_GZIP, MinifyFileEvent(source, destination, bundle, changed))

    def error(self, result: MinificationResult) -> None:
        """Notify observers that ``result`` carries errors."""

        self.emit(
            MinifyEvent.ERROR,
            MinifyFileEvent(result.file_name, None, None, False, result=result),
        )


__all__ = ["EventBus", "MinifyEvent", "MinifyFileEvent", "MinifyHandler"]
