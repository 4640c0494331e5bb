"""Summary: Observer that mirrors pipeline notifications into the shared logger.
Why: Give build runs readable progress output without coupling the core to logging.
"""

from __future__ import annotations

import logging

from bundleminifier.platform.logging import logger as default_logger

from ..usecases.events import EventBus, MinifyEvent, MinifyFileEvent, MinifyHandler


class LoggingObserver:
    """Log every lifecycle notification with structured ``extra`` fields."""

    _LEVELS: dict[MinifyEvent, int] = {
        MinifyEvent.BEFORE_WRITE: logging.DEBUG,
        MinifyEvent.AFTER_WRITE: logging.INFO,
        MinifyEvent.BEFORE_GZIP: logging.DEBUG,
        MinifyEvent.AFTER_GZIP: logging.INFO,
        MinifyEvent.ERROR: logging.ERROR,
    }

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or default_logger

    def attach(self, events: EventBus) -> "LoggingObserver":
        """Subscribe to all five notification points of ``events``."""

        for event in MinifyEvent:
            events.subscribe(event, self._handler_for(event))
        return self

    def _handler_for(self, event: MinifyEvent) -> MinifyHandler:
        def _handle(payload: MinifyFileEvent) -> None:
            self.log(event, payload)

        return _handle

    def log(self, event: MinifyEvent, payload: MinifyFileEvent) -> None:
        if event is MinifyEvent.ERROR and payload.result is not None:
            for error in payload.result.errors:
                self.logger.log(
                    self._LEVELS[event],
                    "%s",
                    error,
                    extra={
                        "minify_event": str(event),
                        "source_path": str(payload.source_file),
                        "error_message": error.message,
                    },
                )
            return

        self.logger.log(
            self._LEVELS[event],
            "%s: %s -> %s (changed=%s)",
            event,
            payload.source_file,
            payload.destination_file,
            payload.changed,
            extra={
                "minify_event": str(event),
                "source_path": str(payload.source_file),
                "target_path": str(payload.destination_file) if payload.destination_file else None,
                "changed": payload.changed,
            },
        )


__all__ = ["LoggingObserver"]
