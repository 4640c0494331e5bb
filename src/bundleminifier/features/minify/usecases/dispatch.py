"""Summary: Extension-based dispatch from a bundle to its minifier strategy.
Why: One bundle's failure must become an error outcome, never a crashed build."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from bundleminifier.platform.logging import logger
from bundleminifier.shared.bundle import Bundle

from ..domain.results import MinificationResult
from .events import EventBus
from .file_writer import MinFileWriter
from .ports import MinifierOutput, MinifierStrategy


class MinifierDispatch:
    """Select a strategy by upper-cased output extension and run it.

    Extensions without a registered strategy pass through silently.
    """

    def __init__(
        self,
        events: EventBus,
        strategies: Mapping[str, MinifierStrategy],
        *,
        writer: MinFileWriter | None = None,
    ) -> None:
        self._events = events
        self._strategies = {extension.upper(): strategy for extension, strategy in strategies.items()}
        self._writer = writer or MinFileWriter(events)

    def strategy_for(self, file_name: Path) -> MinifierStrategy | None:
        return self._strategies.get(file_name.suffix.upper())

    def minify(self, bundle: Bundle) -> MinificationResult:
        """Minify ``bundle`` and return its outcome.

        Strategy exceptions are converted into a single generic error. Errors
        raised while writing the minified file propagate.
        """

        if not bundle.output_file_name:
            return MinificationResult(file_name=bundle.base_directory)

        file_name = bundle.absolute_output_file()
        result = MinificationResult(file_name=file_name)

        if bundle.output and bundle.is_minification_enabled:
            strategy = self.strategy_for(file_name)
            if strategy is not None:
                output: MinifierOutput | None = None
                try:
                    output = strategy.minify(bundle, file_name)
                except Exception as exc:
                    logger.debug("Minifier for %s raised", file_name, exc_info=True)
                    result.add_exception(exc)

                if output is not None:
                    self._apply(bundle, result, output)

        if result.has_errors:
            self._events.error(result)

        return result

    def _apply(self, bundle: Bundle, result: MinificationResult, output: MinifierOutput) -> None:
        if output.errors:
            result.errors.extend(output.errors)
            return

        if output.written_file is not None:
            # The external process decides whether to write, so a change is assumed.
            result.changed = True
            result.written_file = output.written_file
            self._events.after_write(bundle.file_name, output.written_file, bundle, True)
            return

        result.minified_content = output.content
        self._writer.write(bundle, result)


__all__ = ["MinifierDispatch"]
