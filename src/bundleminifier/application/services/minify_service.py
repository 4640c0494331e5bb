"""Application service for minifying bundles.

This layer centralizes construction of the dispatch table, writers and
observers so that build tasks only hand over bundles and read outcomes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import final

from bundleminifier.config.config import config as app_config
from bundleminifier.config.settings import GZIP_COMPRESS_LEVEL, NODE_EXECUTABLE
from bundleminifier.features.minify import (
    BundleOrchestrator,
    EventBus,
    GzipWriter,
    MinificationResult,
    MinifierDispatch,
    MinifierStrategy,
)
from bundleminifier.features.minify.adapters import (
    CssMinifier,
    HtmlMinifier,
    LoggingObserver,
    NodeRuntimeCache,
    ScriptMinifier,
)
from bundleminifier.platform.logging import logger, setup_logger
from bundleminifier.shared.bundle import Bundle


def default_strategies(
    runtime: NodeRuntimeCache | None = None,
    *,
    node_executable: str = NODE_EXECUTABLE,
) -> dict[str, MinifierStrategy]:
    """Return the whitelisted extension → strategy table.

    A missing runtime archive is reported here once; each ``.js`` bundle still
    fails with its own error result.
    """

    runtime = runtime or NodeRuntimeCache.for_directory()
    if not runtime.is_ready() and not runtime.archive.is_file():
        logger.warning(
            "Script minifier runtime archive not found at %s; .js bundles will fail",
            runtime.archive,
        )

    html = HtmlMinifier()
    return {
        ".JS": ScriptMinifier(runtime, node_executable=node_executable),
        ".CSS": CssMinifier(),
        ".HTML": html,
        ".HTM": html,
    }


@final
class MinifyBundlesService:
    """Application service that wires and runs the minification pipeline.

    Tests can inject an event bus or a strategy factory while production
    code relies on the default adapters.
    """

    def __init__(
        self,
        *,
        events: EventBus | None = None,
        strategies_factory: Callable[[], Mapping[str, MinifierStrategy]] | None = None,
        log_events: bool = True,
        configure_logging: bool = False,
    ) -> None:
        if configure_logging:
            _ = setup_logger(log_file=app_config.log_file)

        self.events = events or EventBus()
        if log_events:
            _ = LoggingObserver().attach(self.events)

        strategies = (strategies_factory or default_strategies)()
        self.orchestrator = BundleOrchestrator(
            self.events,
            MinifierDispatch(self.events, strategies),
            gzip_writer=GzipWriter(self.events, compress_level=GZIP_COMPRESS_LEVEL),
        )

    def run(self, bundles: Iterable[Bundle]) -> list[MinificationResult]:
        """Process ``bundles``; per-bundle failures are logged and reported in the results."""

        return self.orchestrator.process_bundles(bundles)

    def run_one(self, bundle: Bundle) -> MinificationResult:
        """Process a single bundle; write-phase errors propagate."""

        return self.orchestrator.process_bundle(bundle)


__all__ = ["MinifyBundlesService", "default_strategies"]
