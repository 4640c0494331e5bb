# Where: features/minify/usecases/orchestrator.py
# What: Entry point tying dispatch, writers and notifications together per bundle.
# Why: Give build tasks one call per bundle plus a batch runner that isolates failures.
# Assumptions:
# - Bundle.output already holds the concatenated inputs.
# - Each bundle targets distinct output files, so bundles never contend on writes.
# Trade-offs:
# - The batch runner converts escaping exceptions into error outcomes instead of
#   re-raising, so a single broken bundle cannot hide the results of the others.

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from bundleminifier.platform.logging import logger
from bundleminifier.shared.bundle import Bundle

from ..domain.file_names import get_min_file_name
from ..domain.results import MinificationResult
from .dispatch import MinifierDispatch
from .events import EventBus
from .gzip_writer import GzipWriter


BATCH_COMPLETE_EVENT = "minify.batch.complete"


class BundleOrchestrator:
    """Run the minify → write → gzip pipeline for bundles."""

    def __init__(
        self,
        events: EventBus,
        dispatch: MinifierDispatch,
        *,
        gzip_writer: GzipWriter | None = None,
    ) -> None:
        self.events = events
        self.dispatch = dispatch
        self.gzip_writer = gzip_writer or GzipWriter(events)

    def minify_bundle(self, bundle: Bundle) -> MinificationResult:
        """Minify a single bundle without gzip handling."""

        return self.dispatch.minify(bundle)

    def process_bundle(self, bundle: Bundle) -> MinificationResult:
        """Minify ``bundle`` and write its gzip sibling when the bundle asks for one.

        Write-phase filesystem errors and observer exceptions propagate.
        """

        result = self.minify_bundle(bundle)

        if result.has_errors or not bundle.is_gzip_enabled or not bundle.output_file_name:
            return result

        source_file = self._gzip_source(bundle, result)
        self.gzip_writer.write_gzip(
            source_file, bundle, result.changed, self._gzip_content(result)
        )
        return result

    @staticmethod
    def _gzip_content(result: MinificationResult) -> str | None:
        if result.minified_content is not None:
            return result.minified_content
        if result.written_file is not None:
            # Externally written output is compressed as it sits on disk.
            return result.written_file.read_bytes().decode("utf-8")
        return None

    @staticmethod
    def _gzip_source(bundle: Bundle, result: MinificationResult) -> Path:
        if result.written_file is not None:
            return result.written_file
        output_file = bundle.absolute_output_file()
        if bundle.is_minification_enabled and bundle.output and (
            output_file.suffix.upper() != ".JS"
        ):
            return get_min_file_name(output_file)
        return output_file

    def process_bundles(self, bundles: Iterable[Bundle]) -> list[MinificationResult]:
        """Process every bundle, logging and recording per-bundle failures."""

        results: list[MinificationResult] = []
        failed = 0

        for bundle in bundles:
            try:
                result = self.process_bundle(bundle)
            except Exception as exc:
                logger.error(
                    "Failed to process bundle %s: %s",
                    bundle.output_file_name or bundle.file_name,
                    exc,
                    exc_info=True,
                )
                file_name = (
                    bundle.absolute_output_file()
                    if bundle.output_file_name
                    else bundle.base_directory
                )
                result = MinificationResult(file_name=file_name)
                result.add_exception(exc)

            if result.has_errors:
                failed += 1
            results.append(result)

        changed = sum(1 for result in results if result.changed)
        logger.log(
            logging.INFO,
            "Processed %d bundles (%d changed, %d failed)",
            len(results),
            changed,
            failed,
            extra={
                "minify_event": BATCH_COMPLETE_EVENT,
                "processed": len(results),
                "changed": changed,
                "failed": failed,
            },
        )
        return results


__all__ = ["BATCH_COMPLETE_EVENT", "BundleOrchestrator"]
