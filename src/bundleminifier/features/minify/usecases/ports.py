"""
Summary: Ports defining the minifier strategy contract used by dispatch.
Why: Treat in-process libraries and external processes as interchangeable variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from bundleminifier.shared.bundle import Bundle

from ..domain.results import MinificationError


@dataclass(slots=True)
class MinifierOutput:
    """What a strategy produced for one bundle.

    Attributes:
        content: Minified text for in-process strategies; None otherwise.
        errors: Structured errors; content is discarded when non-empty.
        written_file: Set when the strategy wrote the output file itself.
    """

    content: str | None = None
    errors: list[MinificationError] = field(default_factory=list)
    written_file: Path | None = None


@runtime_checkable
class MinifierStrategy(Protocol):
    """Port implemented by every minifier backend."""

    def minify(self, bundle: Bundle, file_name: Path) -> MinifierOutput:
        """Minify ``bundle`` whose absolute output file is ``file_name``."""
        ...


__all__ = ["MinifierOutput", "MinifierStrategy"]
