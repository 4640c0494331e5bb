"""
Summary: Outcome records produced for every minified bundle.
Why: Give library, process and unexpected failures one uniform error shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MinificationError:
    """A single structured minification failure.

    Attributes:
        file_name: File the error refers to.
        message: Human-readable description.
        line_number: 1-based line, 0 when unknown.
        column_number: 0-based column, 0 when unknown.
    """

    file_name: Path
    message: str
    line_number: int = 0
    column_number: int = 0

    def __str__(self) -> str:
        if self.line_number:
            return f"{self.file_name}({self.line_number},{self.column_number}): {self.message}"
        return f"{self.file_name}: {self.message}"


@dataclass(slots=True)
class MinificationResult:
    """Per-bundle result carrying minified content and/or structured errors."""

    file_name: Path
    minified_content: str | None = None
    errors: list[MinificationError] = field(default_factory=list)
    changed: bool = False
    written_file: Path | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(self, message: str, line_number: int = 0, column_number: int = 0) -> None:
        """Append an error attributed to this result's file."""

        self.errors.append(
            MinificationError(
                file_name=self.file_name,
                message=message,
                line_number=line_number,
                column_number=column_number,
            )
        )

    def add_exception(self, exc: BaseException) -> None:
        """Record an unexpected exception as a generic error without position."""

        self.add_error(str(exc) or type(exc).__name__)


__all__ = ["MinificationError", "MinificationResult"]
