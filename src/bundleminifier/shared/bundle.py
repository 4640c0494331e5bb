"""
Summary: Immutable description of one minification unit.
Why: Give every pipeline stage the same read-only view of a bundle definition.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


def _as_flag(value: object, default: bool) -> bool:
    """Interpret JSON-ish option values (bools or ``"true"``/``"false"`` strings)."""

    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


@dataclass(frozen=True)
class Bundle:
    """A declared grouping of input files mapped to one output file.

    Attributes:
        file_name: Path of the bundle definition file; relative paths resolve against its folder.
        output_file_name: Output path relative to the definition file.
        input_files: Ordered input paths, already glob-resolved by the config layer.
        output: Concatenated raw text of all inputs, produced before minification runs.
        minify: Per-type option overrides (``enabled``, ``gZip`` and minifier settings).
        source_map: Whether the script minifier should emit a source map.
    """

    file_name: Path
    output_file_name: str
    input_files: tuple[str, ...] = ()
    output: str | None = None
    minify: Mapping[str, Any] = field(default_factory=dict)
    source_map: bool = False

    @property
    def base_directory(self) -> Path:
        return Path(os.path.abspath(self.file_name)).parent

    @property
    def is_minification_enabled(self) -> bool:
        return _as_flag(self.minify.get("enabled"), True)

    @property
    def is_gzip_enabled(self) -> bool:
        return _as_flag(self.minify.get("gZip"), False)

    def option(self, name: str, default: Any = None) -> Any:
        """Return a per-type minifier override, falling back to ``default``."""

        return self.minify.get(name, default)

    def flag(self, name: str, default: bool) -> bool:
        """Return a boolean minifier override."""

        return _as_flag(self.minify.get(name), default)

    def absolute_output_file(self) -> Path:
        """Resolve the output path against the bundle definition folder."""

        return Path(os.path.normpath(self.base_directory / self.output_file_name))

    def absolute_input_files(self) -> list[Path]:
        """Resolve every input path against the bundle definition folder, keeping order."""

        return [
            Path(os.path.normpath(self.base_directory / input_file))
            for input_file in self.input_files
        ]


__all__ = ["Bundle"]
