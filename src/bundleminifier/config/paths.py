"""Shared path utilities for configuration, logs and the runtime cache.

This module centralizes how the pipeline discovers locations for its
config file, log file and the extracted script-minifier runtime.

Policy (portable by default):
- Config: repository-root ``<repo_root>/config/config.toml``
- Logs: repository-root ``<repo_root>/logs/bundleminifier.log``
- Runtime cache: ``<system temp dir>/<tool name><version>`` unless overridden
  by ``BUNDLEMINIFIER_CACHE_DIR``.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


TOOL_NAME: Final[str] = "BundlerMinifier"
TOOL_VERSION: Final[str] = "3.2.0"

_ENV_CACHE_DIR: Final[str] = "BUNDLEMINIFIER_CACHE_DIR"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Detect the repository root by walking up parents.

    Looks for markers like ``pyproject.toml`` or ``.git``.

    Args:
        start: Starting path. Defaults to this file's directory.

    Returns:
        Path: Detected repository root, or the current working directory
        if no marker is found.
    """
    here = (start or Path(__file__).resolve()).parent
    for p in [here, *here.parents]:
        if (p / "pyproject.toml").exists() or (p / ".git").exists():
            return p
    return Path.cwd()


def default_config_path() -> Path:
    """Get the default path to the TOML config file.

    Portable layout: ``<repo_root>/config/config.toml``.
    """
    repo_root = _detect_repo_root()
    return (repo_root / "config" / "config.toml").resolve()


def default_log_dir() -> Path:
    """Get the default directory for log files."""

    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    """Get the default log file path."""

    return (default_log_dir() / "bundleminifier.log").resolve()


def default_runtime_cache_dir(env: Mapping[str, str] | None = None) -> Path:
    """Get the versioned directory the script-minifier runtime is extracted to."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_CACHE_DIR,
        default_factory=lambda: Path(tempfile.gettempdir()) / f"{TOOL_NAME}{TOOL_VERSION}",
    )


def default_runtime_archive() -> Path:
    """Get the archive bundled with the package holding node and uglify-js."""

    return (Path(__file__).resolve().parent.parent / "resources" / "node.zip").resolve()


__all__ = [
    "TOOL_NAME",
    "TOOL_VERSION",
    "default_config_path",
    "default_log_dir",
    "default_log_file",
    "default_runtime_archive",
    "default_runtime_cache_dir",
    "resolve_overridable_path",
]
