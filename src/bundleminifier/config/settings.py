"""Where: src/bundleminifier/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

from pathlib import Path

from bundleminifier.config.config import (
    GZIP_COMPRESS_LEVEL_DEFAULT,
    NODE_EXECUTABLE_DEFAULT,
    config as app_config,
)
from bundleminifier.config.paths import (
    TOOL_NAME,
    TOOL_VERSION,
    default_runtime_archive,
    default_runtime_cache_dir,
)

# Name of the sentinel written once the runtime archive has been extracted.
RUNTIME_LOG_FILE_NAME: str = "log.txt"

# Relative location of the uglify-js entry script inside the runtime cache.
UGLIFY_SCRIPT_PARTS: tuple[str, ...] = ("node_modules", "uglify-js", "bin", "uglifyjs")

NODE_EXECUTABLE: str = app_config.node_executable or NODE_EXECUTABLE_DEFAULT

RUNTIME_ARCHIVE: Path = app_config.runtime_archive or default_runtime_archive()

RUNTIME_CACHE_DIR: Path = app_config.runtime_cache_dir or default_runtime_cache_dir()

_gzip_level = getattr(app_config, "gzip_compress_level", GZIP_COMPRESS_LEVEL_DEFAULT)
GZIP_COMPRESS_LEVEL: int = (
    _gzip_level
    if isinstance(_gzip_level, int) and 1 <= _gzip_level <= 9
    else GZIP_COMPRESS_LEVEL_DEFAULT
)


__all__ = [
    "TOOL_NAME",
    "TOOL_VERSION",
    "RUNTIME_LOG_FILE_NAME",
    "UGLIFY_SCRIPT_PARTS",
    "NODE_EXECUTABLE",
    "RUNTIME_ARCHIVE",
    "RUNTIME_CACHE_DIR",
    "GZIP_COMPRESS_LEVEL",
]
