"""Where: src/bundleminifier/features/minify/adapters/node_runtime.py
What: Lazily extracted node + uglify-js runtime shared by script minification.
Why: Extract the bundled runtime once per process and serialize first use across threads.
"""

from __future__ import annotations

import os
import shutil
import threading
import zipfile
from datetime import datetime
from pathlib import Path
from typing import ClassVar, Final

from bundleminifier.config.settings import (
    RUNTIME_ARCHIVE,
    RUNTIME_CACHE_DIR,
    RUNTIME_LOG_FILE_NAME,
    UGLIFY_SCRIPT_PARTS,
)
from bundleminifier.platform.logging import logger


class RuntimeInitializationError(RuntimeError):
    """Raised when the script minifier runtime cannot be prepared."""

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"Unable to prepare minifier runtime in {directory}: {reason}")
        self.directory: Path = directory
        self.reason: str = reason


class NodeRuntimeCache:
    """Versioned cache directory holding ``node_modules`` and the ``log.txt`` sentinel.

    The directory moves from uninitialized to ready on the first call to
    :meth:`ensure_ready`; later calls reuse it without extracting again.
    """

    _registry: ClassVar[dict[Path, "NodeRuntimeCache"]] = {}
    _registry_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        directory: Path,
        archive: Path,
        *,
        lock: threading.Lock | None = None,
    ) -> None:
        self.directory: Final[Path] = directory
        self.archive: Final[Path] = archive
        self._lock: Final[threading.Lock] = lock or threading.Lock()

    @classmethod
    def for_directory(
        cls,
        directory: Path = RUNTIME_CACHE_DIR,
        archive: Path = RUNTIME_ARCHIVE,
    ) -> "NodeRuntimeCache":
        """Return the process-wide cache instance for ``directory``."""

        key = directory.expanduser().resolve()
        with cls._registry_lock:
            cache = cls._registry.get(key)
            if cache is None:
                cache = cls(key, archive)
                cls._registry[key] = cache
            return cache

    @property
    def node_modules(self) -> Path:
        return self.directory / "node_modules"

    @property
    def log_file(self) -> Path:
        return self.directory / RUNTIME_LOG_FILE_NAME

    @property
    def uglify_script(self) -> Path:
        return self.directory.joinpath(*UGLIFY_SCRIPT_PARTS)

    def is_ready(self) -> bool:
        return self.node_modules.is_dir() and self.log_file.is_file()

    def ensure_ready(self) -> Path:
        """Extract the runtime archive unless a previous run completed it.

        Returns:
            Path: The uglify-js entry script.

        Raises:
            RuntimeInitializationError: When the archive is missing, cannot be
                extracted, or does not contain uglify-js.
        """

        with self._lock:
            if not self.is_ready():
                self._extract()

            if not self.uglify_script.is_file():
                raise RuntimeInitializationError(
                    self.directory, f"uglify-js entry script missing at {self.uglify_script}"
                )
        return self.uglify_script

    def _extract(self) -> None:
        if not self.archive.is_file():
            raise RuntimeInitializationError(self.directory, f"runtime archive not found at {self.archive}")

        logger.info("Extracting minifier runtime to %s", self.directory)
        try:
            if self.directory.exists():
                shutil.rmtree(self.directory)
            self.directory.mkdir(parents=True, exist_ok=True)
            with zipfile.ZipFile(self.archive) as archive:
                self._extract_members(archive)
        except (OSError, zipfile.BadZipFile) as exc:
            raise RuntimeInitializationError(self.directory, str(exc)) from exc

        # The sentinel is written last so an interrupted extraction is retried.
        self.write_log(datetime.now().strftime("%A, %d %B %Y"))

    def _extract_members(self, archive: zipfile.ZipFile) -> None:
        """Extract every member and re-apply the unix mode stored in the archive.

        Modes are applied to the sanitized path ``extract`` returns, never to the
        raw member name.
        """

        for info in archive.infolist():
            target = archive.extract(info, self.directory)
            mode = (info.external_attr >> 16) & 0o777
            if mode and not info.is_dir():
                os.chmod(target, mode)

    def write_log(self, text: str) -> None:
        """Overwrite the sentinel log file with diagnostic ``text``."""

        _ = self.log_file.write_text(text, encoding="utf-8")


__all__ = ["NodeRuntimeCache", "RuntimeInitializationError"]
