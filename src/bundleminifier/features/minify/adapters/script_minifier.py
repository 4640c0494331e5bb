"""Summary: External-process strategy running uglify-js under node for script bundles.
Why: Delegate JavaScript minification and output writing to the bundled uglify-js.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

from bundleminifier.config.settings import NODE_EXECUTABLE
from bundleminifier.platform.logging import logger
from bundleminifier.shared.bundle import Bundle

from ..domain.results import MinificationError
from ..usecases.ports import MinifierOutput
from .node_runtime import NodeRuntimeCache

SKIP_PLATFORM_CHECK_VAR = "NODE_SKIP_PLATFORM_CHECK"


def construct_arguments(bundle: Bundle) -> list[str]:
    """Build the uglify-js arguments for ``bundle``.

    Every absolute input path, ``--mangle`` when minification is enabled,
    ``--output <absolute output>`` and ``--source-map`` when requested.
    """

    arguments = [str(path) for path in bundle.absolute_input_files()]
    if bundle.is_minification_enabled:
        arguments.append("--mangle")
    arguments.extend(["--output", str(bundle.absolute_output_file())])
    if bundle.source_map:
        arguments.append("--source-map")
    return arguments


def format_command_line(arguments: list[str]) -> str:
    """Quote ``arguments`` the way the host shell would expect them."""

    if os.name == "nt":
        return subprocess.list2cmdline(arguments)
    return shlex.join(arguments)


def build_environment(runtime_directory: Path, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy ``base`` (default: ``os.environ``) with the runtime directory first on PATH."""

    env = dict(os.environ if base is None else base)
    existing_path = env.get("PATH", "")
    env["PATH"] = (
        f"{runtime_directory}{os.pathsep}{existing_path}" if existing_path else str(runtime_directory)
    )
    env[SKIP_PLATFORM_CHECK_VAR] = "1"
    return env


class ScriptMinifier:
    """Strategy minifying ``.js`` bundles through an external node process.

    The process writes the output file itself, so a successful run is
    reported as written externally rather than returning content.
    """

    def __init__(
        self,
        runtime: NodeRuntimeCache | None = None,
        *,
        node_executable: str = NODE_EXECUTABLE,
    ) -> None:
        self.runtime = runtime or NodeRuntimeCache.for_directory()
        self.node_executable = node_executable

    def minify(self, bundle: Bundle, file_name: Path) -> MinifierOutput:
        script = self.runtime.ensure_ready()
        arguments = [str(script), *construct_arguments(bundle)]
        working_directory = Path(bundle.base_directory.anchor or os.sep)

        self.runtime.write_log(f"{bundle.base_directory} {format_command_line(arguments)}")
        logger.debug("Running %s %s", self.node_executable, format_command_line(arguments))

        completed = subprocess.run(
            [self.node_executable, *arguments],
            cwd=working_directory,
            env=build_environment(self.runtime.directory),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )

        error = (completed.stderr or "").strip()
        if error:
            return MinifierOutput(errors=[MinificationError(file_name=file_name, message=error)])

        return MinifierOutput(written_file=file_name)


__all__ = [
    "SKIP_PLATFORM_CHECK_VAR",
    "ScriptMinifier",
    "build_environment",
    "construct_arguments",
    "format_command_line",
]
