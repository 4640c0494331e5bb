"""Configuration management for bundleminifier."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from bundleminifier.config.paths import default_config_path, default_log_file
from bundleminifier.platform.filesystem import ensure_parent_directory
from bundleminifier.platform.logging import logger


GZIP_COMPRESS_LEVEL_DEFAULT = 9
NODE_EXECUTABLE_DEFAULT = "node"


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Pipeline configuration."""

    # Log file path; console-only logging when unset
    log_file: Path | None = _path_field()

    # Script minifier runtime
    node_executable: str = NODE_EXECUTABLE_DEFAULT
    runtime_archive: Path | None = _path_field()
    runtime_cache_dir: Path | None = _path_field()

    # Gzip output
    gzip_compress_level: int = GZIP_COMPRESS_LEVEL_DEFAULT

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self, target: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            destination = target or default_config_path()
            content = self._render_toml(config_dict)
            _ = ensure_parent_directory(destination)
            _ = destination.write_text(content, encoding="utf-8")
            logger.info("Configuration saved to %s", destination)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# bundleminifier Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append("# Console logging is always enabled; set this to also keep a rotating log")
        lines.append(f'# Example: log_file = "{default_log_file().as_posix()}"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Executable used to run uglify-js (default \"node\")")
        lines.append(f"node_executable = {self._format_toml_value(config['node_executable'])}")
        lines.append("")

        lines.append("# Zip archive holding node_modules/uglify-js (optional)")
        lines.append("# Defaults to the archive shipped inside the package")
        if config["runtime_archive"] is not None:
            lines.append(
                f"runtime_archive = {self._format_toml_value(config['runtime_archive'])}"
            )
        lines.append("")

        lines.append("# Directory the runtime archive is extracted to (optional)")
        lines.append("# Defaults to a versioned folder in the system temp directory")
        if config["runtime_cache_dir"] is not None:
            lines.append(
                f"runtime_cache_dir = {self._format_toml_value(config['runtime_cache_dir'])}"
            )
        lines.append("")

        lines.append("# Gzip compression level, 1 (fastest) to 9 (smallest)")
        lines.append(
            f"gzip_compress_level = {self._format_toml_value(config['gzip_compress_level'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file.

        Args:
            config_file: Explicit TOML file. Defaults to the portable location.

        Returns:
            Config: Loaded configuration object, or defaults when no file exists.
        """
        if cls._instance is not None and config_file in (None, cls._loaded_from):
            return cls._instance

        source = config_file or default_config_path()

        try:
            if source.exists():
                with open(source, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                for key, value in config_dict.items():
                    if key.endswith("_file") or key.endswith("_dir") or key.endswith("_archive"):
                        if isinstance(value, str) and value.strip() != "":
                            config_dict[key] = value
                        else:
                            config_dict[key] = None

                logger.debug("Configuration loaded from %s", source)
                instance = cls(**config_dict)
            else:
                logger.debug("No configuration at %s; using defaults", source)
                instance = cls()

            cls._instance = instance
            cls._loaded_from = source
            return instance

        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise


# Global configuration instance
config = Config.load()
