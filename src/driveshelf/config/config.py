"""Configuration management for driveshelf."""

from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from driveshelf.config.file_ops import write_text_file
from driveshelf.config.paths import default_config_path
from driveshelf.platform.drive.http_client import DEFAULT_PREFIX_BYTES, DEFAULT_TIMEOUT
from driveshelf.platform.logging import logger

PREFIX_BYTES_DEFAULT: Final[int] = DEFAULT_PREFIX_BYTES
CONNECT_TIMEOUT_DEFAULT: Final[float] = DEFAULT_TIMEOUT[0]
READ_TIMEOUT_DEFAULT: Final[float] = DEFAULT_TIMEOUT[1]


class ConfigError(ValueError):
    """Raised when the configuration file cannot be interpreted."""


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
    """Application configuration."""

    # Share links to audio files, one entry per file
    drive_links: list[str] = field(default_factory=list)

    # Whether tags are read at all; when false the feed stays empty
    read_metadata: bool = True

    # Bytes requested per file; the Range header asks for bytes 0..prefix_bytes
    prefix_bytes: int = PREFIX_BYTES_DEFAULT

    # HTTP timeouts in seconds
    connect_timeout: float = CONNECT_TIMEOUT_DEFAULT
    read_timeout: float = READ_TIMEOUT_DEFAULT

    # Log file path
    log_file: Path | None = _path_field()

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Normalize values read from TOML or passed by callers.

        String paths flagged with ``metadata={"path": True}`` become ``Path``
        objects, and ``drive_links`` accepts either a list or the
        newline-separated text a host settings screen produces.
        """
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

        self.drive_links = _coerce_links(self.drive_links)
        if not isinstance(self.read_metadata, bool):
            raise ConfigError("read_metadata must be a boolean")
        if isinstance(self.prefix_bytes, bool) or not isinstance(self.prefix_bytes, int):
            raise ConfigError("prefix_bytes must be an integer")
        if self.prefix_bytes <= 0:
            self.prefix_bytes = PREFIX_BYTES_DEFAULT
        self.connect_timeout = _coerce_timeout("connect_timeout", self.connect_timeout)
        self.read_timeout = _coerce_timeout("read_timeout", self.read_timeout)

    @property
    def timeout(self) -> tuple[float, float]:
        """Return the ``(connect, read)`` timeout pair for HTTP requests."""

        return (self.connect_timeout, self.read_timeout)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            target = path if path is not None else default_config_path()
            content = self._render_toml(config_dict)
            write_text_file(target, content)
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# driveshelf Configuration File")
        lines.append("")

        lines.append("# Google Drive share links, one per audio file")
        lines.append('# Example: drive_links = ["https://drive.google.com/file/d/<id>/view"]')
        lines.append(f"drive_links = {self._format_toml_value(config['drive_links'])}")
        lines.append("")

        lines.append("# Read song info from the audio files (default true)")
        lines.append("# When false the album feed stays empty")
        lines.append(f"read_metadata = {self._format_toml_value(config['read_metadata'])}")
        lines.append("")

        lines.append("# Number of leading bytes downloaded per file to find its tags")
        lines.append(f"prefix_bytes = {self._format_toml_value(config['prefix_bytes'])}")
        lines.append("")

        lines.append("# HTTP timeouts in seconds")
        lines.append(f"connect_timeout = {self._format_toml_value(config['connect_timeout'])}")
        lines.append(f"read_timeout = {self._format_toml_value(config['read_timeout'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/driveshelf.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _format_toml_value(value: Any) -> str:
        """Format a Python value as a TOML literal."""

        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return repr(value)
        if isinstance(value, list):
            if not value:
                return "[]"
            items = ",\n".join(f"    {json.dumps(str(item))}" for item in value)
            return f"[\n{items},\n]"
        return json.dumps(str(value))

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file.

        A missing file is created with defaults so users have a commented
        template to edit.

        Args:
            path: Explicit config file. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigError: If the file is not valid TOML or holds wrongly typed values.
        """
        config_file = path if path is not None else default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                instance = cls(**{k: v for k, v in config_dict.items() if k in known})
                logger.info("Configuration loaded from %s", config_file)
            else:
                instance = cls()
                instance.save(config_file)
                logger.info("Created default configuration at %s", config_file)
        except tomllib.TOMLDecodeError as e:
            logger.error("Failed to load configuration: %s", e)
            raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e
        except ConfigError as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


def parse_link_text(text: str) -> list[str]:
    """Split newline-separated link text, dropping blank lines."""

    return [line.strip() for line in text.splitlines() if line.strip()]


def _coerce_links(value: object) -> list[str]:
    if isinstance(value, str):
        return parse_link_text(value)
    if isinstance(value, (list, tuple)):
        links: list[str] = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigError("drive_links entries must be strings")
            if item.strip():
                links.append(item.strip())
        return links
    raise ConfigError("drive_links must be a list of strings or newline-separated text")


def _coerce_timeout(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number")
    if value <= 0:
        raise ConfigError(f"{name} must be positive")
    return float(value)


__all__ = [
    "CONNECT_TIMEOUT_DEFAULT",
    "Config",
    "ConfigError",
    "PREFIX_BYTES_DEFAULT",
    "READ_TIMEOUT_DEFAULT",
    "parse_link_text",
]
