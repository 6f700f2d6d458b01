"""Configuration management for the ffmpeg toolkit."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_CONFIG_FILENAME, DEFAULT_EXECUTABLE

LOG = logging.getLogger(__name__)


# Configuration singleton
class _ConfigSingleton:
    """Configuration singleton holder."""

    _instance: ToolkitConfig | None = None

    @classmethod
    def get_instance(cls) -> ToolkitConfig:
        """Get the configuration instance."""
        if cls._instance is None:
            config_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
            if config_path.exists():
                cls._instance = ToolkitConfig.load_from_file(config_path)
            else:
                cls._instance = ToolkitConfig()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the configuration instance."""
        cls._instance = None


_config_singleton = _ConfigSingleton()


@dataclass
class FFmpegConfig:
    """External tool settings."""

    executable: str = DEFAULT_EXECUTABLE
    capture_output: bool = True


@dataclass
class PathsConfig:
    """Base directories for the path helpers. None means resolve from the environment."""

    bundle_root: Path | None = None
    document_root: Path | None = None


@dataclass
class GlobalConfig:
    """Global settings."""

    log_level: str = "INFO"


@dataclass
class ToolkitConfig:
    """Main configuration class."""

    ffmpeg: FFmpegConfig = field(default_factory=FFmpegConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> ToolkitConfig:
        """Load configuration from YAML file."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            LOG.warning("Failed to load config from %s: %s", config_path, e)
            return cls()

        if data is None:
            return cls()
        if not isinstance(data, dict):
            LOG.warning("Ignoring config %s: top level must be a mapping", config_path)
            return cls()
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> ToolkitConfig:
        """Create config from dictionary."""
        return cls(
            ffmpeg=cls._parse_ffmpeg_config(cls._section(data, "ffmpeg")),
            paths=cls._parse_paths_config(cls._section(data, "paths")),
            global_=cls._parse_global_config(cls._section(data, "global")),
        )

    @staticmethod
    def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            LOG.warning("Config section '%s' must be a mapping, using defaults", name)
            return {}
        return section

    @classmethod
    def _parse_ffmpeg_config(cls, ffmpeg_data: dict[str, Any]) -> FFmpegConfig:
        """Parse external tool configuration."""
        defaults = FFmpegConfig()

        executable = ffmpeg_data.get("executable", defaults.executable)
        if not isinstance(executable, str) or not executable.strip():
            LOG.warning("Invalid ffmpeg executable %r. Using '%s'", executable, defaults.executable)
            executable = defaults.executable

        capture_output = ffmpeg_data.get("capture_output", defaults.capture_output)
        if not isinstance(capture_output, bool):
            LOG.warning("Invalid capture_output %r. Using %s", capture_output, defaults.capture_output)
            capture_output = defaults.capture_output

        return FFmpegConfig(executable=executable, capture_output=capture_output)

    @classmethod
    def _parse_paths_config(cls, paths_data: dict[str, Any]) -> PathsConfig:
        """Parse path root configuration."""
        roots: dict[str, Path | None] = {}
        for key in ("bundle_root", "document_root"):
            value = paths_data.get(key)
            if value is None:
                roots[key] = None
            elif isinstance(value, str) and value:
                roots[key] = Path(value).expanduser()
            else:
                LOG.warning("Invalid %s %r. It will be resolved from the environment", key, value)
                roots[key] = None
        return PathsConfig(**roots)

    @classmethod
    def _parse_global_config(cls, global_data: dict[str, Any]) -> GlobalConfig:
        """Parse global configuration."""
        log_level = str(global_data.get("log_level", "INFO")).upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_levels:
            LOG.warning(
                "Invalid log level '%s'. Using 'INFO'. Valid options: %s",
                log_level,
                ", ".join(sorted(valid_levels)),
            )
            log_level = "INFO"

        return GlobalConfig(log_level=log_level)


def get_config() -> ToolkitConfig:
    """Get the global configuration instance."""
    return _config_singleton.get_instance()


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    _config_singleton.reset()
