"""Configuration management for the ffmpeg toolkit."""

from __future__ import annotations

from .constants import *  # noqa: F403, F401
from .settings import FFmpegConfig, GlobalConfig, PathsConfig, ToolkitConfig, get_config, reset_config

__all__ = [
    "FFmpegConfig",
    "GlobalConfig",
    "PathsConfig",
    "ToolkitConfig",
    "get_config",
    "reset_config",
]
