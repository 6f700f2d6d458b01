"""FFmpeg Toolkit - typed argv building and invocation of the ffmpeg executable."""

from __future__ import annotations

__version__ = "0.1.0"
__description__ = "Typed argv building and invocation of the ffmpeg executable"

# Public API exports
from .config import ToolkitConfig, get_config
from .core import (
    ArgumentToken,
    ExternalToolError,
    FFmpegArg,
    FFmpegInvoker,
    InvalidInvocationError,
    InvocationError,
    PathResolutionError,
    PathRoots,
    SpawnError,
    ToolkitError,
    argv_from_command_line,
    argv_from_tokens,
)

__all__ = [
    # Configuration
    "ToolkitConfig",
    "get_config",
    # Core functionality
    "ArgumentToken",
    "FFmpegArg",
    "FFmpegInvoker",
    "PathRoots",
    "argv_from_command_line",
    "argv_from_tokens",
    # Exceptions
    "ToolkitError",
    "PathResolutionError",
    "InvocationError",
    "InvalidInvocationError",
    "SpawnError",
    "ExternalToolError",
]
