"""Core abstractions: tokens, path roots and the ffmpeg invoker."""

from .base import ToolkitError
from .ffmpeg import (
    ExternalToolError,
    FFmpegInvoker,
    InvalidInvocationError,
    InvocationError,
    SpawnError,
    argv_from_command_line,
    argv_from_tokens,
)
from .paths import PathResolutionError, PathRoots, resolve_bundle_root, resolve_document_root
from .tokens import ArgumentToken, FFmpegArg

__all__ = [
    "ArgumentToken",
    "ExternalToolError",
    "FFmpegArg",
    "FFmpegInvoker",
    "InvalidInvocationError",
    "InvocationError",
    "PathResolutionError",
    "PathRoots",
    "SpawnError",
    "ToolkitError",
    "argv_from_command_line",
    "argv_from_tokens",
    "resolve_bundle_root",
    "resolve_document_root",
]
