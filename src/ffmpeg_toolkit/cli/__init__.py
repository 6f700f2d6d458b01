"""CLI module for the ffmpeg toolkit."""

from .main import FFmpegToolkitCLI, main

__all__ = ["FFmpegToolkitCLI", "main"]
