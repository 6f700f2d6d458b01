"""
System constants that should never change.

These are technical/process limits, not user preferences.
User-configurable values belong in ffmpeg_toolkit.yaml instead.
"""

# Default tool name, also the argv[0] that gets swapped for a configured executable
DEFAULT_EXECUTABLE = "ffmpeg"

# Config file looked up in the working directory
DEFAULT_CONFIG_FILENAME = "ffmpeg_toolkit.yaml"

# Environment fallbacks for the path roots
BUNDLE_ROOT_ENV = "FFMPEG_TOOLKIT_BUNDLE_ROOT"
DOCUMENT_ROOT_ENV = "FFMPEG_TOOLKIT_DOCUMENT_ROOT"
DOCUMENTS_DIRNAME = "Documents"

# CLI exit codes
EXIT_USAGE_ERROR = 2
EXIT_SPAWN_FAILED = 127  # Same code a POSIX shell uses for "command not found"
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT

VERBOSE_LOGGING_THRESHOLD = 2
