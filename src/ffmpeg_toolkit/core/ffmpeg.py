"""FFmpeg invocation: argv normalisation and process spawning."""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from typing import TYPE_CHECKING

from ..config.constants import DEFAULT_EXECUTABLE
from .base import ToolkitError
from .tokens import ArgumentToken, FFmpegArg

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..config import ToolkitConfig

LOG = logging.getLogger(__name__)


class InvocationError(ToolkitError):
    """Base for failures of a single ffmpeg invocation."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.command = command


class InvalidInvocationError(InvocationError):
    """The argv list to run is empty."""


class SpawnError(InvocationError):
    """The external executable could not be started, or argv could not be passed to it."""


class ExternalToolError(InvocationError):
    """The external tool ran and exited with a non-zero code."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        command: list[str] | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message, command=command)
        self.exit_code = exit_code
        self.stderr = stderr


def argv_from_command_line(text: str) -> list[str]:
    """
    Split a command line on runs of whitespace.

    No quoting is understood: an argument containing whitespace cannot be
    expressed this way, use the token or string list entry points instead.
    """
    return text.split()


def argv_from_tokens(tokens: Iterable[ArgumentToken | FFmpegArg]) -> list[str]:
    """Map tokens to their values, keeping order and count."""
    return [token.value for token in tokens]


class FFmpegInvoker:
    """Runs ffmpeg synchronously and reports failure through exceptions."""

    def __init__(
        self,
        executable: str | None = None,
        capture_output: bool | None = None,
        config: ToolkitConfig | None = None,
    ) -> None:
        """
        Initialize the invoker.

        Args:
            executable: Program to run when argv[0] is the bare name "ffmpeg"
            capture_output: Capture stdout/stderr instead of inheriting them
            config: Configuration supplying unset arguments (global config by default)

        """
        if executable is None or capture_output is None:
            if config is None:
                from ..config import get_config

                config = get_config()
            if executable is None:
                executable = config.ffmpeg.executable
            if capture_output is None:
                capture_output = config.ffmpeg.capture_output

        self.executable = executable
        self.capture_output = capture_output

    def run_with_command_line(self, text: str) -> None:
        """Run a whitespace-separated command line such as "ffmpeg -i in.mp4 out.mkv"."""
        self.run_with_arguments(argv_from_command_line(text))

    def run_with_tokens(self, tokens: Iterable[ArgumentToken | FFmpegArg]) -> None:
        """Run an ordered sequence of tokens."""
        self.run_with_arguments(argv_from_tokens(tokens))

    def run_with_arguments(self, args: Sequence[str]) -> None:
        """
        Run args as argv and block until the process exits.

        Raises:
            InvalidInvocationError: If args is empty
            SpawnError: If the executable cannot be started
            ExternalToolError: If the tool exits with a non-zero code

        """
        command = self.resolve_command(args)

        LOG.debug("Running command: %s", shlex.join(command))
        start_time = time.time()

        try:
            result = subprocess.run(  # noqa: S603
                command,
                capture_output=self.capture_output,
                text=True,
                check=False,  # We'll handle return code ourselves
                encoding="utf-8",
                errors="replace",
            )
        except (OSError, ValueError) as e:
            msg = f"Cannot start {command[0]}: {e}"
            raise SpawnError(msg, command=command, cause=e) from e

        LOG.debug("Command finished in %.2fs with code %d", time.time() - start_time, result.returncode)

        if result.returncode != 0:
            self._handle_tool_error(result, command)

    def resolve_command(self, args: Sequence[str]) -> list[str]:
        """Validate argv and substitute the configured executable for a bare "ffmpeg"."""
        command = list(args)
        if not command:
            msg = "Cannot run an empty argument list"
            raise InvalidInvocationError(msg, command=command)

        if command[0] == DEFAULT_EXECUTABLE and self.executable != DEFAULT_EXECUTABLE:
            command[0] = self.executable
        return command

    def _handle_tool_error(self, result: subprocess.CompletedProcess, command: list[str]) -> None:
        """Handle a non-zero exit by raising ExternalToolError."""
        error_msg = f"{command[0]} failed with return code {result.returncode}"
        if result.stderr:
            error_msg += f": {result.stderr.strip()}"

        raise ExternalToolError(
            error_msg,
            exit_code=result.returncode,
            command=command,
            stderr=result.stderr,
        )
