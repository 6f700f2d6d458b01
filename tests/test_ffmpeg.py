"""Tests for argv normalisation and FFmpegInvoker."""

import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from ffmpeg_toolkit.config import ToolkitConfig
from ffmpeg_toolkit.core import (
    ArgumentToken,
    ExternalToolError,
    FFmpegArg,
    FFmpegInvoker,
    InvalidInvocationError,
    InvocationError,
    PathRoots,
    SpawnError,
    ToolkitError,
    argv_from_command_line,
    argv_from_tokens,
)

PYTHON = sys.executable


def _completed(returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


@pytest.fixture
def invoker() -> FFmpegInvoker:
    return FFmpegInvoker(executable="ffmpeg", capture_output=True)


def test_command_line_split() -> None:
    """A command line splits into the tool name and its arguments."""
    assert argv_from_command_line("ffmpeg -i a.mp4 b.mkv") == ["ffmpeg", "-i", "a.mp4", "b.mkv"]


def test_command_line_split_ignores_repeated_whitespace() -> None:
    assert argv_from_command_line("  ffmpeg  -i\ta.mp4\nb.mkv ") == ["ffmpeg", "-i", "a.mp4", "b.mkv"]


def test_command_line_cannot_express_spaced_arguments() -> None:
    """Quotes are not interpreted, so a spaced path becomes two arguments."""
    assert argv_from_command_line('ffmpeg -i "my clip.mp4"') == ["ffmpeg", "-i", '"my', 'clip.mp4"']


def test_tokens_to_argv_keeps_order_and_length(roots: PathRoots) -> None:
    """Each token contributes exactly its value, in order."""
    tokens = [
        FFmpegArg.FFMPEG.token,
        FFmpegArg.I.token,
        ArgumentToken.from_bundle_path("inputVideo.MP4", roots),
        FFmpegArg.VF,
        ArgumentToken.from_literal("setpts=0.5*PTS"),
        ArgumentToken.from_document_path("outputVideo.mkv", roots),
    ]

    argv = argv_from_tokens(tokens)

    assert len(argv) == len(tokens)
    assert argv == [
        "ffmpeg",
        "-i",
        str(roots.bundle_root / "inputVideo.MP4"),
        "-vf",
        "setpts=0.5*PTS",
        str(roots.document_root / "outputVideo.mkv"),
    ]


def test_empty_arguments_rejected(invoker: FFmpegInvoker) -> None:
    with patch("ffmpeg_toolkit.core.ffmpeg.subprocess.run") as mock_run:
        with pytest.raises(InvalidInvocationError):
            invoker.run_with_arguments([])
        with pytest.raises(InvalidInvocationError):
            invoker.run_with_command_line("   ")
        with pytest.raises(InvalidInvocationError):
            invoker.run_with_tokens([])

    mock_run.assert_not_called()


def test_arguments_passed_discretely(invoker: FFmpegInvoker) -> None:
    """Arguments reach subprocess.run as a list, without a shell."""
    with patch("ffmpeg_toolkit.core.ffmpeg.subprocess.run", return_value=_completed()) as mock_run:
        result = invoker.run_with_tokens(
            [FFmpegArg.FFMPEG, FFmpegArg.I, ArgumentToken.from_literal("my clip.mp4"), FFmpegArg.Y]
        )

    assert result is None
    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0] == ["ffmpeg", "-i", "my clip.mp4", "-y"]
    assert kwargs["capture_output"] is True
    assert kwargs.get("shell", False) is False


def test_configured_executable_replaces_bare_name() -> None:
    """A bare "ffmpeg" argv[0] is swapped for the configured executable."""
    invoker = FFmpegInvoker(executable="/opt/ffmpeg/bin/ffmpeg", capture_output=False)

    with patch("ffmpeg_toolkit.core.ffmpeg.subprocess.run", return_value=_completed()) as mock_run:
        invoker.run_with_command_line("ffmpeg -version")
        invoker.run_with_arguments(["/usr/bin/ffmpeg", "-version"])

    first, second = (call.args[0] for call in mock_run.call_args_list)
    assert first == ["/opt/ffmpeg/bin/ffmpeg", "-version"]
    assert second == ["/usr/bin/ffmpeg", "-version"]
    assert mock_run.call_args.kwargs["capture_output"] is False


def test_invoker_reads_config() -> None:
    config = ToolkitConfig()
    config.ffmpeg.executable = "ffmpeg6"
    config.ffmpeg.capture_output = False

    invoker = FFmpegInvoker(config=config)

    assert invoker.executable == "ffmpeg6"
    assert invoker.capture_output is False


def test_explicit_arguments_override_config() -> None:
    config = ToolkitConfig()
    config.ffmpeg.executable = "ffmpeg6"

    invoker = FFmpegInvoker(executable="ffmpeg7", capture_output=True, config=config)

    assert invoker.executable == "ffmpeg7"


def test_non_zero_exit_is_not_retried(invoker: FFmpegInvoker) -> None:
    with patch("ffmpeg_toolkit.core.ffmpeg.subprocess.run", return_value=_completed(1, "Invalid data")) as mock_run:
        with pytest.raises(ExternalToolError) as exc_info:
            invoker.run_with_command_line("ffmpeg -i broken.mp4 out.mkv")

    mock_run.assert_called_once()
    assert exc_info.value.exit_code == 1
    assert exc_info.value.stderr == "Invalid data"
    assert exc_info.value.command == ["ffmpeg", "-i", "broken.mp4", "out.mkv"]
    assert "Invalid data" in str(exc_info.value)


def test_stub_tool_success(invoker: FFmpegInvoker) -> None:
    """A real process exiting 0 reports success."""
    invoker.run_with_arguments([PYTHON, "-c", "raise SystemExit(0)"])


def test_stub_tool_failure(invoker: FFmpegInvoker) -> None:
    """A real process exiting 1 raises ExternalToolError with its code and stderr."""
    script = "import sys; sys.stderr.write('conversion failed'); sys.exit(1)"

    with pytest.raises(ExternalToolError) as exc_info:
        invoker.run_with_arguments([PYTHON, "-c", script])

    assert exc_info.value.exit_code == 1
    assert "conversion failed" in exc_info.value.stderr


def test_stub_tool_receives_spaced_argument(invoker: FFmpegInvoker) -> None:
    """Token values containing spaces arrive as a single argument."""
    script = "import sys; sys.exit(0 if sys.argv[1:] == ['-i', 'my clip.mp4'] else 3)"
    tokens = [
        ArgumentToken.from_literal(PYTHON),
        ArgumentToken.from_literal("-c"),
        ArgumentToken.from_literal(script),
        FFmpegArg.I,
        ArgumentToken.from_literal("my clip.mp4"),
    ]

    invoker.run_with_tokens(tokens)


def test_missing_executable_raises_spawn_error(invoker: FFmpegInvoker, tmp_path: Path) -> None:
    missing = str(tmp_path / "no-such-ffmpeg")

    with pytest.raises(SpawnError) as exc_info:
        invoker.run_with_arguments([missing, "-version"])

    assert isinstance(exc_info.value.cause, OSError)
    assert isinstance(exc_info.value.__cause__, OSError)
    assert exc_info.value.command == [missing, "-version"]


def test_error_hierarchy() -> None:
    """All invocation failures share a catchable base."""
    for error_type in (InvalidInvocationError, SpawnError, ExternalToolError):
        assert issubclass(error_type, InvocationError)
        assert issubclass(error_type, ToolkitError)


def test_overlapping_invocations_are_independent(invoker: FFmpegInvoker) -> None:
    """Concurrent calls on one invoker each run their own process."""
    commands = [[PYTHON, "-c", f"raise SystemExit({code})"] for code in (0, 2, 0, 5)]

    def run(command: list[str]) -> int:
        try:
            invoker.run_with_arguments(command)
        except ExternalToolError as e:
            return e.exit_code
        return 0

    with ThreadPoolExecutor(max_workers=4) as executor:
        codes = list(executor.map(run, commands))

    assert codes == [0, 2, 0, 5]


def test_null_byte_argument_raises_spawn_error(invoker: FFmpegInvoker) -> None:
    """Literal tokens accept any text, but NUL cannot reach a child process."""
    tokens = [FFmpegArg.FFMPEG, FFmpegArg.I, ArgumentToken.from_literal("a\x00b")]

    with pytest.raises(SpawnError) as exc_info:
        invoker.run_with_tokens(tokens)

    assert isinstance(exc_info.value.cause, ValueError)
    assert exc_info.value.command == ["ffmpeg", "-i", "a\x00b"]
