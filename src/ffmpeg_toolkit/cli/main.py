"""Main CLI interface for the ffmpeg toolkit."""

from __future__ import annotations

import argparse
import logging
import shlex
import shutil
import sys
from pathlib import Path

from ..config import ToolkitConfig, get_config
from ..config.constants import (
    EXIT_INTERRUPTED,
    EXIT_SPAWN_FAILED,
    EXIT_USAGE_ERROR,
    VERBOSE_LOGGING_THRESHOLD,
)
from ..core import (
    ExternalToolError,
    FFmpegArg,
    FFmpegInvoker,
    InvalidInvocationError,
    PathResolutionError,
    PathRoots,
    SpawnError,
    argv_from_command_line,
    resolve_bundle_root,
    resolve_document_root,
)

LOG = logging.getLogger(__name__)


class FFmpegToolkitCLI:
    """Command-line front end over FFmpegInvoker."""

    def __init__(self, config: ToolkitConfig | None = None) -> None:
        self.config = config if config is not None else get_config()

    def setup_logging(self, verbosity: int) -> None:
        """Setup logging based on verbosity level."""
        level_map = {
            1: logging.INFO,
            2: logging.DEBUG,
        }

        if verbosity:
            level = level_map.get(verbosity, logging.DEBUG)
        else:
            level = getattr(logging, self.config.global_.log_level, logging.INFO)

        log_format = (
            "%(levelname)s: %(name)s: %(message)s"
            if verbosity >= VERBOSE_LOGGING_THRESHOLD
            else "%(levelname)s: %(message)s"
        )

        logging.basicConfig(level=level, format=log_format, handlers=[logging.StreamHandler(sys.stderr)])

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser."""
        parser = argparse.ArgumentParser(
            prog="ffmpeg-toolkit",
            description="Run ffmpeg from a command line or an argument list",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Whitespace-separated command line (no quoting, no spaces inside arguments)
  ffmpeg-toolkit run "ffmpeg -y -i in.mp4 -vn out.mp3"

  # Discrete arguments, spaces inside arguments are kept
  ffmpeg-toolkit exec ffmpeg -i "my clip.mp4" -vf "scale=320:-1" out.gif

  # Show the argv without running it
  ffmpeg-toolkit --dry-run run "ffmpeg -i a.mp4 b.mkv"
            """,
        )

        # Global options
        parser.add_argument(
            "-v",
            "--verbose",
            action="count",
            default=0,
            help="Increase verbosity (-v for info, -vv for debug)",
        )
        parser.add_argument("--config", type=Path, help="Path to configuration file")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the argv that would run without starting a process",
        )
        parser.add_argument(
            "--show-output",
            action="store_true",
            help="Let ffmpeg write to this terminal instead of capturing its output",
        )

        subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

        run_parser = subparsers.add_parser("run", help="Run a whitespace-separated command line")
        run_parser.add_argument("command_line", help='Command line, e.g. "ffmpeg -i a.mp4 b.mkv"')

        exec_parser = subparsers.add_parser("exec", help="Run discrete arguments, everything after exec is passed on")
        exec_parser.add_argument("arguments", nargs=argparse.REMAINDER, help="Program followed by its arguments")

        subparsers.add_parser("flags", help="List the named ffmpeg constants")
        subparsers.add_parser("info", help="Show executable and path root information")

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parser = self.build_parser()
        parsed_args = parser.parse_args(args)

        if getattr(parsed_args, "config", None):
            self.config = ToolkitConfig.load_from_file(parsed_args.config)

        self.setup_logging(parsed_args.verbose)

        try:
            if parsed_args.command == "run":
                return self._handle_invocation(parsed_args, argv_from_command_line(parsed_args.command_line))
            if parsed_args.command == "exec":
                arguments = parsed_args.arguments
                if arguments[:1] == ["--"]:
                    arguments = arguments[1:]
                return self._handle_invocation(parsed_args, arguments)
            if parsed_args.command == "flags":
                return self._handle_flags()
            if parsed_args.command == "info":
                return self._handle_info()
            parser.error(f"Unknown command: {parsed_args.command}")

        except KeyboardInterrupt:
            LOG.info("Operation cancelled by user")
            return EXIT_INTERRUPTED

        return 0

    def _handle_invocation(self, args: argparse.Namespace, argv: list[str]) -> int:
        """Run argv through the invoker and map failures to exit codes."""
        invoker = FFmpegInvoker(
            capture_output=False if args.show_output else None,
            config=self.config,
        )

        try:
            if args.dry_run:
                print(shlex.join(invoker.resolve_command(argv)))
                return 0
            invoker.run_with_arguments(argv)
        except InvalidInvocationError as e:
            LOG.error("%s", e)  # noqa: TRY400
            return EXIT_USAGE_ERROR
        except SpawnError as e:
            LOG.error("%s", e)  # noqa: TRY400
            return EXIT_SPAWN_FAILED
        except ExternalToolError as e:
            LOG.error("%s", e)  # noqa: TRY400
            return exit_status(e.exit_code)

        LOG.info("%s finished successfully", argv[0])
        return 0

    @staticmethod
    def _handle_flags() -> int:
        """Print the constant catalogue."""
        width = max(len(arg.name) for arg in FFmpegArg)
        literals = [arg for arg in FFmpegArg if not arg.is_flag]
        flags = [arg for arg in FFmpegArg if arg.is_flag]
        for arg in literals + flags:
            print(f"{arg.name:<{width}}  {arg.value}")
        return 0

    def _handle_info(self) -> int:
        """Print executable and root resolution details."""
        executable = self.config.ffmpeg.executable
        located = shutil.which(executable)
        print(f"{'executable:':<16}{executable} ({located or 'not found on PATH'})")
        print(f"{'capture output:':<16}{self.config.ffmpeg.capture_output}")

        roots = PathRoots.from_config(self.config)
        status = 0
        for label, resolver in (("bundle root", resolve_bundle_root), ("document root", resolve_document_root)):
            try:
                print(f"{label + ':':<16}{resolver(roots)}")
            except PathResolutionError as e:
                print(f"{label + ':':<16}unresolved ({e})")
                status = EXIT_USAGE_ERROR

        return status


def exit_status(return_code: int) -> int:
    """Map a child return code to a process exit status (signal N becomes 128 + N)."""
    if return_code < 0:
        return 128 + abs(return_code)
    return return_code


def main() -> int:
    """Entry point for the CLI."""
    cli = FFmpegToolkitCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
