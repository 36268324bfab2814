"""Command-line interface for eslsp."""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from eslsp.linter.config import DEFAULT_EXECUTABLE, LinterConfig
from eslsp.linter.runner import RunController
from eslsp.logging import configure_logging, get_logger
from eslsp.lsp.server import create_server


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    executable: str
    extra_args: tuple[str, ...]
    project_root: Path | None
    debounce_ms: int
    show_rule_name: bool

    def linter_config(self) -> LinterConfig:
        """Build the linter configuration described by these arguments."""
        return LinterConfig(
            executable=self.executable,
            extra_args=self.extra_args,
            project_root=self.project_root,
            show_rule_name=self.show_rule_name,
        )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="eslsp",
        description="ESLint diagnostics over the Language Server Protocol",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=4390,
        help="Port for TCP transport (default: 4390)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    parser.add_argument(
        "--executable",
        default=DEFAULT_EXECUTABLE,
        help=f"Linter executable name or path (default: {DEFAULT_EXECUTABLE})",
    )

    parser.add_argument(
        "--extra-arg",
        dest="extra_args",
        action="append",
        default=[],
        metavar="ARG",
        help="Extra argument appended to the linter command (repeatable)",
    )

    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Working directory for the linter (default: the document's directory)",
    )

    parser.add_argument(
        "--debounce-ms",
        type=_non_negative_int,
        default=300,
        help="Delay before checking a changed document (default: 300)",
    )

    parser.add_argument(
        "--hide-rule-name",
        action="store_true",
        help="Do not append the rule name to diagnostic messages",
    )

    args = parser.parse_args(argv)

    # Explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        executable=args.executable,
        extra_args=tuple(args.extra_args),
        project_root=args.project_root,
        debounce_ms=args.debounce_ms,
        show_rule_name=not args.hide_rule_name,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting eslsp server")
    logger.debug("Configuration: %s", args)

    controller = RunController(args.linter_config())
    try:
        server = create_server(controller=controller, debounce_ms=args.debounce_ms)

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1

    finally:
        controller.cancel_all()
