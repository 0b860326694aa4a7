"""Command-line interface handler for shellexec."""

import argparse
import codecs
import json
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from . import config
from . import executor
from .errors import NonZeroExit, ParseError, SpawnError
from .quoting import join
from .shlex_parser import parse

console = Console()
err_console = Console(stderr=True)

VERSION = "1.0"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def print_usage() -> None:
    """Print usage information."""
    print("""Usage: shellexec [-h | --help] [--log-level LEVEL] <command> [<args>]

Commands:
  split <line>             Split a command line into command and arguments
      --json               Print the result as a JSON object

  quote <command> [<arg>...]
                           Print a single command line that splits back to the given values

  run <line>               Execute a command line and print its combined output
      --check              Fail if the process returns a non-zero exit code
      --encoding ENC       Encoding of the process output (default $SHELLEXEC_ENCODING or locale)

  help                     Show this help message
  version                  Show program version
""")


def print_version() -> None:
    """Print version information."""
    print(VERSION)


def log_level(name: str) -> int:
    """Map a level name to its number, WARNING for unknown names."""
    name = name.upper()
    if name not in LOG_LEVELS:
        return logging.WARNING
    return logging.getLevelName(name)


def encoding_name(value: str) -> str:
    """Validate an --encoding value before anything is executed."""
    try:
        return codecs.lookup(value).name
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {value}")


def configure_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=log_level(level),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def cmd_split(args: argparse.Namespace) -> None:
    """Execute the split command."""
    try:
        command, arguments = parse(args.line)
    except ParseError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        sys.exit(1)

    if args.json:
        print(json.dumps({"command": command, "args": arguments}))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Token", style="green")
    for i, token in enumerate([command] + arguments):
        table.add_row(str(i), Text(repr(token)))
    console.print(table)


def cmd_quote(args: argparse.Namespace) -> None:
    """Execute the quote command."""
    print(join(args.name, args.args))


def cmd_run(args: argparse.Namespace) -> None:
    """Execute the run command."""
    if args.encoding:
        runner = executor.LocalExecutor(encoding=args.encoding)
    else:
        runner = executor.DEFAULT_EXECUTOR

    try:
        output, code = runner.run_line(args.line)
    except ParseError as e:
        err_console.print(f"Error: {e}", markup=False, highlight=False)
        sys.exit(2)
    except SpawnError as e:
        err_console.print(f"Error: {e} ({e.__cause__})", markup=False, highlight=False)
        sys.exit(127)

    sys.stdout.write(output)
    sys.stdout.flush()

    if args.check and code != 0:
        err_console.print(f"Error: {NonZeroExit(code, output)}", markup=False, highlight=False)
        sys.exit(1)
    if code != 0:
        sys.exit(code)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the CLI."""
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(
        description="Shell-like command line splitting, quoting and execution",
        add_help=False,
    )

    # Add global options
    parser.add_argument("-h", "--help", action="store_true", help="Show help message")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=config.default_log_level(),
        help="Logging level (default WARNING)",
    )

    # Add subparsers for commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Split command
    split_parser = subparsers.add_parser("split", add_help=False)
    split_parser.add_argument("line", help="Command line to split")
    split_parser.add_argument("--json", action="store_true", help="Print JSON")

    # Quote command
    quote_parser = subparsers.add_parser("quote", add_help=False)
    quote_parser.add_argument("name", metavar="command", help="Command name")
    quote_parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments")

    # Run command
    run_parser = subparsers.add_parser("run", add_help=False)
    run_parser.add_argument("line", help="Command line to execute")
    run_parser.add_argument(
        "--check", action="store_true", help="Fail on non-zero exit code"
    )
    run_parser.add_argument("--encoding", type=encoding_name, help="Output encoding")

    # Help command
    subparsers.add_parser("help", add_help=False)

    # Version command
    subparsers.add_parser("version", add_help=False)

    # Parse arguments
    if not argv:
        print_usage()
        return

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    # Handle global help
    if args.help or args.command == "help":
        print_usage()
        return

    # Handle version
    if args.command == "version":
        print_version()
        return

    # Execute commands
    if args.command == "split":
        cmd_split(args)
    elif args.command == "quote":
        cmd_quote(args)
    elif args.command == "run":
        cmd_run(args)
    else:
        print_usage()
