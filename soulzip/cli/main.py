"""
SoulZip CLI.

Commands:
    soulzip calculate [--no-zip]   — Evaluate stdin with soulver
    soulzip completions <shell>    — Print a shell completion script

`calculate` reads the whole of stdin and prints the result followed by a
single newline. Failures are reported on stderr with exit code 1.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

import shtab
import structlog

from .. import __version__
from ..domain import SoulZipError
from ..evaluator import SoulverEvaluator
from ..logs import configure_logging
from .pipeline import run_calculation


logger = structlog.get_logger(__name__)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def report_failure(error: Exception) -> int:
    """Print a one-line error to stderr and return the failure exit code."""
    logger.debug("calculation_failed", error=str(error), error_type=type(error).__name__)
    print(f"ERROR: {error}", file=sys.stderr)
    return 1


def cmd_calculate(args: argparse.Namespace) -> int:
    """Evaluate stdin and print the realigned (or zipped) result."""
    try:
        text = sys.stdin.read()
    except UnicodeDecodeError as e:
        return report_failure(e)

    # A bad SOULZIP_TIMEOUT surfaces here as ValueError
    try:
        evaluator = SoulverEvaluator(command=getattr(args, "soulver", None))
    except ValueError as e:
        return report_failure(e)

    try:
        result = run_calculation(
            text,
            zip_output=not getattr(args, "no_zip", False),
            evaluator=evaluator,
        )
    except SoulZipError as e:
        return report_failure(e)

    print(result.text)
    return 0


def cmd_completions(args: argparse.Namespace) -> int:
    """Print a completion script for the requested shell."""
    print(shtab.complete(create_parser(), shell=args.shell))
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="soulzip",
        description="Run soulver and show each input line next to its result",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug information to stderr",
    )
    
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )
    
    # Calculate command
    calculate_parser = subparsers.add_parser(
        "calculate",
        help="Evaluate expressions read from stdin",
    )
    calculate_parser.add_argument(
        "--no-zip",
        action="store_true",
        help="Do not add the input to the output",
    )
    calculate_parser.add_argument(
        "--soulver",
        metavar="PATH",
        help="soulver executable to run",
    )
    calculate_parser.set_defaults(func=cmd_calculate)
    
    # Completions command
    completions_parser = subparsers.add_parser(
        "completions",
        help="Generate shell completions",
    )
    completions_parser.add_argument(
        "shell",
        choices=shtab.SUPPORTED_SHELLS,
        help="The shell to generate the completions for",
    )
    completions_parser.set_defaults(func=cmd_completions)
    
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    configure_logging(verbose=args.verbose)
    
    if args.command is None:
        parser.print_help()
        return 0
    
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
