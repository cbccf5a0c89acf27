"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import commands
from .errors import IntsocError

VERSION = "0.1.0"


def _global_options(parser: argparse.ArgumentParser, default_verbose, default_format) -> None:
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=default_verbose, help="Enable verbose output"
    )
    parser.add_argument(
        "-f", "--format", default=default_format, help="Output format (text, json)"
    )


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``intsoc`` command."""
    parser = argparse.ArgumentParser(
        prog="intsoc",
        description=(
            "Internet Society document transactor — check, fix, and submit documents "
            "across IETF, IRTF, IAB, Independent, IANA, and RFC Editor streams"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    _global_options(parser, False, "text")

    # Global options may also follow the subcommand.
    common = argparse.ArgumentParser(add_help=False)
    _global_options(common, argparse.SUPPRESS, argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", parents=[common], help="Check a document for issues")
    check.add_argument("file", type=Path, help="Path to the document file (XML or plain text)")
    check.add_argument("--errors-only", action="store_true", help="Only show errors")

    fix = sub.add_parser("fix", parents=[common], help="Generate and apply fixes to a document")
    fix.add_argument("file", type=Path, help="Path to the document file")
    fix.add_argument("--auto-only", action="store_true", help="Only apply AutoSafe fixes")
    fix.add_argument("--dry-run", action="store_true", help="Preview changes without applying")
    fix.add_argument("-o", "--output", type=Path, help="Output fixed document to a different file")

    submit = sub.add_parser(
        "submit", parents=[common], help="Submit a document to the appropriate stream"
    )
    submit.add_argument("file", type=Path, help="Path to the document file")
    submit.add_argument("--skip-checks", action="store_true", help="Skip pre-submission checks")

    status = sub.add_parser("status", parents=[common], help="Check submission status of a draft")
    status.add_argument("name", help="Draft name")

    init = sub.add_parser("init", parents=[common], help="Initialize a new draft from a template")
    init.add_argument("name", help="Draft name")
    init.add_argument(
        "-s",
        "--stream",
        default="individual",
        help="Stream type (individual, wg, irtf, iab, independent)",
    )
    init.add_argument("-g", "--group", help="Working group or research group abbreviation")
    init.add_argument("-d", "--dir", type=Path, default=Path("."), help="Output directory")

    return parser


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")
    logging.getLogger().setLevel(level)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "check":
            commands.run_check(args.file, args.errors_only, args.format)
        elif args.command == "fix":
            commands.run_fix(args.file, args.auto_only, args.dry_run, args.output, args.format)
        elif args.command == "submit":
            commands.run_submit(args.file, args.skip_checks)
        elif args.command == "status":
            asyncio.run(commands.run_status(args.name, args.format))
        elif args.command == "init":
            commands.run_init(args.name, args.stream, args.group, args.dir)
    except (IntsocError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0