"""gtfs-rdf CLI entry points.
This module exposes the convert and check commands.
It maps argparse commands onto the conversion pipeline.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from cli.check_command import add_check_command, run_check_command
from cli.convert_command import add_convert_command, run_convert_command


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="gtfs-rdf",
        description="Convert GTFS transit feeds into linked-data RDF",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_convert_command(subparsers)
    add_check_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the gtfs-rdf CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "convert":
        return run_convert_command(args)
    if args.command == "check":
        return run_check_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2
