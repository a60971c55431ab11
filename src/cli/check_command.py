"""Check command wiring for gtfs-rdf CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from core.constants import OPTIONAL_TABLES
from core.errors import GtfsRdfError
from core.types import TableKind
from ingest.table_reader import discover_tables


def add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser(
        "check",
        help="Report which GTFS tables are present in a directory",
    )
    parser.add_argument("input_dir", nargs="?", default=".", help="GTFS directory")


def run_check_command(args: argparse.Namespace) -> int:
    """Print one line per table with its status."""
    try:
        tables = discover_tables(Path(args.input_dir))
    except GtfsRdfError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    consumed = {table.value for table in TableKind}
    for table_name in tables.required:
        print(f"{table_name}\trequired")
    for table_name in OPTIONAL_TABLES:
        if table_name not in tables.optional:
            status = "missing"
        elif table_name in consumed:
            status = "used"
        else:
            status = "ignored"
        print(f"{table_name}\toptional\t{status}")
    return 0
