"""Source table readers for conversion.

This module discovers GTFS table files in an input directory and
yields header-keyed rows from one table at a time.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterator

from core.constants import OPTIONAL_TABLES, REQUIRED_TABLES, TABLE_FILE_SUFFIX
from core.errors import GtfsRdfError, MissingRequiredFileError
from core.types import FeedTables, SourceRow, TableKind


def discover_tables(input_dir: Path) -> FeedTables:
    """Check required tables and list optional ones present.

    Args:
        input_dir: Directory containing GTFS ``*.txt`` files.

    Returns:
        Required and optional table names found.

    Raises:
        MissingRequiredFileError: If any required table is not readable.
    """
    for table_name in REQUIRED_TABLES:
        if not _table_path(input_dir, table_name).is_file():
            raise MissingRequiredFileError(f"{table_name}{TABLE_FILE_SUFFIX}", str(input_dir))
    optional = tuple(
        table_name
        for table_name in OPTIONAL_TABLES
        if _table_path(input_dir, table_name).is_file()
    )
    return FeedTables(required=REQUIRED_TABLES, optional=optional)


def read_table(input_dir: Path, table: TableKind) -> Iterator[SourceRow]:
    """Yield rows of one table, keyed by its header names.

    Headers are matched by name, so column order does not matter. A
    missing optional table yields nothing.

    Args:
        input_dir: Directory containing GTFS files.
        table: Table to read.

    Yields:
        Source rows in file order.

    Raises:
        GtfsRdfError: If the file cannot be decoded as UTF-8 CSV.
    """
    table_path = _table_path(input_dir, table.value)
    if not table_path.is_file():
        return
    with table_path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.reader(handle)
        try:
            header = next(reader, None)
            if header is None:
                return
            field_names = [_clean_value(name) for name in header]
            for row_values in reader:
                if not any(value.strip() for value in row_values):
                    continue
                yield SourceRow(
                    table=table,
                    line_number=reader.line_num,
                    fields=_build_fields(field_names, row_values),
                )
        except (csv.Error, UnicodeDecodeError) as error:
            raise GtfsRdfError(
                f"Failed to read {table_path} near line {reader.line_num}: {error}. "
                "Tables must be UTF-8 encoded comma-separated text."
            ) from error


def _build_fields(field_names: list[str], row_values: list[str]) -> dict[str, str]:
    """Map header names to cleaned values; short rows pad with empty strings."""
    fields: dict[str, str] = {}
    for index, name in enumerate(field_names):
        raw_value = row_values[index] if index < len(row_values) else ""
        fields[name] = _clean_value(raw_value)
    return fields


def _clean_value(value: str) -> str:
    """Drop leading whitespace and trailing line breaks."""
    return value.lstrip().rstrip("\r\n")


def _table_path(input_dir: Path, table_name: str) -> Path:
    return input_dir / f"{table_name}{TABLE_FILE_SUFFIX}"
