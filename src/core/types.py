"""Shared typed models.

This module defines the table and entity enumerations and the
immutable row models passed between ingest, graph and output layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class TableKind(str, Enum):
    """GTFS tables consumed by the converter, in processing order."""

    CALENDAR = "calendar"
    AGENCY = "agency"
    ROUTES = "routes"
    FREQUENCIES = "frequencies"
    TRIPS = "trips"
    STOPS = "stops"
    STOP_TIMES = "stop_times"


class EntityKind(str, Enum):
    """Entity kinds that own a natural id to URI map."""

    AGENCY = "agency"
    SERVICE = "service"
    ROUTE = "route"
    TRIP = "trip"
    STOP = "stop"


@dataclass(frozen=True)
class SourceRow:
    """One record from a source table.

    Attributes:
        table: Table the row was read from.
        line_number: One-based line number in the source file.
        fields: Column name to raw value, stripped of surrounding newlines.
    """

    table: TableKind
    line_number: int
    fields: Mapping[str, str]

    def get(self, field_name: str) -> str:
        """Return a field value, or an empty string when absent."""
        return self.fields.get(field_name) or ""


@dataclass(frozen=True)
class Frequency:
    """Headway-based schedule attached to exactly one trip.

    Attributes:
        trip_id: Natural id of the trip.
        start_time: First departure time (HH:MM:SS).
        end_time: Last departure time (HH:MM:SS).
        headway_secs: Seconds between departures, as written in the feed.
    """

    trip_id: str
    start_time: str
    end_time: str
    headway_secs: str


@dataclass(frozen=True)
class FeedTables:
    """Table files discovered in an input directory.

    Attributes:
        required: Required table names, all present.
        optional: Optional table names found in the directory.
    """

    required: tuple[str, ...]
    optional: tuple[str, ...]


@dataclass(frozen=True)
class ConversionSummary:
    """Counts reported after a finished conversion.

    Attributes:
        rows_by_table: Source rows consumed per table.
        entity_counts: Registered entities per entity kind.
        batch_count: Number of output batches written.
    """

    rows_by_table: Mapping[str, int]
    entity_counts: Mapping[str, int]
    batch_count: int
