"""gtfs-rdf exception hierarchy.

This module defines traceable conversion errors with clear boundaries.
Every error is fatal to a run; the CLI reports it and exits non-zero.
"""

from __future__ import annotations


class GtfsRdfError(Exception):
    """Base exception for all gtfs-rdf failures."""


class GtfsRdfConfigError(GtfsRdfError):
    """Raised for invalid runtime configuration."""


class GtfsRdfDependencyError(GtfsRdfError):
    """Raised when an optional runtime dependency is missing."""


class MissingRequiredFileError(GtfsRdfError):
    """Raised when a required GTFS table file is absent."""

    def __init__(self, file_name: str, input_dir: str) -> None:
        super().__init__(
            f"Missing required file {file_name} in {input_dir}. "
            "A GTFS feed must provide agency, stops, routes, trips, stop_times and calendar."
        )
        self.file_name = file_name
        self.input_dir = input_dir


class MissingFieldError(GtfsRdfError):
    """Raised when a table lacks a required column."""

    def __init__(self, table: str, field: str) -> None:
        super().__init__(
            f"Missing {table} field {field}. Add the '{field}' column to {table}.txt."
        )
        self.table = table
        self.field = field


class UnknownRouteTypeError(GtfsRdfError):
    """Raised for a route_type outside the basic GTFS enumeration."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown route type '{code}': expected an integer from 0 to 7.")
        self.code = code


class InvalidDateFormatError(GtfsRdfError):
    """Raised when a calendar date is not an 8-digit YYYYMMDD value."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Not a valid date value: '{value}'. Dates must use YYYYMMDD.")
        self.value = value


class InvalidFieldValueError(GtfsRdfError):
    """Raised when a field value cannot be coerced to its expected type."""

    def __init__(self, table: str, field: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid {table} field {field}: '{value}' is not {expected}.")
        self.table = table
        self.field = field
        self.value = value
        self.expected = expected


class DuplicateEntityError(GtfsRdfError):
    """Raised when a natural id is registered twice with different URIs."""

    def __init__(self, kind: str, natural_id: str) -> None:
        super().__init__(
            f"Duplicate {kind} id '{natural_id}': already registered with a different URI."
        )
        self.kind = kind
        self.natural_id = natural_id


class DuplicateSequenceError(GtfsRdfError):
    """Raised when one trip lists the same stop_sequence twice."""

    def __init__(self, trip_id: str, sequence: int) -> None:
        super().__init__(
            f"Duplicate stop_sequence {sequence} for trip '{trip_id}'. "
            "Each stop time of a trip needs a distinct sequence."
        )
        self.trip_id = trip_id
        self.sequence = sequence


class UnresolvedReferenceError(GtfsRdfError):
    """Raised when a row references an id that was never registered."""

    def __init__(self, kind: str, natural_id: str) -> None:
        super().__init__(
            f"Unknown {kind} id '{natural_id}'. "
            f"Check that the {kind} exists in its table before it is referenced."
        )
        self.kind = kind
        self.natural_id = natural_id
