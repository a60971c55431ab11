"""Turtle literal helpers.

This module escapes strings and coerces raw GTFS values into the
literal forms written by the statement emitter.
"""

from __future__ import annotations

import re

from core.errors import InvalidDateFormatError, InvalidFieldValueError

_DATE_PATTERN = re.compile(r"^([0-9]{4})([0-9]{2})([0-9]{2})$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+)$")
_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_NEEDS_ESCAPE = re.compile(r'[\\"\x00-\x1f\x7f]')


def escape_string(value: str) -> str:
    """Escape a string for use inside a double-quoted Turtle literal."""
    return _NEEDS_ESCAPE.sub(_escape_char, value)


def string_literal(value: str) -> str:
    """Return a quoted, escaped Turtle string literal."""
    return f'"{escape_string(value)}"'


def boolean_literal(value: str) -> str:
    """Coerce a raw flag to ``true``/``false`` by truthiness.

    Empty values and numeric zero are false; anything else is true.
    """
    return "true" if is_truthy(value) else "false"


def is_truthy(value: str | None) -> bool:
    """Return whether a raw GTFS flag value counts as set."""
    stripped = (value or "").strip()
    if not stripped:
        return False
    try:
        return float(stripped) != 0
    except ValueError:
        return True


def date_literal(value: str) -> str:
    """Rewrite ``YYYYMMDD`` as a typed ``xsd:date`` literal.

    Raises:
        InvalidDateFormatError: If the value is not exactly eight digits.
    """
    match = _DATE_PATTERN.match(value)
    if match is None:
        raise InvalidDateFormatError(value)
    year, month, day = match.groups()
    return f'"{year}-{month}-{day}"^^xsd:date'


def decimal_literal(table: str, field: str, value: str) -> str:
    """Validate a coordinate-style number and return it as a bare literal."""
    stripped = value.strip()
    if not _DECIMAL_PATTERN.match(stripped):
        raise InvalidFieldValueError(table, field, value, "a decimal number")
    return stripped


def parse_integer(table: str, field: str, value: str) -> int:
    """Parse an integer field such as ``stop_sequence``."""
    stripped = value.strip()
    if not _INTEGER_PATTERN.match(stripped):
        raise InvalidFieldValueError(table, field, value, "an integer")
    return int(stripped)


def _escape_char(match: re.Match[str]) -> str:
    char = match.group(0)
    return _SIMPLE_ESCAPES.get(char) or f"\\u{ord(char):04X}"
