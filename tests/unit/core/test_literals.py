"""Unit tests for Turtle literal helpers."""

from __future__ import annotations

import pytest

from core.errors import InvalidDateFormatError, InvalidFieldValueError
from core.literals import (
    boolean_literal,
    date_literal,
    decimal_literal,
    escape_string,
    parse_integer,
    string_literal,
)


def test_date_literal_rewrites_compact_date() -> None:
    assert date_literal("20230615") == '"2023-06-15"^^xsd:date'


@pytest.mark.parametrize("value", ["2023-06-15", "2023061", "", "2023O615"])
def test_date_literal_rejects_other_shapes(value: str) -> None:
    """Only 8-digit YYYYMMDD values are accepted."""
    with pytest.raises(InvalidDateFormatError) as error_info:
        date_literal(value)

    assert error_info.value.value == value


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", "true"), ("0", "false"), ("", "false"), ("  ", "false"), ("yes", "true")],
)
def test_boolean_literal_uses_truthiness(raw: str, expected: str) -> None:
    assert boolean_literal(raw) == expected


def test_escape_string_handles_quotes_backslashes_and_controls() -> None:
    """Escaped strings must be safe inside a double-quoted literal."""
    escaped = escape_string('Say "hi"\\\n\tnow\x01')

    assert escaped == 'Say \\"hi\\"\\\\\\n\\tnow\\u0001'


def test_string_literal_keeps_unicode() -> None:
    assert string_literal("Bahnhof Zoo – Süd") == '"Bahnhof Zoo – Süd"'


def test_decimal_literal_rejects_non_numbers() -> None:
    with pytest.raises(InvalidFieldValueError):
        decimal_literal("stops", "stop_lat", "north")


def test_decimal_literal_accepts_signed_values() -> None:
    assert decimal_literal("stops", "stop_lon", " -73.977056") == "-73.977056"


def test_parse_integer_reads_padded_sequence() -> None:
    assert parse_integer("stop_times", "stop_sequence", "05") == 5


def test_parse_integer_rejects_fractions() -> None:
    with pytest.raises(InvalidFieldValueError):
        parse_integer("stop_times", "stop_sequence", "1.5")


def test_numeric_literals_reject_non_ascii_digits() -> None:
    with pytest.raises(InvalidDateFormatError):
        date_literal("２０２３１２３１")
    with pytest.raises(InvalidFieldValueError):
        decimal_literal("stops", "stop_lat", "٤١.189903")
    with pytest.raises(InvalidFieldValueError):
        parse_integer("stop_times", "stop_sequence", "٣")
