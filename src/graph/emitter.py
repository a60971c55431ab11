"""Statement emitter for the streaming phase.

This module renders the Turtle statements that can be resolved from a
single row plus the registry state of earlier tables. Each table kind
has exactly one handler; stop_times rows also feed the accumulator.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping, Sequence

from core.constants import ROUTE_TYPES
from core.errors import MissingFieldError, UnknownRouteTypeError
from core.literals import (
    boolean_literal,
    date_literal,
    decimal_literal,
    is_truthy,
    parse_integer,
    string_literal,
)
from core.types import EntityKind, Frequency, SourceRow, TableKind
from core.uri import escape_iri, make_name_id, mint_uri
from graph.context import ConversionContext

StatementHandler = Callable[[ConversionContext, SourceRow], "str | None"]
Property = tuple[str, str]

_ASCII_INTEGER = re.compile(r"^[+-]?[0-9]+$")
_NON_DIGIT = re.compile(r"[^0-9]")

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
REQUIRED_FIELDS: Mapping[TableKind, tuple[str, ...]] = {
    TableKind.CALENDAR: ("service_id", *WEEKDAYS, "start_date", "end_date"),
    TableKind.AGENCY: ("agency_name", "agency_url", "agency_timezone"),
    TableKind.ROUTES: ("route_id", "route_long_name", "route_type"),
    TableKind.FREQUENCIES: ("trip_id", "start_time", "end_time", "headway_secs"),
    TableKind.TRIPS: ("route_id", "service_id", "trip_id"),
    TableKind.STOPS: ("stop_id", "stop_name", "stop_lat", "stop_lon"),
    TableKind.STOP_TIMES: (
        "trip_id",
        "arrival_time",
        "departure_time",
        "stop_id",
        "stop_sequence",
    ),
}


def emit_row(context: ConversionContext, row: SourceRow) -> str | None:
    """Validate a row and return its Turtle block.

    Args:
        context: Run-wide conversion context.
        row: Row from any consumed table.

    Returns:
        Turtle statements for the row, or None when the row only
        updates context state.

    Raises:
        MissingFieldError: If a required column is absent.
        GtfsRdfError: For any value or reference error raised by the handler.
    """
    require_fields(row)
    return _HANDLERS[row.table](context, row)


def require_fields(row: SourceRow) -> None:
    """Fail when the row's table lacks a required column."""
    for field_name in REQUIRED_FIELDS[row.table]:
        if field_name not in row.fields:
            raise MissingFieldError(row.table.value, field_name)


def emit_service(context: ConversionContext, row: SourceRow) -> str:
    service_id = row.get("service_id")
    uri = mint_uri(context.base_uri, "service", service_id)
    properties: list[Property] = [
        ("gtfs:start_date", date_literal(row.get("start_date"))),
        ("gtfs:end_date", date_literal(row.get("end_date"))),
    ]
    properties.extend((f"gtfs:{day}", boolean_literal(row.get(day))) for day in WEEKDAYS)
    context.registry.register(EntityKind.SERVICE, service_id, uri)
    return subject_block(uri, "gtfs:Service", properties)


def emit_agency(context: ConversionContext, row: SourceRow) -> str:
    name = row.get("agency_name")
    uri = mint_uri(context.base_uri, "agency", make_name_id(name))
    context.registry.register(EntityKind.AGENCY, row.get("agency_id"), uri)
    properties: list[Property] = [
        ("dc:title", string_literal(name)),
        ("foaf:homepage", iri(row.get("agency_url"))),
        ("gtfs:timezone", string_literal(row.get("agency_timezone"))),
    ]
    if row.get("agency_lang"):
        properties.append(("gtfs:lang", string_literal(row.get("agency_lang"))))
    if row.get("agency_phone"):
        properties.append(("gtfs:phone", string_literal(row.get("agency_phone"))))
    return subject_block(uri, "gtfs:Agency", properties)


def emit_route(context: ConversionContext, row: SourceRow) -> str:
    route_id = row.get("route_id")
    short_name = row.get("route_short_name")
    long_name = row.get("route_long_name")
    type_name = route_type_name(row.get("route_type"))
    name = short_name or long_name
    uri = mint_uri(context.base_uri, "route", make_name_id(f"{route_id}-{name}"))
    context.registry.register(EntityKind.ROUTE, route_id, uri)
    context.registry.set_label(EntityKind.ROUTE, route_id, name)

    properties: list[Property] = [
        ("dcterms:identifier", string_literal(route_id)),
        ("gtfs:route_type", f"gtfs:{type_name}"),
        ("rdfs:label", string_literal(name)),
    ]
    if short_name:
        properties.append(("dc:title", string_literal(short_name)))
    if long_name:
        properties.append(("dc:description", string_literal(long_name)))
    agency_uri = _route_agency_uri(context, row.get("agency_id"))
    if agency_uri:
        properties.append(("gtfs:agency", f"<{agency_uri}>"))
    if row.get("route_url"):
        properties.append(("foaf:homepage", iri(row.get("route_url"))))
    if row.get("route_color"):
        properties.append(("gtfs:color", string_literal(row.get("route_color"))))
    if row.get("route_text_color"):
        properties.append(("gtfs:text_color", string_literal(row.get("route_text_color"))))
    return subject_block(uri, "gtfs:Route", properties)


def emit_frequency(context: ConversionContext, row: SourceRow) -> None:
    context.add_frequency(
        Frequency(
            trip_id=row.get("trip_id"),
            start_time=row.get("start_time"),
            end_time=row.get("end_time"),
            headway_secs=row.get("headway_secs"),
        )
    )


def emit_trip(context: ConversionContext, row: SourceRow) -> str:
    route_id = row.get("route_id")
    service_id = row.get("service_id")
    trip_id = row.get("trip_id")
    route_uri = context.registry.resolve(EntityKind.ROUTE, route_id)
    uri = mint_uri(route_uri, "service", service_id, trip_id)
    label = trip_label(route_id, service_id, trip_id)
    context.registry.register(EntityKind.TRIP, trip_id, uri)
    context.registry.set_label(EntityKind.TRIP, trip_id, label)
    context.registry.set_trip_route(trip_id, route_id)

    properties: list[Property] = [
        ("rdfs:label", string_literal(label)),
        ("gtfs:route", f"<{route_uri}>"),
        ("gtfs:route_id", string_literal(route_id)),
        ("gtfs:service_id", string_literal(service_id)),
        ("gtfs:trip_id", string_literal(trip_id)),
    ]
    service_uri = context.registry.lookup(EntityKind.SERVICE, service_id)
    if service_uri:
        properties.append(("gtfs:service", f"<{service_uri}>"))
    for frequency in context.frequencies_for(trip_id):
        properties.extend(
            [
                ("gtfs:start_time", string_literal(frequency.start_time)),
                ("gtfs:end_time", string_literal(frequency.end_time)),
                ("gtfs:headway_seconds", string_literal(frequency.headway_secs)),
            ]
        )
    if row.get("trip_headsign"):
        properties.append(("gtfs:trip_headsign", string_literal(row.get("trip_headsign"))))
    if row.get("direction_id"):
        properties.append(("gtfs:direction_id", string_literal(row.get("direction_id"))))
    return subject_block(uri, "gtfs:Trip", properties)


def emit_stop(context: ConversionContext, row: SourceRow) -> str:
    stop_id = row.get("stop_id")
    name = row.get("stop_name")
    uri = mint_uri(context.base_uri, "stop", make_name_id(name))
    latitude = decimal_literal(row.table.value, "stop_lat", row.get("stop_lat"))
    longitude = decimal_literal(row.table.value, "stop_lon", row.get("stop_lon"))
    context.registry.register(EntityKind.STOP, stop_id, uri)
    context.registry.set_label(EntityKind.STOP, stop_id, name)

    stop_type = "gtfs:Station" if is_truthy(row.get("location_type")) else "gtfs:Stop"
    properties: list[Property] = [
        ("dcterms:identifier", string_literal(stop_id)),
        ("rdfs:label", string_literal(name)),
        ("geo:lat", latitude),
        ("geo:long", longitude),
    ]
    if row.get("stop_code"):
        properties.append(("gtfs:stop_code", string_literal(row.get("stop_code"))))
    if row.get("stop_desc"):
        properties.append(("dc:description", string_literal(row.get("stop_desc"))))
    if row.get("stop_url"):
        properties.append(("foaf:homepage", iri(row.get("stop_url"))))
    return subject_block(uri, stop_type, properties)


def emit_stop_time(context: ConversionContext, row: SourceRow) -> str:
    registry = context.registry
    trip_id = row.get("trip_id")
    stop_id = row.get("stop_id")
    raw_sequence = row.get("stop_sequence")
    departure = row.get("departure_time")

    trip_uri = registry.resolve(EntityKind.TRIP, trip_id)
    stop_uri = registry.resolve(EntityKind.STOP, stop_id)
    sequence = parse_integer(row.table.value, "stop_sequence", raw_sequence)
    route_id = registry.trip_route(trip_id)
    route_uri = registry.resolve(EntityKind.ROUTE, route_id)
    uri = mint_uri(trip_uri, "stop", raw_sequence.strip())

    accumulator = context.accumulator
    accumulator.record_trip_stop_time(trip_id, sequence, uri)
    accumulator.record_stop_route(stop_id, stop_uri, route_id, route_uri)
    accumulator.record_route_trip(route_id, route_uri, trip_id, trip_uri)

    label = (
        f"{registry.label(EntityKind.STOP, stop_id)}, "
        f"{registry.label(EntityKind.TRIP, trip_id)}, dep {departure}"
    )
    properties: list[Property] = [
        ("rdfs:label", string_literal(label)),
        ("gtfs:trip", f"<{trip_uri}>"),
        ("gtfs:stop", f"<{stop_uri}>"),
        ("gtfs:stop_sequence", str(sequence)),
    ]
    if not context.frequencies_for(trip_id):
        properties.append(("gtfs:arrival_time", string_literal(row.get("arrival_time"))))
        properties.append(("gtfs:departure_time", string_literal(departure)))
    if row.get("stop_headsign"):
        properties.append(("gtfs:stop_headsign", string_literal(row.get("stop_headsign"))))
    return subject_block(uri, "gtfs:StopTime", properties)


def route_type_name(code: str) -> str:
    """Map a GTFS route_type code onto its vocabulary class name.

    Raises:
        UnknownRouteTypeError: If the code is not an integer in 0..7.
    """
    stripped = code.strip()
    if not _ASCII_INTEGER.match(stripped):
        raise UnknownRouteTypeError(code)
    type_name = ROUTE_TYPES.get(int(stripped))
    if type_name is None:
        raise UnknownRouteTypeError(code)
    return type_name


def trip_label(route_id: str, service_id: str, trip_id: str) -> str:
    """Build the human-readable trip label; ids without non-digits get a ``#``."""
    trip_number = trip_id if _NON_DIGIT.search(trip_id) else f"#{trip_id}"
    return f"Route {route_id}, {service_id} service, {trip_number}"


def subject_block(subject_uri: str, type_name: str, properties: Sequence[Property]) -> str:
    """Render one subject with its type and predicate-object list."""
    lines = [f"<{subject_uri}> a {type_name} ;"]
    lines.extend(f"\t{predicate} {value} ;" for predicate, value in properties)
    lines.append("\t.")
    return "\n".join(lines) + "\n\n"


def iri(value: str) -> str:
    return f"<{escape_iri(value)}>"


def ensure_exhaustive(handlers: Mapping[TableKind, StatementHandler]) -> None:
    """Fail at import time if any table kind lacks a handler."""
    missing = [kind.value for kind in TableKind if kind not in handlers]
    if missing:
        raise RuntimeError(f"No statement handler for tables: {', '.join(missing)}")


def _route_agency_uri(context: ConversionContext, agency_id: str) -> str | None:
    """Resolve a route's agency.

    An empty id, or an id unknown to a feed whose single agency has no
    agency_id, falls back to that id-less agency.
    """
    registry = context.registry
    idless_agency = registry.lookup(EntityKind.AGENCY, "")
    if not agency_id:
        return idless_agency
    if idless_agency and registry.count(EntityKind.AGENCY) == 1:
        return registry.lookup(EntityKind.AGENCY, agency_id) or idless_agency
    return registry.resolve(EntityKind.AGENCY, agency_id)


_HANDLERS: dict[TableKind, StatementHandler] = {
    TableKind.CALENDAR: emit_service,
    TableKind.AGENCY: emit_agency,
    TableKind.ROUTES: emit_route,
    TableKind.FREQUENCIES: emit_frequency,
    TableKind.TRIPS: emit_trip,
    TableKind.STOPS: emit_stop,
    TableKind.STOP_TIMES: emit_stop_time,
}
ensure_exhaustive(_HANDLERS)
