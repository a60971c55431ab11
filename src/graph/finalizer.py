"""Deferred assertion finalizer.

This module emits the statements that need the whole dataset: routes
serving each stop, trips of each route, and each trip's ordered list
of stop times. It also renders the closing dataset descriptor.
"""

from __future__ import annotations

from typing import Iterator

from core.config import ConversionConfig
from core.constants import DATASET_SUBJECT_IRI, GTFS_VOCAB_NS
from core.literals import string_literal
from core.logging_config import get_logger
from core.types import EntityKind
from core.uri import escape_iri, mint_uri
from graph.context import ConversionContext

_LOGGER = get_logger(__name__)


def finalize_assertions(context: ConversionContext) -> Iterator[str]:
    """Yield deferred Turtle blocks and drain the accumulator.

    Args:
        context: Context whose accumulator holds the stop_times indices.

    Yields:
        One block for stop/route links, one for route/trip links, then
        one block per trip with recorded stop times.
    """
    accumulator = context.accumulator
    yield _stop_route_block(accumulator.stop_routes())
    yield _route_trip_block(accumulator.route_trips())
    trip_count = 0
    for trip_id, stop_time_uris in accumulator.trip_stop_times():
        trip_count += 1
        yield _trip_times_block(context, trip_id, stop_time_uris)
    _warn_unused_frequencies(context)
    accumulator.drain()
    _LOGGER.info("finalization_completed", trip_count=trip_count)


def describe_dataset(config: ConversionConfig, example_uri: str | None) -> str:
    """Render the void:Dataset descriptor block.

    Args:
        config: Conversion config providing base, license and source.
        example_uri: Stop-time URI to advertise as example resource.

    Returns:
        Turtle block for the dataset descriptor.
    """
    lines = [
        f"<{dataset_uri(config.base_uri)}> a void:Dataset ;",
        f"\tdcterms:subject <{DATASET_SUBJECT_IRI}> ;",
        f"\tvoid:vocabulary <{GTFS_VOCAB_NS}> ;",
    ]
    if config.license_uri:
        lines.append(f"\tdcterms:license <{escape_iri(config.license_uri)}> ;")
    if config.source_uri:
        lines.append(f"\tdcterms:source <{escape_iri(config.source_uri)}> ;")
    if example_uri:
        lines.append(f"\tvoid:exampleResource <{example_uri}> ;")
    lines.append("\t.")
    return "\n".join(lines) + "\n\n"


def dataset_uri(base_uri: str) -> str:
    return mint_uri(base_uri, "dataset")


def _stop_route_block(pairs: Iterator[tuple[str, str]]) -> str:
    lines: list[str] = []
    for stop_uri, route_uri in pairs:
        lines.append(f"<{stop_uri}> gtfs:has_route <{route_uri}> .")
        lines.append(f"<{route_uri}> gtfs:has_stop <{stop_uri}> .")
    return _join_lines(lines)


def _route_trip_block(pairs: Iterator[tuple[str, str]]) -> str:
    lines = [f"<{route_uri}> gtfs:has_trip <{trip_uri}> ." for route_uri, trip_uri in pairs]
    return _join_lines(lines)


def _trip_times_block(context: ConversionContext, trip_id: str, stop_time_uris: list[str]) -> str:
    """Render the rdf:Seq of a trip; positions are 1-based sequence ranks."""
    trip_uri = context.registry.resolve(EntityKind.TRIP, trip_id)
    title = context.registry.label(EntityKind.TRIP, trip_id)
    times_uri = f"{trip_uri}/times"
    lines = [
        f"<{trip_uri}> gtfs:has_stoptimes <{times_uri}> .",
        f"<{times_uri}> a rdf:Seq ;",
        f"\trdfs:label {string_literal(f'Trip times for {title}')} .",
    ]
    lines.extend(
        f"<{times_uri}> rdf:_{position} <{stop_time_uri}> ."
        for position, stop_time_uri in enumerate(stop_time_uris, 1)
    )
    return _join_lines(lines)


def _warn_unused_frequencies(context: ConversionContext) -> None:
    for trip_id in sorted(context.frequencies):
        if context.registry.lookup(EntityKind.TRIP, trip_id) is None:
            _LOGGER.warning("frequency_unused", trip_id=trip_id)


def _join_lines(lines: list[str]) -> str:
    if not lines:
        return ""
    return "\n".join(lines) + "\n\n"
