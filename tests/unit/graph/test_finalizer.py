"""Unit tests for deferred assertions and the dataset descriptor."""

from __future__ import annotations

from core.config import ConversionConfig
from core.types import EntityKind
from graph.context import ConversionContext
from graph.finalizer import describe_dataset, finalize_assertions

BASE = "http://example.org/t"
TRIP_URI = f"{BASE}/route/r/service/s/T1"


def _context_with_trip() -> ConversionContext:
    context = ConversionContext(config=ConversionConfig(base_uri=BASE))
    context.registry.register(EntityKind.TRIP, "T1", TRIP_URI)
    context.registry.set_label(EntityKind.TRIP, "T1", "Route r, s service, T1")
    return context


def test_trip_positions_are_sequence_ranks() -> None:
    """Raw sequences 1, 5, 20 become list positions 1, 2, 3."""
    context = _context_with_trip()
    for sequence in (20, 1, 5):
        context.accumulator.record_trip_stop_time("T1", sequence, f"{TRIP_URI}/stop/{sequence}")

    output = "".join(finalize_assertions(context))

    times_uri = f"{TRIP_URI}/times"
    assert f"<{TRIP_URI}> gtfs:has_stoptimes <{times_uri}> ." in output
    assert 'rdfs:label "Trip times for Route r, s service, T1" .' in output
    position_lines = [line for line in output.splitlines() if " rdf:_" in line]
    assert position_lines == [
        f"<{times_uri}> rdf:_1 <{TRIP_URI}/stop/1> .",
        f"<{times_uri}> rdf:_2 <{TRIP_URI}/stop/5> .",
        f"<{times_uri}> rdf:_3 <{TRIP_URI}/stop/20> .",
    ]


def test_stop_route_pairs_are_bidirectional_and_unique() -> None:
    context = _context_with_trip()
    for _ in range(2):
        context.accumulator.record_stop_route("S", "http://s", "R", "http://r")
        context.accumulator.record_route_trip("R", "http://r", "T1", TRIP_URI)

    output = "".join(finalize_assertions(context))

    assert output.count("<http://s> gtfs:has_route <http://r> .") == 1
    assert output.count("<http://r> gtfs:has_stop <http://s> .") == 1
    assert output.count(f"<http://r> gtfs:has_trip <{TRIP_URI}> .") == 1


def test_finalize_drains_accumulator() -> None:
    context = _context_with_trip()
    context.accumulator.record_trip_stop_time("T1", 1, f"{TRIP_URI}/stop/1")

    list(finalize_assertions(context))

    assert context.accumulator.first_stop_time() is None


def test_describe_dataset_includes_optional_links() -> None:
    config = ConversionConfig(
        base_uri=BASE,
        license_uri="http://creativecommons.org/licenses/by/3.0/",
        source_uri="http://web.mta.info/developers/",
    )

    block = describe_dataset(config, f"{TRIP_URI}/stop/1")

    assert f"<{BASE}/dataset> a void:Dataset ;" in block
    assert "dcterms:license <http://creativecommons.org/licenses/by/3.0/> ;" in block
    assert "dcterms:source <http://web.mta.info/developers/> ;" in block
    assert f"void:exampleResource <{TRIP_URI}/stop/1> ;" in block


def test_describe_dataset_without_stop_times_has_no_example() -> None:
    block = describe_dataset(ConversionConfig(base_uri=BASE), None)

    assert "exampleResource" not in block and "dcterms:license" not in block
