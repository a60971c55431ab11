"""Integration tests for end-to-end feed conversion."""

from __future__ import annotations

import io

from rdflib import Graph, Literal, Namespace, URIRef
from rdflib.namespace import RDF, RDFS, XSD

from core.constants import BATCH_BOUNDARY_MARKER
from gtfs_rdf import ConversionConfig, convert_feed
from tests.fixture_paths import fixture_path

GTFS = Namespace("http://myrdf.us/gtfs/vocab/")
VOID = Namespace("http://rdfs.org/ns/void#")


def _convert(base_uri: str, **kwargs: object) -> str:
    config = ConversionConfig(base_uri=base_uri, input_dir=fixture_path("gtfs_valid"), **kwargs)
    stream = io.StringIO()
    convert_feed(config, stream)
    return stream.getvalue()


def _turtle_graph(base_uri: str) -> Graph:
    graph = Graph()
    graph.parse(data=_convert(base_uri), format="turtle")
    return graph


def test_turtle_output_parses_into_linked_graph(base_uri: str) -> None:
    """Stops, routes and trips should be linked in both directions."""
    graph = _turtle_graph(base_uri)
    grand_central = URIRef(f"{base_uri}/stop/grand_central_terminal")
    hudson = URIRef(f"{base_uri}/route/1-hudson")
    harlem = URIRef(f"{base_uri}/route/2-h")

    assert (grand_central, RDF.type, GTFS.Station) in graph
    assert set(graph.objects(grand_central, GTFS.has_route)) == {hudson, harlem}
    assert (hudson, GTFS.has_stop, grand_central) in graph
    assert len(set(graph.objects(hudson, GTFS.has_trip))) == 2


def test_trip_times_list_is_ordered_by_sequence_rank(base_uri: str) -> None:
    graph = _turtle_graph(base_uri)
    trip = f"{base_uri}/route/1-hudson/service/WKD/1001"
    times = URIRef(f"{trip}/times")

    members = [graph.value(times, RDF[f"_{position}"]) for position in (1, 2, 3)]

    assert (URIRef(trip), GTFS.has_stoptimes, times) in graph
    assert members == [
        URIRef(f"{trip}/stop/1"),
        URIRef(f"{trip}/stop/5"),
        URIRef(f"{trip}/stop/20"),
    ]
    assert graph.value(times, RDF._4) is None
    assert graph.value(times, RDFS.label) == Literal("Trip times for Route 1, WKD service, #1001")


def test_frequency_trip_stop_times_have_no_clock_times(base_uri: str) -> None:
    graph = _turtle_graph(base_uri)
    frequency_trip = URIRef(f"{base_uri}/route/1-hudson/service/WKD/T100")
    scheduled_trip = URIRef(f"{base_uri}/route/1-hudson/service/WKD/1001")

    frequency_times = list(graph.subjects(GTFS.trip, frequency_trip))
    scheduled_times = list(graph.subjects(GTFS.trip, scheduled_trip))

    assert graph.value(frequency_trip, GTFS.headway_seconds) == Literal("600")
    assert len(frequency_times) == 2
    assert all(graph.value(node, GTFS.arrival_time) is None for node in frequency_times)
    assert len(scheduled_times) == 3
    assert all(graph.value(node, GTFS.departure_time) is not None for node in scheduled_times)


def test_service_dates_are_typed(base_uri: str) -> None:
    graph = _turtle_graph(base_uri)
    service = URIRef(f"{base_uri}/service/WKD")

    assert graph.value(service, GTFS.start_date) == Literal("2023-06-01", datatype=XSD.date)
    assert graph.value(service, GTFS.saturday) == Literal(False)


def test_dataset_example_resource_is_deterministic(base_uri: str) -> None:
    """The example is the smallest sequence of the smallest trip id."""
    graph = _turtle_graph(base_uri)
    dataset = URIRef(f"{base_uri}/dataset")

    example = graph.value(dataset, VOID.exampleResource)

    assert example == URIRef(f"{base_uri}/route/1-hudson/service/WKD/1001/stop/1")
    assert (URIRef(f"{base_uri}/dataset"), RDF.type, VOID.Dataset) in graph


def test_split_batches_each_parse_on_their_own(base_uri: str) -> None:
    output = _convert(base_uri, split_size=4)
    batches = output.split(f"{BATCH_BOUNDARY_MARKER}\n")
    merged = Graph()

    for batch in batches:
        batch_graph = Graph()
        batch_graph.parse(data=batch, format="turtle")
        merged += batch_graph

    assert len(batches) == 5
    assert set(merged) == set(_turtle_graph(base_uri))


def test_ntriples_output_matches_turtle_statements(base_uri: str) -> None:
    ntriples_graph = Graph()
    ntriples_graph.parse(data=_convert(base_uri, output_format="ntriples"), format="nt")

    assert set(ntriples_graph) == set(_turtle_graph(base_uri))
