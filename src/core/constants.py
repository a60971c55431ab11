"""Core constants used across gtfs-rdf modules.

This module centralizes table names, vocabulary IRIs and output markers.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_INPUT_DIR = Path(".")
TABLE_FILE_SUFFIX = ".txt"
REQUIRED_TABLES = ("agency", "stops", "routes", "trips", "stop_times", "calendar")
OPTIONAL_TABLES = (
    "calendar_dates",
    "fare_attributes",
    "fare_rules",
    "shapes",
    "frequencies",
    "transfers",
)
ROUTE_TYPES = {
    0: "LightRail",
    1: "Subway",
    2: "Rail",
    3: "Bus",
    4: "Ferry",
    5: "CableCar",
    6: "Gondola",
    7: "Funicular",
}
GTFS_VOCAB_NS = "http://myrdf.us/gtfs/vocab/"
NAMESPACE_PREFIXES = (
    ("rdf", "http://www.w3.org/1999/02/22-rdf-syntax-ns#"),
    ("rdfs", "http://www.w3.org/2000/01/rdf-schema#"),
    ("dc", "http://purl.org/dc/elements/1.1/"),
    ("dcterms", "http://purl.org/dc/terms/"),
    ("void", "http://rdfs.org/ns/void#"),
    ("xsd", "http://www.w3.org/2001/XMLSchema#"),
    ("geo", "http://www.w3.org/2003/01/geo/wgs84_pos#"),
    ("foaf", "http://xmlns.com/foaf/0.1/"),
    ("gtfs", GTFS_VOCAB_NS),
)
DATASET_SUBJECT_IRI = "http://dbpedia.org/resource/Transport"
BATCH_BOUNDARY_MARKER = "----------"
OUTPUT_TURTLE = "turtle"
OUTPUT_NTRIPLES = "ntriples"
SUPPORTED_OUTPUT_FORMATS = (OUTPUT_TURTLE, OUTPUT_NTRIPLES)
DEFAULT_OUTPUT_FORMAT = OUTPUT_TURTLE
PROFILE_KEYS = ("base", "input_dir", "license", "source", "split_size", "output")
