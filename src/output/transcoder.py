"""Turtle to N-Triples transcoding.

This module delegates parsing and reserialization to rdflib so the
alternate encoding carries the same statement set as the Turtle text.
"""

from __future__ import annotations

from typing import Any

from core.errors import GtfsRdfDependencyError, GtfsRdfError


def transcode_to_ntriples(turtle_text: str, base_uri: str) -> str:
    """Parse Turtle and return sorted N-Triples lines.

    Args:
        turtle_text: Turtle document including prefix declarations.
        base_uri: Base URI for resolving relative references.

    Returns:
        N-Triples text, one statement per line, sorted for stable output.

    Raises:
        GtfsRdfDependencyError: If rdflib is not installed.
        GtfsRdfError: If the Turtle text cannot be parsed.
    """
    graph = _create_graph()
    try:
        graph.parse(data=turtle_text, format="turtle", publicID=f"{base_uri}/")
    except Exception as error:
        raise GtfsRdfError(
            f"Failed to transcode generated Turtle to N-Triples: {error}. "
            "Check the feed for values that produce invalid IRIs."
        ) from error
    serialized = graph.serialize(format="nt")
    lines = sorted(line for line in serialized.splitlines() if line.strip())
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def _create_graph() -> Any:
    """Create an empty rdflib graph.

    Raises:
        GtfsRdfDependencyError: If rdflib is missing.
    """
    try:
        from rdflib import Graph
    except ImportError as error:
        raise GtfsRdfDependencyError(
            "N-Triples output requires rdflib, but it is not installed. "
            "Install rdflib to use --output ntriples."
        ) from error
    return Graph()
