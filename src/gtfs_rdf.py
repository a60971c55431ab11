"""Public import surface for gtfs-rdf.

This module provides a stable import path for library users.
It re-exports the conversion entry point and typed models.
"""

from __future__ import annotations

from core.config import ConversionConfig, load_profile
from core.errors import GtfsRdfError
from core.types import ConversionSummary, TableKind
from graph.accumulator import RelationshipAccumulator
from graph.context import ConversionContext
from graph.registry import EntityRegistry
from ingest.pipeline import ConversionRunner, convert_feed
from output.sink import StatementSink

__all__ = [
    "ConversionConfig",
    "ConversionContext",
    "ConversionRunner",
    "ConversionSummary",
    "EntityRegistry",
    "GtfsRdfError",
    "RelationshipAccumulator",
    "StatementSink",
    "TableKind",
    "convert_feed",
    "load_profile",
]
