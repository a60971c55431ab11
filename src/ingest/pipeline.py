"""Conversion orchestration for GTFS feeds.

This module drives the two conversion phases over one shared context:
a streaming phase that reads tables in dependency order and emits
row-local statements, and a finalization phase that emits statements
needing the complete dataset.
"""

from __future__ import annotations

from typing import TextIO

from core.config import ConversionConfig
from core.logging_config import get_logger
from core.types import ConversionSummary, FeedTables, TableKind
from graph.context import ConversionContext
from graph.emitter import emit_row
from graph.finalizer import describe_dataset, finalize_assertions
from ingest.table_reader import discover_tables, read_table
from output.sink import StatementSink

_LOGGER = get_logger(__name__)


class ConversionRunner:
    """Stateful runner for one conversion of a feed directory."""

    def __init__(self, config: ConversionConfig, stream: TextIO) -> None:
        self._config = config.validate()
        self._context = ConversionContext(config=self._config)
        self._sink = StatementSink(
            stream,
            base_uri=self._config.base_uri,
            split_size=self._config.split_size,
            output_format=self._config.output_format,
        )
        self._rows_by_table: dict[str, int] = {}

    def run(self) -> ConversionSummary:
        """Execute both phases and return conversion counts.

        Raises:
            GtfsRdfError: On the first invalid file, row or reference.
        """
        tables = discover_tables(self._config.input_dir)
        _log_detected_tables(tables)
        for table in TableKind:
            self._process_table(table)
        self._finalize()
        self._sink.close()
        summary = ConversionSummary(
            rows_by_table=dict(self._rows_by_table),
            entity_counts=self._context.registry.counts(),
            batch_count=self._sink.batch_count,
        )
        _log_conversion_completion(self._config, summary)
        return summary

    def _process_table(self, table: TableKind) -> None:
        self._sink.section(table.value)
        row_count = 0
        for row in read_table(self._config.input_dir, table):
            row_count += 1
            turtle = emit_row(self._context, row)
            if turtle is not None:
                self._sink.emit_row(turtle)
        self._rows_by_table[table.value] = row_count
        _LOGGER.info("table_processed", table=table.value, row_count=row_count)

    def _finalize(self) -> None:
        example_uri = self._context.accumulator.first_stop_time()
        self._sink.section("back filling trips to stoptimes")
        for block in finalize_assertions(self._context):
            self._sink.emit_block(block)
        self._sink.section("dataset")
        self._sink.emit_block(describe_dataset(self._config, example_uri))


def convert_feed(config: ConversionConfig, stream: TextIO) -> ConversionSummary:
    """Convert a GTFS feed directory into linked-data statements.

    Args:
        config: Conversion configuration.
        stream: Text stream receiving the graph output.

    Returns:
        Counts of rows, entities and batches.

    Raises:
        GtfsRdfConfigError: If the config is invalid.
        GtfsRdfError: If the feed is incomplete or a row is invalid.
    """
    runner = ConversionRunner(config, stream)
    return runner.run()


def _log_detected_tables(tables: FeedTables) -> None:
    """Log detected tables; optional tables other than frequencies are unused."""
    _LOGGER.info("tables_detected", required=list(tables.required), optional=list(tables.optional))
    consumed = {table.value for table in TableKind}
    for table_name in tables.optional:
        if table_name not in consumed:
            _LOGGER.info("optional_table_ignored", table=table_name)


def _log_conversion_completion(config: ConversionConfig, summary: ConversionSummary) -> None:
    """Log conversion completion with contextual metadata."""
    _LOGGER.info(
        "conversion_completed",
        base_uri=config.base_uri,
        input_dir=str(config.input_dir),
        output_format=config.output_format,
        split_size=config.split_size,
        rows_by_table=dict(summary.rows_by_table),
        entity_counts=dict(summary.entity_counts),
        batch_count=summary.batch_count,
    )
