"""Unit tests for the batching statement sink."""

from __future__ import annotations

import io

from core.constants import BATCH_BOUNDARY_MARKER
from output.sink import StatementSink, namespace_preamble

BASE = "http://example.org/t"


def _row(index: int) -> str:
    return f"<{BASE}/stop/{index}> a gtfs:Stop ;\n\t.\n\n"


def test_split_size_bounds_batches_by_rows() -> None:
    """Five rows with split size 2 give batches of 2, 2 and 1 rows."""
    stream = io.StringIO()
    sink = StatementSink(stream, BASE, split_size=2)

    for index in range(5):
        sink.emit_row(_row(index))
    sink.close()

    batches = stream.getvalue().split(f"{BATCH_BOUNDARY_MARKER}\n")
    assert len(batches) == 3
    assert [batch.count("a gtfs:Stop") for batch in batches] == [2, 2, 1]
    assert all(batch.startswith(namespace_preamble()) for batch in batches)
    assert sink.batch_count == 3


def test_zero_split_size_writes_one_batch() -> None:
    stream = io.StringIO()
    sink = StatementSink(stream, BASE, split_size=0)

    for index in range(5):
        sink.emit_row(_row(index))

    output = stream.getvalue()
    assert BATCH_BOUNDARY_MARKER not in output
    assert output.count("@prefix gtfs:") == 1


def test_blocks_do_not_count_toward_split_size() -> None:
    stream = io.StringIO()
    sink = StatementSink(stream, BASE, split_size=1)

    sink.emit_row(_row(1))
    sink.emit_block("<http://a> <http://b> <http://c> .\n")
    sink.emit_block("")

    assert BATCH_BOUNDARY_MARKER not in stream.getvalue()


def test_section_writes_comment_line() -> None:
    stream = io.StringIO()
    sink = StatementSink(stream, BASE)

    sink.section("stops")

    assert stream.getvalue() == "# stops\n"


def test_ntriples_output_has_no_prefixes() -> None:
    stream = io.StringIO()
    sink = StatementSink(stream, BASE, split_size=1, output_format="ntriples")

    sink.emit_row(_row(1))
    sink.emit_row(_row(2))
    sink.close()

    lines = stream.getvalue().splitlines()
    assert lines == [
        f"<{BASE}/stop/1> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
        "<http://myrdf.us/gtfs/vocab/Stop> .",
        BATCH_BOUNDARY_MARKER,
        f"<{BASE}/stop/2> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
        "<http://myrdf.us/gtfs/vocab/Stop> .",
    ]
