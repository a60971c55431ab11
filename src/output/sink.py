"""Statement sink with row-counted batches.

This module writes Turtle blocks to a text stream. With a positive
split size, a boundary marker is written once the batch holds that
many source rows, and the next batch restarts with the shared
namespace preamble so every batch parses on its own.
"""

from __future__ import annotations

from typing import TextIO

from core.constants import BATCH_BOUNDARY_MARKER, NAMESPACE_PREFIXES, OUTPUT_NTRIPLES
from output.transcoder import transcode_to_ntriples


def namespace_preamble() -> str:
    """Return the shared ``@prefix`` declarations."""
    lines = [f"@prefix {prefix}: <{namespace}> ." for prefix, namespace in NAMESPACE_PREFIXES]
    return "\n".join(lines) + "\n\n"


class StatementSink:
    """Batching writer for Turtle or transcoded N-Triples output."""

    def __init__(
        self,
        stream: TextIO,
        base_uri: str,
        split_size: int = 0,
        output_format: str = "turtle",
    ) -> None:
        self._stream = stream
        self._base_uri = base_uri
        self._split_size = split_size
        self._transcode = output_format == OUTPUT_NTRIPLES
        self._preamble = namespace_preamble()
        self._batch_rows = 0
        self._batch_open = False
        self._batch_count = 0
        self._pending: list[str] = []

    @property
    def batch_count(self) -> int:
        return self._batch_count

    def emit_row(self, turtle: str) -> None:
        """Write the statements of one source row, counting it toward the split size."""
        if self._split_size and self._batch_rows >= self._split_size:
            self._flush_pending()
            self._stream.write(f"{BATCH_BOUNDARY_MARKER}\n")
            self._batch_rows = 0
            self._batch_open = False
        self._ensure_batch()
        self._batch_rows += 1
        self._write(turtle)

    def emit_block(self, turtle: str) -> None:
        """Write statements that do not belong to a source row."""
        if not turtle:
            return
        self._ensure_batch()
        self._write(turtle)

    def section(self, name: str) -> None:
        """Write a ``# name`` comment separating table output."""
        self._flush_pending()
        self._stream.write(f"# {name}\n")

    def close(self) -> None:
        """Flush buffered output; the stream itself stays open."""
        self._flush_pending()
        self._stream.flush()

    def _ensure_batch(self) -> None:
        if self._batch_open:
            return
        self._batch_open = True
        self._batch_count += 1
        if not self._transcode:
            self._stream.write(self._preamble)

    def _write(self, turtle: str) -> None:
        if self._transcode:
            self._pending.append(turtle)
        else:
            self._stream.write(turtle)

    def _flush_pending(self) -> None:
        if not self._pending:
            return
        document = self._preamble + "".join(self._pending)
        self._pending.clear()
        self._stream.write(transcode_to_ntriples(document, self._base_uri))
