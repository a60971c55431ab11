"""Conversion context shared by every processing stage.

One context value is created per run and passed explicitly to the
emitter and finalizer; nothing is kept in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.config import ConversionConfig
from core.types import Frequency
from graph.accumulator import RelationshipAccumulator
from graph.registry import EntityRegistry


@dataclass
class ConversionContext:
    """Run-wide mutable state owned by the single processing thread.

    Attributes:
        config: Validated conversion configuration.
        registry: Entity registry of minted URIs.
        accumulator: Relationship indices for the finalization phase.
        frequencies: Headway windows per trip id, in file order.
    """

    config: ConversionConfig
    registry: EntityRegistry = field(default_factory=EntityRegistry)
    accumulator: RelationshipAccumulator = field(default_factory=RelationshipAccumulator)
    frequencies: dict[str, list[Frequency]] = field(default_factory=dict)

    @property
    def base_uri(self) -> str:
        return self.config.base_uri

    def add_frequency(self, frequency: Frequency) -> None:
        """Attach a headway window to its trip id; a trip may have several."""
        self.frequencies.setdefault(frequency.trip_id, []).append(frequency)

    def frequencies_for(self, trip_id: str) -> list[Frequency]:
        return self.frequencies.get(trip_id, [])
