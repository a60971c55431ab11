"""Entity registry for minted URIs.

This module owns one natural id to URI map per entity kind, plus the
labels and trip parents needed to compose later statements.
"""

from __future__ import annotations

from core.errors import DuplicateEntityError, UnresolvedReferenceError
from core.types import EntityKind


class EntityRegistry:
    """Per-kind id to URI maps populated once per owning table."""

    def __init__(self) -> None:
        self._uris: dict[EntityKind, dict[str, str]] = {kind: {} for kind in EntityKind}
        self._labels: dict[EntityKind, dict[str, str]] = {kind: {} for kind in EntityKind}
        self._trip_routes: dict[str, str] = {}

    def register(self, kind: EntityKind, natural_id: str, uri: str) -> None:
        """Register a minted URI for a natural id.

        Re-registering the same URI is a no-op.

        Raises:
            DuplicateEntityError: If the id is bound to a different URI.
        """
        existing = self._uris[kind].get(natural_id)
        if existing is not None and existing != uri:
            raise DuplicateEntityError(kind.value, natural_id)
        self._uris[kind][natural_id] = uri

    def resolve(self, kind: EntityKind, natural_id: str) -> str:
        """Return the URI for a natural id.

        Raises:
            UnresolvedReferenceError: If the id was never registered.
        """
        uri = self._uris[kind].get(natural_id)
        if uri is None:
            raise UnresolvedReferenceError(kind.value, natural_id)
        return uri

    def lookup(self, kind: EntityKind, natural_id: str) -> str | None:
        """Return the URI for a natural id, or None when unknown."""
        return self._uris[kind].get(natural_id)

    def set_label(self, kind: EntityKind, natural_id: str, label: str) -> None:
        self._labels[kind][natural_id] = label

    def label(self, kind: EntityKind, natural_id: str) -> str:
        return self._labels[kind].get(natural_id, "")

    def set_trip_route(self, trip_id: str, route_id: str) -> None:
        """Record the parent route of a trip."""
        self._trip_routes[trip_id] = route_id

    def trip_route(self, trip_id: str) -> str:
        """Return the parent route id of a registered trip.

        Raises:
            UnresolvedReferenceError: If the trip was never registered.
        """
        route_id = self._trip_routes.get(trip_id)
        if route_id is None:
            raise UnresolvedReferenceError(EntityKind.TRIP.value, trip_id)
        return route_id

    def count(self, kind: EntityKind) -> int:
        return len(self._uris[kind])

    def counts(self) -> dict[str, int]:
        """Return registered entity counts keyed by kind name."""
        return {kind.value: len(uris) for kind, uris in self._uris.items()}
