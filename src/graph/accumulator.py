"""Relationship accumulator for deferred assertions.

This module buffers associations that are only complete once every
stop time has been read: routes serving a stop, trips of a route and
the ordered stop times of a trip.
"""

from __future__ import annotations

from typing import Iterator

from core.errors import DuplicateSequenceError


class RelationshipAccumulator:
    """Indices filled during the stop_times pass and drained once."""

    def __init__(self) -> None:
        self._stop_routes: dict[str, dict[str, tuple[str, str]]] = {}
        self._route_trips: dict[str, dict[str, tuple[str, str]]] = {}
        self._trip_stop_times: dict[str, dict[int, str]] = {}

    def record_stop_route(self, stop_id: str, stop_uri: str, route_id: str, route_uri: str) -> None:
        """Record that a route serves a stop; repeated pairs are kept once."""
        routes = self._stop_routes.setdefault(stop_id, {})
        routes.setdefault(route_id, (stop_uri, route_uri))

    def record_route_trip(self, route_id: str, route_uri: str, trip_id: str, trip_uri: str) -> None:
        """Record that a trip runs on a route; repeated pairs are kept once."""
        trips = self._route_trips.setdefault(route_id, {})
        trips.setdefault(trip_id, (route_uri, trip_uri))

    def record_trip_stop_time(self, trip_id: str, sequence: int, stop_time_uri: str) -> None:
        """Record one stop time of a trip under its integer sequence.

        Raises:
            DuplicateSequenceError: If the trip already has this sequence.
        """
        stop_times = self._trip_stop_times.setdefault(trip_id, {})
        if sequence in stop_times:
            raise DuplicateSequenceError(trip_id, sequence)
        stop_times[sequence] = stop_time_uri

    def stop_routes(self) -> Iterator[tuple[str, str]]:
        """Yield unique ``(stop_uri, route_uri)`` pairs."""
        for routes in self._stop_routes.values():
            yield from routes.values()

    def route_trips(self) -> Iterator[tuple[str, str]]:
        """Yield unique ``(route_uri, trip_uri)`` pairs."""
        for trips in self._route_trips.values():
            yield from trips.values()

    def trip_stop_times(self) -> Iterator[tuple[str, list[str]]]:
        """Yield each trip id with its stop-time URIs in ascending sequence order."""
        for trip_id, stop_times in self._trip_stop_times.items():
            yield trip_id, [stop_times[sequence] for sequence in sorted(stop_times)]

    def has_stop_times(self, trip_id: str) -> bool:
        return trip_id in self._trip_stop_times

    def first_stop_time(self) -> str | None:
        """Return a deterministic example stop time.

        Picks the lexicographically smallest trip id and, within it, the
        smallest sequence.
        """
        if not self._trip_stop_times:
            return None
        trip_id = min(self._trip_stop_times)
        stop_times = self._trip_stop_times[trip_id]
        return stop_times[min(stop_times)]

    def drain(self) -> None:
        """Release all indices after finalization."""
        self._stop_routes.clear()
        self._route_trips.clear()
        self._trip_stop_times.clear()
