# campus_nav/models/campus.py

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple


class Location:
    """
    A named point on campus with descriptive tags.

    Immutable once created. Equality and hashing use (name, lat, lon) only,
    so two records that differ only in their tags are the same location.
    """

    __slots__ = ("_name", "_lat", "_lon", "_tags")

    def __init__(
        self,
        name: str,
        lat: float,
        lon: float,
        tags: Optional[Iterable[str]] = None,
    ) -> None:
        self._name = name
        self._lat = float(lat)
        self._lon = float(lon)
        self._tags: Tuple[str, ...] = tuple(tags) if tags is not None else ()

    @property
    def name(self) -> str:
        return self._name

    @property
    def lat(self) -> float:
        return self._lat

    @property
    def lon(self) -> float:
        return self._lon

    @property
    def tags(self) -> Tuple[str, ...]:
        return self._tags

    def heuristic_to(self, other: "Location") -> float:
        """
        Straight-line distance in degree space, scaled by 1000 (rough metres).

        Not a lower bound on the graph distance.
        """
        dx = self._lat - other._lat
        dy = self._lon - other._lon
        return math.sqrt(dx * dx + dy * dy) * 1000.0

    def _key(self) -> Tuple[str, float, float]:
        return (self._name, self._lat, self._lon)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Location):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"Location({self._name!r}, {self._lat}, {self._lon})"

    def __str__(self) -> str:
        return self._name


class PathSegment:
    """
    Directed edge between two locations.

    Distance (metres) and base time (minutes) are fixed; the congestion
    factor scales the effective time and may change at any moment.
    """

    __slots__ = ("_start", "_end", "_distance", "_base_time", "_congestion_factor")

    def __init__(
        self,
        start: Location,
        end: Location,
        distance: float,
        base_time: float,
    ) -> None:
        self._start = start
        self._end = end
        self._distance = float(distance)
        self._base_time = float(base_time)
        self._congestion_factor = 1.0

    @property
    def start(self) -> Location:
        return self._start

    @property
    def end(self) -> Location:
        return self._end

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def base_time(self) -> float:
        return self._base_time

    @property
    def congestion_factor(self) -> float:
        return self._congestion_factor

    def effective_time(self) -> float:
        return self._base_time * self._congestion_factor

    def set_congestion(self, factor: float) -> None:
        # Non-positive factors fall back to free flow.
        self._congestion_factor = factor if factor > 0 else 1.0

    def __repr__(self) -> str:
        return (
            f"PathSegment({self._start.name!r} -> {self._end.name!r}, "
            f"distance={self._distance}, base_time={self._base_time}, "
            f"congestion={self._congestion_factor})"
        )


# Adjacency: every location maps to the segments leaving it.
Graph = Dict[Location, List[PathSegment]]


class Route:
    """
    A concrete walk through the graph with aggregated distance and time.

    The landmark list is computed once: tags of every location on the path,
    lower-cased, duplicates removed, first occurrence kept.
    """

    __slots__ = ("_path", "_distance", "_time", "_landmarks")

    def __init__(self, path: Sequence[Location], distance: float, time: float) -> None:
        self._path: Tuple[Location, ...] = tuple(path)
        if not self._path:
            raise ValueError("A route needs at least one location")
        self._distance = float(distance)
        self._time = float(time)
        self._landmarks: Tuple[str, ...] = self._extract_landmarks(self._path)

    @staticmethod
    def _extract_landmarks(path: Sequence[Location]) -> Tuple[str, ...]:
        seen: Dict[str, None] = {}
        for loc in path:
            for tag in loc.tags:
                seen.setdefault(tag.casefold(), None)
        return tuple(seen)

    @property
    def path(self) -> Tuple[Location, ...]:
        return self._path

    def get_path(self) -> List[Location]:
        return list(self._path)

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def time(self) -> float:
        return self._time

    @property
    def landmarks(self) -> Tuple[str, ...]:
        return self._landmarks

    @property
    def start(self) -> Location:
        return self._path[0]

    @property
    def end(self) -> Location:
        return self._path[-1]

    @property
    def stops(self) -> int:
        return len(self._path)

    def passes_landmark(self, landmark: str) -> bool:
        return landmark.casefold() in self._landmarks

    def walking_pace_kmh(self) -> float:
        """
        Average pace along the route in km/h (time is in minutes).
        """
        if self._time <= 0:
            return 0.0
        return (self._distance / 1000.0) / (self._time / 60.0)

    def __repr__(self) -> str:
        names = [loc.name for loc in self._path]
        return (
            f"Route({names}, distance={self._distance:.2f}, "
            f"time={self._time:.2f}, landmarks={list(self._landmarks)})"
        )
