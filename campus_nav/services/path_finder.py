# campus_nav/services/path_finder.py

from time import perf_counter
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import networkx as nx

from campus_nav.core.logger import logger
from campus_nav.models.campus import Graph, Location, PathSegment, Route


class PathFinder:
    """
    All-pairs route planner over a small campus graph.

    - precomputes every optimal route at construction (Floyd-Warshall,
      minimising distance only; time is summed along the chosen path)
    - answers point-to-point queries from the table in constant time
    - offers sorting and landmark filtering over route collections

    The table is a snapshot: later congestion changes on the graph's segments
    are not reflected in stored route times. Use current_time() for that.
    """

    def __init__(self, graph: Graph) -> None:
        self._graph: Dict[Location, Tuple[PathSegment, ...]] = {
            loc: tuple(segments) for loc, segments in graph.items()
        }
        self._table: Dict[Location, Dict[Location, Route]] = self._precompute_all_paths()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def get_graph(self) -> Mapping[Location, Tuple[PathSegment, ...]]:
        return MappingProxyType(self._graph)

    def get_precomputed_path(
        self,
        start: Optional[Location],
        end: Optional[Location],
    ) -> Optional[Route]:
        """
        Stored optimal route from start to end, or None if either endpoint is
        missing/unknown or end is unreachable from start.
        """
        if start is None or end is None:
            return None
        row = self._table.get(start)
        if row is None:
            return None
        return row.get(end)

    def route_via(
        self,
        start: Optional[Location],
        via: Optional[Location],
        end: Optional[Location],
    ) -> Optional[Route]:
        """
        Join the stored routes start->via and via->end into one route.
        """
        first = self.get_precomputed_path(start, via)
        second = self.get_precomputed_path(via, end)
        if first is None or second is None:
            return None
        return Route(
            first.path + second.path[1:],
            first.distance + second.distance,
            first.time + second.time,
        )

    def current_time(self, route: Route) -> float:
        """
        Walking time along the route under the congestion factors in effect now.
        """
        total = 0.0
        for u, v in zip(route.path[:-1], route.path[1:]):
            segment = self.segment(u, v)
            if segment is not None:
                total += segment.effective_time()
        return total

    def segment(self, start: Location, end: Location) -> Optional[PathSegment]:
        for seg in self._graph.get(start, ()):
            if seg.end == end:
                return seg
        return None

    def locations(self) -> List[Location]:
        return sorted(self._graph, key=lambda loc: loc.name)

    def find_location(self, name: str) -> Optional[Location]:
        for loc in self._graph:
            if loc.name == name:
                return loc
        return None

    def all_landmarks(self) -> List[str]:
        return sorted({tag.casefold() for loc in self._graph for tag in loc.tags})

    def iter_routes(self) -> Iterator[Tuple[Location, Location, Route]]:
        for u, row in self._table.items():
            for v, route in row.items():
                yield u, v, route

    def to_networkx(self) -> nx.Graph:
        """
        Undirected networkx view of the campus graph, weighted by 'distance'.
        """
        G = nx.Graph()
        for loc in self._graph:
            G.add_node(loc, name=loc.name, lat=loc.lat, lon=loc.lon)
        for loc, segments in self._graph.items():
            for seg in segments:
                G.add_edge(loc, seg.end, distance=seg.distance, time=seg.base_time)
        return G

    # ------------------------------------------------------------------ #
    # Route collection utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def sort_routes(routes: Optional[List[Route]], criteria: Optional[str]) -> None:
        """
        Stable in-place sort by "distance", "time" (ascending) or "landmarks"
        (most landmarks first). Any other criteria leaves the list untouched.
        """
        if routes is None or not isinstance(criteria, str):
            return

        key = criteria.lower()
        if key == "distance":
            routes.sort(key=lambda r: r.distance)
        elif key == "time":
            routes.sort(key=lambda r: r.time)
        elif key == "landmarks":
            routes.sort(key=lambda r: len(r.landmarks), reverse=True)

    @staticmethod
    def filter_by_landmark(
        routes: Optional[Sequence[Route]],
        landmark: Optional[str],
    ) -> Sequence[Route]:
        """
        Prefer routes passing the landmark; if none does, return routes as given.
        """
        if routes is None or landmark is None:
            return []

        filtered = PathFinder.filter_by_landmark_strict(routes, landmark)
        return filtered if filtered else routes

    @staticmethod
    def filter_by_landmark_strict(
        routes: Optional[Sequence[Route]],
        landmark: Optional[str],
    ) -> List[Route]:
        if routes is None or landmark is None:
            return []
        return [r for r in routes if r is not None and r.passes_landmark(landmark)]

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _precompute_all_paths(self) -> Dict[Location, Dict[Location, Route]]:
        """
        Floyd-Warshall over the adjacency mapping.

        Absent entries mean "unreachable". On equal distance the existing
        entry is kept, so results depend only on the graph's key order.
        """
        t0 = perf_counter()
        nodes = list(self._graph)

        dist: Dict[Location, Dict[Location, Route]] = {}
        for u in nodes:
            row: Dict[Location, Route] = {u: Route([u], 0.0, 0.0)}
            for seg in self._graph[u]:
                row[seg.end] = Route([u, seg.end], seg.distance, seg.effective_time())
            dist[u] = row

        for k in nodes:
            row_k = dist[k]
            for i in nodes:
                ik = dist[i].get(k)
                if ik is None:
                    continue
                row_i = dist[i]
                for j in nodes:
                    kj = row_k.get(j)
                    if kj is None:
                        continue
                    new_dist = ik.distance + kj.distance
                    ij = row_i.get(j)
                    if ij is None or new_dist < ij.distance:
                        row_i[j] = Route(
                            ik.path + kj.path[1:],
                            new_dist,
                            ik.time + kj.time,
                        )

        t1 = perf_counter()
        pairs = sum(len(row) for row in dist.values())
        logger.info(
            "Precomputed all-pairs routes: {} locations, {} reachable pairs in {:.2f} ms",
            len(nodes),
            pairs,
            (t1 - t0) * 1000.0,
        )
        return dist
