# campus_nav/services/routing_service.py

from time import perf_counter
from typing import List, Optional

from campus_nav.core.logger import logger
from campus_nav.models.campus import Location, Route
from campus_nav.models.routing import (
    LocationOut,
    RouteOptionsRequest,
    RouteOptionsResponse,
    RouteOut,
    RouteRequest,
)
from campus_nav.services.graph_manager import GraphManager
from campus_nav.services.path_finder import PathFinder


class UnknownLocationError(LookupError):
    """Raised when a requested location name is not part of the campus graph."""


class SameLocationError(ValueError):
    """Raised when start and end name the same location."""


class RoutingService:
    """
    High-level routing service:
    - ensures the campus path finder is built
    - resolves location names for start/end
    - looks up precomputed routes
    - builds alternative routes through landmark locations and ranks them
    """

    def __init__(self, graph_manager: GraphManager | None = None) -> None:
        self.graph_manager = graph_manager or GraphManager()
        logger.info("RoutingService initialised (path finder will be built on demand).")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def list_locations(self) -> List[LocationOut]:
        finder = self.graph_manager.ensure_path_finder()
        return [
            LocationOut(name=loc.name, lat=loc.lat, lon=loc.lon, tags=list(loc.tags))
            for loc in finder.locations()
        ]

    def list_landmarks(self) -> List[str]:
        return self.graph_manager.ensure_path_finder().all_landmarks()

    def compute_route(self, request: RouteRequest) -> Optional[RouteOut]:
        """
        Main entry point for the /route endpoint.

        Returns None when the two locations are not connected.
        """
        t0 = perf_counter()
        finder = self.graph_manager.ensure_path_finder()
        start, end = self._resolve_endpoints(finder, request)

        logger.info(f"Received routing request {start.name!r} -> {end.name!r}")

        route = finder.get_precomputed_path(start, end)
        t1 = perf_counter()

        if route is None:
            logger.info(
                f"No route between {start.name!r} and {end.name!r} "
                f"(lookup {(t1 - t0) * 1000.0:.2f} ms)"
            )
            return None

        logger.info(
            f"Route summary: {route.stops} stops, distance={route.distance:.1f} m, "
            f"time={route.time:.1f} min (lookup {(t1 - t0) * 1000.0:.2f} ms)"
        )
        return self._to_route_out(route)

    def compute_route_options(self, request: RouteOptionsRequest) -> RouteOptionsResponse:
        """
        Candidate routes for the /route/options endpoint.

        1. Direct optimal route from the table.
        2. One route via every location tagged with the preferred landmark.
        3. Keep routes passing the landmark (all of them if none does).
        4. Sort by the requested criteria.
        """
        finder = self.graph_manager.ensure_path_finder()
        start, end = self._resolve_endpoints(finder, request)

        candidates: List[Route] = []
        via_names = {}

        direct = finder.get_precomputed_path(start, end)
        if direct is not None:
            candidates.append(direct)

        if request.landmark:
            wanted = request.landmark.casefold()
            for loc in finder.locations():
                if loc in (start, end):
                    continue
                if wanted not in (tag.casefold() for tag in loc.tags):
                    continue
                via_route = finder.route_via(start, loc, end)
                if via_route is not None:
                    candidates.append(via_route)
                    via_names[id(via_route)] = loc.name

        routes = candidates
        if request.landmark is not None:
            routes = list(finder.filter_by_landmark(candidates, request.landmark))
        finder.sort_routes(routes, request.criteria)

        logger.info(
            f"Route options {start.name!r} -> {end.name!r}: {len(candidates)} candidates, "
            f"{len(routes)} returned (criteria={request.criteria}, landmark={request.landmark})"
        )

        return RouteOptionsResponse(
            criteria=request.criteria,
            landmark=request.landmark,
            routes=[self._to_route_out(r, via=via_names.get(id(r))) for r in routes],
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _resolve_endpoints(self, finder: PathFinder, request: RouteRequest) -> tuple[Location, Location]:
        start = self._resolve(finder, request.start)
        end = self._resolve(finder, request.end)
        if start == end:
            raise SameLocationError("Start and end locations cannot be the same.")
        return start, end

    @staticmethod
    def _resolve(finder: PathFinder, name: str) -> Location:
        loc = finder.find_location(name)
        if loc is None:
            raise UnknownLocationError(f"Unknown location: {name!r}")
        return loc

    @staticmethod
    def _to_route_out(route: Route, via: Optional[str] = None) -> RouteOut:
        return RouteOut(
            path=[loc.name for loc in route.path],
            distance_m=route.distance,
            time_min=route.time,
            landmarks=list(route.landmarks),
            stops=route.stops,
            walking_pace_kmh=route.walking_pace_kmh(),
            via=via,
        )
