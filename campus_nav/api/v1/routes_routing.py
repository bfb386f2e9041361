# campus_nav/api/v1/routes_routing.py
from typing import List

from fastapi import APIRouter, HTTPException

from campus_nav.core.logger import logger
from campus_nav.models.routing import (
    LocationOut,
    RouteOptionsRequest,
    RouteOptionsResponse,
    RouteOut,
    RouteRequest,
)
from campus_nav.services.graph_loader import CampusDataError
from campus_nav.services.graph_manager import GraphManager
from campus_nav.services.routing_service import (
    RoutingService,
    SameLocationError,
    UnknownLocationError,
)

router = APIRouter(
    prefix="/route",
    tags=["routing"],
)

# Single shared instances
graph_manager = GraphManager()
routing_service = RoutingService(graph_manager=graph_manager)


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, UnknownLocationError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, SameLocationError):
        return HTTPException(status_code=400, detail=str(exc))
    logger.error(f"Campus data unavailable: {exc}")
    return HTTPException(status_code=503, detail="Campus data unavailable")


@router.get(
    "/locations",
    response_model=List[LocationOut],
    summary="List campus locations sorted by name",
)
async def list_locations() -> List[LocationOut]:
    try:
        return routing_service.list_locations()
    except CampusDataError as exc:
        raise _to_http_error(exc) from exc


@router.get(
    "/landmarks",
    response_model=List[str],
    summary="List every landmark tag on campus",
)
async def list_landmarks() -> List[str]:
    try:
        return routing_service.list_landmarks()
    except CampusDataError as exc:
        raise _to_http_error(exc) from exc


@router.post(
    "/",
    response_model=RouteOut,
    summary="Shortest walking route between two campus locations",
)
async def compute_route(request: RouteRequest) -> RouteOut:
    """
    Look up the precomputed shortest route (by distance) between two locations.

    - 404 if a location is unknown or the two are not connected.
    - 400 if start and end are the same location.
    """
    try:
        route = routing_service.compute_route(request)
    except (UnknownLocationError, SameLocationError, CampusDataError) as exc:
        raise _to_http_error(exc) from exc

    if route is None:
        raise HTTPException(
            status_code=404,
            detail=f"No route found between {request.start!r} and {request.end!r}",
        )
    return route


@router.post(
    "/options",
    response_model=RouteOptionsResponse,
    summary="Candidate routes ranked by criteria, preferring a landmark",
)
async def compute_route_options(request: RouteOptionsRequest) -> RouteOptionsResponse:
    try:
        return routing_service.compute_route_options(request)
    except (UnknownLocationError, SameLocationError, CampusDataError) as exc:
        raise _to_http_error(exc) from exc
