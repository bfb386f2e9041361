# campus_nav/models/routing.py

from typing import List, Optional

from pydantic import BaseModel, Field


class LocationOut(BaseModel):
    """
    A campus location as listed by the API.
    """
    name: str
    lat: float
    lon: float
    tags: List[str] = []


class RouteRequest(BaseModel):
    """
    Request body for the /route endpoint. Locations are referenced by name.
    """
    start: str = Field(min_length=1)
    end: str = Field(min_length=1)


class RouteOptionsRequest(RouteRequest):
    """
    Request body for the /route/options endpoint.

    - criteria: "distance", "time" or "landmarks"; anything else keeps the
      candidate order.
    - landmark: preferred landmark; routes passing it are kept, unless none
      does, in which case all candidates are returned.
    """
    criteria: Optional[str] = None
    landmark: Optional[str] = None


class RouteOut(BaseModel):
    """
    One route: ordered location names plus aggregates.

    distance_m is in metres, time_min in minutes.
    """
    path: List[str]
    distance_m: float
    time_min: float
    landmarks: List[str]
    stops: int
    walking_pace_kmh: float
    via: Optional[str] = None


class RouteOptionsResponse(BaseModel):
    """
    Response for the /route/options endpoint, best candidate first.
    """
    criteria: Optional[str] = None
    landmark: Optional[str] = None
    routes: List[RouteOut]
