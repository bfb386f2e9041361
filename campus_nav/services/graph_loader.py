# campus_nav/services/graph_loader.py
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from campus_nav.core.logger import logger
from campus_nav.models.campus import Graph, Location, PathSegment


class CampusDataError(Exception):
    """Raised when a campus data document cannot be read or has the wrong shape."""


class LocationRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    lat: float = 0.0
    lon: float = 0.0
    tags: Optional[List[str]] = None


class PathRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    distance: float = Field(default=0.0, ge=0)
    time: float = Field(default=0.0, ge=0)


class CampusDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    locations: List[LocationRecord]
    paths: List[PathRecord]


def build_graph(document: CampusDocument) -> Graph:
    """
    Turn a parsed document into the bidirectional adjacency mapping.

    - locations without a name are skipped
    - paths whose endpoints are not known locations are skipped
    - paths from a location to itself are skipped
    - every remaining path becomes two opposing segments
    """
    index: Dict[str, Location] = {}
    for record in document.locations:
        if not record.name:
            logger.debug("Skipping location record without a name")
            continue
        index[record.name] = Location(record.name, record.lat, record.lon, record.tags)

    graph: Graph = {loc: [] for loc in index.values()}

    skipped = 0
    for record in document.paths:
        start = index.get(record.from_)
        end = index.get(record.to)
        if start is None or end is None:
            logger.debug(f"Skipping path {record.from_!r} -> {record.to!r}: unknown endpoint")
            skipped += 1
            continue
        if start == end:
            logger.debug(f"Skipping path {record.from_!r} -> {record.to!r}: self-loop")
            skipped += 1
            continue
        graph[start].append(PathSegment(start, end, record.distance, record.time))
        graph[end].append(PathSegment(end, start, record.distance, record.time))

    num_segments = sum(len(segments) for segments in graph.values())
    logger.info(
        f"Campus graph built: {len(graph)} locations, {num_segments} segments, "
        f"{skipped} paths skipped"
    )
    return graph


def parse_document(data: Mapping[str, Any], source: str = "<memory>") -> CampusDocument:
    if not isinstance(data, Mapping) or "locations" not in data or "paths" not in data:
        raise CampusDataError(f"Invalid campus data in {source}: 'locations' and 'paths' are required")
    try:
        return CampusDocument.model_validate(data)
    except ValidationError as exc:
        raise CampusDataError(f"Invalid campus data in {source}: {exc}") from exc


def load_graph(data: Mapping[str, Any], source: str = "<memory>") -> Graph:
    return build_graph(parse_document(data, source))


def load_graph_from_file(path: Union[str, Path]) -> Graph:
    """
    Read a JSON campus document from disk and build its graph.
    """
    path = Path(path)
    logger.info(f"Loading campus data from {path}")
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        raise CampusDataError(f"Failed to load campus data from {path}: {exc}") from exc
    return load_graph(data, source=str(path))
