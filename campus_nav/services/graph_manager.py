# campus_nav/services/graph_manager.py
from pathlib import Path
from time import perf_counter
from typing import Optional, Union

import networkx as nx

from campus_nav.core.config import settings
from campus_nav.core.logger import logger
from campus_nav.models.campus import Graph
from campus_nav.services.graph_loader import load_graph_from_file
from campus_nav.services.path_finder import PathFinder


class GraphManager:
    # Owns the campus graph and its precomputed PathFinder.

    def __init__(
        self,
        data_file: Union[str, Path, None] = None,
        graph: Optional[Graph] = None,
    ) -> None:
        # Source document; ignored when a graph is handed in directly
        self.data_file = Path(data_file) if data_file is not None else settings.CAMPUS_DATA_FILE
        self._graph: Optional[Graph] = graph
        self._loaded_from_file = False
        # Current planner (or None if not built yet)
        self.path_finder: Optional[PathFinder] = None
        logger.info("GraphManager initialised (path finder will be built on demand).")

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def ensure_path_finder(self) -> PathFinder:
        """
        Return the PathFinder, loading the graph and precomputing routes on first use.

        Loader failures (CampusDataError) propagate to the caller.
        """
        if self.path_finder is None:
            self._build_path_finder()
        return self.path_finder

    def reload(self) -> PathFinder:
        """
        Drop the current table and rebuild it, picking up new congestion factors
        (and, when reading from file, new data).
        """
        if self._loaded_from_file:
            self._graph = None
        self.path_finder = None
        return self.ensure_path_finder()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _build_path_finder(self) -> None:
        t0 = perf_counter()

        if self._graph is None:
            self._graph = load_graph_from_file(self.data_file)
            self._loaded_from_file = True

        finder = PathFinder(self._graph)
        components = nx.number_connected_components(finder.to_networkx()) if self._graph else 0

        t1 = perf_counter()
        logger.info(
            f"PathFinder ready: {len(self._graph)} locations, "
            f"{components} connected components, built in {(t1 - t0) * 1000.0:.2f} ms"
        )
        self.path_finder = finder
