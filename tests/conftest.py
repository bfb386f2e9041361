# tests/conftest.py
import json
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import campus_nav" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from campus_nav.services.graph_loader import load_graph  # noqa: E402
from campus_nav.services.path_finder import PathFinder  # noqa: E402


# A-B-C-D chain with a longer A-C shortcut; E is isolated.
SCENARIO_DOCUMENT = {
    "locations": [
        {"name": "A", "lat": 0, "lon": 0, "tags": ["library"]},
        {"name": "B", "lat": 0, "lon": 1, "tags": ["cafe"]},
        {"name": "C", "lat": 1, "lon": 1, "tags": []},
        {"name": "D", "lat": 2, "lon": 2, "tags": ["gate"]},
        {"name": "E", "lat": 5, "lon": 5},
    ],
    "paths": [
        {"from": "A", "to": "B", "distance": 100, "time": 2},
        {"from": "B", "to": "C", "distance": 150, "time": 3},
        {"from": "A", "to": "C", "distance": 400, "time": 8},
        {"from": "C", "to": "D", "distance": 200, "time": 4},
    ],
}


@pytest.fixture
def scenario_document():
    return json.loads(json.dumps(SCENARIO_DOCUMENT))


@pytest.fixture
def scenario_graph(scenario_document):
    return load_graph(scenario_document)


@pytest.fixture
def locations(scenario_graph):
    return {loc.name: loc for loc in scenario_graph}


@pytest.fixture
def finder(scenario_graph):
    return PathFinder(scenario_graph)


@pytest.fixture
def scenario_file(tmp_path, scenario_document):
    path = tmp_path / "campus_data.json"
    path.write_text(json.dumps(scenario_document), encoding="utf-8")
    return path
