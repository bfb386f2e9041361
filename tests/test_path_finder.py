# tests/test_path_finder.py
import random

import networkx as nx
import pytest

from campus_nav.models.campus import Location, PathSegment, Route
from campus_nav.services.graph_loader import load_graph
from campus_nav.services.path_finder import PathFinder


def names(route):
    return [loc.name for loc in route.path]


# ---------------------------------------------------------------------- #
# End-to-end scenario
# ---------------------------------------------------------------------- #


def test_shortest_route_a_to_d(finder, locations):
    route = finder.get_precomputed_path(locations["A"], locations["D"])

    assert names(route) == ["A", "B", "C", "D"]
    assert route.distance == 450.0
    assert route.time == 9.0
    assert list(route.landmarks) == ["library", "cafe", "gate"]


def test_trivial_route_a_to_a(finder, locations):
    route = finder.get_precomputed_path(locations["A"], locations["A"])

    assert names(route) == ["A"]
    assert route.distance == 0.0
    assert route.time == 0.0
    assert list(route.landmarks) == ["library"]


def test_unreachable_pair_is_none(finder, locations):
    assert finder.get_precomputed_path(locations["A"], locations["E"]) is None
    assert finder.get_precomputed_path(locations["E"], locations["A"]) is None


def test_reverse_route_is_symmetric(finder, locations):
    route = finder.get_precomputed_path(locations["D"], locations["A"])

    assert names(route) == ["D", "C", "B", "A"]
    assert route.distance == 450.0


def test_congestion_after_precomputation_does_not_change_table(finder, locations):
    segment = finder.segment(locations["B"], locations["C"])
    segment.set_congestion(3.0)

    route = finder.get_precomputed_path(locations["A"], locations["D"])

    assert route.time == 9.0
    # 2 + 3 * 3 + 4 under current conditions
    assert finder.current_time(route) == pytest.approx(15.0)


def test_congestion_before_precomputation_is_captured(scenario_graph, locations):
    for seg in scenario_graph[locations["B"]]:
        if seg.end == locations["C"]:
            seg.set_congestion(2.0)

    finder = PathFinder(scenario_graph)
    route = finder.get_precomputed_path(locations["A"], locations["D"])

    assert names(route) == ["A", "B", "C", "D"]
    assert route.time == pytest.approx(12.0)
    # reverse direction has its own factor
    assert finder.get_precomputed_path(locations["D"], locations["A"]).time == pytest.approx(9.0)


def test_filter_by_landmark_scenario(finder, locations):
    route_ad = finder.get_precomputed_path(locations["A"], locations["D"])
    route_ab = finder.get_precomputed_path(locations["A"], locations["B"])

    assert finder.filter_by_landmark([route_ad, route_ab], "gate") == [route_ad]

    only_ab = [route_ab]
    assert finder.filter_by_landmark(only_ab, "gate") is only_ab


# ---------------------------------------------------------------------- #
# Queries
# ---------------------------------------------------------------------- #


def test_none_and_unknown_endpoints(finder, locations):
    stranger = Location("Z", 9, 9)

    assert finder.get_precomputed_path(None, locations["A"]) is None
    assert finder.get_precomputed_path(locations["A"], None) is None
    assert finder.get_precomputed_path(stranger, locations["A"]) is None
    assert finder.get_precomputed_path(locations["A"], stranger) is None


def test_lookup_by_equal_location(finder):
    # equality is by (name, lat, lon), tags do not matter
    a = Location("A", 0, 0, ["whatever"])
    d = Location("D", 2, 2)
    assert finder.get_precomputed_path(a, d).distance == 450.0


def test_graph_view_is_read_only(finder, locations):
    graph = finder.get_graph()
    assert set(graph) == set(locations.values())
    with pytest.raises(TypeError):
        graph[Location("Z", 9, 9)] = ()


def test_route_via(finder, locations):
    route = finder.route_via(locations["B"], locations["A"], locations["D"])

    assert names(route) == ["B", "A", "B", "C", "D"]
    assert route.distance == 550.0
    assert route.time == 11.0
    assert finder.route_via(locations["A"], locations["E"], locations["D"]) is None


def test_read_helpers(finder, locations):
    assert [loc.name for loc in finder.locations()] == ["A", "B", "C", "D", "E"]
    assert finder.all_landmarks() == ["cafe", "gate", "library"]
    assert finder.find_location("C") == locations["C"]
    assert finder.find_location("Nowhere") is None
    assert finder.segment(locations["A"], locations["D"]) is None
    assert finder.segment(locations["A"], locations["B"]).distance == 100.0


# ---------------------------------------------------------------------- #
# Table invariants
# ---------------------------------------------------------------------- #


def test_component_entry_count(finder):
    # {A, B, C, D} and {E}
    assert sum(1 for _ in finder.iter_routes()) == 4 ** 2 + 1 ** 2


def _random_graph(seed, n=12, p=0.25):
    rng = random.Random(seed)
    locs = [Location(f"N{i}", rng.random(), rng.random(), [f"t{i % 4}"]) for i in range(n)]
    graph = {loc: [] for loc in locs}
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                d = float(rng.randint(1, 500))
                t = float(rng.randint(1, 10))
                graph[locs[i]].append(PathSegment(locs[i], locs[j], d, t))
                graph[locs[j]].append(PathSegment(locs[j], locs[i], d, t))
    return graph


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
def test_table_invariants_on_random_graphs(seed):
    graph = _random_graph(seed)
    finder = PathFinder(graph)
    G = finder.to_networkx()
    oracle = dict(nx.all_pairs_dijkstra_path_length(G, weight="distance"))

    count = 0
    for u, v, route in finder.iter_routes():
        count += 1
        assert route.path[0] == u
        assert route.path[-1] == v

        total = 0.0
        for a, b in zip(route.path[:-1], route.path[1:]):
            seg = finder.segment(a, b)
            assert seg is not None
            total += seg.distance
        assert total == route.distance

        assert route.distance == oracle[u][v]

        back = finder.get_precomputed_path(v, u)
        assert back is not None
        assert back.distance == route.distance

    for u in graph:
        trivial = finder.get_precomputed_path(u, u)
        assert list(trivial.path) == [u]
        assert trivial.distance == 0.0
        assert trivial.time == 0.0

    assert count == sum(len(c) ** 2 for c in nx.connected_components(G))


def test_precomputation_is_deterministic():
    first = PathFinder(_random_graph(3))
    second = PathFinder(_random_graph(3))

    assert [(u.name, v.name, names(r)) for u, v, r in first.iter_routes()] == [
        (u.name, v.name, names(r)) for u, v, r in second.iter_routes()
    ]


def test_empty_graph():
    finder = PathFinder({})
    assert list(finder.iter_routes()) == []
    assert finder.locations() == []


# ---------------------------------------------------------------------- #
# Route collection utilities
# ---------------------------------------------------------------------- #


@pytest.fixture
def sample_routes():
    a = Location("A", 0, 0, ["library"])
    b = Location("B", 0, 1, ["cafe", "gate"])
    c = Location("C", 1, 1)
    return [
        Route([a, c], 300, 4),   # 1 landmark
        Route([c], 100, 9),      # 0 landmarks
        Route([a, b], 300, 2),   # 3 landmarks
        Route([b, c], 200, 4),   # 2 landmarks
    ]


def test_sort_by_distance_is_stable(sample_routes):
    routes = list(sample_routes)
    PathFinder.sort_routes(routes, "distance")
    assert routes == [sample_routes[1], sample_routes[3], sample_routes[0], sample_routes[2]]


def test_sort_by_time_case_insensitive(sample_routes):
    routes = list(sample_routes)
    PathFinder.sort_routes(routes, "TIME")
    assert routes == [sample_routes[2], sample_routes[0], sample_routes[3], sample_routes[1]]


def test_sort_by_landmarks_descending(sample_routes):
    routes = list(sample_routes)
    PathFinder.sort_routes(routes, "Landmarks")
    assert [len(r.landmarks) for r in routes] == [3, 2, 1, 0]


@pytest.mark.parametrize("criteria", ["distance", "time", "landmarks"])
def test_sort_is_idempotent(sample_routes, criteria):
    once = list(sample_routes)
    PathFinder.sort_routes(once, criteria)
    twice = list(once)
    PathFinder.sort_routes(twice, criteria)
    assert once == twice


@pytest.mark.parametrize("criteria", ["speed", "", None, 3])
def test_sort_unknown_criteria_is_noop(sample_routes, criteria):
    routes = list(sample_routes)
    PathFinder.sort_routes(routes, criteria)
    assert routes == sample_routes


def test_sort_none_routes_is_noop():
    PathFinder.sort_routes(None, "distance")


def test_filter_keeps_only_matching_routes(sample_routes):
    result = PathFinder.filter_by_landmark(sample_routes, "GATE")
    assert result == [sample_routes[2], sample_routes[3]]
    assert all(r.passes_landmark("gate") for r in result)


def test_filter_falls_back_to_original(sample_routes):
    assert PathFinder.filter_by_landmark(sample_routes, "hospital") is sample_routes


def test_filter_none_arguments(sample_routes):
    assert list(PathFinder.filter_by_landmark(None, "gate")) == []
    assert list(PathFinder.filter_by_landmark(sample_routes, None)) == []


def test_filter_skips_none_entries(sample_routes):
    routes = [None] + sample_routes
    assert PathFinder.filter_by_landmark(routes, "library") == [sample_routes[0], sample_routes[2]]


def test_strict_filter_can_be_empty(sample_routes):
    assert PathFinder.filter_by_landmark_strict(sample_routes, "hospital") == []
    assert PathFinder.filter_by_landmark_strict(sample_routes, "cafe") == [
        sample_routes[2],
        sample_routes[3],
    ]


def test_self_loop_in_document_keeps_trivial_route(scenario_document):
    scenario_document["paths"].append({"from": "A", "to": "A", "distance": 50, "time": 1})
    finder = PathFinder(load_graph(scenario_document))
    a = finder.find_location("A")

    route = finder.get_precomputed_path(a, a)
    assert names(route) == ["A"]
    assert route.distance == 0.0
