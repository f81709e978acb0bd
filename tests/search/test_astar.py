# tests/search/test_astar.py
import heapq
from dataclasses import fields

import numpy as np
import pytest

from astar3d.domain.adjacency import AdjacencyStyle
from astar3d.domain.entities.node import INFINITY
from astar3d.domain.graph import Graph
from astar3d.errors import CoordinateError, SearchBudgetExceeded
from astar3d.search.astar import AStar, SearchResult, SearchStatus
from astar3d.search.hooks import NoopHooks


def _dijkstra(graph: Graph, start, goal):
    """Reference shortest-path cost over the same edges."""
    dist = {tuple(start): 0}
    q = [(0, tuple(start))]
    while q:
        d, c = heapq.heappop(q)
        if c == tuple(goal):
            return d
        if d > dist[c]:
            continue
        for nb, e in graph.neighbours(graph.get_node(*c)):
            if e.weight == 0:
                continue
            nd = d + e.weight
            if nd < dist.get(tuple(nb.coord), float("inf")):
                dist[tuple(nb.coord)] = nd
                heapq.heappush(q, (nd, tuple(nb.coord)))
    return None


def _path_weights(graph: Graph, path):
    out = []
    for a, b in zip(path, path[1:]):
        e = a.edge_to(b.coord)
        assert e is not None, f"{a} -> {b} is not an edge"
        out.append(e.weight)
    return out


@pytest.fixture
def cube():
    return Graph(3, 3, 3, AdjacencyStyle.MANHATTAN)


# ------------------ END TO END ------------------


def test_corner_to_corner_on_manhattan_cube(cube):
    astar = AStar(cube)
    assert astar.status is SearchStatus.IDLE
    assert astar.get_path() == []

    res = astar.search(cube.get_node(0, 0, 0), cube.get_node(2, 2, 2))

    path = astar.get_path()
    assert len(path) == 7
    assert path[0] is cube.get_node(0, 0, 0)
    assert path[-1] is cube.get_node(2, 2, 2)
    assert sum(_path_weights(cube, path)) == 6
    assert astar.path_cost() == 6 == res.cost
    assert res.found and res.path == [n.coord for n in path]
    assert astar.status is SearchStatus.DONE


def test_accepts_coordinates(cube):
    res = AStar(cube).search((0, 0, 0), (2, 0, 1))
    assert res.cost == 3
    assert res.path[0] == (0, 0, 0) and res.path[-1] == (2, 0, 1)


def test_start_equals_goal(cube):
    astar = AStar(cube)
    res = astar.search((1, 1, 1), (1, 1, 1))
    assert res.path == [(1, 1, 1)]
    assert res.cost == 0
    assert res.expanded == 1


def test_out_of_bounds_endpoint_raises(cube):
    with pytest.raises(CoordinateError):
        AStar(cube).search((0, 0, 0), (3, 0, 0))


# ------------------ CONNECTIVITY ------------------


def test_removed_edges_disconnect_regions(cube):
    corner = cube.get_node(0, 0, 0)
    for nb, _ in list(cube.neighbours(corner)):
        cube.remove_edge(corner, nb)

    astar = AStar(cube)
    res = astar.search((0, 0, 0), (2, 2, 2))
    assert not res.found
    assert res.cost is None
    assert astar.get_path() == []
    assert astar.status is SearchStatus.DONE

    # inbound edges still exist, so the reverse query succeeds
    assert astar.search((2, 2, 2), (0, 0, 0)).cost == 6


def test_single_line_cut():
    g = Graph(3, 1, 1)
    g.remove_edge(g.get_node(1, 0, 0), g.get_node(2, 0, 0))
    assert AStar(g).search((0, 0, 0), (2, 0, 0)).path == []


def test_detour_around_wall():
    g = Graph(3, 3, 1, blocked=[(1, 0, 0), (1, 1, 0)])
    res = AStar(g).search((0, 0, 0), (2, 0, 0))
    assert res.cost == 6
    assert len(res.path) == 7
    assert (1, 2, 0) in res.path
    assert all(g.node(c).passable for c in res.path)


def test_blocked_goal_is_unreachable_but_blocked_start_can_leave(cube):
    cube.set_passable((2, 2, 2), False)
    astar = AStar(cube)
    res = astar.search((0, 0, 0), (2, 2, 2))
    assert not res.found
    assert res.expanded == 26
    # edges out of a blocked node keep their weight
    assert astar.search((2, 2, 2), (0, 0, 0)).cost == 6

    cube.set_passable((2, 2, 2), True)
    assert astar.search((0, 0, 0), (2, 2, 2)).cost == 6


def test_blocked_start_on_a_line():
    g = Graph(3, 1, 1, blocked=[(0, 0, 0)])
    res = AStar(g).search((0, 0, 0), (2, 0, 0))
    assert res.path == [(0, 0, 0), (1, 0, 0), (2, 0, 0)]
    assert res.cost == 2
    assert AStar(g).search((0, 0, 0), (0, 0, 0)).path == [(0, 0, 0)]


def test_manual_edge_shortcut_is_used(cube):
    cube.add_edge(cube.get_node(0, 0, 0), cube.get_node(2, 2, 2), 2)
    res = AStar(cube).search((0, 0, 0), (2, 2, 2))
    assert res.path == [(0, 0, 0), (2, 2, 2)]
    assert res.cost == 2


# ------------------ RESET ------------------


def test_reset_is_idempotent(cube):
    astar = AStar(cube)
    first = astar.search((0, 0, 0), (2, 1, 2))
    astar.search((2, 2, 2), (0, 2, 0))
    for _ in range(3):
        astar.reset()
    assert astar.status is SearchStatus.IDLE
    assert astar.get_path() == []
    again = astar.search((0, 0, 0), (2, 1, 2))

    fresh = AStar(Graph(3, 3, 3)).search((0, 0, 0), (2, 1, 2))
    assert again.path == first.path == fresh.path
    assert again.cost == first.cost == fresh.cost == 5


def test_search_clears_stale_state(cube):
    astar = AStar(cube)
    astar.search((0, 0, 0), (2, 2, 2))
    res = astar.search((2, 2, 2), (2, 2, 1))
    assert res.path == [(2, 2, 2), (2, 2, 1)]
    # untouched corner keeps no trace of the earlier search
    corner = cube.get_node(0, 0, 0)
    assert corner.came_from is None and corner.g == INFINITY


# ------------------ WEIGHTED GRAPHS ------------------


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_weighted_paths_are_optimal_and_consistent(seed):
    rng = np.random.default_rng(seed)
    w = rng.integers(1, 9, size=(5, 5, 4))
    w[rng.random(w.shape) < 0.2] = 0
    w[0, 0, 0] = w[4, 4, 3] = 1
    g = Graph.from_weights(w)

    astar = AStar(g)
    res = astar.search((0, 0, 0), (4, 4, 3))
    expected = _dijkstra(g, (0, 0, 0), (4, 4, 3))
    if expected is None:
        assert not res.found
        return
    path = astar.get_path()
    weights = _path_weights(g, path)
    assert all(wt > 0 for wt in weights)
    assert sum(weights) == path[-1].g == res.cost == expected


def test_expansion_order_is_non_decreasing_in_f(cube):
    class FTrace(NoopHooks):
        def __init__(self):
            self.f = []

        def expand(self, node, *, expanded, qsize):
            self.f.append(node.f)

    hooks = FTrace()
    AStar(cube, hooks=hooks).search((0, 0, 0), (2, 2, 2))
    assert hooks.f == sorted(hooks.f)


# ------------------ DIAGONAL ------------------


def test_diagonal_graph_paths():
    g = Graph(3, 3, 3, "diagonal")
    res = AStar(g).search((0, 0, 0), (2, 2, 2))
    assert res.found
    assert res.path[0] == (0, 0, 0) and res.path[-1] == (2, 2, 2)
    assert res.cost <= 6

    exact = AStar(g, heuristic="chebyshev").search((0, 0, 0), (2, 2, 2))
    assert exact.cost == 2
    assert exact.path == [(0, 0, 0), (1, 1, 1), (2, 2, 2)]


def test_custom_heuristic_callable(cube):
    calls = []

    def h(a, b):
        calls.append(a.coord)
        return 0

    assert AStar(cube, heuristic=h).search((0, 0, 0), (2, 2, 2)).cost == 6
    assert calls


def test_bad_heuristic_arguments(cube):
    with pytest.raises(ValueError):
        AStar(cube, heuristic="nope")
    with pytest.raises(TypeError):
        AStar(cube, heuristic=3)


# ------------------ BUDGET & HOOKS ------------------


def test_step_budget(cube):
    class Errors(NoopHooks):
        def __init__(self):
            self.seen = []

        def error(self, *, reason, **kw):
            self.seen.append((reason, kw["budget"]))

    hooks = Errors()
    astar = AStar(cube, max_expansions=3, hooks=hooks)
    with pytest.raises(SearchBudgetExceeded):
        astar.search((0, 0, 0), (2, 2, 2))
    assert astar.status is SearchStatus.DONE
    assert hooks.seen == [("budget_exceeded", 3)]

    # enough budget: no error
    assert AStar(cube, max_expansions=1000).search((0, 0, 0), (2, 2, 2)).cost == 6

    with pytest.raises(ValueError):
        AStar(cube, max_expansions=0)


def test_hooks_lifecycle(cube):
    class Trace(NoopHooks):
        def __init__(self):
            self.events = []

        def search_start(self, *, start, goal, style, qsize):
            self.events.append(("start", tuple(start.coord), tuple(goal.coord), style))

        def search_end(self, *, found, expanded, cost, path_len, wall_ms):
            self.events.append(("end", found, cost, path_len))

    hooks = Trace()
    AStar(cube, hooks=hooks).search((0, 0, 0), (0, 0, 2))
    assert hooks.events == [
        ("start", (0, 0, 0), (0, 0, 2), AdjacencyStyle.MANHATTAN),
        ("end", True, 2, 3),
    ]


def test_search_result_shape(cube):
    assert [f.name for f in fields(SearchResult)] == ["start", "goal", "path", "cost", "expanded"]
    res = AStar(cube).search((0, 0, 0), (0, 1, 0))
    assert (res.start, res.goal, res.cost, res.found) == ((0, 0, 0), (0, 1, 0), 1, True)
