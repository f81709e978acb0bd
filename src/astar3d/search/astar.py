# search/astar.py
from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from astar3d.domain.entities.coord import Coord, CoordLike
from astar3d.domain.entities.node import Node
from astar3d.domain.graph import Graph
from astar3d.errors import SearchBudgetExceeded
from astar3d.search.heap import MinHeap
from astar3d.search.heuristics import Heuristic, for_style, get_heuristic
from astar3d.search.hooks import NoopHooks, SearchHooks


class SearchStatus(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    DONE = "done"


@dataclass(frozen=True)
class SearchResult:
    start: Coord
    goal: Coord
    path: list[Coord]  # start..goal inclusive; empty => no path
    cost: int | None  # None when no path exists
    expanded: int

    @property
    def found(self) -> bool:
        return bool(self.path)


def _f(n: Node) -> float:
    return n.f


class AStar:
    """
    A* search session bound to one Graph.

    The per-node g/f/came_from scratch state lives on the graph's nodes, so
    a graph serves one search at a time. Every search starts with reset().
    """

    def __init__(
        self,
        graph: Graph,
        *,
        heuristic: str | Heuristic | None = None,
        max_expansions: int | None = None,
        hooks: SearchHooks | None = None,
    ):
        if max_expansions is not None and max_expansions < 1:
            raise ValueError("max_expansions must be >= 1")
        self.graph = graph
        self.max_expansions = max_expansions
        self._h = self._resolve(heuristic)
        self._hooks = hooks or NoopHooks()
        self._open: MinHeap[Node] = MinHeap(key=_f)
        self._path: list[Node] = []
        self.status = SearchStatus.IDLE
        self.expanded = 0

    def _resolve(self, h: str | Heuristic | None) -> Heuristic:
        if h is None or h == "style":
            return for_style(self.graph.style)
        if isinstance(h, str):
            return get_heuristic(h)
        if callable(h):
            return h
        raise TypeError(f"heuristic must be a name or callable, got {type(h).__name__}")

    @property
    def heuristic(self) -> Callable[[Node, Node], int]:
        return self._h

    @property
    def found(self) -> bool:
        return bool(self._path)

    def get_path(self) -> list[Node]:
        return list(self._path)

    def path_cost(self) -> int:
        return int(self._path[-1].g) if self._path else 0

    def reset(self) -> None:
        self.graph.reset()
        while not self._open.is_empty():
            self._open.pop_min()
        self._path.clear()
        self.status = SearchStatus.IDLE
        self.expanded = 0

    def search(self, start: Node | CoordLike, goal: Node | CoordLike) -> SearchResult:
        s, t = self.graph.node(start), self.graph.node(goal)
        self.reset()
        self.status = SearchStatus.SEARCHING
        t0 = time.perf_counter()
        self._hooks.search_start(start=s, goal=t, style=self.graph.style, qsize=len(self._open))

        s.g = 0
        s.f = self._h(s, t)
        self._open.push(s)

        try:
            while not self._open.is_empty():
                current = self._open.pop_min()
                self.expanded += 1
                if self.max_expansions is not None and self.expanded > self.max_expansions:
                    self._hooks.error(
                        reason="budget_exceeded",
                        expanded=self.expanded,
                        budget=self.max_expansions,
                        start=tuple(s.coord),
                        goal=tuple(t.coord),
                    )
                    raise SearchBudgetExceeded(self.expanded, self.max_expansions)
                self._hooks.expand(current, expanded=self.expanded, qsize=len(self._open))

                if current is t:
                    self._reconstruct(s, t)
                    break
                self._relax(current, t)
        finally:
            self.status = SearchStatus.DONE

        result = SearchResult(
            start=s.coord,
            goal=t.coord,
            path=[n.coord for n in self._path],
            cost=self.path_cost() if self._path else None,
            expanded=self.expanded,
        )
        self._hooks.search_end(
            found=result.found,
            expanded=self.expanded,
            cost=result.cost,
            path_len=len(result.path),
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return result

    def _relax(self, current: Node, goal: Node) -> None:
        for n, e in self.graph.neighbours(current):
            if e.weight == 0:
                continue
            g = current.g + e.weight
            if g < n.g:
                n.came_from = current.coord
                n.g = g
                n.f = g + self._h(n, goal)
                if self._open.contains(n):
                    self._open.decrease_key(n)
                else:
                    self._open.push(n)

    def _reconstruct(self, start: Node, goal: Node) -> None:
        path = [goal]
        n = goal
        while n is not start:
            n = self.graph.came_from(n)
            path.append(n)
        path.reverse()
        self._path = path
