# domain/graph.py
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator

import numpy as np

from astar3d.domain.adjacency import AdjacencyStyle, offsets
from astar3d.domain.entities.coord import Coord, CoordLike, as_coord
from astar3d.domain.entities.edge import Edge
from astar3d.domain.entities.node import Node
from astar3d.errors import CoordinateError

MAX_WEIGHT = 255  # edge weights are unsigned bytes


def _check_weight(w: int, name: str = "weight") -> int:
    if not 0 <= int(w) <= MAX_WEIGHT:
        raise ValueError(f"{name} must be in 0..{MAX_WEIGHT}, got {w}")
    return int(w)


def _check_weights(w: np.ndarray, size: tuple[int, int, int]) -> np.ndarray:
    if w.shape != size:
        raise ValueError(f"weights shape {w.shape} does not match graph size {size}")
    if not np.issubdtype(w.dtype, np.integer):
        raise ValueError(f"weights must be integers, got dtype {w.dtype}")
    if w.min() < 0 or w.max() > MAX_WEIGHT:
        raise ValueError(f"weights must be in 0..{MAX_WEIGHT}")
    return w


class Graph:
    """
    Fixed-size 3-D grid of nodes owning every Node it hands out.

    Edges are outgoing: node.edges lists the nodes reachable from node and
    the cost of entering each. Built edges carry the entry cost of the node
    they lead into, or 0 when that node is impassable.
    """

    def __init__(
        self,
        x_size: int,
        y_size: int,
        z_size: int,
        style: AdjacencyStyle | str = AdjacencyStyle.MANHATTAN,
        *,
        default_weight: int = 1,
        weights: np.ndarray | None = None,
        blocked: Iterable[CoordLike] = (),
    ):
        if min(x_size, y_size, z_size) < 1:
            raise ValueError(f"graph extents must be >= 1, got {(x_size, y_size, z_size)}")
        if default_weight < 1:
            raise ValueError("default_weight must be >= 1")
        self.size = (int(x_size), int(y_size), int(z_size))
        self._style = AdjacencyStyle(style)
        self.default_weight = _check_weight(default_weight, "default_weight")
        if weights is not None:
            weights = _check_weights(np.asarray(weights), self.size)

        # coord -> coords holding an edge into it
        self._incoming: dict[Coord, set[Coord]] = defaultdict(set)

        self._nodes = np.empty(self.size, dtype=object)
        for x, y, z in np.ndindex(self.size):
            w = self.default_weight if weights is None else int(weights[x, y, z])
            node = Node.create(x, y, z, passable=w != 0, weight=w or self.default_weight)
            self._nodes[x, y, z] = node
        for c in blocked:
            self.get_node(*as_coord(c)).passable = False

        self._build_edges()

    @classmethod
    def from_weights(
        cls, weights, style: AdjacencyStyle | str = AdjacencyStyle.MANHATTAN, **kw
    ) -> Graph:
        """Build from a 3-D array of per-node entry costs (0 => impassable)."""
        w = np.asarray(weights)
        if w.ndim != 3:
            raise ValueError(f"weights must be 3-dimensional, got shape {w.shape}")
        return cls(*w.shape, style=style, weights=w, **kw)

    def _entry_weight(self, n: Node) -> int:
        return n.weight if n.passable else 0

    def _build_edges(self) -> None:
        deltas = offsets(self._style)
        for node in self:
            for d in deltas:
                c = node.coord.offset(*d)
                if self.in_bounds(*c):
                    node.edges.append(Edge(c, self._entry_weight(self._at(c))))
                    self._incoming[c].add(node.coord)

    # ------------------ lookup ----------------------

    @property
    def style(self) -> AdjacencyStyle:
        return self._style

    @property
    def x_size(self) -> int:
        return self.size[0]

    @property
    def y_size(self) -> int:
        return self.size[1]

    @property
    def z_size(self) -> int:
        return self.size[2]

    def in_bounds(self, x: int, y: int, z: int) -> bool:
        xs, ys, zs = self.size
        return 0 <= x < xs and 0 <= y < ys and 0 <= z < zs

    def get_node(self, x: int, y: int, z: int) -> Node:
        # explicit check: numpy would wrap negative indices
        if not self.in_bounds(x, y, z):
            raise CoordinateError((x, y, z), self.size)
        return self._nodes[x, y, z]

    def _at(self, c: Coord) -> Node:
        return self._nodes[c[0], c[1], c[2]]

    def node(self, c: CoordLike | Node) -> Node:
        if isinstance(c, Node):
            return self.get_node(*c.coord)
        return self.get_node(*as_coord(c))

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.flat)

    def __len__(self) -> int:
        return self._nodes.size

    def __contains__(self, n: object) -> bool:
        return isinstance(n, Node) and self.in_bounds(*n.coord) and self._at(n.coord) is n

    def neighbours(self, n: Node) -> Iterator[tuple[Node, Edge]]:
        for e in n.edges:
            yield self._at(e.neighbour), e

    def came_from(self, n: Node) -> Node | None:
        return None if n.came_from is None else self._at(n.came_from)

    # ------------------ mutation ----------------------

    def reset(self) -> None:
        for n in self:
            n.reset()

    def add_edge(self, frm: Node, to: Node, weight: int) -> bool:
        """One-way connection frm -> to. Existing edges keep their weight."""
        self._own(frm)
        self._own(to)
        added = frm.add_edge(to, _check_weight(weight))
        if added:
            self._incoming[to.coord].add(frm.coord)
        return added

    def remove_edge(self, frm: Node, to: Node) -> bool:
        self._own(frm)
        self._own(to)
        removed = frm.remove_edge(to)
        if removed:
            self._incoming[to.coord].discard(frm.coord)
        return removed

    def set_passable(self, c: CoordLike | Node, passable: bool) -> Node:
        n = self.node(c)
        n.passable = bool(passable)
        w = self._entry_weight(n)
        for src in self._incoming.get(n.coord, ()):
            self._at(src).replace_edge_weight(n.coord, w)
        return n

    def _own(self, n: Node) -> None:
        if n not in self:
            raise CoordinateError(n.coord, self.size)
