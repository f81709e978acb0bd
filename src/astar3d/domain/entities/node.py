# domain/entities/node.py
import logging
from dataclasses import dataclass, field

from astar3d.domain.entities.coord import Coord
from astar3d.domain.entities.edge import Edge

log = logging.getLogger(__name__)

# "unknown" cost; compares greater than any reachable g/f
INFINITY = float("inf")


@dataclass(eq=False)
class Node:
    coord: Coord
    passable: bool = True
    weight: int = 1  # entry cost restored on edges into this node when passable
    edges: list[Edge] = field(default_factory=list)
    came_from: Coord | None = None
    g: float = INFINITY
    f: float = INFINITY

    @classmethod
    def create(cls, x: int, y: int, z: int, passable: bool = True, weight: int = 1) -> "Node":
        return cls(Coord(x, y, z), passable=passable, weight=weight)

    # identity is the coordinate
    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.coord == other.coord

    def __hash__(self):
        return hash(self.coord)

    def __repr__(self):
        return f"Node(x={self.x}, y={self.y}, z={self.z}, f={self.f}, g={self.g})"

    @property
    def x(self) -> int:
        return self.coord.x

    @property
    def y(self) -> int:
        return self.coord.y

    @property
    def z(self) -> int:
        return self.coord.z

    def reset(self) -> None:
        self.came_from = None
        self.g = INFINITY
        self.f = INFINITY

    def edge_to(self, coord: Coord) -> Edge | None:
        for e in self.edges:
            if e.neighbour == coord:
                return e
        return None

    def add_edge(self, to: "Node", weight: int) -> bool:
        """One-way edge self -> to. Re-adding an existing edge is a no-op."""
        if self.edge_to(to.coord) is not None:
            log.warning(
                "duplicate_edge",
                extra={"extra": {"from": tuple(self.coord), "to": tuple(to.coord)}},
            )
            return False
        self.edges.append(Edge(to.coord, weight))
        return True

    def remove_edge(self, to: "Node") -> bool:
        for i, e in enumerate(self.edges):
            if e.neighbour == to.coord:
                del self.edges[i]
                return True
        log.warning(
            "not_a_neighbour",
            extra={"extra": {"from": tuple(self.coord), "to": tuple(to.coord)}},
        )
        return False

    def replace_edge_weight(self, to: Coord, weight: int) -> None:
        # edges are immutable; swap in a new one at the same position
        for i, e in enumerate(self.edges):
            if e.neighbour == to:
                self.edges[i] = Edge(to, weight)
                return
