# search/heuristics.py
from collections.abc import Callable

from astar3d.domain.adjacency import AdjacencyStyle
from astar3d.domain.entities.node import Node

Heuristic = Callable[[Node, Node], int]

_heuristic_registry: dict[str, Heuristic] = {}


def register_heuristic(name: str):
    def deco(fn: Heuristic):
        _heuristic_registry[name] = fn
        return fn

    return deco


def get_heuristic(name: str) -> Heuristic:
    try:
        return _heuristic_registry[name]
    except KeyError:
        raise ValueError(f"Unknown heuristic {name!r}") from None


def available() -> list[str]:
    return sorted(_heuristic_registry)


@register_heuristic("manhattan")
def manhattan(a: Node, b: Node) -> int:
    dx, dy, dz = a.coord.deltas(b.coord)
    return dx + dy + dz


@register_heuristic("diagonal")
def diagonal(a: Node, b: Node) -> int:
    # L1 distance less two per move that shortcuts all three axes at once
    dx, dy, dz = a.coord.deltas(b.coord)
    return (dx + dy + dz) - 2 * min(dx, dy, dz)


@register_heuristic("chebyshev")
def chebyshev(a: Node, b: Node) -> int:
    return max(a.coord.deltas(b.coord))


@register_heuristic("zero")
def zero(a: Node, b: Node) -> int:
    return 0


_BY_STYLE = {
    AdjacencyStyle.MANHATTAN: manhattan,
    AdjacencyStyle.DIAGONAL: diagonal,
}


def heuristic(a: Node, b: Node, style: AdjacencyStyle | str) -> int:
    """Estimate of the cost from `a` to `b` for the graph's adjacency style."""
    return _BY_STYLE[AdjacencyStyle(style)](a, b)


def for_style(style: AdjacencyStyle | str) -> Heuristic:
    return _BY_STYLE[AdjacencyStyle(style)]
