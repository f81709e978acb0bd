# domain/adjacency.py
from enum import Enum
from itertools import product


class AdjacencyStyle(Enum):
    MANHATTAN = "manhattan"
    DIAGONAL = "diagonal"


Offset = tuple[int, int, int]


def _manhattan(d: Offset) -> bool:
    # exactly one axis moves by one
    return sum(abs(v) for v in d) == 1


def _diagonal(d: Offset) -> bool:
    return d != (0, 0, 0)


_RULES = {
    AdjacencyStyle.MANHATTAN: _manhattan,
    AdjacencyStyle.DIAGONAL: _diagonal,
}

OFFSETS: dict[AdjacencyStyle, tuple[Offset, ...]] = {
    style: tuple(d for d in product((-1, 0, 1), repeat=3) if rule(d))
    for style, rule in _RULES.items()
}


def offsets(style: AdjacencyStyle | str) -> tuple[Offset, ...]:
    return OFFSETS[AdjacencyStyle(style)]
