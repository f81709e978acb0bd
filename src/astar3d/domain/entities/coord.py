# domain/entities/coord.py
from __future__ import annotations

from typing import NamedTuple


class Coord(NamedTuple):
    x: int
    y: int
    z: int

    def offset(self, dx: int, dy: int, dz: int) -> Coord:
        return Coord(self.x + dx, self.y + dy, self.z + dz)

    def deltas(self, other: Coord) -> tuple[int, int, int]:
        """Absolute per-axis differences to `other`."""
        return abs(self.x - other.x), abs(self.y - other.y), abs(self.z - other.z)


CoordLike = Coord | tuple[int, int, int]


def as_coord(c: CoordLike) -> Coord:
    return c if isinstance(c, Coord) else Coord(int(c[0]), int(c[1]), int(c[2]))
