# domain/obstacles.py
from collections.abc import Iterable

import numpy as np

from astar3d.domain.entities.coord import Coord, CoordLike, as_coord


def random_blocked(
    size: tuple[int, int, int],
    density: float,
    rng: np.random.Generator,
    *,
    keep: Iterable[CoordLike] = (),
) -> list[Coord]:
    """Cells blocked with probability `density`; coordinates in `keep` never are."""
    if not 0.0 <= density < 1.0:
        raise ValueError(f"density must be in [0, 1), got {density}")
    mask = rng.random(size) < density
    for c in keep:
        mask[tuple(as_coord(c))] = False
    return [Coord(int(x), int(y), int(z)) for x, y, z in np.argwhere(mask)]
