# domain/entities/edge.py
from dataclasses import dataclass

from astar3d.domain.entities.coord import Coord


@dataclass(frozen=True)
class Edge:
    neighbour: Coord  # node this edge leads into, resolved through the owning Graph
    weight: int  # cost of the move; 0 => unusable
