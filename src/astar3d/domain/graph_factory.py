# astar3d/domain/graph_factory.py

from astar3d.config.models import (
    GraphModel,
    ObstaclesCellsModel,
    ObstaclesNoneModel,
    ObstaclesRandomModel,
)
from astar3d.domain.graph import Graph
from astar3d.domain.obstacles import random_blocked
from astar3d.sim.rng import RNGRegistry


def blocked_cells(cfg: GraphModel, rng_registry: RNGRegistry | None = None) -> list[tuple]:
    obs = cfg.obstacles
    if isinstance(obs, ObstaclesNoneModel):
        return []
    if isinstance(obs, ObstaclesCellsModel):
        return list(obs.cells)
    if isinstance(obs, ObstaclesRandomModel):
        reg = rng_registry or RNGRegistry(obs.seed)
        return random_blocked(cfg.size, obs.density, reg.stream("obstacles"), keep=obs.keep)
    raise ValueError(f"Unknown obstacles kind {obs.kind!r}")


def build_graph(cfg: GraphModel, rng_registry: RNGRegistry | None = None) -> Graph:
    return Graph(
        *cfg.size,
        style=cfg.style,
        default_weight=cfg.default_weight,
        blocked=blocked_cells(cfg, rng_registry),
    )
