# astar3d/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from astar3d.config.models import ObstaclesRandomModel, QueryModel, ScenarioModel
from astar3d.domain.graph import Graph
from astar3d.domain.graph_factory import build_graph
from astar3d.io.recorder import JsonlSink, Recorder, Sink
from astar3d.io.search_logging import SearchLogging
from astar3d.search.astar import AStar, SearchResult
from astar3d.search.hooks import NoopHooks, SearchHooks
from astar3d.sim.rng import RNGRegistry


@dataclass
class App:
    graph: Graph
    astar: AStar
    hooks: SearchHooks
    recorder: Recorder
    queries: list[QueryModel] = field(default_factory=list)

    def run(self) -> list[SearchResult]:
        out = []
        for q in self.queries:
            res = self.astar.search(q.start, q.goal)
            self.recorder.emit(res)
            out.append(res)
        return out


def build(
    cfg: ScenarioModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: tuple[Sink, ...] = (),
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)

    # 1) Graph (obstacle draws keyed by scenario name)
    obstacles = model.graph.obstacles
    rng_registry = (
        RNGRegistry(obstacles.seed, scenario=model.name)
        if isinstance(obstacles, ObstaclesRandomModel)
        else None
    )
    graph = build_graph(model.graph, rng_registry)

    # 2) Hooks & recorder
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )
    recorder = Recorder(*(sinks or (JsonlSink(),)), run_id=model.run_id)

    # 3) Search session
    astar = AStar(
        graph,
        heuristic=model.search.heuristic,
        max_expansions=model.search.max_expansions,
        hooks=hooks,
    )
    return App(graph, astar, hooks, recorder, list(model.queries))
