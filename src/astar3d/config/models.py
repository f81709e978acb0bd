from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Triple = tuple[int, int, int]


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- OBSTACLES ---------------------


class ObstaclesNoneModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["none"] = "none"


class ObstaclesCellsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["cells"] = "cells"
    cells: list[Triple] = Field(default_factory=list)


class ObstaclesRandomModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["random"] = "random"
    density: float = Field(default=0.2, ge=0.0, lt=1.0)
    seed: int = 123
    keep: list[Triple] = Field(default_factory=list)  # always passable


ObstaclesUnion = Annotated[
    ObstaclesNoneModel | ObstaclesCellsModel | ObstaclesRandomModel,
    Field(discriminator="kind"),
]


# ----------------- GRAPH ---------------------


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    size: Triple = (3, 3, 3)
    style: Literal["manhattan", "diagonal"] = "manhattan"
    default_weight: int = Field(default=1, ge=1, le=255)
    obstacles: ObstaclesUnion = Field(default_factory=ObstaclesNoneModel)

    @field_validator("size")
    @classmethod
    def _extents(cls, v: Triple) -> Triple:
        if any(not 1 <= n <= 256 for n in v):
            raise ValueError(f"each extent must be in 1..256, got {v}")
        return v

    @model_validator(mode="after")
    def _obstacles_in_bounds(self):
        cells = []
        if isinstance(self.obstacles, ObstaclesCellsModel):
            cells = self.obstacles.cells
        elif isinstance(self.obstacles, ObstaclesRandomModel):
            cells = self.obstacles.keep
        for c in cells:
            _check_in(c, self.size, "obstacle")
        return self


def _check_in(c: Triple, size: Triple, what: str) -> None:
    if any(not 0 <= v < n for v, n in zip(c, size, strict=True)):
        raise ValueError(f"{what} {c} is outside graph of size {size}")


# ----------------- SEARCH ---------------------


class SearchModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    heuristic: Literal["style", "manhattan", "diagonal", "chebyshev", "zero"] = "style"
    max_expansions: int | None = Field(default=None, ge=1)


class QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    start: Triple
    goal: Triple


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    graph: GraphModel = Field(default_factory=GraphModel)
    search: SearchModel = Field(default_factory=SearchModel)
    log: LogModel = LogModel()
    queries: list[QueryModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _queries_in_bounds(self):
        for q in self.queries:
            _check_in(q.start, self.graph.size, "query start")
            _check_in(q.goal, self.graph.size, "query goal")
        return self
