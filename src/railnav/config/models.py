import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from railnav.routing.geodesy import EARTH_RADIUS_M


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class GraphSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    nodes_file: str
    edges_file: str
    must_exist: bool = True

    @field_validator("nodes_file", "edges_file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ----------------- HEURISTICS ---------------------


class HeuristicHaversineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["haversine"] = "haversine"
    earth_radius_m: float = EARTH_RADIUS_M

    @field_validator("earth_radius_m")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class HeuristicZeroModel(BaseModel):
    """Dijkstra; handy as a reference."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["zero"] = "zero"


HeuristicUnion = Annotated[
    HeuristicHaversineModel | HeuristicZeroModel,
    Field(discriminator="kind"),
]


# ----------------- ROUTING ---------------------


class PathfinderModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    heuristic: HeuristicUnion = Field(default_factory=HeuristicHaversineModel)
    tie_break: Literal["node_id", "insertion"] = "node_id"


class NarratorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    turn_threshold_deg: float = Field(default=45.0, ge=0.0, le=180.0)


# ------------------------------------------------------------------


class NavigatorModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "railnav"
    graph: GraphSourceModel | None = None
    log: LogModel = LogModel()
    pathfinder: PathfinderModel = Field(default_factory=PathfinderModel)
    narrator: NarratorModel = Field(default_factory=NarratorModel)
    bounds_padding: float = Field(default=0.1, ge=0.0)
    nearest_candidates: int = Field(default=3, ge=1)
