import math
from dataclasses import dataclass
from enum import Enum

Coord = tuple[float, float]  # (lon, lat) in degrees


class NodeType(str, Enum):
    STAIRWAY_TOP = "STAIRWAY_TOP"
    STAIRWAY_BOT = "STAIRWAY_BOT"
    LIFT_TOP = "LIFT_TOP"
    LIFT_BOT = "LIFT_BOT"
    JUNCTION = "JUNCTION"
    ENTRY_EXIT = "ENTRY/EXIT"


# Core feature types consumed by the graph builder
@dataclass(frozen=True)
class Node:
    id: int
    coordinate: Coord
    name: str | None = None
    type: str | None = None  # NodeType value or any other tag
    level: int = 0
    note: str | None = None

    @property
    def lon(self) -> float:
        return self.coordinate[0]

    @property
    def lat(self) -> float:
        return self.coordinate[1]


@dataclass(frozen=True)
class Edge:
    id: str
    start_id: int
    end_id: int
    distance_m: float
    geometry: tuple[Coord, ...] = ()
    type: str | None = None
    level: str | None = None
    accessibility: str | None = None


@dataclass(frozen=True)
class EdgeRecord:
    """Edge as delivered by the loader: ids and distance are still strings."""

    id: str
    start_id: str
    end_id: str
    distance: str
    geometry: tuple[Coord, ...] = ()
    type: str | None = None
    level: str | None = None
    accessibility: str | None = None

    def parse(self) -> Edge | None:
        start, end = _to_int(self.start_id), _to_int(self.end_id)
        dist = _to_float(self.distance)
        if start is None or end is None or dist is None:
            return None
        # zero/negative weights break the A* lower bound
        if not math.isfinite(dist) or dist <= 0:
            return None
        return Edge(
            id=self.id,
            start_id=start,
            end_id=end,
            distance_m=dist,
            geometry=self.geometry,
            type=self.type,
            level=self.level,
            accessibility=self.accessibility,
        )


def _to_int(v) -> int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    try:
        return int(str(v).strip())
    except (TypeError, ValueError):
        return None


def _to_float(v) -> float | None:
    if isinstance(v, bool):
        return None
    try:
        return float(str(v).strip())
    except (TypeError, ValueError):
        return None
