from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from railnav.domain.entities.features import Coord
from railnav.domain.graph import GraphNode


@runtime_checkable
class Heuristic(Protocol):
    """
    Lower bound on the remaining cost (meters) from `node` to `goal`.
    Must never overestimate, or A* loses its optimality guarantee.
    """

    def __call__(self, node: GraphNode, goal: GraphNode) -> float: ...


@runtime_checkable
class Narrator(Protocol):
    def generate(self, route: Sequence[GraphNode]) -> list[str]: ...


EdgeGeometryIndex = Mapping[tuple[int, int], Sequence[Coord]]


@runtime_checkable
class Snapper(Protocol):
    """
    Responsibilities:
      • Project a live position onto the rendered geometry of a route.
    Units: (lon, lat) degrees in and out.
    """

    def snap_point(self, position: Coord, route: Sequence[GraphNode]) -> Coord | None: ...
