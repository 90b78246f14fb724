# railnav/app/navigator.py
from dataclasses import dataclass, field

import numpy as np

from railnav.domain.entities.features import Coord, Node
from railnav.domain.graph import Graph
from railnav.routing.geodesy import Bounds, bounds_of, haversine_many_m
from railnav.routing.narrator import TurnByTurnNarrator
from railnav.routing.pathfinder import Pathfinder, Route, SearchStatus
from railnav.routing.snapper import RouteSnapper, SnapResult

NO_PATH_MESSAGE = "No path could be found between the selected locations."


@dataclass(frozen=True)
class RoutePlan:
    status: SearchStatus
    route: Route | None
    instructions: list[str]
    bounds: Bounds | None = None

    @property
    def found(self) -> bool:
        return self.route is not None


@dataclass
class Navigator:
    """
    Convenience façade over the routing core.
    Call sites get a route, its narration and its bounds in one call.
    """

    graph: Graph
    pathfinder: Pathfinder
    narrator: TurnByTurnNarrator
    snapper: RouteSnapper
    bounds_padding: float = 0.1
    nearest_candidates: int = 3
    _coords: np.ndarray = field(init=False, repr=False)
    _nodes: list[Node] = field(init=False, repr=False)
    _by_name: list[Node] = field(init=False, repr=False)

    def __post_init__(self):
        self._nodes = [gn.node for gn in self.graph]
        named = [n for n in self._nodes if n.name is not None]
        self._by_name = sorted(named, key=lambda n: (n.name, n.id))
        self._coords = np.array([n.coordinate for n in self._nodes], dtype=float).reshape(-1, 2)

    def plan(self, start_id: int, end_id: int) -> RoutePlan:
        res = self.pathfinder.search(start_id, end_id)
        if res.route is None:
            return RoutePlan(res.status, None, [NO_PATH_MESSAGE])
        return RoutePlan(
            res.status,
            res.route,
            self.narrator.generate(res.route),
            self.route_bounds(res.route),
        )

    def snap(self, position: Coord, route: Route) -> Coord | None:
        return self.snapper.snap_point(position, route)

    def snap_detail(self, position: Coord, route: Route) -> SnapResult | None:
        return self.snapper.snap(position, route)

    def route_bounds(self, route: Route, padding: float | None = None) -> Bounds:
        pad = self.bounds_padding if padding is None else padding
        return bounds_of([n.coordinate for n in route], pad)

    def nearest_nodes(self, position: Coord, k: int | None = None) -> list[Node]:
        k = self.nearest_candidates if k is None else k
        if k < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        if not self._nodes:
            return []
        d = haversine_many_m(position, self._coords)
        order = np.argsort(d, kind="stable")[:k]
        return [self._nodes[int(i)] for i in order]

    def nearest_node(self, position: Coord) -> Node | None:
        hits = self.nearest_nodes(position, k=1)
        return hits[0] if hits else None

    def search_nodes(self, query: str) -> list[Node]:
        """Case-insensitive substring match on node names, sorted by name.

        Queries shorter than two characters return nothing.
        """
        if len(query) < 2:
            return []
        q = query.casefold()
        return [n for n in self._by_name if q in n.name.casefold()]
