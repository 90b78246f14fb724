# routing/pathfinder.py
import heapq
import itertools
import math
import time
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from railnav.app.protocols import Heuristic
from railnav.domain.graph import Graph, GraphNode
from railnav.routing.heuristics import HaversineHeuristic
from railnav.routing.hooks import NoopHooks, RoutingHooks

TieBreak = Literal["node_id", "insertion"]


class SearchStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"  # start or goal id unknown
    NO_PATH = "no_path"  # both known, goal unreachable


@dataclass(frozen=True)
class Route:
    """Ordered, non-empty start -> goal node sequence."""

    nodes: tuple[GraphNode, ...]
    cost_m: float = 0.0

    def __post_init__(self):
        if not self.nodes:
            raise ValueError("a route needs at least one node")

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, i):
        return self.nodes[i]

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)

    @property
    def node_ids(self) -> list[int]:
        return [n.id for n in self.nodes]

    def pairs(self) -> list[tuple[int, int]]:
        return [(a.id, b.id) for a, b in zip(self.nodes, self.nodes[1:])]


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    route: Route | None = None
    expanded: int = 0

    @property
    def cost_m(self) -> float | None:
        return self.route.cost_m if self.route else None


class Pathfinder:
    """
    A* over a Graph.
    Frontier entries are (f, tie, g, node); an entry whose g is worse than the
    best known g for its node is stale and dropped when popped. Nodes may be
    expanded more than once if a cheaper path to them turns up later.
    """

    def __init__(
        self,
        graph: Graph,
        heuristic: Heuristic | None = None,
        *,
        tie_break: TieBreak = "node_id",
        hooks: RoutingHooks | None = None,
    ):
        if tie_break not in ("node_id", "insertion"):
            raise ValueError(f"Unknown tie_break {tie_break!r}")
        self.G = graph
        self.h = heuristic or HaversineHeuristic()
        self.tie_break = tie_break
        self._hooks = hooks or NoopHooks()

    def search(self, start_id: int, end_id: int) -> SearchResult:
        t0 = time.perf_counter()
        self._hooks.search_start(start_id=start_id, end_id=end_id)
        start, goal = self.G.get(start_id), self.G.get(end_id)
        if start is None or goal is None:
            res = SearchResult(SearchStatus.NOT_FOUND)
        else:
            res = self._astar(start, goal)
        self._hooks.search_end(
            status=res.status.value,
            expanded=res.expanded,
            cost_m=res.cost_m,
            ms=(time.perf_counter() - t0) * 1000,
        )
        return res

    def find_shortest_path(self, start_id: int, end_id: int) -> Route | None:
        return self.search(start_id, end_id).route

    # ------------------------------------------------------------------

    def _tie(self, node: GraphNode, seq: int):
        return (node.id, seq) if self.tie_break == "node_id" else (seq,)

    def _astar(self, start: GraphNode, goal: GraphNode) -> SearchResult:
        counter = itertools.count()
        g: dict[GraphNode, float] = {start: 0.0}
        came_from: dict[GraphNode, GraphNode] = {}
        frontier: list = [(self.h(start, goal), self._tie(start, next(counter)), 0.0, start)]
        expanded = 0

        while frontier:
            _, _, g_at_push, current = heapq.heappop(frontier)
            if g_at_push > g.get(current, math.inf):
                continue  # stale
            if current is goal:
                nodes = self._reconstruct(came_from, current)
                return SearchResult(SearchStatus.FOUND, Route(nodes, g[current]), expanded)
            expanded += 1
            for neighbor, weight in current.neighbors:
                tentative = g[current] + weight
                if tentative < g.get(neighbor, math.inf):
                    came_from[neighbor] = current
                    g[neighbor] = tentative
                    f = tentative + self.h(neighbor, goal)
                    heapq.heappush(
                        frontier, (f, self._tie(neighbor, next(counter)), tentative, neighbor)
                    )

        return SearchResult(SearchStatus.NO_PATH, expanded=expanded)

    @staticmethod
    def _reconstruct(came_from: dict[GraphNode, GraphNode], current: GraphNode):
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return tuple(path)


def find_shortest_path(graph: Graph, start_id: int, end_id: int) -> Route | None:
    return Pathfinder(graph).find_shortest_path(start_id, end_id)
