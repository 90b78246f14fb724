from railnav.app.protocols import Heuristic
from railnav.domain.graph import GraphNode
from railnav.routing.geodesy import EARTH_RADIUS_M, haversine_m


class HaversineHeuristic(Heuristic):
    def __init__(self, earth_radius_m: float = EARTH_RADIUS_M):
        self.R = earth_radius_m

    def __call__(self, node: GraphNode, goal: GraphNode) -> float:
        return haversine_m(node.coordinate, goal.coordinate, self.R)


class ZeroHeuristic(Heuristic):
    """h = 0 turns A* into plain Dijkstra."""

    def __call__(self, node: GraphNode, goal: GraphNode) -> float:
        return 0.0
