# railnav/domain/graph.py
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from railnav.domain.entities.features import Coord, EdgeRecord, Node
from railnav.routing.hooks import NoopHooks, RoutingHooks


@dataclass(eq=False)
class GraphNode:
    """A node of the facility graph plus its outgoing (neighbour, weight) arcs."""

    node: Node
    neighbors: list[tuple["GraphNode", float]] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.node.id

    @property
    def coordinate(self) -> Coord:
        return self.node.coordinate

    @property
    def name(self) -> str | None:
        return self.node.name

    @property
    def type(self) -> str | None:
        return self.node.type

    def __repr__(self) -> str:
        return f"GraphNode(id={self.id}, arcs={len(self.neighbors)})"


class Graph:
    """Directed weighted graph keyed by node id. Read-only once built."""

    def __init__(self, nodes: dict[int, GraphNode]):
        self._nodes = nodes

    @classmethod
    def build(
        cls,
        nodes: Iterable[Node],
        edges: Iterable[EdgeRecord],
        *,
        hooks: RoutingHooks | None = None,
    ) -> "Graph":
        hooks = hooks or NoopHooks()

        table: dict[int, GraphNode] = {}
        for n in nodes:
            if n.id in table:
                hooks.duplicate_node(node_id=n.id)
            table[n.id] = GraphNode(n)  # last record wins

        arcs = skipped = 0
        for rec in edges:
            edge = rec.parse()
            if edge is None:
                skipped += 1
                hooks.edge_skipped(edge_id=rec.id, reason="unparseable")
                continue
            start, end = table.get(edge.start_id), table.get(edge.end_id)
            if start is None or end is None:
                skipped += 1
                hooks.edge_skipped(edge_id=rec.id, reason="unknown_endpoint")
                continue
            start.neighbors.append((end, edge.distance_m))
            arcs += 1

        hooks.graph_built(nodes=len(table), arcs=arcs, skipped=skipped)
        return cls(table)

    def get(self, node_id: int) -> GraphNode | None:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    @property
    def arc_count(self) -> int:
        return sum(len(gn.neighbors) for gn in self._nodes.values())

    def describe_neighbors(self, node_id: int) -> list[str]:
        gn = self._nodes.get(node_id)
        if gn is None:
            return [f"Node with ID {node_id} not found."]
        if not gn.neighbors:
            return [f"Node {node_id} has no outgoing connections."]
        return [f"-> Connects to Node {nb.id} (Distance: {w})" for nb, w in gn.neighbors]


def build_graph(
    nodes: Iterable[Node],
    edges: Iterable[EdgeRecord],
    *,
    hooks: RoutingHooks | None = None,
) -> Graph:
    return Graph.build(nodes, edges, hooks=hooks)
