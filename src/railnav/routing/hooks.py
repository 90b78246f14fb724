# routing/hooks.py
from typing import Protocol


class RoutingHooks(Protocol):
    def duplicate_node(self, *, node_id: int): ...
    def edge_skipped(self, *, edge_id, reason: str): ...
    def graph_built(self, *, nodes: int, arcs: int, skipped: int): ...
    def search_start(self, *, start_id: int, end_id: int): ...
    def search_end(self, *, status: str, expanded: int, cost_m: float | None, ms: float): ...
    def snap_gap(self, *, start_id: int, end_id: int): ...


class NoopHooks:
    def duplicate_node(self, **_):
        pass

    def edge_skipped(self, **_):
        pass

    def graph_built(self, **_):
        pass

    def search_start(self, **_):
        pass

    def search_end(self, **_):
        pass

    def snap_gap(self, **_):
        pass
