# routing/snapper.py
"""
Snap a live position onto the geometry of a computed route.

Distances are compared in planar (lon, lat) degrees. That is good enough at
the sub-kilometre scale of a station or campus, but it is not a geodesic
projection: longitudes shrink towards the poles and long segments bend.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from railnav.app.protocols import EdgeGeometryIndex, Snapper
from railnav.domain.entities.features import Coord, EdgeRecord
from railnav.domain.graph import GraphNode
from railnav.routing.geodesy import haversine_m
from railnav.routing.hooks import NoopHooks, RoutingHooks


@dataclass(frozen=True)
class SnapResult:
    point: Coord
    distance_deg: float  # planar, in degrees
    distance_m: float  # haversine from the query to `point`
    pair: tuple[int, int]  # (start_id, end_id) of the edge snapped to


def edge_geometry_index(edges: Iterable[EdgeRecord]) -> dict[tuple[int, int], tuple[Coord, ...]]:
    index: dict[tuple[int, int], tuple[Coord, ...]] = {}
    for rec in edges:
        edge = rec.parse()
        if edge is None or not edge.geometry:
            continue
        index[(edge.start_id, edge.end_id)] = edge.geometry
    return index


def project_onto_polyline(q: Coord, coords: Sequence[Coord]) -> tuple[np.ndarray, float]:
    """Closest point to q on a polyline, and its planar distance."""
    pts = np.asarray(coords, dtype=float).reshape(-1, 2)
    qv = np.asarray(q, dtype=float)
    if len(pts) == 1:
        return pts[0], float(np.hypot(*(qv - pts[0])))

    s, e = pts[:-1], pts[1:]
    d = e - s
    len2 = np.einsum("ij,ij->i", d, d)
    dot = np.einsum("ij,ij->i", qv - s, d)
    t = np.divide(dot, len2, out=np.zeros_like(dot), where=len2 > 0)
    t = np.clip(t, 0.0, 1.0)
    proj = s + t[:, None] * d
    dist = np.hypot(proj[:, 0] - qv[0], proj[:, 1] - qv[1])
    k = int(np.argmin(dist))  # first minimum
    return proj[k], float(dist[k])


class RouteSnapper(Snapper):
    def __init__(self, index: EdgeGeometryIndex, *, hooks: RoutingHooks | None = None):
        self.index = index
        self._hooks = hooks or NoopHooks()

    def snap(self, position: Coord, route: Sequence[GraphNode]) -> SnapResult | None:
        best: SnapResult | None = None
        nodes = list(route)
        for a, b in zip(nodes, nodes[1:]):
            geom = self.index.get((a.id, b.id))
            if not geom:
                self._hooks.snap_gap(start_id=a.id, end_id=b.id)
                continue
            p, dist = project_onto_polyline(position, geom)
            if best is None or dist < best.distance_deg:
                pt = (float(p[0]), float(p[1]))
                best = SnapResult(pt, dist, haversine_m(position, pt), (a.id, b.id))
        return best

    def snap_point(self, position: Coord, route: Sequence[GraphNode]) -> Coord | None:
        res = self.snap(position, route)
        return res.point if res else None


def snap_to_route(
    position: Coord, route: Sequence[GraphNode], edge_geometry_index: EdgeGeometryIndex
) -> Coord | None:
    return RouteSnapper(edge_geometry_index).snap_point(position, route)
