# tests/routing/test_snapper.py
import pytest

from railnav.domain.entities.features import EdgeRecord, Node
from railnav.domain.graph import GraphNode
from railnav.routing.hooks import NoopHooks
from railnav.routing.snapper import (
    RouteSnapper,
    edge_geometry_index,
    project_onto_polyline,
    snap_to_route,
)


def gn(i, lon, lat):
    return GraphNode(Node(id=i, coordinate=(lon, lat)))


# ---------- Fixtures


@pytest.fixture
def route():
    return [gn(1, 0.0, 0.0), gn(2, 0.0, 0.001), gn(3, 0.001, 0.001)]


@pytest.fixture
def index():
    return {
        (1, 2): [(0.0, 0.0), (0.0, 0.0005), (0.0, 0.001)],
        (2, 3): [(0.0, 0.001), (0.001, 0.001)],
    }


# ---------- Projection


def test_projection_clamps_to_segment_ends():
    seg = [(0.0, 0.0), (1.0, 0.0)]
    p, d = project_onto_polyline((-2.0, 1.0), seg)
    assert tuple(p) == (0.0, 0.0)
    assert d == pytest.approx(5 ** 0.5)
    p, d = project_onto_polyline((0.25, 3.0), seg)
    assert tuple(p) == pytest.approx((0.25, 0.0))
    assert d == pytest.approx(3.0)


def test_degenerate_segment_projects_to_its_start():
    p, d = project_onto_polyline((1.0, 1.0), [(0.0, 0.0), (0.0, 0.0)])
    assert tuple(p) == (0.0, 0.0)
    assert d == pytest.approx(2 ** 0.5)


# ---------- Snapping


def test_query_on_a_vertex_returns_that_vertex(route, index):
    snapped = snap_to_route((0.0, 0.0005), route, index)
    assert snapped == pytest.approx((0.0, 0.0005))
    res = RouteSnapper(index).snap((0.0, 0.0005), route)
    assert res.distance_deg == pytest.approx(0.0, abs=1e-12)
    assert res.distance_m == pytest.approx(0.0, abs=1e-6)


def test_query_beside_the_route_projects_perpendicular(route, index):
    snapped = snap_to_route((0.0004, 0.0012), route, index)
    assert snapped == pytest.approx((0.0004, 0.001))


def test_far_query_returns_clamped_endpoint(route, index):
    res = RouteSnapper(index).snap((0.5, 0.5), route)
    assert res.point == pytest.approx((0.001, 0.001))
    assert res.pair == (2, 3)


def test_missing_segment_geometry_is_skipped(route, index):
    class Gaps(NoopHooks):
        def __init__(self):
            self.gaps = []

        def snap_gap(self, *, start_id, end_id):
            self.gaps.append((start_id, end_id))

    hooks = Gaps()
    partial = {(2, 3): index[(2, 3)]}
    res = RouteSnapper(partial, hooks=hooks).snap((0.0, 0.0), route)
    assert res.point == pytest.approx((0.0, 0.001))
    assert hooks.gaps == [(1, 2)]


def test_no_geometry_or_single_node_route_gives_none(route, index):
    assert snap_to_route((0.0, 0.0), route, {}) is None
    assert snap_to_route((0.0, 0.0), route[:1], index) is None


def test_geometry_lookup_is_directed(route, index):
    reversed_index = {(b, a): g for (a, b), g in index.items()}
    assert snap_to_route((0.0, 0.0), route, reversed_index) is None


def test_edge_geometry_index_from_records():
    recs = [
        EdgeRecord(id="a", start_id="1", end_id="2", distance="10", geometry=((0, 0), (0, 1))),
        EdgeRecord(id="b", start_id="x", end_id="2", distance="10", geometry=((0, 0), (1, 1))),
        EdgeRecord(id="c", start_id="2", end_id="3", distance="10"),
        EdgeRecord(id="d", start_id="1", end_id="2", distance="12", geometry=((5, 5), (6, 6))),
    ]
    idx = edge_geometry_index(recs)
    assert set(idx) == {(1, 2)}
    assert idx[(1, 2)] == ((5, 5), (6, 6))  # later record replaces earlier
