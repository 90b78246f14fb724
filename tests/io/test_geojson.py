# tests/io/test_geojson.py
import json

import pytest

from railnav.domain.graph import build_graph
from railnav.io.geojson import load_edges, load_nodes, parse_edges, parse_nodes


def node_feature(i, lon, lat, **props):
    return {
        "type": "Feature",
        "properties": {"node_id": i, "node_level": 0, **props},
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
    }


def edge_feature(eid, s, e, d, coords=None, **props):
    return {
        "type": "Feature",
        "properties": {"edge_id": eid, "start_id": s, "end_id": e, "edge_distance": d, **props},
        "geometry": {"type": "LineString", "coordinates": coords or [[0, 0], [0, 0.001]]},
    }


def fc(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def test_parse_nodes_maps_properties():
    nodes = parse_nodes(
        fc(
            node_feature(
                7, 1.5, 2.5, node_name="Gate", node_type="ENTRY/EXIT", note="x", extra="ignored"
            )
        )
    )
    (n,) = nodes
    assert (n.id, n.name, n.type, n.level, n.note) == (7, "Gate", "ENTRY/EXIT", 0, "x")
    assert n.coordinate == (1.5, 2.5)


def test_malformed_node_features_are_skipped():
    bad_id = node_feature("seven", 0, 0)
    no_level = {"properties": {"node_id": 3}, "geometry": {"coordinates": [0, 0]}}
    short = node_feature(4, 0, 0)
    short["geometry"]["coordinates"] = [1.0]
    with_alt = node_feature(5, 1.0, 2.0)
    with_alt["geometry"]["coordinates"] = [1.0, 2.0, 30.0]
    nodes = parse_nodes(fc(node_feature(1, 0, 0), bad_id, no_level, short, with_alt))
    assert [n.id for n in nodes] == [1, 5]
    assert nodes[1].coordinate == (1.0, 2.0)


def test_edges_stay_loose_for_the_builder():
    edges = parse_edges(
        fc(
            edge_feature("e1", "1", "2", "10.5", edge_accessibilty="step-free"),
            edge_feature(2, 2, 1, 11, edge_accessibility="stairs"),
            edge_feature("e3", "1", "two", "abc"),
        )
    )
    assert [e.id for e in edges] == ["e1", "2", "e3"]
    assert edges[0].accessibility == "step-free"
    assert edges[1].accessibility == "stairs"
    assert (edges[1].start_id, edges[1].distance) == ("2", "11")
    assert edges[0].geometry == ((0.0, 0.0), (0.0, 0.001))

    g = build_graph(parse_nodes(fc(node_feature(1, 0, 0), node_feature(2, 0, 0.001))), edges)
    assert g.arc_count == 2  # e3 dropped by the builder, not the loader


def test_unusable_edge_geometry_becomes_empty():
    one_point = edge_feature("a", "1", "2", "5", coords=[[0, 0]])
    junk = edge_feature("b", "1", "2", "5", coords=[[0, 0], ["x", 1]])
    no_geom = edge_feature("c", "1", "2", "5")
    no_geom["geometry"] = None
    edges = parse_edges(fc(one_point, junk, no_geom))
    assert [e.geometry for e in edges] == [(), (), ()]


def test_edge_without_required_properties_is_skipped():
    broken = {"properties": {"edge_id": "z"}, "geometry": None}
    assert parse_edges(fc(broken)) == []


def test_not_a_feature_collection():
    with pytest.raises(ValueError):
        parse_nodes({"type": "Feature"})


def test_load_from_files(tmp_path):
    nodes_p = tmp_path / "nodes.geojson"
    edges_p = tmp_path / "edges.geojson"
    nodes_p.write_text(json.dumps(fc(node_feature(1, 0, 0), node_feature(2, 0, 0.001))))
    edges_p.write_text(json.dumps(fc(edge_feature("e", "1", "2", "100"))))
    assert len(load_nodes(nodes_p)) == 2
    assert load_edges(str(edges_p))[0].distance == "100"


def test_missing_and_invalid_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_nodes(tmp_path / "nope.geojson")
    bad = tmp_path / "bad.geojson"
    bad.write_text("{not json")
    with pytest.raises(ValueError):
        load_edges(bad)
