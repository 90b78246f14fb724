# io/geojson.py
"""
Read node (Point) and edge (LineString) FeatureCollections into feature records.

Node properties are validated; a node feature that does not validate is
skipped with a warning. Edge properties stay loosely typed strings so that the
graph builder can apply its per-edge skip policy.
"""

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from railnav.domain.entities.features import Coord, EdgeRecord, Node

log = logging.getLogger(__name__)


def _stringify(v):
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return v


LooseStr = Annotated[str, BeforeValidator(_stringify)]
OptLooseStr = Annotated[str | None, BeforeValidator(_stringify)]


class NodeProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")
    node_id: int
    node_name: str | None = None
    node_type: str | None = None
    node_level: int
    note: str | None = None


class PointGeometry(BaseModel):
    model_config = ConfigDict(extra="ignore")
    coordinates: list[float]

    @field_validator("coordinates")
    @classmethod
    def _lon_lat(cls, v: list[float]) -> list[float]:
        # altitude, if present, is dropped
        if len(v) < 2 or not all(math.isfinite(x) for x in v[:2]):
            raise ValueError("point needs finite [lon, lat]")
        return v[:2]


class NodeFeature(BaseModel):
    model_config = ConfigDict(extra="ignore")
    properties: NodeProperties
    geometry: PointGeometry

    def to_node(self) -> Node:
        p = self.properties
        lon, lat = self.geometry.coordinates
        return Node(
            id=p.node_id,
            coordinate=(lon, lat),
            name=p.node_name,
            type=p.node_type,
            level=p.node_level,
            note=p.note,
        )


class EdgeProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")
    edge_id: LooseStr
    edge_type: OptLooseStr = None
    start_id: LooseStr
    end_id: LooseStr
    edge_level: OptLooseStr = None
    edge_distance: LooseStr
    edge_accessibilty: OptLooseStr = Field(
        default=None, validation_alias=AliasChoices("edge_accessibilty", "edge_accessibility")
    )


class EdgeFeature(BaseModel):
    model_config = ConfigDict(extra="ignore")
    properties: EdgeProperties
    geometry: dict[str, Any] | None = None

    def to_record(self) -> EdgeRecord:
        p = self.properties
        return EdgeRecord(
            id=p.edge_id,
            start_id=p.start_id,
            end_id=p.end_id,
            distance=p.edge_distance,
            geometry=_line_coords(self.geometry),
            type=p.edge_type,
            level=p.edge_level,
            accessibility=p.edge_accessibilty,
        )


def _line_coords(geometry: Mapping | None) -> tuple[Coord, ...]:
    """LineString coordinates, or () when the geometry is unusable."""
    raw = (geometry or {}).get("coordinates")
    if not isinstance(raw, list) or len(raw) < 2:
        return ()
    out = []
    for pt in raw:
        try:
            lon, lat = float(pt[0]), float(pt[1])
        except (TypeError, ValueError, IndexError):
            return ()
        if not (math.isfinite(lon) and math.isfinite(lat)):
            return ()
        out.append((lon, lat))
    return tuple(out)


def _features(obj: Any) -> list:
    if not isinstance(obj, Mapping) or not isinstance(obj.get("features"), list):
        raise ValueError("expected a GeoJSON FeatureCollection with a 'features' list")
    return obj["features"]


def parse_nodes(obj: Mapping) -> list[Node]:
    nodes = []
    for i, feat in enumerate(_features(obj)):
        try:
            nodes.append(NodeFeature.model_validate(feat).to_node())
        except ValidationError as e:
            log.warning("skipping node feature %d: %s", i, e.errors(include_url=False))
    return nodes


def parse_edges(obj: Mapping) -> list[EdgeRecord]:
    edges = []
    for i, feat in enumerate(_features(obj)):
        try:
            edges.append(EdgeFeature.model_validate(feat).to_record())
        except ValidationError as e:
            log.warning("skipping edge feature %d: %s", i, e.errors(include_url=False))
    return edges


def _read_json(path: str | Path):
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))
    try:
        with p.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"{p}: invalid JSON ({e})") from e


def load_nodes(path: str | Path) -> list[Node]:
    return parse_nodes(_read_json(path))


def load_edges(path: str | Path) -> list[EdgeRecord]:
    return parse_edges(_read_json(path))
