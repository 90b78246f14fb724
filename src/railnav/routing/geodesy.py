import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from railnav.domain.entities.features import Coord

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: Coord, b: Coord, radius_m: float = EARTH_RADIUS_M) -> float:
    """Great-circle distance in meters between two (lon, lat) points."""
    lon1, lat1 = a
    lon2, lat2 = b
    p1, p2 = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    h = min(1.0, math.sin(dlat / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dlon / 2) ** 2)
    return radius_m * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_many_m(
    origin: Coord, points: np.ndarray, radius_m: float = EARTH_RADIUS_M
) -> np.ndarray:
    """Vectorised haversine from one origin to an (n, 2) array of (lon, lat)."""
    pts = np.radians(np.asarray(points, dtype=float).reshape(-1, 2))
    lon0, lat0 = math.radians(origin[0]), math.radians(origin[1])
    dlat = pts[:, 1] - lat0
    dlon = pts[:, 0] - lon0
    h = np.sin(dlat / 2) ** 2 + math.cos(lat0) * np.cos(pts[:, 1]) * np.sin(dlon / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return radius_m * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def bearing_deg(a: Coord, b: Coord) -> float:
    """Initial bearing (forward azimuth) from a to b, in [0, 360)."""
    lon1, lat1 = a
    lon2, lat2 = b
    p1, p2 = math.radians(lat1), math.radians(lat2)
    dlon = math.radians(lon2 - lon1)
    y = math.sin(dlon) * math.cos(p2)
    x = math.cos(p1) * math.sin(p2) - math.sin(p1) * math.cos(p2) * math.cos(dlon)
    return math.degrees(math.atan2(y, x)) % 360.0


def turn_angle_deg(bearing_in: float, bearing_out: float) -> float:
    """Signed turn in (-180, 180]; positive is a right (clockwise) turn."""
    a = (bearing_out - bearing_in + 180.0) % 360.0 - 180.0
    return 180.0 if a == -180.0 else a


@dataclass(frozen=True)
class Bounds:
    north: float
    east: float
    south: float
    west: float


def bounds_of(coords: Sequence[Coord], padding: float = 0.0) -> Bounds:
    """Bounding box of coords, widened by `padding` x span on every side."""
    arr = np.asarray(coords, dtype=float).reshape(-1, 2)
    west, south = arr.min(axis=0)
    east, north = arr.max(axis=0)
    pad_lon = (east - west) * padding
    pad_lat = (north - south) * padding
    return Bounds(
        north=float(north + pad_lat),
        east=float(east + pad_lon),
        south=float(south - pad_lat),
        west=float(west - pad_lon),
    )
