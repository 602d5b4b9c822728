"""Geospatial utility helpers used by the proximity index and ranking."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from driverfinder.models.coordinate import Coordinate


# Mean Earth radius; spherical model, roughly 0.5% off the WGS84 ellipsoid.
EARTH_RADIUS_M = 6_371_000.0


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def _haversine(
    lat1: float, lng1: float, lat2: float, lng2: float, radius: float
) -> float:
    phi1 = to_radians(lat1)
    phi2 = to_radians(lat2)
    dphi = to_radians(lat2 - lat1)
    dlambda = to_radians(lng2 - lng1)

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.asin(math.sqrt(a))
    return radius * c


def haversine_distance_m(
    a: Coordinate, b: Coordinate, *, radius_m: float = EARTH_RADIUS_M
) -> float:
    """Great-circle distance between two coordinates in metres (haversine)."""

    if a == b:
        return 0.0
    # distance(a, b) and distance(b, a) must evaluate identically
    first, second = (a, b) if (a.lat, a.lng) <= (b.lat, b.lng) else (b, a)
    return _haversine(first.lat, first.lng, second.lat, second.lng, radius_m)


__all__ = [
    "EARTH_RADIUS_M",
    "haversine_distance_m",
    "to_radians",
]
