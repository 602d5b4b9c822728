"""Immutable latitude/longitude value type."""

from __future__ import annotations

import math
from dataclasses import dataclass

from driverfinder.core.exceptions import InvalidCoordinate

LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)


def check_lat_lng(lat: float, lng: float) -> tuple[float, float]:
    """Return ``(lat, lng)`` as floats or raise :class:`InvalidCoordinate`."""

    if isinstance(lat, bool) or isinstance(lng, bool):
        raise InvalidCoordinate(f"coordinate must be numeric: ({lat!r}, {lng!r})")
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinate(f"coordinate must be numeric: ({lat!r}, {lng!r})") from exc
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        raise InvalidCoordinate(f"coordinate must be finite: ({lat_f}, {lng_f})")
    if not LAT_RANGE[0] <= lat_f <= LAT_RANGE[1]:
        raise InvalidCoordinate(f"latitude out of range [-90, 90]: {lat_f}")
    if not LNG_RANGE[0] <= lng_f <= LNG_RANGE[1]:
        raise InvalidCoordinate(f"longitude out of range [-180, 180]: {lng_f}")
    return lat_f, lng_f


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        lat, lng = check_lat_lng(self.lat, self.lng)
        object.__setattr__(self, "lat", lat)
        object.__setattr__(self, "lng", lng)

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


__all__ = ["Coordinate", "check_lat_lng"]
