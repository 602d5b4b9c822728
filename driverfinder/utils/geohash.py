"""Geohash encode/decode and neighbour derivation.

The base-32 codec itself comes from :mod:`pygeohash`; this module adds precision
and alphabet checks that raise domain errors, bounding boxes, and neighbour cells
with longitude wrap and latitude clamping.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import pygeohash

from driverfinder.core.exceptions import InvalidHash, InvalidPrecision, ValidationError
from driverfinder.models.coordinate import Coordinate, check_lat_lng

BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_ALPHABET = frozenset(BASE32)

# 12 characters is ~3.7cm x 1.9cm; longer hashes stop round-tripping through doubles.
MAX_PRECISION = 12

_METERS_PER_DEGREE = math.pi * 6_371_000.0 / 180.0


class Direction(str, Enum):
    N = "n"
    S = "s"
    E = "e"
    W = "w"
    NE = "ne"
    NW = "nw"
    SE = "se"
    SW = "sw"


# (lat steps, lng steps); cardinal directions first so a clamped diagonal never
# claims a cell that is really the cardinal neighbour.
_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.N: (1, 0),
    Direction.S: (-1, 0),
    Direction.E: (0, 1),
    Direction.W: (0, -1),
    Direction.NE: (1, 1),
    Direction.NW: (1, -1),
    Direction.SE: (-1, 1),
    Direction.SW: (-1, -1),
}


@dataclass(frozen=True, slots=True)
class BoundingBox:
    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: float

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.lat_min + self.lat_max) / 2.0, (self.lng_min + self.lng_max) / 2.0)

    @property
    def lat_error(self) -> float:
        return (self.lat_max - self.lat_min) / 2.0

    @property
    def lng_error(self) -> float:
        return (self.lng_max - self.lng_min) / 2.0

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.lat_min <= coordinate.lat <= self.lat_max
            and self.lng_min <= coordinate.lng <= self.lng_max
        )


def check_precision(precision: int) -> int:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidPrecision(f"precision must be an integer, got {precision!r}")
    if precision <= 0:
        raise InvalidPrecision(f"precision must be > 0, got {precision}")
    if precision > MAX_PRECISION:
        raise InvalidPrecision(f"precision must be <= {MAX_PRECISION}, got {precision}")
    return precision


def normalize(geohash: str) -> str:
    """Lower-case ``geohash`` and check it against the base-32 alphabet."""

    if not isinstance(geohash, str) or not geohash:
        raise InvalidHash("geohash must be a non-empty string")
    if len(geohash) > MAX_PRECISION:
        raise InvalidHash(f"geohash longer than {MAX_PRECISION} characters: {geohash!r}")
    gh = geohash.lower()
    for c in gh:
        if c not in _ALPHABET:
            raise InvalidHash(f"Invalid geohash character: {c!r}")
    return gh


def encode(lat: float, lng: float, precision: int) -> str:
    check_precision(precision)
    lat, lng = check_lat_lng(lat, lng)
    return pygeohash.encode(lat, lng, precision=precision)


def encode_coordinate(coordinate: Coordinate, precision: int) -> str:
    return encode(coordinate.lat, coordinate.lng, precision)


def decode_bbox(geohash: str) -> BoundingBox:
    """Return the cell covered by ``geohash``."""

    lat, lng, lat_error, lng_error = pygeohash.decode_exactly(normalize(geohash))
    return BoundingBox(lat - lat_error, lat + lat_error, lng - lng_error, lng + lng_error)


def decode(geohash: str) -> tuple[Coordinate, float, float]:
    """Return ``(center, lat_error, lng_error)`` for ``geohash``."""

    bbox = decode_bbox(geohash)
    return bbox.center, bbox.lat_error, bbox.lng_error


def _wrap_lng(lng: float) -> float:
    if -180.0 <= lng <= 180.0:
        return lng
    return ((lng + 180.0) % 360.0) - 180.0


def neighbors(geohash: str) -> dict[Direction, str]:
    """Adjacent cells of ``geohash`` at the same precision, keyed by direction.

    Longitude wraps around the antimeridian; latitude is clamped at the poles, so a
    polar cell reports fewer than eight neighbours. The input cell is never included.
    """

    gh = normalize(geohash)
    bbox = decode_bbox(gh)
    center = bbox.center
    lat_span = bbox.lat_max - bbox.lat_min
    lng_span = bbox.lng_max - bbox.lng_min

    out: dict[Direction, str] = {}
    seen = {gh}
    for direction, (lat_steps, lng_steps) in _STEPS.items():
        lat = min(90.0, max(-90.0, center.lat + lat_steps * lat_span))
        lng = _wrap_lng(center.lng + lng_steps * lng_span)
        cell = encode(lat, lng, len(gh))
        if cell in seen:
            continue
        seen.add(cell)
        out[direction] = cell
    return out


def cell_size(precision: int) -> tuple[float, float]:
    """``(lat_degrees, lng_degrees)`` extent of a cell at ``precision``."""

    check_precision(precision)
    bits = 5 * precision
    lng_bits = (bits + 1) // 2
    lat_bits = bits // 2
    return 180.0 / (1 << lat_bits), 360.0 / (1 << lng_bits)


def precision_for_radius(radius_m: float) -> int:
    """Finest precision whose cell edge (at the equator) is still >= ``radius_m``.

    Searching that cell plus its ring of neighbours then covers every point within
    ``radius_m`` of an equatorial query. Cells narrow east-west towards the poles.
    """

    if not math.isfinite(radius_m) or radius_m <= 0:
        raise ValidationError(f"radius_m must be a positive number, got {radius_m!r}")
    for precision in range(MAX_PRECISION, 0, -1):
        lat_deg, lng_deg = cell_size(precision)
        if min(lat_deg, lng_deg) * _METERS_PER_DEGREE >= radius_m:
            return precision
    return 1


__all__ = [
    "BASE32",
    "MAX_PRECISION",
    "BoundingBox",
    "Direction",
    "cell_size",
    "check_precision",
    "decode",
    "decode_bbox",
    "encode",
    "encode_coordinate",
    "neighbors",
    "normalize",
    "precision_for_radius",
]
