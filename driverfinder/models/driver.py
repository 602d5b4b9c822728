from __future__ import annotations

import threading
from typing import NamedTuple

import structlog

from driverfinder.core.config import get_settings
from driverfinder.models.coordinate import Coordinate
from driverfinder.utils.geohash import check_precision, encode_coordinate


class DriverLocation(NamedTuple):
    coordinate: Coordinate
    geohash: str


class Driver:
    """A located driver whose cached geohash always matches its coordinate.

    ``move_to`` swaps the coordinate and the recomputed geohash under the instance
    lock; readers that need both values take them from ``snapshot()``.
    """

    def __init__(
        self,
        id: int,
        name: str,
        coordinate: Coordinate,
        *,
        hash_precision: int | None = None,
    ) -> None:
        if hash_precision is None:
            hash_precision = get_settings().entity_hash_precision
        self.id = id
        self.name = name
        self.hash_precision = check_precision(hash_precision)
        self._lock = threading.Lock()
        self._coordinate = coordinate
        self._geohash = encode_coordinate(coordinate, self.hash_precision)

    @classmethod
    def at(
        cls,
        id: int,
        name: str,
        lat: float,
        lng: float,
        *,
        hash_precision: int | None = None,
    ) -> Driver:
        return cls(id, name, Coordinate(lat, lng), hash_precision=hash_precision)

    @property
    def coordinate(self) -> Coordinate:
        with self._lock:
            return self._coordinate

    @property
    def geohash(self) -> str:
        with self._lock:
            return self._geohash

    @property
    def latitude(self) -> float:
        return self.coordinate.lat

    @property
    def longitude(self) -> float:
        return self.coordinate.lng

    def snapshot(self) -> DriverLocation:
        with self._lock:
            return DriverLocation(self._coordinate, self._geohash)

    def move_to(self, coordinate: Coordinate) -> str:
        """Update the location and return the recomputed geohash."""

        geohash = encode_coordinate(coordinate, self.hash_precision)
        with self._lock:
            self._coordinate = coordinate
            self._geohash = geohash
        structlog.get_logger(__name__).debug(
            "driver_location_updated",
            driver_id=self.id,
            lat=coordinate.lat,
            lng=coordinate.lng,
            geohash=geohash,
        )
        return geohash

    def __repr__(self) -> str:
        location = self.snapshot()
        return (
            f"Driver(id={self.id!r}, name={self.name!r}, "
            f"lat={location.coordinate.lat}, lng={location.coordinate.lng}, "
            f"geohash={location.geohash!r})"
        )
