"""Candidate generation: query cell plus its neighbour ring, filtered by hash prefix."""

from __future__ import annotations

from collections.abc import Iterable, Set
from typing import NamedTuple

import structlog

from driverfinder.core.exceptions import StaleHashPrecision
from driverfinder.models.coordinate import Coordinate
from driverfinder.models.driver import Driver, DriverLocation
from driverfinder.repositories.interfaces import DriverReadRepository
from driverfinder.utils import geohash


class Candidate(NamedTuple):
    """A matched driver with the location that put it in the candidate set."""

    driver: Driver
    location: DriverLocation

    @classmethod
    def of(cls, driver: Driver) -> Candidate:
        return cls(driver, driver.snapshot())


def build_candidate_hash_set(coordinate: Coordinate, precision: int) -> frozenset[str]:
    """Geohash of ``coordinate`` at ``precision`` together with its adjacent cells.

    The query's own cell is always part of the result.
    """

    own = geohash.encode_coordinate(coordinate, precision)
    return frozenset({own, *geohash.neighbors(own).values()})


def filter_by_hash_set(
    entities: Iterable[Driver],
    hash_set: Set[str],
    precision: int,
    *,
    strict: bool = False,
) -> list[Candidate]:
    """Drivers whose cached geohash, truncated to ``precision``, is in ``hash_set``.

    Each driver is read once through ``snapshot()`` and returned with that location,
    so a concurrent ``move_to`` cannot pair it with a coordinate outside the set.
    Input order is preserved. A driver hashed at a coarser precision than ``precision``
    cannot be truncated; it is skipped with a ``stale_hash_precision`` warning, or
    :class:`StaleHashPrecision` is raised when ``strict`` is set.
    """

    geohash.check_precision(precision)
    logger = structlog.get_logger(__name__)

    matched: list[Candidate] = []
    for entity in entities:
        location = entity.snapshot()
        cached = location.geohash
        if len(cached) < precision:
            if strict:
                raise StaleHashPrecision(entity.id, len(cached), precision)
            logger.warning(
                "stale_hash_precision",
                driver_id=entity.id,
                cached_precision=len(cached),
                query_precision=precision,
            )
            continue
        if cached[:precision] in hash_set:
            matched.append(Candidate(entity, location))
    return matched


class ProximityIndex:
    """Prefix filter over the drivers supplied by a repository.

    Holds no per-query state; every call reads the repository afresh.
    """

    def __init__(self, repository: DriverReadRepository, *, strict: bool = False) -> None:
        self._repository = repository
        self._strict = strict

    def candidates(self, coordinate: Coordinate, precision: int) -> list[Candidate]:
        hash_set = build_candidate_hash_set(coordinate, precision)
        structlog.get_logger(__name__).debug(
            "candidate_hash_set",
            precision=precision,
            hashes=sorted(hash_set),
        )
        return filter_by_hash_set(
            self._repository.list_available(),
            hash_set,
            precision,
            strict=self._strict,
        )


__all__ = ["Candidate", "ProximityIndex", "build_candidate_hash_set", "filter_by_hash_set"]
