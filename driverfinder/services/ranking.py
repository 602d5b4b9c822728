from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from driverfinder.models.coordinate import Coordinate
from driverfinder.models.driver import Driver, DriverLocation
from driverfinder.services.proximity_index import Candidate
from driverfinder.utils.geo import EARTH_RADIUS_M, haversine_distance_m


@dataclass(frozen=True, slots=True)
class RankedCandidate:
    driver: Driver
    location: DriverLocation
    distance_m: float


@dataclass(frozen=True, slots=True)
class RankedResult:
    """Distance-annotated candidates in input order plus the nearest one.

    ``nearest`` is ``None`` when nothing was found; that is a valid outcome.
    """

    items: tuple[RankedCandidate, ...]
    nearest: RankedCandidate | None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)

    def sorted_by_distance(self) -> list[RankedCandidate]:
        return sorted(self.items, key=lambda item: item.distance_m)

    def within(self, max_distance_m: float) -> RankedResult:
        """Keep only candidates at most ``max_distance_m`` away."""

        return rank_items([item for item in self.items if item.distance_m <= max_distance_m])


EMPTY_RESULT = RankedResult(items=(), nearest=None)


def rank_items(items: Iterable[RankedCandidate]) -> RankedResult:
    ranked = tuple(items)
    nearest: RankedCandidate | None = None
    for item in ranked:
        # strict < keeps the first of equally distant candidates
        if nearest is None or item.distance_m < nearest.distance_m:
            nearest = item
    return RankedResult(items=ranked, nearest=nearest)


def rank(
    coordinate: Coordinate,
    candidates: Iterable[Candidate],
    *,
    radius_m: float = EARTH_RADIUS_M,
) -> RankedResult:
    """Annotate ``candidates`` with their distance from ``coordinate`` and pick the nearest.

    Distances use the location each candidate was matched at, not the driver's
    current one.
    """

    return rank_items(
        RankedCandidate(
            driver=driver,
            location=location,
            distance_m=haversine_distance_m(
                coordinate, location.coordinate, radius_m=radius_m
            ),
        )
        for driver, location in candidates
    )


__all__ = ["EMPTY_RESULT", "RankedCandidate", "RankedResult", "rank", "rank_items"]
