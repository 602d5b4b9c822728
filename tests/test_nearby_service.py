"""Unit tests for the end-to-end nearby driver search."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from driverfinder.core.config import get_settings
from driverfinder.core.exceptions import (
    DomainError,
    InvalidCoordinate,
    InvalidPrecision,
    StaleHashPrecision,
)
from driverfinder.models.coordinate import Coordinate
from driverfinder.models.driver import Driver
from driverfinder.repositories.memory import InMemoryDriverRepository
from driverfinder.schemas.nearby import NearbyDriversResponse, ProximityQuery
from driverfinder.services.nearby import find_nearby_drivers, search_nearby

pytestmark = pytest.mark.unit


def test_find_nearby_drivers_scenario(repository: InMemoryDriverRepository) -> None:
    query = ProximityQuery(lat=41.0083, lng=28.9780, precision=7)

    result = find_nearby_drivers(repository, query)

    assert [item.driver.id for item in result.items] == [1, 2, 5]
    assert result.nearest is not None
    assert result.nearest.driver.id in {1, 5}
    assert result.nearest.driver.id == 1
    assert result.nearest.distance_m < 60.0


def test_find_nearby_drivers_logs_search_summary(repository: InMemoryDriverRepository) -> None:
    with capture_logs() as logs:
        find_nearby_drivers(repository, ProximityQuery(lat=41.0083, lng=28.9780))

    summary = [entry for entry in logs if entry["event"] == "nearby_drivers_search"]
    assert len(summary) == 1
    assert summary[0]["log_level"] == "info"
    assert summary[0]["candidates"] == 3
    assert summary[0]["nearest_id"] == 1
    assert summary[0]["precision"] == 7


def test_nobody_nearby_is_an_empty_result(repository: InMemoryDriverRepository) -> None:
    result = find_nearby_drivers(repository, ProximityQuery(lat=-33.8688, lng=151.2093))

    assert result.is_empty
    assert result.nearest is None


def test_coarser_precision_widens_the_search(repository: InMemoryDriverRepository) -> None:
    result = find_nearby_drivers(repository, ProximityQuery(lat=41.0083, lng=28.9780, precision=5))

    assert [item.driver.id for item in result.items] == [1, 2, 3, 4, 5]


def test_strict_setting_turns_stale_hashes_into_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    repo = InMemoryDriverRepository([Driver.at(9, "Eski", 41.0082, 28.9784, hash_precision=5)])
    query = ProximityQuery(lat=41.0083, lng=28.9780, precision=7)

    assert find_nearby_drivers(repo, query).is_empty

    monkeypatch.setenv("DRIVERFINDER_STRICT_HASH_PRECISION", "true")
    get_settings.cache_clear()
    with pytest.raises(StaleHashPrecision):
        find_nearby_drivers(repo, query)
    assert find_nearby_drivers(repo, query, strict=False).is_empty


def test_search_nearby_builds_response(repository: InMemoryDriverRepository) -> None:
    response = search_nearby(repository, lat=41.0083, lng=28.9780, precision=7)

    assert isinstance(response, NearbyDriversResponse)
    assert response.total == 3
    assert response.precision == 7
    assert response.query_geohash == "sxk973m"
    assert [item.id for item in response.items] == [1, 2, 5]
    assert response.items[1].geohash == "sxk973q"
    assert response.nearest is not None
    assert response.nearest.id == 1
    assert response.nearest.name == "Ahmet"
    assert response.nearest.distance_m == pytest.approx(35.4, abs=1.0)


def test_search_nearby_empty_response(repository: InMemoryDriverRepository) -> None:
    response = search_nearby(repository, lat=0.0, lng=0.0)

    assert response.items == []
    assert response.nearest is None
    assert response.total == 0
    assert response.model_dump()["nearest"] is None


def test_query_precision_defaults_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    assert ProximityQuery(lat=41.0, lng=29.0).precision == 7

    monkeypatch.setenv("DRIVERFINDER_QUERY_PRECISION", "6")
    get_settings.cache_clear()
    assert ProximityQuery(lat=41.0, lng=29.0).precision == 6


@pytest.mark.parametrize(
    "lat, lng",
    [(91.0, 0.0), (0.0, -180.5), (float("nan"), 0.0), ("north", 0.0), (None, 0.0), (0.0, [28.9])],
)
def test_query_rejects_invalid_coordinates(lat: object, lng: object) -> None:
    with pytest.raises(InvalidCoordinate):
        ProximityQuery(lat=lat, lng=lng)


@pytest.mark.parametrize("precision", [0, -1, 13, "abc", 6.5, True])
def test_query_rejects_invalid_precision(precision: object) -> None:
    with pytest.raises(InvalidPrecision):
        ProximityQuery(lat=41.0, lng=29.0, precision=precision)


def test_search_nearby_propagates_validation_errors(repository: InMemoryDriverRepository) -> None:
    with pytest.raises(InvalidCoordinate):
        search_nearby(repository, lat=120.0, lng=0.0)
    with pytest.raises(InvalidPrecision):
        search_nearby(repository, lat=41.0, lng=29.0, precision=0)


def test_query_errors_are_domain_errors() -> None:
    with pytest.raises(DomainError):
        ProximityQuery(lat="north", lng=28.9780)
    with pytest.raises(DomainError):
        ProximityQuery(lat=41.0, lng=29.0, precision="abc")


def test_query_accepts_numeric_strings() -> None:
    query = ProximityQuery(lat="41.0083", lng="28.9780")
    assert query.coordinate == Coordinate(41.0083, 28.9780)


class _RelocatingRepository:
    """Hands out drivers and then moves each one across the globe."""

    def __init__(self, drivers: list[Driver]) -> None:
        self._drivers = drivers

    def list_available(self):
        for driver in self._drivers:
            yield driver
            driver.move_to(Coordinate(10.0, 10.0))

    def get(self, driver_id: int) -> Driver | None:
        return None


def test_location_update_during_search_does_not_leak_into_ranking() -> None:
    ahmet = Driver.at(1, "Ahmet", 41.0082, 28.9784, hash_precision=7)
    repo = _RelocatingRepository([ahmet])

    response = search_nearby(repo, lat=41.0083, lng=28.9780, precision=7)

    assert ahmet.geohash != "sxk973m"
    assert response.nearest is not None
    assert response.nearest.distance_m < 1000.0
    assert response.nearest.geohash == "sxk973m"
    assert (response.nearest.latitude, response.nearest.longitude) == (41.0082, 28.9784)
