from __future__ import annotations

import structlog

from driverfinder.core.config import get_settings
from driverfinder.dto.mappers import map_result_to_response
from driverfinder.repositories.interfaces import DriverReadRepository
from driverfinder.schemas.nearby import NearbyDriversResponse, ProximityQuery
from driverfinder.services.proximity_index import ProximityIndex
from driverfinder.services.ranking import RankedResult, rank
from driverfinder.utils.geohash import encode_coordinate


def find_nearby_drivers(
    repository: DriverReadRepository,
    query: ProximityQuery,
    *,
    strict: bool | None = None,
) -> RankedResult:
    """Drivers in the query cell and its eight neighbours, ranked by haversine distance.

    An empty result means nobody is nearby; invalid input raises instead.
    """

    logger = structlog.get_logger(__name__)
    settings = get_settings()
    if strict is None:
        strict = settings.strict_hash_precision

    precision = int(query.precision)
    coordinate = query.coordinate

    index = ProximityIndex(repository, strict=strict)
    candidates = index.candidates(coordinate, precision)
    result = rank(coordinate, candidates, radius_m=settings.earth_radius_m)

    nearest = result.nearest
    logger.info(
        "nearby_drivers_search",
        lat=coordinate.lat,
        lng=coordinate.lng,
        precision=precision,
        candidates=len(result),
        nearest_id=nearest.driver.id if nearest else None,
        nearest_distance_m=round(nearest.distance_m, 2) if nearest else None,
    )
    return result


def search_nearby(
    repository: DriverReadRepository,
    *,
    lat: float,
    lng: float,
    precision: int | None = None,
) -> NearbyDriversResponse:
    """Validate raw query values and return the response payload."""

    query = ProximityQuery(lat=lat, lng=lng, precision=precision)
    result = find_nearby_drivers(repository, query)
    return map_result_to_response(
        result,
        precision=int(query.precision),
        query_geohash=encode_coordinate(query.coordinate, int(query.precision)),
    )


__all__ = ["find_nearby_drivers", "search_nearby"]
