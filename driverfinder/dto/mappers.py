"""Utilities to map ranking results into response schemas."""

from __future__ import annotations

from driverfinder.schemas.nearby import NearbyDriverItem, NearbyDriversResponse
from driverfinder.services.ranking import RankedCandidate, RankedResult


def map_candidate_to_item(candidate: RankedCandidate) -> NearbyDriverItem:
    location = candidate.location
    return NearbyDriverItem(
        id=int(candidate.driver.id),
        name=str(candidate.driver.name or ""),
        latitude=location.coordinate.lat,
        longitude=location.coordinate.lng,
        geohash=location.geohash,
        distance_m=float(candidate.distance_m),
    )


def map_result_to_response(
    result: RankedResult,
    *,
    precision: int,
    query_geohash: str,
) -> NearbyDriversResponse:
    items = [map_candidate_to_item(item) for item in result.items]
    nearest = None
    if result.nearest is not None:
        nearest = items[result.items.index(result.nearest)]
    return NearbyDriversResponse(
        items=items,
        nearest=nearest,
        total=len(items),
        precision=precision,
        query_geohash=query_geohash,
    )


__all__ = ["map_candidate_to_item", "map_result_to_response"]
