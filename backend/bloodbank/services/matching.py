from __future__ import annotations

from typing import List

from loguru import logger

from ..database import settings
from ..models.common import GeoQuery, parse_blood_type
from ..models.matching import DonorMatch
from ..store import MongoStore
from ..utils.geo import haversine_km


async def find_nearby_donors(
    store: MongoStore,
    point: GeoQuery | None,
    blood_type: str | None,
    radius_meters: float | None = None,
) -> List[DonorMatch]:
    """Donors of exactly ``blood_type`` within ``radius_meters`` of ``point``, nearest first.

    Missing or unreadable input yields an empty list rather than an error.
    """
    resolved_type = parse_blood_type(blood_type)
    if point is None or resolved_type is None:
        return []
    if radius_meters is None:
        radius_meters = settings.match_radius_meters

    donors = await store.find_donors_near(point, resolved_type.value, radius_meters)
    matches: List[DonorMatch] = []
    for donor in donors:
        location = donor.get("location") or {}
        coordinates = location.get("coordinates") or []
        distance = None
        if len(coordinates) == 2:
            lng, lat = coordinates
            distance = round(haversine_km(point.lat, point.lng, lat, lng), 2)
        matches.append(
            DonorMatch(
                name=donor.get("name", ""),
                email=donor.get("email", ""),
                city=location.get("city"),
                distance_km=distance,
            )
        )
    logger.info(
        "Matched {} {} donors within {}m of ({}, {})",
        len(matches),
        resolved_type.value,
        radius_meters,
        point.lat,
        point.lng,
    )
    return matches
