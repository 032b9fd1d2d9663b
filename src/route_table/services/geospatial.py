"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Coordinate, CoordinateValue, Row

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(start: Coordinate, end: Coordinate) -> float:
    return haversine_km(start.latitude, start.longitude, end.latitude, end.longitude)


def _parse_degrees(value: CoordinateValue, limit: float) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        degrees = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(degrees) or abs(degrees) > limit:
        return None
    return degrees


def parse_coordinate(latitude: CoordinateValue, longitude: CoordinateValue) -> Coordinate | None:
    """Return a coordinate when both parts are finite, in-range decimal degrees."""

    lat = _parse_degrees(latitude, 90.0)
    lon = _parse_degrees(longitude, 180.0)
    if lat is None or lon is None:
        return None
    return Coordinate(latitude=lat, longitude=lon)


def row_coordinate(row: Row) -> Coordinate | None:
    return parse_coordinate(row.latitude, row.longitude)
