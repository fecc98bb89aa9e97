"""Equirectangular offset helpers used by every route builder."""
from __future__ import annotations

import math

from walkloop.models.route import Coordinate

METERS_PER_DEGREE = 111000.0


def meters_to_lat_degrees(meters: float) -> float:
    return meters / METERS_PER_DEGREE


def meters_to_lon_degrees(meters: float, reference_latitude: float) -> float:
    return meters / (METERS_PER_DEGREE * math.cos(reference_latitude * math.pi / 180.0))


def offset_coordinate(origin: Coordinate, north_m: float, east_m: float) -> Coordinate:
    """Move ``origin`` by a planar offset in meters (flat-earth, short distances)."""
    return make_coordinate(
        origin.latitude + meters_to_lat_degrees(north_m),
        origin.longitude + meters_to_lon_degrees(east_m, origin.latitude),
    )


def offset_by_degrees(origin: Coordinate, radius_deg: float, angle: float) -> Coordinate:
    """Point at ``radius_deg`` degrees from ``origin`` along bearing ``angle`` (radians)."""
    return make_coordinate(
        origin.latitude + radius_deg * math.cos(angle),
        origin.longitude
        + radius_deg * math.sin(angle) / math.cos(origin.latitude * math.pi / 180.0),
    )


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    return make_coordinate(
        (a.latitude + b.latitude) / 2, (a.longitude + b.longitude) / 2
    )


def make_coordinate(latitude: float, longitude: float) -> Coordinate:
    """Build a Coordinate, clamping latitude and wrapping longitude into range."""
    latitude = min(90.0, max(-90.0, latitude))
    if not -180.0 <= longitude <= 180.0:
        longitude = (longitude + 180.0) % 360.0 - 180.0
    return Coordinate(latitude=latitude, longitude=longitude)
