"""Spherical-earth helpers. Latitudes/longitudes in degrees, distances in metres.

The sphere radius is the mean earth radius plus an optional altitude offset,
so horizontal steps flown high up cover slightly fewer degrees.
"""
import math

from .models import Position

EARTH_RADIUS_M = 6371000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float, altitude: float = 0.0) -> float:
    """Haversine great-circle distance (m)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))
    return (EARTH_RADIUS_M + altitude) * c


def bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing from point 1 to point 2, degrees in [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lon2 - lon1)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = (
        math.cos(phi1) * math.sin(phi2)
        - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
    )
    return normalize_heading(math.degrees(math.atan2(y, x)))


def destination(lat: float, lon: float, distance_m: float, bearing_deg: float,
                altitude: float = 0.0) -> Position:
    """Point reached after travelling ``distance_m`` along ``bearing_deg``."""
    phi1 = math.radians(lat)
    lambda1 = math.radians(lon)
    delta = distance_m / (EARTH_RADIUS_M + altitude)   # angular distance
    theta = math.radians(bearing_deg)

    sin_phi2 = (
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return Position(math.degrees(phi2), math.degrees(lambda2))


def normalize_heading(deg: float) -> float:
    h = deg % 360.0
    # -1e-15 % 360.0 rounds to 360.0
    if h >= 360.0:
        h = 0.0
    return h


def heading_difference(from_deg: float, to_deg: float) -> float:
    """Signed shortest turn from ``from_deg`` to ``to_deg``, in [-180, 180].

    Positive is a right (clockwise) turn.
    """
    diff = (to_deg - from_deg) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff
