"""Great-circle distance on a spherical Earth.

Haversine is accurate to well under 0.5% at track-point spacing, which is
all the slope calculation needs.
"""

import math

# Earth's mean radius in meters
EARTH_RADIUS_M = 6_371_000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2

    # Rounding can push a a hair past 1 for antipodal points
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(a, 1.0)))


def point_distance(a, b) -> float:
    """Distance in meters between two objects with lat/lon attributes."""
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)
