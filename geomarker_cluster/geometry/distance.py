"""
Great-Circle Distance Module
============================

Haversine distance on a spherical Earth.

Design:
- Pure functions (no state)
- Scalar version for single pairs, vectorized version for one-to-many scans
- NaN/Inf inputs propagate NaN, never raise
"""

import math

import numpy as np

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Haversine great-circle distance between two WGS-84 points.

    Args:
        lat1: Latitude of first point (degrees)
        lon1: Longitude of first point (degrees)
        lat2: Latitude of second point (degrees)
        lon2: Longitude of second point (degrees)

    Returns:
        Distance in kilometers (NaN if any input is NaN or infinite)
    """
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return math.nan

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a past 1 for near-antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_km(
    lat: float,
    lon: float,
    lats: np.ndarray,
    lons: np.ndarray,
) -> np.ndarray:
    """
    Haversine distance from one point to many (vectorized).

    Same formula as distance_km(), evaluated over numpy arrays.

    Args:
        lat: Latitude of the origin point (degrees)
        lon: Longitude of the origin point (degrees)
        lats: Array of target latitudes (degrees)
        lons: Array of target longitudes (degrees)

    Returns:
        Float array of distances in kilometers, NaN where inputs are not finite
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)

    with np.errstate(invalid="ignore"):
        d_lat = np.radians(lats - lat)
        d_lon = np.radians(lons - lon)

        a = (
            np.sin(d_lat / 2) ** 2
            + np.cos(np.radians(lat))
            * np.cos(np.radians(lats))
            * np.sin(d_lon / 2) ** 2
        )
        a = np.minimum(a, 1.0)
        c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
        result = EARTH_RADIUS_KM * c

    # Non-finite inputs map to NaN
    finite = np.isfinite(lats) & np.isfinite(lons) & math.isfinite(lat) & math.isfinite(lon)
    return np.where(finite, result, np.nan)
