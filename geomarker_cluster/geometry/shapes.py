"""
Geographic Shapes Module
========================

Pure geographic value objects - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Viewport validates at construction, items are validated by the region filter
- Thread-safe by design (immutability)
"""

import math
from dataclasses import dataclass
from typing import Any

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """
    Check WGS-84 ranges (NaN is never valid).

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        True if latitude in [-90, 90] and longitude in [-180, 180]
    """
    return (
        MIN_LATITUDE <= latitude <= MAX_LATITUDE
        and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE
    )


@dataclass(frozen=True)
class GeoItem:
    """
    Immutable geo-tagged item (post, live stream, ...).

    The engine only reads id and coordinates; payload is carried through
    untouched so the caller can render it.

    Attributes:
        id: Stable identifier
        latitude: WGS-84 latitude (degrees)
        longitude: WGS-84 longitude (degrees)
        payload: Opaque caller reference
    """

    id: str
    latitude: float
    longitude: float
    payload: Any = None

    @property
    def is_valid(self) -> bool:
        """True if coordinates are inside WGS-84 ranges."""
        return is_valid_coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class BoundingBox:
    """
    Inclusive latitude/longitude box.

    Attributes:
        min_latitude: Southern edge (degrees)
        max_latitude: Northern edge (degrees)
        min_longitude: Western edge (degrees)
        max_longitude: Eastern edge (degrees)
    """

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """
        Check if a point lies inside the box (edges included).

        Args:
            latitude: Point latitude (degrees)
            longitude: Point longitude (degrees)

        Returns:
            True if inside on both axes
        """
        return (
            self.min_latitude <= latitude <= self.max_latitude
            and self.min_longitude <= longitude <= self.max_longitude
        )


@dataclass(frozen=True)
class Viewport:
    """
    Immutable visible map region.

    Deltas are the FULL span of the visible region, centered on
    (latitude, longitude).

    Attributes:
        latitude: Center latitude (degrees)
        longitude: Center longitude (degrees)
        latitude_delta: Full visible latitude span (degrees, > 0)
        longitude_delta: Full visible longitude span (degrees, > 0)
    """

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    def __post_init__(self):
        """Validate spans."""
        if not (self.latitude_delta > 0 and math.isfinite(self.latitude_delta)):
            raise ValueError(f"latitude_delta must be > 0, got {self.latitude_delta}")
        if not (self.longitude_delta > 0 and math.isfinite(self.longitude_delta)):
            raise ValueError(f"longitude_delta must be > 0, got {self.longitude_delta}")

    def bounds(self, margin_percent: float = 0.0) -> BoundingBox:
        """
        Bounding box of the viewport expanded by a percentage margin.

        margin = delta * margin_percent / 100, added on each side.
        Negative margins shrink the box.

        Args:
            margin_percent: Expansion as a percentage of each span

        Returns:
            BoundingBox (not clamped to WGS-84 ranges)
        """
        margin_lat = self.latitude_delta * margin_percent / 100
        margin_lon = self.longitude_delta * margin_percent / 100

        half_lat = self.latitude_delta / 2
        half_lon = self.longitude_delta / 2

        return BoundingBox(
            min_latitude=self.latitude - half_lat - margin_lat,
            max_latitude=self.latitude + half_lat + margin_lat,
            min_longitude=self.longitude - half_lon - margin_lon,
            max_longitude=self.longitude + half_lon + margin_lon,
        )
