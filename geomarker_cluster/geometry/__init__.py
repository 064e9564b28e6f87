"""
Geometry Layer
==============

Bounded Context: Geographic primitives and viewport queries.

Responsibilities:
- Item and viewport representation (immutable)
- Great-circle distance
- Viewport bounding box + margin filtering
- NO state, NO clustering, NO rendering

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation for viewports, graceful exclusion for items
"""

from geomarker_cluster.geometry.distance import distance_km, distances_km
from geomarker_cluster.geometry.shapes import (
    BoundingBox,
    GeoItem,
    Viewport,
    is_valid_coordinate,
)
from geomarker_cluster.geometry.region import filter_by_region

__all__ = [
    "distance_km",
    "distances_km",
    "BoundingBox",
    "GeoItem",
    "Viewport",
    "is_valid_coordinate",
    "filter_by_region",
]
