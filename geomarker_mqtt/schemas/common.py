"""
Common Schema Types
==================

Bounded Context: Shared Data Structures

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Serialization: to_dict() for JSON export
- Validation: Constructor validates invariants

Types:
- Timestamp: ISO 8601 timestamp wrapper
- ViewportSchema: Viewport as sent over the wire
"""

import math
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, Any


@dataclass(frozen=True)
class Timestamp:
    """
    Immutable ISO 8601 timestamp wrapper.

    Attributes:
        value: ISO 8601 formatted timestamp string

    Example:
        >>> ts = Timestamp.now()
        >>> ts.value
        '2025-10-24T15:30:45.123456+00:00'
    """
    value: str

    @classmethod
    def now(cls) -> 'Timestamp':
        """Create timestamp from current UTC time."""
        return cls(value=datetime.now(timezone.utc).isoformat())

    def to_datetime(self) -> datetime:
        """Parse to datetime object.

        Raises:
            ValueError: If timestamp format invalid
        """
        try:
            return datetime.fromisoformat(self.value)
        except ValueError as e:
            raise ValueError(f"Invalid ISO timestamp: {self.value}") from e

    def to_dict(self) -> str:
        """Serialize to JSON (as string)."""
        return self.value


@dataclass(frozen=True)
class ViewportSchema:
    """
    Viewport echoed in marker messages so clients can match a snapshot to
    the region they asked for.

    Attributes:
        latitude: Center latitude (degrees)
        longitude: Center longitude (degrees)
        latitude_delta: Full latitude span (degrees)
        longitude_delta: Full longitude span (degrees)

    Invariants:
        - latitude_delta > 0
        - longitude_delta > 0
    """
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    def __post_init__(self):
        """Validate invariants."""
        if not (self.latitude_delta > 0 and math.isfinite(self.latitude_delta)):
            raise ValueError(f"latitude_delta must be > 0, got {self.latitude_delta}")
        if not (self.longitude_delta > 0 and math.isfinite(self.longitude_delta)):
            raise ValueError(f"longitude_delta must be > 0, got {self.longitude_delta}")

    @classmethod
    def from_viewport(cls, viewport: Any) -> 'ViewportSchema':
        """Copy fields from a geomarker_cluster Viewport."""
        return cls(
            latitude=viewport.latitude,
            longitude=viewport.longitude,
            latitude_delta=viewport.latitude_delta,
            longitude_delta=viewport.longitude_delta,
        )

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ViewportSchema':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        try:
            return cls(
                latitude=float(data['latitude']),
                longitude=float(data['longitude']),
                latitude_delta=float(data['latitude_delta']),
                longitude_delta=float(data['longitude_delta'])
            )
        except KeyError as e:
            raise ValueError(f"Missing required viewport field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid viewport data: {e}")
