"""
Marker Message Schema
=====================

Bounded Context: Marker Snapshot Data Structures

This module defines the schema for marker snapshots published via MQTT.

Design:
- MarkerSchema: One render primitive (singleton or cluster)
- MarkerMessage: Complete snapshot for one viewport
- Payloads are NOT serialized, only member ids

Message Flow:
    MarkerPipeline → MarkerMessage → MarkerPublisher → MQTT → Render client
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from .common import Timestamp, ViewportSchema


@dataclass(frozen=True)
class MarkerSchema:
    """
    Single render primitive as sent over the wire.

    For singletons:
        - id: the item id
        - count: None (omitted from JSON)
        - item_ids: [id]

    For clusters:
        - id: "cluster-<id>-<id>..."
        - latitude/longitude: centroid
        - count: number of members

    Invariants:
        - item_ids is never empty
        - count, when set, is >= 2 and equals len(item_ids)

    Example (Cluster):
        >>> marker = MarkerSchema(
        ...     id="cluster-1-2",
        ...     latitude=0.0005,
        ...     longitude=0.0005,
        ...     count=2,
        ...     item_ids=["1", "2"]
        ... )
    """
    id: str
    latitude: float
    longitude: float
    count: Optional[int] = None
    item_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate invariants."""
        if not self.item_ids:
            raise ValueError(f"Marker '{self.id}' must reference at least one item")
        if self.count is not None:
            if self.count < 2:
                raise ValueError(f"Cluster count must be >= 2, got {self.count}")
            if self.count != len(self.item_ids):
                raise ValueError(
                    f"Cluster count {self.count} does not match "
                    f"{len(self.item_ids)} item ids"
                )

    @classmethod
    def from_result(cls, result: Any) -> 'MarkerSchema':
        """Build from a geomarker_cluster ClusterResult."""
        return cls(
            id=result.id,
            latitude=result.latitude,
            longitude=result.longitude,
            count=result.count,
            item_ids=[item.id for item in result.items]
        )

    @property
    def is_cluster(self) -> bool:
        """True for aggregates."""
        return self.count is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict (count omitted for singletons)."""
        result = {
            'id': self.id,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'item_ids': list(self.item_ids)
        }
        if self.count is not None:
            result['count'] = self.count
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MarkerSchema':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            count = data.get('count')
            return cls(
                id=str(data['id']),
                latitude=float(data['latitude']),
                longitude=float(data['longitude']),
                count=int(count) if count is not None else None,
                item_ids=[str(i) for i in data['item_ids']]
            )
        except KeyError as e:
            raise ValueError(f"Missing required marker field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid marker data: {e}")


@dataclass(frozen=True)
class MarkerMessage:
    """
    Complete marker snapshot for MQTT publication.

    Attributes:
        schema_version: Message schema version (for evolution)
        timestamp: ISO 8601 timestamp of message creation
        sequence: Monotonic snapshot number per service
        service_id: Publishing service identifier
        viewport: Region the markers were computed for
        markers: Render primitives (already limited)
        total_items: Items received before filtering
        visible_items: Items inside viewport + margin
        truncated: True if the render cap dropped primitives

    Example:
        >>> msg = MarkerMessage(
        ...     schema_version="1.0",
        ...     timestamp=Timestamp.now(),
        ...     sequence=12,
        ...     service_id="map_home",
        ...     viewport=ViewportSchema(37.785, -122.425, 0.05, 0.05),
        ...     markers=[marker]
        ... )
    """
    schema_version: str
    timestamp: Timestamp
    sequence: int
    service_id: str
    viewport: ViewportSchema
    markers: List[MarkerSchema] = field(default_factory=list)
    total_items: int = 0
    visible_items: int = 0
    truncated: bool = False

    def __post_init__(self):
        """Validate invariants."""
        if self.sequence < 0:
            raise ValueError(f"Sequence must be >= 0, got {self.sequence}")
        if not self.service_id:
            raise ValueError("service_id cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            'schema_version': self.schema_version,
            'timestamp': self.timestamp.to_dict(),
            'sequence': self.sequence,
            'service_id': self.service_id,
            'viewport': self.viewport.to_dict(),
            'markers': [marker.to_dict() for marker in self.markers],
            'total_items': self.total_items,
            'visible_items': self.visible_items,
            'truncated': self.truncated
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MarkerMessage':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            return cls(
                schema_version=str(data['schema_version']),
                timestamp=Timestamp(value=data['timestamp']),
                sequence=int(data['sequence']),
                service_id=str(data['service_id']),
                viewport=ViewportSchema.from_dict(data['viewport']),
                markers=[
                    MarkerSchema.from_dict(marker)
                    for marker in data.get('markers', [])
                ],
                total_items=int(data.get('total_items', 0)),
                visible_items=int(data.get('visible_items', 0)),
                truncated=bool(data.get('truncated', False))
            )
        except KeyError as e:
            raise ValueError(f"Missing required MarkerMessage field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid MarkerMessage data: {e}")

    @property
    def marker_count(self) -> int:
        """Number of markers in this message."""
        return len(self.markers)

    @property
    def item_count(self) -> int:
        """Number of items represented by the markers."""
        return sum(len(marker.item_ids) for marker in self.markers)

    def get_marker_by_id(self, marker_id: str) -> Optional[MarkerSchema]:
        """Find marker by id, None if absent."""
        for marker in self.markers:
            if marker.id == marker_id:
                return marker
        return None

    def get_clusters(self) -> List[MarkerSchema]:
        """Markers aggregating two or more items."""
        return [marker for marker in self.markers if marker.is_cluster]
