"""
Proximity Clusterer Module
==========================

Stateless greedy grouping of nearby items into map primitives.

Design:
- Single pass, leader-based: each group is anchored on the earliest
  unvisited item and collects every unvisited item within the radius
- Star-shaped groups, NOT transitive (A~B and B~C does not pull C to A)
- O(n^2) scan, vectorized per leader with numpy
- Visited state is positional, so duplicate ids are still counted
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from geomarker_cluster.geometry.distance import distances_km
from geomarker_cluster.geometry.shapes import GeoItem

DEFAULT_RADIUS_KM = 0.5
CLUSTER_ID_PREFIX = "cluster"


@dataclass(frozen=True)
class ClusterResult:
    """
    Immutable render primitive: a single item or an aggregate of items.

    Design:
    - Tagged union pattern (count is None for singletons)
    - items always holds the members in input-encounter order

    Attributes:
        id: Item id (singleton) or synthetic id from member ids (cluster)
        latitude: Item latitude or centroid latitude (degrees)
        longitude: Item longitude or centroid longitude (degrees)
        count: Member count for clusters, None for singletons
        items: Member items
    """

    id: str
    latitude: float
    longitude: float
    count: Optional[int]
    items: Tuple[GeoItem, ...]

    @property
    def is_cluster(self) -> bool:
        """True for aggregates of two or more items."""
        return self.count is not None

    @property
    def size(self) -> int:
        """Number of items represented (1 for singletons)."""
        return len(self.items)

    @property
    def item_ids(self) -> List[str]:
        """Member ids in discovery order."""
        return [item.id for item in self.items]

    @classmethod
    def singleton(cls, item: GeoItem) -> "ClusterResult":
        """Wrap a lone item."""
        return cls(
            id=item.id,
            latitude=item.latitude,
            longitude=item.longitude,
            count=None,
            items=(item,),
        )

    @classmethod
    def aggregate(cls, members: Sequence[GeoItem]) -> "ClusterResult":
        """
        Build a cluster from two or more members.

        Args:
            members: Items in discovery order (leader first)

        Returns:
            ClusterResult with centroid = mean of member coordinates

        Raises:
            ValueError: If fewer than 2 members
        """
        if len(members) < 2:
            raise ValueError(f"A cluster needs at least 2 members, got {len(members)}")

        latitude = sum(m.latitude for m in members) / len(members)
        longitude = sum(m.longitude for m in members) / len(members)

        return cls(
            id="-".join([CLUSTER_ID_PREFIX] + [m.id for m in members]),
            latitude=latitude,
            longitude=longitude,
            count=len(members),
            items=tuple(members),
        )


def cluster(
    items: Sequence[GeoItem],
    radius_km: float = DEFAULT_RADIUS_KM,
) -> List[ClusterResult]:
    """
    Group items lying within radius_km of a group leader.

    Algorithm:
        1. Walk items in input order, skipping visited ones
        2. The first unvisited item becomes a leader and is marked visited
        3. Every other unvisited item within radius_km of the leader joins
           the group (in input order) and is marked visited
        4. One member -> singleton, two or more -> cluster

    A radius <= 0 (or NaN) never groups anything, even items at identical
    coordinates.

    Args:
        items: Items to group (typically the region-filtered set)
        radius_km: Grouping radius in kilometers (default: 0.5)

    Returns:
        New list of ClusterResult in leader order (empty for empty input)
    """
    if len(items) == 0:
        return []

    if not radius_km > 0:
        return [ClusterResult.singleton(item) for item in items]

    lats = np.array([item.latitude for item in items], dtype=np.float64)
    lons = np.array([item.longitude for item in items], dtype=np.float64)
    visited = np.zeros(len(items), dtype=bool)

    results: List[ClusterResult] = []
    for idx, leader in enumerate(items):
        if visited[idx]:
            continue
        visited[idx] = True

        # NaN distances compare False, so malformed items never join a group
        with np.errstate(invalid="ignore"):
            near = distances_km(leader.latitude, leader.longitude, lats, lons) <= radius_km
        joined = np.flatnonzero(near & ~visited)
        visited[joined] = True

        if len(joined) == 0:
            results.append(ClusterResult.singleton(leader))
        else:
            members = [leader] + [items[j] for j in joined]
            results.append(ClusterResult.aggregate(members))

    return results


def total_item_count(results: Sequence[ClusterResult]) -> int:
    """
    Number of input items represented by a result list.

    Args:
        results: Output of cluster()

    Returns:
        sum(count or 1) over results
    """
    return sum(r.count or 1 for r in results)

