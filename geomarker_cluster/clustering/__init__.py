"""
Clustering Layer
================

Bounded Context: Turning visible items into render primitives.

Responsibilities:
- Greedy proximity grouping (singletons + clusters)
- Capping the primitive count
- NO viewport logic, NO logging, NO I/O

Design Philosophy:
- Pure functions
- Immutable outputs (ClusterResult)
- Deterministic: same input order, same output
"""

from geomarker_cluster.clustering.clusterer import (
    ClusterResult,
    cluster,
    total_item_count,
)
from geomarker_cluster.clustering.limiter import limit

__all__ = [
    "ClusterResult",
    "cluster",
    "total_item_count",
    "limit",
]
