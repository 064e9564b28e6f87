"""
Geomarker Cluster Engine v1.0
=============================

Bounded Context: Map marker aggregation for geo-tagged posts and live streams.

Design Philosophy:
- Separation of Concerns: Geometry, Clustering, Orchestration separated
- Pure functions, immutable values, no engine state between calls
- O(n^2) clustering on purpose: inputs are viewport-bounded (tens to
  low hundreds of items)

Architecture:

    geomarker_cluster/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── distance.py    # Haversine distance (scalar + vectorized)
    │   ├── shapes.py      # GeoItem, Viewport, BoundingBox
    │   └── region.py      # filter_by_region
    │
    ├── clustering/        # Render primitives (stateless)
    │   ├── clusterer.py   # cluster, ClusterResult
    │   └── limiter.py     # limit
    │
    └── pipeline.py        # Orchestration (filter -> cluster -> limit)

Usage:

    # 1. Describe items and the viewport
    from geomarker_cluster import GeoItem, Viewport

    items = [
        GeoItem(id="post_1", latitude=37.7851, longitude=-122.4250),
        GeoItem(id="live_7", latitude=37.7853, longitude=-122.4248),
    ]
    viewport = Viewport(
        latitude=37.785, longitude=-122.425,
        latitude_delta=0.05, longitude_delta=0.05,
    )

    # 2. Use the stages directly
    from geomarker_cluster import filter_by_region, cluster, limit

    visible = filter_by_region(items, viewport, margin_percent=20)
    markers = limit(cluster(visible, radius_km=0.5), max_items=50)

    # 3. Or use the pipeline
    from geomarker_cluster import PipelineBuilder

    pipeline = PipelineBuilder().with_radius_km(0.5).build()
    result = pipeline.run(items, viewport)
"""

# Geometry Layer (immutable, stateless)
from geomarker_cluster.geometry.distance import distance_km, distances_km
from geomarker_cluster.geometry.shapes import GeoItem, Viewport, BoundingBox
from geomarker_cluster.geometry.region import filter_by_region

# Clustering Layer (stateless)
from geomarker_cluster.clustering.clusterer import ClusterResult, cluster, total_item_count
from geomarker_cluster.clustering.limiter import limit

# Pipeline (orchestration)
from geomarker_cluster.pipeline import (
    MarkerPipeline,
    PipelineBuilder,
    PipelineConfig,
    PipelineResult,
)

__all__ = [
    # Geometry
    "distance_km",
    "distances_km",
    "GeoItem",
    "Viewport",
    "BoundingBox",
    "filter_by_region",
    # Clustering
    "ClusterResult",
    "cluster",
    "total_item_count",
    "limit",
    # Pipeline
    "MarkerPipeline",
    "PipelineBuilder",
    "PipelineConfig",
    "PipelineResult",
]

__version__ = "1.0.0"
