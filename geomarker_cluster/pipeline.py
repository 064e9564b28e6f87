"""
Marker Pipeline Module
======================

Bounded Context: Orchestration of viewport filtering, clustering and limiting.

Design:
- Orchestrator: region filter -> proximity clusterer -> primitive limiter
- Builder pattern: Fluent configuration
- Fail Fast: Validation at build time, not at run time
- Holds only immutable configuration, so one pipeline serves many calls

Dependencies:
- geomarker_cluster.geometry (items, viewport, region filter)
- geomarker_cluster.clustering (clusterer, limiter)
- geomarker_mqtt.logging (structured logs)
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from geomarker_cluster.geometry.shapes import GeoItem, Viewport
from geomarker_cluster.geometry.region import filter_by_region, DEFAULT_MARGIN_PERCENT
from geomarker_cluster.clustering.clusterer import ClusterResult, cluster, DEFAULT_RADIUS_KM
from geomarker_cluster.clustering.limiter import limit, DEFAULT_MAX_MARKERS
from geomarker_mqtt.logging import StructuredLogger, LogEvent, create_logger


@dataclass(frozen=True)
class PipelineConfig:
    """
    Pipeline parameters (immutable).

    Attributes:
        margin_percent: Viewport expansion per side, percent of each span
        radius_km: Clustering radius in kilometers
        max_markers: Maximum primitives handed to the renderer
    """

    margin_percent: float = DEFAULT_MARGIN_PERCENT
    radius_km: float = DEFAULT_RADIUS_KM
    max_markers: int = DEFAULT_MAX_MARKERS

    def __post_init__(self):
        """Validate parameters."""
        if not math.isfinite(self.margin_percent):
            raise ValueError(f"margin_percent must be finite, got {self.margin_percent}")
        # At -50% each side the box collapses to nothing
        if self.margin_percent <= -50:
            raise ValueError(f"margin_percent must be > -50, got {self.margin_percent}")
        if not math.isfinite(self.radius_km):
            raise ValueError(f"radius_km must be finite, got {self.radius_km}")
        if isinstance(self.max_markers, bool) or not isinstance(self.max_markers, int):
            raise ValueError(f"max_markers must be an int, got {self.max_markers!r}")


@dataclass(frozen=True)
class PipelineResult:
    """
    Output of one pipeline run.

    Attributes:
        markers: Limited render primitives
        total_items: Items received
        visible_items: Items left after region filtering
        rejected_items: Items dropped for out-of-range coordinates
        cluster_count: Primitives produced by the clusterer (before limiting)
    """

    markers: List[ClusterResult] = field(default_factory=list)
    total_items: int = 0
    visible_items: int = 0
    rejected_items: int = 0
    cluster_count: int = 0

    @property
    def truncated(self) -> bool:
        """True if the limiter dropped primitives."""
        return len(self.markers) < self.cluster_count

    @property
    def marker_count(self) -> int:
        """Number of primitives to render."""
        return len(self.markers)


class MarkerPipeline:
    """
    Turns a raw item set + viewport into render primitives.

    Design:
    - Single Responsibility: orchestration only
    - Delegates computation to the pure geometry/clustering functions
    - Logs stage counts (DEBUG) and truncation (INFO)

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_radius_km(0.5)
            .with_margin_percent(20)
            .with_max_markers(50)
            .build()
        )

        result = pipeline.run(items, viewport)
        for marker in result.markers:
            ...
    """

    def __init__(self, config: PipelineConfig, logger: Optional[StructuredLogger] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration (validated)
            logger: Structured logger (default: component "pipeline")
        """
        self.config = config
        self.logger = logger or create_logger("pipeline")

    def run(self, items: Sequence[GeoItem], viewport: Viewport) -> PipelineResult:
        """
        Run filter -> cluster -> limit.

        Pipeline stages:
        1. Region filter (viewport + margin, invalid coordinates dropped)
        2. Proximity clustering (greedy leader grouping)
        3. Primitive limiting (first N)

        Args:
            items: Raw geo-tagged items
            viewport: Current map viewport

        Returns:
            PipelineResult with markers and stage counts
        """
        # 1. Region filter
        rejected = sum(1 for item in items if not item.is_valid)
        visible = filter_by_region(items, viewport, self.config.margin_percent)

        self.logger.debug(
            event=LogEvent.MARKERS_FILTERED,
            message=f"Filtered {len(items)} items to {len(visible)}",
            metadata={
                'total_items': len(items),
                'visible_items': len(visible),
                'rejected_items': rejected,
                'margin_percent': self.config.margin_percent,
            }
        )

        # 2. Cluster
        clustered = cluster(visible, self.config.radius_km)

        self.logger.debug(
            event=LogEvent.MARKERS_CLUSTERED,
            message=f"Grouped {len(visible)} items into {len(clustered)} markers",
            metadata={
                'visible_items': len(visible),
                'cluster_count': len(clustered),
                'radius_km': self.config.radius_km,
            }
        )

        # 3. Limit
        markers = limit(clustered, self.config.max_markers)

        if len(markers) < len(clustered):
            self.logger.info(
                event=LogEvent.MARKERS_LIMITED,
                message=f"Truncated {len(clustered)} markers to {len(markers)}",
                metadata={
                    'cluster_count': len(clustered),
                    'max_markers': self.config.max_markers,
                }
            )

        return PipelineResult(
            markers=list(markers),
            total_items=len(items),
            visible_items=len(visible),
            rejected_items=rejected,
            cluster_count=len(clustered),
        )


class PipelineBuilder:
    """
    Builder for MarkerPipeline.

    Design:
    - Fluent API for construction
    - Fail-fast validation in build()
    - Defaults from the map screen (20% margin, 0.5 km, 50 markers)

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_radius_km(1.0)
            .with_max_markers(100)
            .build()
        )
    """

    def __init__(self):
        self._margin_percent: float = DEFAULT_MARGIN_PERCENT
        self._radius_km: float = DEFAULT_RADIUS_KM
        self._max_markers: int = DEFAULT_MAX_MARKERS
        self._logger: Optional[StructuredLogger] = None

    def with_margin_percent(self, margin_percent: float) -> "PipelineBuilder":
        """Set viewport margin (percent of each span)."""
        self._margin_percent = margin_percent
        return self

    def with_radius_km(self, radius_km: float) -> "PipelineBuilder":
        """Set clustering radius in kilometers."""
        self._radius_km = radius_km
        return self

    def with_max_markers(self, max_markers: int) -> "PipelineBuilder":
        """Set maximum number of rendered primitives."""
        self._max_markers = max_markers
        return self

    def with_logger(self, logger: StructuredLogger) -> "PipelineBuilder":
        """Set structured logger."""
        self._logger = logger
        return self

    def with_config(self, config: PipelineConfig) -> "PipelineBuilder":
        """Copy all parameters from an existing config."""
        self._margin_percent = config.margin_percent
        self._radius_km = config.radius_km
        self._max_markers = config.max_markers
        return self

    def build(self) -> MarkerPipeline:
        """
        Build the pipeline.

        Returns:
            Configured pipeline

        Raises:
            ValueError: If a parameter is invalid
        """
        config = PipelineConfig(
            margin_percent=self._margin_percent,
            radius_km=self._radius_km,
            max_markers=self._max_markers,
        )
        return MarkerPipeline(config, logger=self._logger)
