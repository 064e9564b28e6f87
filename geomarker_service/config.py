"""
Configuration schema for the marker service.

This module defines the configuration structure for the marker service:
clustering parameters, MQTT publishing settings and log level.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from geomarker_cluster.pipeline import PipelineConfig
from geomarker_cluster.geometry.region import DEFAULT_MARGIN_PERCENT
from geomarker_cluster.clustering.clusterer import DEFAULT_RADIUS_KM
from geomarker_cluster.clustering.limiter import DEFAULT_MAX_MARKERS


@dataclass(frozen=True)
class ClusteringConfig:
    """Clustering parameters for the map screen."""

    radius_km: float = DEFAULT_RADIUS_KM
    margin_percent: float = DEFAULT_MARGIN_PERCENT
    max_markers: int = DEFAULT_MAX_MARKERS

    def __post_init__(self):
        """Validate clustering configuration."""
        for name in ("radius_km", "margin_percent"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {value!r}")

        if not math.isfinite(self.radius_km):
            raise ValueError(f"radius_km must be finite, got {self.radius_km}")

        if not math.isfinite(self.margin_percent) or self.margin_percent <= -50:
            raise ValueError(
                f"margin_percent must be finite and > -50, got {self.margin_percent}"
            )

        if isinstance(self.max_markers, bool) or not isinstance(self.max_markers, int):
            raise ValueError(f"max_markers must be an int, got {self.max_markers!r}")

    def to_pipeline_config(self) -> PipelineConfig:
        """Pipeline parameters for MarkerPipeline."""
        return PipelineConfig(
            margin_percent=self.margin_percent,
            radius_km=self.radius_km,
            max_markers=self.max_markers,
        )


@dataclass(frozen=True)
class MQTTConfig:
    """MQTT broker configuration."""

    broker: str = "localhost"
    port: int = 1883
    username: Optional[str] = None
    password: Optional[str] = None
    qos: int = 0  # Fire-and-forget
    retain: bool = True

    marker_topic: str = "geomarker/data/markers/{service_id}"

    def __post_init__(self):
        """Validate MQTT configuration."""
        if not self.broker:
            raise ValueError("MQTT broker cannot be empty")

        if not 1 <= self.port <= 65535:
            raise ValueError(
                f"MQTT port must be in [1, 65535], got {self.port}"
            )

        if self.qos not in {0, 1, 2}:
            raise ValueError(
                f"MQTT QoS must be 0, 1, or 2, got {self.qos}"
            )

    def topic_for(self, service_id: str) -> str:
        """Marker topic with the service id filled in."""
        return self.marker_topic.format(service_id=service_id)


@dataclass(frozen=True)
class ServiceConfig:
    """
    Main configuration for the marker service.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    service_id: str
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    mqtt_config: MQTTConfig = field(default_factory=MQTTConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate service configuration."""
        if not self.service_id:
            raise ValueError("service_id cannot be empty")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Invalid log_level: {self.log_level}")

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level.upper())

    @property
    def marker_topic(self) -> str:
        """Resolved MQTT topic for marker snapshots."""
        return self.mqtt_config.topic_for(self.service_id)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ServiceConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            service_id: "map_home"
            log_level: "INFO"

            clustering:
              radius_km: 0.5
              margin_percent: 20
              max_markers: 50

            mqtt_config:
              broker: "localhost"
              port: 1883
              username: null
              password: null
              marker_topic: "geomarker/data/markers/{service_id}"
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceConfig":
        """Build from an already parsed mapping (see from_yaml for layout)."""
        if not isinstance(data, dict):
            raise ValueError(f"Service config must be a mapping, got {type(data).__name__}")
        if "service_id" not in data:
            raise ValueError("service_id is required")

        try:
            clustering = ClusteringConfig(**(data.get("clustering") or {}))
            mqtt_config = MQTTConfig(**(data.get("mqtt_config") or {}))
        except TypeError as e:
            raise ValueError(f"Invalid service config: {e}") from e

        return cls(
            service_id=str(data["service_id"]),
            clustering=clustering,
            mqtt_config=mqtt_config,
            log_level=str(data.get("log_level", "INFO")),
        )
