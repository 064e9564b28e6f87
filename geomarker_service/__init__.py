"""
geomarker_service - Marker snapshot service

Wires the clustering pipeline to configuration and MQTT publishing.

Architecture:
- MarkerService: Orchestrator (pipeline + publisher)
- ServiceConfig: YAML configuration
- load_items: YAML/JSON item documents for batch runs
"""

from geomarker_service.config import ServiceConfig, ClusteringConfig, MQTTConfig
from geomarker_service.items import load_items, item_from_dict
from geomarker_service.service import MarkerService, build_message

__all__ = [
    "ServiceConfig",
    "ClusteringConfig",
    "MQTTConfig",
    "load_items",
    "item_from_dict",
    "MarkerService",
    "build_message",
]
