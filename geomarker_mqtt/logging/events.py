"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators (Elasticsearch, CloudWatch Insights)

Event Naming Convention:
    <component>.<category>.<action>

    component: mqtt, markers, error
    category: connected, publish, filtered
    action: success, failed

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, message, metadata.visible_items
    | filter event = "markers.filtered"
    | stats avg(metadata.visible_items) by bin(5m)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - mqtt.*: MQTT broker interactions
    - markers.*: Marker pipeline stages
    - config.*: Configuration loading
    - error.*: Error conditions
    """

    # ========== MQTT Events ==========
    MQTT_CONNECTED = "mqtt.connected"
    """MQTT broker connection established."""

    MQTT_DISCONNECTED = "mqtt.disconnected"
    """MQTT broker connection lost."""

    MQTT_PUBLISH_SUCCESS = "mqtt.publish.success"
    """Message successfully published to broker."""

    MQTT_PUBLISH_FAILED = "mqtt.publish.failed"
    """Message publication failed."""

    # ========== Marker Pipeline Events ==========
    MARKERS_FILTERED = "markers.filtered"
    """Items restricted to the viewport (+ margin)."""

    MARKERS_CLUSTERED = "markers.clustered"
    """Visible items grouped into clusters and singletons."""

    MARKERS_LIMITED = "markers.limited"
    """Primitive list truncated to the render cap."""

    MARKERS_SERIALIZED = "markers.serialized"
    """Marker message serialized to JSON."""

    MARKERS_PUBLISHED = "markers.published"
    """Marker message published for render clients."""

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Service configuration loaded and validated."""

    # ========== Error Events ==========
    SERIALIZATION_ERROR = "error.serialization"
    """Failed to serialize message to JSON."""

    MQTT_CONNECTION_ERROR = "error.mqtt_connection"
    """Failed to connect to MQTT broker."""

    MQTT_PUBLISH_ERROR = "error.mqtt_publish"
    """Error during message publication."""

