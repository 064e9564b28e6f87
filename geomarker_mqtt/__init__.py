"""
Geomarker MQTT Communication Package
====================================

Bounded Context: Delivery of marker snapshots to render clients

Architecture:
- schemas/: Immutable data structures with type safety
- publishers/: Message producers (MarkerPublisher)
- logging/: Structured JSON logging for observability

Design Philosophy:
- Type Safety: Leverage Python typing for correctness
- Immutability: Use frozen dataclasses for message DTOs
- Observability: Structured logs (JSON) for production queries

Public API
----------
Schemas:
    Timestamp, ViewportSchema
    MarkerSchema, MarkerMessage

Publishers:
    MarkerPublisher
    BasePublisher (for custom publishers)

Logging:
    LogEvent, StructuredLogger, create_logger

Example:
    >>> from geomarker_mqtt import MarkerPublisher, create_logger
    >>> from geomarker_mqtt.schemas import MarkerMessage, ViewportSchema, Timestamp
    >>>
    >>> logger = create_logger("publisher")
    >>> publisher = MarkerPublisher(
    ...     broker_host="localhost",
    ...     topic="geomarker/data/markers/map_home",
    ...     logger=logger
    ... )
    >>> publisher.connect()
    >>> publisher.publish_markers(msg)
"""

from .logging import LogEvent, StructuredLogger, create_logger
from .schemas import Timestamp, ViewportSchema, MarkerSchema, MarkerMessage
from .publishers import BasePublisher, MarkerPublisher

__all__ = [
    # Logging
    'LogEvent',
    'StructuredLogger',
    'create_logger',
    # Schemas
    'Timestamp',
    'ViewportSchema',
    'MarkerSchema',
    'MarkerMessage',
    # Publishers
    'BasePublisher',
    'MarkerPublisher',
]

__version__ = "1.0.0"
