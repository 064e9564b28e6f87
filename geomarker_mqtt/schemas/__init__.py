"""
Geomarker MQTT Schemas
======================

Bounded Context: Data Structures

Immutable, typed data structures for marker snapshot messages.

Design:
- Frozen dataclasses (immutability)
- to_dict() for JSON serialization
- from_dict() for deserialization
- Schema versioning for evolution

Public API
----------
Common Types:
    Timestamp: ISO 8601 timestamp wrapper
    ViewportSchema: Viewport echoed with each snapshot

Marker Types:
    MarkerSchema: Single render primitive
    MarkerMessage: Complete marker snapshot
"""

from .common import Timestamp, ViewportSchema
from .markers import MarkerSchema, MarkerMessage

__all__ = [
    'Timestamp',
    'ViewportSchema',
    'MarkerSchema',
    'MarkerMessage',
]
