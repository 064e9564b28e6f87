"""
MQTT Publishers
==============

Bounded Context: Message Production

Design:
- BasePublisher: Abstract base with connection management
- MarkerPublisher: Publishes marker snapshots

Public API
----------
    BasePublisher: Abstract publisher (for custom publishers)
    MarkerPublisher: Marker snapshot publisher
"""

from .base import BasePublisher
from .markers import MarkerPublisher

__all__ = [
    'BasePublisher',
    'MarkerPublisher',
]
