"""
Structured Logging for Geomarker
================================

Bounded Context: Observability

JSON-structured logging shared by the pipeline, service and publishers.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from geomarker_mqtt.logging import StructuredLogger, LogEvent
    >>> logger = StructuredLogger(component="pipeline")
    >>> logger.info(
    ...     event=LogEvent.MARKERS_CLUSTERED,
    ...     message="Clustered 40 items into 12 markers",
    ...     metadata={'visible_items': 40, 'cluster_count': 12}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
