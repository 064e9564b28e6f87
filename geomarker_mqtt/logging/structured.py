"""
Structured JSON Logger
======================

Bounded Context: Observability Infrastructure

Each record is one JSON object per line:

    {"timestamp": "2025-10-24T15:30:45.123456+00:00", "level": "INFO",
     "component": "pipeline", "event": "markers.limited",
     "message": "Truncated markers", "metadata": {"before": 80, "after": 50}}

Loggers live under the ``geomarker.`` namespace of the standard logging
tree. Structured fields travel on the LogRecord (``extra``) and are
rendered by JSONFormatter, so any handler can be given the formatter.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional

from .events import LogEvent

LOGGER_NAMESPACE = "geomarker"


class JSONFormatter(logging.Formatter):
    """Render a record carrying StructuredLogger fields as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', record.name),
            'event': getattr(record, 'event', None),
            'message': record.getMessage(),
        }

        metadata = getattr(record, 'metadata', None)
        if metadata:
            entry['metadata'] = metadata

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            entry['exception'] = {'type': type(error).__name__, 'message': str(error)}

        return json.dumps(entry, default=str)


class StructuredLogger:
    """
    Logger emitting typed events with metadata.

    Attributes:
        component: Component name ("pipeline", "service", "publisher")
        logger: Underlying ``geomarker.<component>`` logger
    """

    def __init__(self, component: str, level: int = logging.INFO):
        self.component = component
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{component}")
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: int,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(
            level,
            message,
            exc_info=exc_info,
            extra={
                'component': self.component,
                'event': event.value,
                'metadata': metadata,
            },
        )

    def debug(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, event, message, metadata)

    def info(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, event, message, metadata)

    def warning(self, event: LogEvent, message: str, metadata: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log an error event.

        Args:
            event: Typed log event (usually an ``error.*`` event)
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception whose type and message are added to the record
        """
        self._log(logging.ERROR, event, message, metadata, exc_info)


def create_logger(component: str, level: int = logging.INFO) -> StructuredLogger:
    """StructuredLogger for a component, e.g. ``create_logger("pipeline")``."""
    return StructuredLogger(component=component, level=level)
