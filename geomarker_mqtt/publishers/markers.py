"""
Marker Publisher
================

Bounded Context: Marker Snapshot Production

Design:
- Inherits from BasePublisher (connection management)
- Formats MarkerMessage to JSON
- Retained by default (latest snapshot per topic)

Message Flow:
    MarkerService → MarkerMessage → MarkerPublisher → MQTT Broker

Example:
    >>> from geomarker_mqtt.publishers import MarkerPublisher
    >>> from geomarker_mqtt.logging import create_logger
    >>>
    >>> publisher = MarkerPublisher(
    ...     broker_host="localhost",
    ...     topic="geomarker/data/markers/map_home",
    ...     logger=create_logger("publisher")
    ... )
    >>> publisher.connect()
    >>> publisher.publish_markers(msg)
"""

from typing import Dict, Any, Optional
from .base import BasePublisher
from ..schemas import MarkerMessage
from ..logging import StructuredLogger, LogEvent


class MarkerPublisher(BasePublisher):
    """
    Publisher for marker snapshot messages.

    Attributes:
        Same as BasePublisher, plus:
        schema_version: Current schema version for messages
        retain: Whether snapshots are retained by the broker
    """

    def __init__(
        self,
        broker_host: str,
        topic: str,
        logger: StructuredLogger,
        broker_port: int = 1883,
        client_id: str = "geomarker_publisher",
        username: Optional[str] = None,
        password: Optional[str] = None,
        qos: int = 0,
        retain: bool = True
    ):
        """
        Initialize marker publisher.

        Args:
            broker_host: MQTT broker hostname
            topic: Topic to publish marker messages
            logger: Structured logger instance
            broker_port: MQTT broker port (default: 1883)
            client_id: MQTT client ID (default: geomarker_publisher)
            username: MQTT auth username (optional)
            password: MQTT auth password (optional)
            qos: Quality of Service (default: 0)
            retain: Retain latest snapshot on the broker (default: True)
        """
        super().__init__(
            broker_host=broker_host,
            broker_port=broker_port,
            topic=topic,
            client_id=client_id,
            logger=logger,
            username=username,
            password=password,
            qos=qos
        )
        self.schema_version = "1.0"
        self.retain = retain

    def format_message(self, marker_msg: MarkerMessage) -> Dict[str, Any]:
        """
        Format MarkerMessage to JSON-compatible dict.

        Args:
            marker_msg: MarkerMessage instance

        Returns:
            Dictionary ready for JSON serialization

        Raises:
            ValueError: If marker_msg cannot be serialized
        """
        try:
            formatted = marker_msg.to_dict()
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Failed to serialize marker message",
                exc_info=e,
                metadata={'sequence': getattr(marker_msg, 'sequence', None)}
            )
            raise ValueError(f"Failed to format marker message: {e}") from e

        self.logger.debug(
            event=LogEvent.MARKERS_SERIALIZED,
            message="Serialized marker message",
            metadata={
                'sequence': marker_msg.sequence,
                'marker_count': marker_msg.marker_count,
                'service_id': marker_msg.service_id
            }
        )
        return formatted

    def publish_markers(self, marker_msg: MarkerMessage) -> bool:
        """
        Publish a marker snapshot.

        Args:
            marker_msg: MarkerMessage instance

        Returns:
            True if published successfully, False otherwise
        """
        message_data = self.format_message(marker_msg)
        success = self.publish(message_data, retain=self.retain)

        if success:
            self.logger.info(
                event=LogEvent.MARKERS_PUBLISHED,
                message=f"Published {marker_msg.marker_count} markers",
                metadata={
                    'sequence': marker_msg.sequence,
                    'marker_count': marker_msg.marker_count,
                    'item_count': marker_msg.item_count,
                    'truncated': marker_msg.truncated
                }
            )

        return success
