"""
Marker Service - wires configuration, pipeline and publisher.

Each call to process() turns the current item set + viewport into a
MarkerMessage and, when a publisher is attached, sends it to the broker.

Threading Model:
- The pipeline is stateless, so process() may run on any thread
- The sequence counter is protected by a lock
- Publishing goes through paho-mqtt's own network thread
"""

import threading
from typing import Optional, Sequence

from geomarker_cluster.geometry.shapes import GeoItem, Viewport
from geomarker_cluster.pipeline import MarkerPipeline, PipelineResult
from geomarker_mqtt.logging import StructuredLogger, LogEvent, create_logger
from geomarker_mqtt.publishers import MarkerPublisher
from geomarker_mqtt.schemas import MarkerMessage, MarkerSchema, Timestamp, ViewportSchema
from geomarker_service.config import ServiceConfig

SCHEMA_VERSION = "1.0"


def build_message(
    result: PipelineResult,
    viewport: Viewport,
    service_id: str,
    sequence: int,
) -> MarkerMessage:
    """
    Convert a pipeline result to a wire message.

    Args:
        result: Output of MarkerPipeline.run()
        viewport: Viewport the result was computed for
        service_id: Publishing service identifier
        sequence: Snapshot number

    Returns:
        MarkerMessage stamped with the current time
    """
    return MarkerMessage(
        schema_version=SCHEMA_VERSION,
        timestamp=Timestamp.now(),
        sequence=sequence,
        service_id=service_id,
        viewport=ViewportSchema.from_viewport(viewport),
        markers=[MarkerSchema.from_result(marker) for marker in result.markers],
        total_items=result.total_items,
        visible_items=result.visible_items,
        truncated=result.truncated,
    )


class MarkerService:
    """
    Marker snapshot service.

    Usage:
        config = ServiceConfig.from_yaml("config/service.yaml")
        service = MarkerService.from_config(config, publish=True)
        service.start()
        message = service.process(items, viewport)
        service.stop()
    """

    def __init__(
        self,
        config: ServiceConfig,
        pipeline: MarkerPipeline,
        publisher: Optional[MarkerPublisher] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize marker service.

        Args:
            config: Service configuration
            pipeline: Marker pipeline
            publisher: MQTT publisher (None = compute only)
            logger: Structured logger (default: component "service")
        """
        self.config = config
        self.pipeline = pipeline
        self.publisher = publisher
        self.logger = logger or create_logger("service", level=config.log_level_value)

        self._sequence = 0
        self._sequence_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ServiceConfig, publish: bool = False) -> "MarkerService":
        """
        Build the service and its collaborators from configuration.

        Args:
            config: Service configuration
            publish: Attach an MQTT publisher

        Returns:
            MarkerService (publisher not yet connected)
        """
        level = config.log_level_value
        pipeline = MarkerPipeline(
            config.clustering.to_pipeline_config(),
            logger=create_logger("pipeline", level=level),
        )

        publisher = None
        if publish:
            mqtt_config = config.mqtt_config
            publisher = MarkerPublisher(
                broker_host=mqtt_config.broker,
                broker_port=mqtt_config.port,
                topic=config.marker_topic,
                logger=create_logger("publisher", level=level),
                client_id=f"geomarker_{config.service_id}",
                username=mqtt_config.username,
                password=mqtt_config.password,
                qos=mqtt_config.qos,
                retain=mqtt_config.retain,
            )

        service = cls(config, pipeline, publisher, create_logger("service", level=level))
        service.logger.info(
            event=LogEvent.CONFIG_LOADED,
            message="Marker service configured",
            metadata={
                'service_id': config.service_id,
                'radius_km': config.clustering.radius_km,
                'margin_percent': config.clustering.margin_percent,
                'max_markers': config.clustering.max_markers,
                'publish': publish,
            }
        )
        return service

    def start(self, timeout: float = 10.0) -> bool:
        """
        Connect the publisher, if any.

        Returns:
            True when ready to process (always True without a publisher)
        """
        if self.publisher is None:
            return True
        return self.publisher.connect(timeout=timeout)

    def stop(self) -> None:
        """Disconnect the publisher, if any."""
        if self.publisher is not None:
            self.publisher.disconnect()

    def _next_sequence(self) -> int:
        with self._sequence_lock:
            sequence = self._sequence
            self._sequence += 1
            return sequence

    def process(self, items: Sequence[GeoItem], viewport: Viewport) -> MarkerMessage:
        """
        Compute (and publish) a marker snapshot.

        Args:
            items: Current geo-tagged items
            viewport: Current map viewport

        Returns:
            The MarkerMessage built for this call
        """
        result = self.pipeline.run(items, viewport)
        message = build_message(
            result, viewport, self.config.service_id, self._next_sequence()
        )

        if self.publisher is not None:
            self.publisher.publish_markers(message)

        return message

    def get_stats(self) -> dict:
        """Snapshot count and publisher statistics."""
        with self._sequence_lock:
            stats = {'service_id': self.config.service_id, 'snapshots': self._sequence}
        if self.publisher is not None:
            stats['publisher'] = self.publisher.get_stats()
        return stats
