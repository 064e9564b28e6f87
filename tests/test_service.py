import json
import logging

from geomarker_cluster import MarkerPipeline, PipelineConfig
from geomarker_mqtt import MarkerPublisher, StructuredLogger
from geomarker_mqtt.schemas import MarkerMessage, Timestamp, ViewportSchema
from geomarker_service import MarkerService, ServiceConfig


def make_service(quiet_logger, publisher=None):
    config = ServiceConfig(service_id="map_home", log_level="WARNING")
    pipeline = MarkerPipeline(PipelineConfig(margin_percent=0), logger=quiet_logger)
    return MarkerService(config, pipeline, publisher=publisher, logger=quiet_logger)


def make_publisher():
    return MarkerPublisher(
        broker_host="localhost",
        topic="geomarker/data/markers/map_home",
        logger=StructuredLogger(component="test_publisher", level=logging.ERROR),
    )


def test_process_without_publisher(sf_items, sf_viewport, quiet_logger):
    service = make_service(quiet_logger)

    assert service.start()
    message = service.process(sf_items, sf_viewport)

    assert message.service_id == "map_home"
    assert message.sequence == 0
    assert message.total_items == 3
    assert message.visible_items == 2
    assert [m.id for m in message.markers] == ["1", "2"]
    assert message.viewport == ViewportSchema.from_viewport(sf_viewport)


def test_sequence_increments(sf_items, sf_viewport, quiet_logger):
    service = make_service(quiet_logger)

    sequences = [service.process(sf_items, sf_viewport).sequence for _ in range(3)]

    assert sequences == [0, 1, 2]
    assert service.get_stats() == {"service_id": "map_home", "snapshots": 3}


def test_unconnected_publisher_does_not_block_processing(sf_items, sf_viewport, quiet_logger):
    publisher = make_publisher()
    service = make_service(quiet_logger, publisher=publisher)

    message = service.process(sf_items, sf_viewport)

    assert message.marker_count == 2
    assert service.get_stats()["publisher"]["message_count"] == 0


def test_from_config_wires_publisher():
    config = ServiceConfig.from_dict({"service_id": "explore", "log_level": "ERROR"})

    service = MarkerService.from_config(config, publish=True)

    assert service.publisher is not None
    assert service.publisher.topic == "geomarker/data/markers/explore"
    assert service.pipeline.config.max_markers == 50


def test_publisher_format_message():
    publisher = make_publisher()
    message = MarkerMessage(
        schema_version="1.0",
        timestamp=Timestamp.now(),
        sequence=0,
        service_id="map_home",
        viewport=ViewportSchema(0.0, 0.0, 1.0, 1.0),
    )

    formatted = publisher.format_message(message)

    assert formatted == message.to_dict()
    assert not publisher.is_connected()
    assert publisher.publish_markers(message) is False
    assert publisher.get_stats()["broker"] == "localhost:1883"


class StubPublishInfo:
    def __init__(self, rc):
        self.rc = rc


def test_publisher_counts_successful_publishes(monkeypatch):
    publisher = make_publisher()
    sent = []

    def fake_publish(topic, payload, qos=0, retain=False):
        sent.append((topic, payload, retain))
        return StubPublishInfo(0)

    monkeypatch.setattr(publisher.client, "publish", fake_publish)
    publisher._connected.set()
    message = MarkerMessage(
        schema_version="1.0",
        timestamp=Timestamp.now(),
        sequence=7,
        service_id="map_home",
        viewport=ViewportSchema(0.0, 0.0, 1.0, 1.0),
    )

    assert publisher.publish_markers(message) is True
    assert publisher.get_stats()["message_count"] == 1
    topic, payload, retain = sent[0]
    assert topic == "geomarker/data/markers/map_home"
    assert retain is True
    assert json.loads(payload) == message.to_dict()


def test_publisher_reports_rejected_publish(monkeypatch):
    publisher = make_publisher()

    def rejecting_publish(topic, payload, qos=0, retain=False):
        raise ValueError("Invalid topic.")

    monkeypatch.setattr(publisher.client, "publish", rejecting_publish)
    publisher._connected.set()

    assert publisher.publish({"markers": []}) is False
    assert publisher.get_stats()["message_count"] == 0
