import json
import logging

from geomarker_mqtt.logging import LogEvent, StructuredLogger, create_logger
from geomarker_mqtt.logging.structured import JSONFormatter


def read_entries(capsys):
    return [json.loads(line) for line in capsys.readouterr().err.splitlines()]


def test_info_event_is_one_json_line(capsys):
    logger = create_logger("test_logging_info")

    logger.info(
        event=LogEvent.MARKERS_LIMITED,
        message="Truncated markers",
        metadata={"before": 80, "after": 50},
    )

    (entry,) = read_entries(capsys)
    assert entry["level"] == "INFO"
    assert entry["component"] == "test_logging_info"
    assert entry["event"] == "markers.limited"
    assert entry["message"] == "Truncated markers"
    assert entry["metadata"] == {"before": 80, "after": 50}
    assert entry["timestamp"].endswith("+00:00")


def test_level_filters_events(capsys):
    logger = StructuredLogger(component="test_logging_level", level=logging.WARNING)

    logger.debug(event=LogEvent.MARKERS_FILTERED, message="hidden")
    logger.info(event=LogEvent.MARKERS_CLUSTERED, message="hidden")
    logger.warning(event=LogEvent.MQTT_PUBLISH_FAILED, message="shown")

    entries = read_entries(capsys)
    assert [e["message"] for e in entries] == ["shown"]
    assert "metadata" not in entries[0]


def test_error_carries_exception(capsys):
    logger = create_logger("test_logging_error")

    logger.error(
        event=LogEvent.SERIALIZATION_ERROR,
        message="Failed to serialize marker message",
        exc_info=ValueError("bad marker"),
    )

    (entry,) = read_entries(capsys)
    assert entry["level"] == "ERROR"
    assert entry["exception"] == {"type": "ValueError", "message": "bad marker"}


def test_formatter_handles_plain_records():
    record = logging.getLogger("geomarker.plain").makeRecord(
        "geomarker.plain", logging.INFO, __file__, 1, "hello %s", ("world",), None
    )

    entry = json.loads(JSONFormatter().format(record))

    assert entry["component"] == "geomarker.plain"
    assert entry["event"] is None
    assert entry["message"] == "hello world"
