import logging

import pytest

from geomarker_cluster import GeoItem, Viewport
from geomarker_mqtt.logging import StructuredLogger


@pytest.fixture
def three_items():
    """Two items ~157 m apart near the origin, one far away at (1, 1)."""
    return [
        GeoItem(id="1", latitude=0.0, longitude=0.0, payload={"title": "A"}),
        GeoItem(id="2", latitude=0.001, longitude=0.001, payload={"title": "B"}),
        GeoItem(id="3", latitude=1.0, longitude=1.0, payload={"title": "C"}),
    ]


@pytest.fixture
def sf_viewport():
    return Viewport(
        latitude=37.785,
        longitude=-122.425,
        latitude_delta=0.05,
        longitude_delta=0.05,
    )


@pytest.fixture
def sf_items():
    return [
        GeoItem(id="1", latitude=37.78, longitude=-122.43),
        GeoItem(id="2", latitude=37.79, longitude=-122.42),
        GeoItem(id="3", latitude=39.0, longitude=-120.0),
    ]


@pytest.fixture
def quiet_logger():
    return StructuredLogger(component="test", level=logging.WARNING)
