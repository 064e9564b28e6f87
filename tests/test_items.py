import json

import pytest

from geomarker_service.items import item_from_dict, load_items

ITEMS_YAML = """
- id: post_1
  latitude: 37.78
  longitude: -122.43
  kind: post
- id: live_7
  latitude: "37.79"
  longitude: -122.42
"""


def test_load_yaml_list(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text(ITEMS_YAML)

    items = load_items(str(path))

    assert [item.id for item in items] == ["post_1", "live_7"]
    assert items[0].payload == {"kind": "post"}
    assert items[1].latitude == 37.79
    assert items[1].payload is None


def test_load_json_document_with_items_key(tmp_path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps({"items": [{"id": 3, "latitude": 1, "longitude": 2}]}))

    items = load_items(str(path))

    assert items[0].id == "3"
    assert (items[0].latitude, items[0].longitude) == (1.0, 2.0)


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_items("/nonexistent/items.yaml")


def test_document_must_be_a_list(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text("just a string")

    with pytest.raises(ValueError):
        load_items(str(path))


def test_entry_missing_coordinates():
    with pytest.raises(ValueError, match="latitude"):
        item_from_dict({"id": "x", "longitude": 0})


def test_out_of_range_coordinates_are_kept_for_the_filter():
    item = item_from_dict({"id": "x", "latitude": 120, "longitude": 0})

    assert not item.is_valid
