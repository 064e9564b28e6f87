import math

import pytest

from geomarker_cluster import GeoItem, Viewport, filter_by_region
from geomarker_cluster.geometry.shapes import is_valid_coordinate


def test_filters_markers_outside_visible_region(sf_items, sf_viewport):
    result = filter_by_region(sf_items, sf_viewport, margin_percent=0)

    ids = [item.id for item in result]
    assert "3" not in ids
    assert "2" in ids


def test_keeps_input_order(sf_items, sf_viewport):
    reordered = [sf_items[1], sf_items[2], sf_items[0]]

    result = filter_by_region(reordered, sf_viewport, margin_percent=0)

    assert [item.id for item in result] == ["2", "1"]


def test_bounds_are_inclusive():
    viewport = Viewport(latitude=0.0, longitude=0.0, latitude_delta=2.0, longitude_delta=2.0)
    on_edge = GeoItem(id="edge", latitude=1.0, longitude=-1.0)

    assert filter_by_region([on_edge], viewport, margin_percent=0) == [on_edge]


def test_margin_expands_box(sf_viewport):
    # Top edge at 37.81, 20% margin adds 0.01
    just_north = GeoItem(id="n", latitude=37.815, longitude=-122.425)
    too_far = GeoItem(id="far", latitude=37.825, longitude=-122.425)

    assert filter_by_region([just_north], sf_viewport, margin_percent=0) == []
    assert filter_by_region([just_north], sf_viewport, margin_percent=20) == [just_north]
    assert filter_by_region([too_far], sf_viewport, margin_percent=20) == []


def test_default_margin_is_twenty_percent(sf_viewport):
    just_north = GeoItem(id="n", latitude=37.815, longitude=-122.425)

    assert filter_by_region([just_north], sf_viewport) == [just_north]


def test_negative_margin_shrinks_box(sf_viewport):
    near_edge = GeoItem(id="e", latitude=37.805, longitude=-122.425)

    assert filter_by_region([near_edge], sf_viewport, margin_percent=0) == [near_edge]
    assert filter_by_region([near_edge], sf_viewport, margin_percent=-20) == []


def test_out_of_range_coordinates_are_rejected():
    viewport = Viewport(latitude=0.0, longitude=0.0, latitude_delta=170.0, longitude_delta=350.0)
    items = [
        GeoItem(id="ok", latitude=10.0, longitude=10.0),
        GeoItem(id="lat", latitude=91.0, longitude=0.0),
        GeoItem(id="lon", latitude=0.0, longitude=-181.0),
        GeoItem(id="nan", latitude=math.nan, longitude=0.0),
    ]

    result = filter_by_region(items, viewport, margin_percent=100)

    assert [item.id for item in result] == ["ok"]


def test_empty_input(sf_viewport):
    assert filter_by_region([], sf_viewport, margin_percent=20) == []


def test_idempotent(sf_items, sf_viewport):
    once = filter_by_region(sf_items, sf_viewport, margin_percent=20)
    twice = filter_by_region(once, sf_viewport, margin_percent=20)

    assert twice == once


def test_does_not_mutate_input(sf_items, sf_viewport):
    snapshot = list(sf_items)

    filter_by_region(sf_items, sf_viewport, margin_percent=0)

    assert sf_items == snapshot


@pytest.mark.parametrize("lat_delta, lon_delta", [(0.0, 1.0), (1.0, -1.0), (math.nan, 1.0)])
def test_viewport_rejects_bad_deltas(lat_delta, lon_delta):
    with pytest.raises(ValueError):
        Viewport(latitude=0.0, longitude=0.0, latitude_delta=lat_delta, longitude_delta=lon_delta)


def test_viewport_bounds(sf_viewport):
    box = sf_viewport.bounds(margin_percent=0)

    assert box.min_latitude == pytest.approx(37.76)
    assert box.max_latitude == pytest.approx(37.81)
    assert box.min_longitude == pytest.approx(-122.45)
    assert box.max_longitude == pytest.approx(-122.40)


def test_is_valid_coordinate():
    assert is_valid_coordinate(90.0, 180.0)
    assert is_valid_coordinate(-90.0, -180.0)
    assert not is_valid_coordinate(90.0001, 0.0)
    assert not is_valid_coordinate(0.0, math.nan)
