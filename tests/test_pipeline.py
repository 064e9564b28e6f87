import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from geomarker_cluster import (
    GeoItem,
    MarkerPipeline,
    PipelineBuilder,
    PipelineConfig,
    Viewport,
    cluster,
    filter_by_region,
    limit,
)


def test_builder_defaults():
    pipeline = PipelineBuilder().build()

    assert pipeline.config == PipelineConfig(margin_percent=20.0, radius_km=0.5, max_markers=50)


def test_builder_fluent_configuration(quiet_logger):
    pipeline = (
        PipelineBuilder()
        .with_margin_percent(0)
        .with_radius_km(0.1)
        .with_max_markers(10)
        .with_logger(quiet_logger)
        .build()
    )

    assert pipeline.config.margin_percent == 0
    assert pipeline.config.radius_km == 0.1
    assert pipeline.config.max_markers == 10
    assert pipeline.logger is quiet_logger


@pytest.mark.parametrize(
    "kwargs",
    [
        {"radius_km": math.inf},
        {"radius_km": math.nan},
        {"margin_percent": -50},
        {"margin_percent": math.nan},
        {"max_markers": 1.5},
        {"max_markers": True},
    ],
)
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        PipelineConfig(**kwargs)


def test_run_matches_manual_composition(sf_items, sf_viewport, quiet_logger):
    pipeline = MarkerPipeline(PipelineConfig(margin_percent=0, radius_km=0.5), logger=quiet_logger)

    result = pipeline.run(sf_items, sf_viewport)

    expected = limit(cluster(filter_by_region(sf_items, sf_viewport, 0), 0.5), 50)
    assert result.markers == expected
    assert result.total_items == 3
    assert result.visible_items == 2
    assert result.rejected_items == 0
    assert not result.truncated


def test_run_counts_rejected_items(sf_viewport, quiet_logger):
    items = [
        GeoItem(id="ok", latitude=37.79, longitude=-122.42),
        GeoItem(id="bad", latitude=137.79, longitude=-122.42),
    ]
    pipeline = MarkerPipeline(PipelineConfig(), logger=quiet_logger)

    result = pipeline.run(items, sf_viewport)

    assert result.rejected_items == 1
    assert [m.id for m in result.markers] == ["ok"]


def test_run_truncates_to_max_markers(quiet_logger):
    viewport = Viewport(latitude=0.0, longitude=0.0, latitude_delta=20.0, longitude_delta=20.0)
    # 1 degree apart, never clustered at 0.5 km
    items = [GeoItem(id=str(i), latitude=0.0, longitude=float(i - 5)) for i in range(10)]
    pipeline = MarkerPipeline(PipelineConfig(max_markers=4), logger=quiet_logger)

    result = pipeline.run(items, viewport)

    assert result.cluster_count == 10
    assert result.marker_count == 4
    assert result.truncated
    assert [m.id for m in result.markers] == ["0", "1", "2", "3"]


def test_run_empty_input(sf_viewport, quiet_logger):
    result = MarkerPipeline(PipelineConfig(), logger=quiet_logger).run([], sf_viewport)

    assert result.markers == []
    assert result.total_items == 0
    assert not result.truncated


def test_pipeline_is_reusable(three_items, quiet_logger):
    viewport = Viewport(latitude=0.5, longitude=0.5, latitude_delta=2.0, longitude_delta=2.0)
    pipeline = MarkerPipeline(PipelineConfig(), logger=quiet_logger)

    first = pipeline.run(three_items, viewport)
    second = pipeline.run(three_items, viewport)

    assert first == second
    assert [m.id for m in first.markers] == ["cluster-1-2", "3"]


def test_shared_pipeline_across_threads(quiet_logger):
    viewport = Viewport(latitude=0.0, longitude=0.0, latitude_delta=4.0, longitude_delta=4.0)
    # Pairs 0.001 deg apart, pairs 0.1 deg apart from each other
    items = [
        GeoItem(id=f"{i}", latitude=(i // 2) * 0.1 - 1.0, longitude=(i % 2) * 0.001)
        for i in range(40)
    ]
    pipeline = MarkerPipeline(PipelineConfig(max_markers=15), logger=quiet_logger)
    expected = pipeline.run(items, viewport)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(lambda _: pipeline.run(items, viewport), range(32)))

    assert expected.cluster_count == 20
    assert expected.truncated
    assert all(result == expected for result in results)
    assert [item.id for item in items] == [str(i) for i in range(40)]
