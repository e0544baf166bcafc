"""
Sequential multi-dataset execution with per-dataset failure isolation.
"""

import json

import pytest

from core.models import Coordinate, ResultStatus
from infrastructure.earth_engine import EarthEngineClient
from services.dataset_registry import DEFAULT_REGISTRY
from services.sensor_query import SensorQueryExecutor


@pytest.fixture
def executor(http_client, google):
    client = EarthEngineClient(http_client, project_id=google.project, access_token=google.access_token)
    return SensorQueryExecutor(DEFAULT_REGISTRY, client)


@pytest.fixture
def point():
    return Coordinate(lat=-2.8, lon=-60.3)


class TestRun:
    def test_one_call_per_dataset_in_order(self, executor, google, point):
        executor.run(point)
        loaded = [json.loads(r.content) for r in google.ee_requests()]
        assert len(loaded) == 7
        order = [str(body) for body in loaded]
        for descriptor, body in zip(DEFAULT_REGISTRY, order):
            assert descriptor.remote_id in body

    def test_all_success(self, executor, point):
        results = executor.run(point)
        assert list(results) == DEFAULT_REGISTRY.names()
        assert all(r.status == ResultStatus.SUCCESS for r in results.values())

    def test_default_scales_used_without_override(self, executor, point):
        results = executor.run(point)
        for descriptor in DEFAULT_REGISTRY:
            assert results[descriptor.name].scale == descriptor.default_scale

    def test_scale_override_applies_to_all(self, executor, point):
        results = executor.run(point, scale=50)
        assert {r.scale for r in results.values()} == {50}
        assert results["GEDI Aboveground Biomass"].default_scale == 927.7

    def test_scene_ids_only_for_sentinel(self, executor, google, point):
        results = executor.run(point)
        assert results["Sentinel-2 Surface Reflectance"].scene_id == google.s2_scene_id
        assert results["Sentinel-1 SAR"].scene_id == google.s1_scene_id
        others = [r for name, r in results.items() if "Sentinel" not in name]
        assert all(r.scene_id is None for r in others)


class TestFailureIsolation:
    def test_upstream_error_recorded_in_its_slot(self, executor, google, point):
        google.failing_assets["USGS/SRTMGL1_003"] = (404, "Image asset not found")
        results = executor.run(point)

        srtm = results["SRTM Digital Elevation"]
        assert srtm.status == ResultStatus.ERROR
        assert "Image asset not found" in srtm.error
        assert srtm.payload is None
        others = [r for name, r in results.items() if name != "SRTM Digital Elevation"]
        assert all(r.status == ResultStatus.SUCCESS for r in others)

    def test_transport_error_recorded_and_batch_continues(self, executor, google, point):
        google.transport_errors.append("COPERNICUS/S2_SR")
        results = executor.run(point)

        assert results["Sentinel-2 Surface Reflectance"].status == ResultStatus.ERROR
        assert results["Sentinel-2 Surface Reflectance"].scene_id is None
        assert len(google.ee_requests()) == 7
        assert results["Global Forest Change"].status == ResultStatus.SUCCESS

    def test_every_dataset_failing_still_returns_all(self, executor, google, point):
        google.compute_response = (500, "Internal error")
        results = executor.run(point)
        assert len(results) == 7
        assert all(r.status == ResultStatus.ERROR for r in results.values())
