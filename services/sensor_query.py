# ============================================================================
# CLAUDE CONTEXT - SENSOR QUERY EXECUTOR
# ============================================================================
# STATUS: Service Layer - multi-dataset value:compute fan-in
# PURPOSE: Query every registered dataset for one point, isolating failures
# EXPORTS: SensorQueryExecutor
# DEPENDENCIES: httpx, core.models, infrastructure.earth_engine
# ============================================================================
"""
Sensor Query Executor.

Runs one value:compute call per registered dataset, strictly sequentially,
and records exactly one outcome per dataset:

    success -> DatasetResult(status=success, data=<raw payload>, sceneId?)
    error   -> DatasetResult(status=error, error=<upstream status/text or transport error>)

A failing dataset never aborts the batch: every registered dataset appears
in the result, in registry order. Failures outside the per-dataset call
(credentials, token exchange) happen before the executor runs and are the
trigger's concern.
"""

from typing import Dict, Optional

import httpx

from core.models import Coordinate, DatasetResult, ResultStatus
from exceptions import UpstreamError
from infrastructure.earth_engine import EarthEngineClient
from util_logger import LoggerFactory, ComponentType
from .dataset_registry import DatasetDescriptor, DatasetRegistry
from .expressions import sensor_expression, to_compute_request
from .scene_id import extract_scene_id


class SensorQueryExecutor:
    """
    Queries all datasets in a registry through one EarthEngineClient.

    Usage:
        executor = SensorQueryExecutor(DEFAULT_REGISTRY, client)
        results = executor.run(coordinate, scale=30)
    """

    def __init__(self, registry: DatasetRegistry, client: EarthEngineClient):
        self.registry = registry
        self.client = client
        self.logger = LoggerFactory.create_logger(ComponentType.SERVICE, "SensorQueryExecutor")

    def run(self, coordinate: Coordinate, scale: Optional[float] = None) -> Dict[str, DatasetResult]:
        """
        Query every dataset.

        Args:
            coordinate: Point of interest (carried for logging; the expressions are point-independent)
            scale: Override for every dataset's default scale

        Returns:
            Ordered mapping of dataset name to DatasetResult
        """
        self.logger.info(
            f"Querying {len(self.registry)} datasets at ({coordinate.lat}, {coordinate.lon})"
        )
        results: Dict[str, DatasetResult] = {}
        for descriptor in self.registry:
            results[descriptor.name] = self.query_dataset(descriptor, scale)

        failed = [name for name, result in results.items() if result.status == ResultStatus.ERROR]
        if failed:
            self.logger.warning(f"{len(failed)}/{len(results)} datasets failed: {', '.join(failed)}")
        return results

    def query_dataset(self, descriptor: DatasetDescriptor, scale: Optional[float] = None) -> DatasetResult:
        """Query one dataset. Never raises for upstream or transport failures."""
        common = {
            "remote_id": descriptor.remote_id,
            "kind": descriptor.kind,
            "bands": list(descriptor.bands),
            "scale": scale if scale is not None else descriptor.default_scale,
            "default_scale": descriptor.default_scale,
        }

        try:
            payload = self.client.compute(to_compute_request(sensor_expression(descriptor)))
        except UpstreamError as e:
            self.logger.warning(f"{descriptor.name}: {e}")
            return DatasetResult(status=ResultStatus.ERROR, error=str(e), **common)
        except httpx.HTTPError as e:
            self.logger.warning(f"{descriptor.name}: transport error {type(e).__name__}: {e}")
            return DatasetResult(
                status=ResultStatus.ERROR,
                error=str(e) or f"{type(e).__name__} while contacting Earth Engine",
                **common,
            )

        return DatasetResult(
            status=ResultStatus.SUCCESS,
            scene_id=extract_scene_id(descriptor.name, payload),
            payload=payload,
            **common,
        )
