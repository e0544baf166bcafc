"""
Compute Proxy Service.

Backs POST /sensor-data: one value:compute call asking Earth Engine to run
ANALYZE_SENSOR_DATA for a point, returning the upstream JSON untouched.
Non-2xx answers propagate as UpstreamError and become HTTP 502.
"""

from typing import Any

from core.models import ComputeRequest
from infrastructure.earth_engine import EarthEngineClient
from util_logger import LoggerFactory, ComponentType
from .expressions import analyze_sensor_request


class ComputeProxyService:

    def __init__(self, client: EarthEngineClient):
        self.client = client
        self.logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ComputeProxyService")

    def analyze(self, request: ComputeRequest) -> Any:
        self.logger.info(f"ANALYZE_SENSOR_DATA at ({request.lat}, {request.lon})")
        return self.client.compute(analyze_sensor_request(request))
