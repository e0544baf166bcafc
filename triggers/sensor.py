"""
Sensor Query HTTP Trigger.

POST /sensor (and POST /) - query every registered dataset at one point.

Request body:
    {"lat": -2.8, "lon": -60.3, "scale": 30}   scale optional

Response (200 even when some datasets failed):
    {
        "coordinates": {"lat": -2.8, "lon": -60.3},
        "scale": {"requested": 30.0, "note": "Custom scale of 30m applied to all datasets"},
        "datasets": {
            "Sentinel-2 Surface Reflectance": {"status": "success", "id": "COPERNICUS/S2_SR",
                                               "sceneId": "...", "data": {...}, ...},
            "SRTM Digital Elevation": {"status": "error", "error": "...", ...},
            ...
        },
        "timestamp": "..."
    }

Exports:
    SensorTrigger: Trigger class
    sensor_trigger: Singleton trigger instance
"""

from typing import Any, Dict, Optional

import azure.functions as func
import httpx

from core.models import SensorRequest, parse_request
from services import DEFAULT_REGISTRY, DatasetRegistry, SensorQueryExecutor, assemble_sensor_response
from .http_base import EarthEngineTrigger


class SensorTrigger(EarthEngineTrigger):
    """Multi-dataset sensor query."""

    def __init__(
        self,
        registry: DatasetRegistry = DEFAULT_REGISTRY,
        http_transport: Optional[httpx.BaseTransport] = None
    ):
        super().__init__("sensor", http_transport=http_transport)
        self.registry = registry

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        request = parse_request(SensorRequest, self.extract_json_body(req))

        with self.earth_engine_session() as client:
            results = SensorQueryExecutor(self.registry, client).run(request, scale=request.scale)

        return assemble_sensor_response(request, request.scale, results).to_response()


# Create singleton instance for use in function_app.py
sensor_trigger = SensorTrigger()
