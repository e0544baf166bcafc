"""
Compute Proxy HTTP Trigger.

POST /sensor-data - single ANALYZE_SENSOR_DATA call, upstream JSON passed through.

Request body:
    {"lat": -2.8, "lon": -60.3}

Success:
    200 with the upstream JSON as the body, no envelope.
    The request id travels only in the X-Request-ID header.

Errors:
    502 {"error": "EE compute failed", "details": "<upstream text>", ...}

Exports:
    ComputeTrigger: Trigger class
    compute_trigger: Singleton trigger instance
"""

import json
from typing import Any, Optional

import azure.functions as func
import httpx

from core.models import ComputeRequest, parse_request
from services import ComputeProxyService
from .http_base import EarthEngineTrigger


class ComputeTrigger(EarthEngineTrigger):

    upstream_error_label = "EE compute failed"

    def __init__(self, http_transport: Optional[httpx.BaseTransport] = None):
        super().__init__("sensor_data", http_transport=http_transport)

    def process_request(self, req: func.HttpRequest) -> Any:
        request = parse_request(ComputeRequest, self.extract_json_body(req))

        with self.earth_engine_session() as client:
            return ComputeProxyService(client).analyze(request)

    def build_response(self, data: Any, request_id: str) -> func.HttpResponse:
        """Upstream payload unchanged; no timestamp or request_id keys added."""
        return func.HttpResponse(
            json.dumps(data),
            status_code=200,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


# Create singleton instance for use in function_app.py
compute_trigger = ComputeTrigger()
