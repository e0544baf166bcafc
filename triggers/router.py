"""
Request Router.

Single dispatch point behind the catch-all route in function_app.py.

Order of checks:
    1. Method - anything but POST is 405, whatever the path
    2. Path   - trailing slashes ignored, unknown paths are 404
    3. Trigger - body validation and Earth Engine calls (see http_base)

Routes:
    /             -> sensor
    /sensor       -> sensor
    /image        -> image
    /sensor-data  -> compute proxy

Exports:
    RelayRouter: Router class
    normalize_path: Path normalisation used for lookups
    relay_router: Singleton router instance
"""

from typing import Dict, Optional
from urllib.parse import urlparse

import azure.functions as func
import httpx

from util_logger import LoggerFactory, ComponentType
from .http_base import BaseHttpTrigger, create_error_response, generate_request_id
from .compute import ComputeTrigger, compute_trigger
from .image import ImageTrigger, image_trigger
from .sensor import SensorTrigger, sensor_trigger

ALLOWED_METHODS = ["POST"]


def normalize_path(url: str) -> str:
    """'/sensor/' -> '/sensor', '' -> '/'."""
    path = urlparse(url).path or "/"
    stripped = path.rstrip("/")
    return stripped or "/"


class RelayRouter:
    """
    Maps request paths to triggers.
    """

    def __init__(self, sensor: BaseHttpTrigger, image: BaseHttpTrigger, compute: BaseHttpTrigger):
        self.routes: Dict[str, BaseHttpTrigger] = {
            "/": sensor,
            "/sensor": sensor,
            "/image": image,
            "/sensor-data": compute,
        }
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "RelayRouter")

    @classmethod
    def with_transport(cls, http_transport: Optional[httpx.BaseTransport]) -> "RelayRouter":
        """Router with fresh triggers whose outbound calls go through http_transport."""
        return cls(
            sensor=SensorTrigger(http_transport=http_transport),
            image=ImageTrigger(http_transport=http_transport),
            compute=ComputeTrigger(http_transport=http_transport),
        )

    def dispatch(self, req: func.HttpRequest) -> func.HttpResponse:
        request_id = generate_request_id()

        if req.method.upper() not in ALLOWED_METHODS:
            self.logger.info(f"Request {request_id}: {req.method} {req.url} rejected (405)")
            return create_error_response(
                error="Method not allowed",
                message=f"Method {req.method} not allowed. Allowed: {', '.join(ALLOWED_METHODS)}",
                status_code=405,
                request_id=request_id
            )

        path = normalize_path(req.url)
        trigger = self.routes.get(path)
        if trigger is None:
            self.logger.info(f"Request {request_id}: no route for {path} (404)")
            return create_error_response(
                error="Not found",
                message=f"No endpoint at {path}. Available: {', '.join(sorted(self.routes))}",
                status_code=404,
                request_id=request_id
            )

        return trigger.handle_request(req, request_id=request_id)


# Create singleton instance for use in function_app.py
relay_router = RelayRouter(sensor=sensor_trigger, image=image_trigger, compute=compute_trigger)
