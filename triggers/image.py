"""
Thumbnail HTTP Trigger.

POST /image - render one dataset around a point.

Request body:
    {"lat": -2.8, "lon": -60.3, "dataset": "SRTM Digital Elevation",
     "width": 512, "height": 512, "year": 2023, "scale": 30}
    width/height/year/scale optional

Response:
    {"coordinates": {...}, "dataset": {"name", "id", "type"}, "imageUrl": "...",
     "visualization": {"bands", "min", "max", "palette"?, "year"?, "scale"},
     "dimensions": {"width", "height"}}

Exports:
    ImageTrigger: Trigger class
    image_trigger: Singleton trigger instance
"""

from typing import Any, Dict, Optional

import azure.functions as func
import httpx

from core.models import ImageRequest, parse_request
from services import DEFAULT_REGISTRY, DatasetRegistry, ThumbnailService, resolve_dataset
from .http_base import EarthEngineTrigger


class ImageTrigger(EarthEngineTrigger):
    """Single-dataset thumbnail generator."""

    upstream_error_label = "EE thumbnail failed"

    def __init__(
        self,
        registry: DatasetRegistry = DEFAULT_REGISTRY,
        http_transport: Optional[httpx.BaseTransport] = None
    ):
        super().__init__("image", http_transport=http_transport)
        self.registry = registry

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        request = parse_request(ImageRequest, self.extract_json_body(req))

        # Unknown dataset is a 400 before any credentials are touched
        resolve_dataset(self.registry, request.dataset)

        with self.earth_engine_session() as client:
            return ThumbnailService(self.registry, client).render(request)


# Create singleton instance for use in function_app.py
image_trigger = ImageTrigger()
