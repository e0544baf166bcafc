# ============================================================================
# CLAUDE CONTEXT - THUMBNAIL SERVICE
# ============================================================================
# STATUS: Service Layer - backs POST /image
# PURPOSE: Render one dataset around a point as a PNG thumbnail URL
# EXPORTS: ThumbnailService
# DEPENDENCIES: core.models, infrastructure.earth_engine
# ============================================================================
"""
Thumbnail Service.

Resolves the requested dataset in the registry, builds a clip-and-scale
expression over a square region centred on the point and asks Earth Engine
for a thumbnail. The thumbnail itself is not downloaded; the caller receives
the getPixels URL (which still requires an Earth Engine bearer token).

Region size:
    side = scale * max(width, height) metres, scale defaulting to the
    dataset's native resolution, so one output pixel covers roughly one
    native pixel.
"""

from typing import Any, Dict

from config.defaults import ImageDefaults
from core.models import ImageRequest
from exceptions import ValidationError
from infrastructure.earth_engine import EarthEngineClient
from util_logger import LoggerFactory, ComponentType
from .dataset_registry import DatasetDescriptor, DatasetRegistry
from .expressions import thumbnail_request


def resolve_dataset(registry: DatasetRegistry, name: str) -> DatasetDescriptor:
    """
    Look up a dataset for /image.

    Raises:
        ValidationError: Unknown dataset, message lists the available names
    """
    try:
        return registry.get(name)
    except KeyError:
        raise ValidationError(
            f"Unknown dataset '{name}'. Available datasets: {', '.join(registry.names())}"
        ) from None


class ThumbnailService:
    """Builds /image responses."""

    def __init__(self, registry: DatasetRegistry, client: EarthEngineClient):
        self.registry = registry
        self.client = client
        self.logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ThumbnailService")

    def render(self, request: ImageRequest) -> Dict[str, Any]:
        """
        Create a thumbnail for the request.

        Raises:
            ValidationError: Unknown dataset
            UpstreamError: Earth Engine rejected the thumbnail request
        """
        descriptor = resolve_dataset(self.registry, request.dataset)
        scale = request.scale if request.scale is not None else descriptor.default_scale
        side_meters = scale * max(request.width, request.height)

        body = thumbnail_request(
            descriptor,
            request,
            side_meters,
            request.width,
            request.height,
            year=request.year,
            file_format=ImageDefaults.FILE_FORMAT,
        )
        self.logger.info(
            f"Thumbnail {descriptor.name} {request.width}x{request.height} "
            f"side={side_meters:.0f}m year={request.year}"
        )
        image_url = self.client.create_thumbnail(body)

        visualization = descriptor.visualization.to_dict()
        if request.year is not None:
            visualization["year"] = request.year
        visualization["scale"] = scale

        return {
            "coordinates": request.to_dict(),
            "dataset": {
                "name": descriptor.name,
                "id": descriptor.remote_id,
                "type": descriptor.kind.value,
            },
            "imageUrl": image_url,
            "visualization": visualization,
            "dimensions": {"width": request.width, "height": request.height},
        }
