"""
Service Layer - Explicit Exports (No Decorators!)

Every service the triggers use is imported here explicitly. No decorators,
no auto-discovery, no import magic.

Services receive their collaborators (registry, Earth Engine client) through
the constructor; triggers build them per request.

    DatasetRegistry / DEFAULT_REGISTRY  - static dataset table
    SensorQueryExecutor                 - POST /sensor, POST /
    ThumbnailService                    - POST /image
    ComputeProxyService                 - POST /sensor-data
    assemble_sensor_response            - /sensor response envelope
    extract_scene_id                    - Sentinel scene identifiers
"""

from .dataset_registry import (
    DatasetDescriptor,
    VisualizationPreset,
    DatasetRegistry,
    DEFAULT_DATASETS,
    DEFAULT_REGISTRY,
)
from .scene_id import SCENE_ID_PROBES, extract_scene_id
from .sensor_query import SensorQueryExecutor
from .response_assembler import assemble_sensor_response, scale_note
from .image_service import ThumbnailService, resolve_dataset
from .compute_proxy import ComputeProxyService

__all__ = [
    'DatasetDescriptor',
    'VisualizationPreset',
    'DatasetRegistry',
    'DEFAULT_DATASETS',
    'DEFAULT_REGISTRY',
    'SCENE_ID_PROBES',
    'extract_scene_id',
    'SensorQueryExecutor',
    'assemble_sensor_response',
    'scale_note',
    'ThumbnailService',
    'resolve_dataset',
    'ComputeProxyService',
]
