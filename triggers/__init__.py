"""
Triggers Package.

Azure Functions HTTP trigger implementations.

HTTP Endpoints (routePrefix is empty, all POST):
    /, /sensor: Multi-dataset sensor query
    /image: Dataset thumbnail
    /sensor-data: ANALYZE_SENSOR_DATA compute proxy

Exports:
    Base classes; trigger instances should be imported from their modules
"""

# Only import base classes to avoid initialization at import time
# Trigger instances should be imported directly from their modules
from .http_base import BaseHttpTrigger, EarthEngineTrigger

__all__ = [
    'BaseHttpTrigger',
    'EarthEngineTrigger',
]
