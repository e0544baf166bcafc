"""
Core Data Models Package.

Contains pure data structures without I/O.

Exports:
    DatasetKind, ResultStatus: Enums
    Coordinate: Validated lat/lon point
    SensorRequest, ImageRequest, ComputeRequest: Request bodies
    DatasetResult: Per-dataset outcome
    ScaleInfo, SensorResponse: /sensor response envelope
"""

from .enums import DatasetKind, ResultStatus
from .geo import Coordinate
from .requests import SensorRequest, ImageRequest, ComputeRequest, parse_request
from .results import DatasetResult, ScaleInfo, SensorResponse

__all__ = [
    'DatasetKind',
    'ResultStatus',
    'Coordinate',
    'SensorRequest',
    'ImageRequest',
    'ComputeRequest',
    'parse_request',
    'DatasetResult',
    'ScaleInfo',
    'SensorResponse',
]
