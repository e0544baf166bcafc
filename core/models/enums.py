"""
Pure Enumeration Types.

No business logic - pure type definitions only.

Exports:
    DatasetKind: Earth Engine asset type
    ResultStatus: Per-dataset outcome
"""

from enum import Enum


class DatasetKind(str, Enum):
    """
    Earth Engine asset type of a registered dataset.

    COLLECTION assets are reduced to their first available item
    before band selection.
    """

    IMAGE = "image"
    COLLECTION = "collection"


class ResultStatus(str, Enum):
    """Outcome of one dataset query within a /sensor request."""

    SUCCESS = "success"
    ERROR = "error"
