# ============================================================================
# CLAUDE CONTEXT - RESULT MODELS
# ============================================================================
# STATUS: Core model - Pydantic models for the /sensor response
# PURPOSE: Per-dataset outcome and the combined response envelope
# EXPORTS: DatasetResult, ScaleInfo, SensorResponse
# DEPENDENCIES: pydantic
# ============================================================================
"""
Result Models.

DatasetResult wire names follow the published OpenAPI document: `id` for the
Earth Engine asset id, `type` for the asset kind, `data` for the raw
value:compute payload and camelCase `defaultScale` / `sceneId`.

Invariants (enforced at construction):
    - status=error never carries data
    - status=success never carries error

sceneId is not checked here: the model never sees the dataset name.
services.scene_id.extract_scene_id returns None for non-Sentinel datasets.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import DatasetKind, ResultStatus
from .geo import Coordinate


class DatasetResult(BaseModel):
    """
    Outcome of one dataset query.

    Built fresh per dataset per request, never shared.
    """

    model_config = ConfigDict(populate_by_name=True)

    status: ResultStatus
    remote_id: str = Field(..., alias="id", description="Earth Engine asset id")
    kind: DatasetKind = Field(..., alias="type", description="image or collection")
    bands: List[str]
    scale: float = Field(..., description="Effective scale used for this dataset")
    default_scale: float = Field(..., alias="defaultScale")
    scene_id: Optional[str] = Field(default=None, alias="sceneId")
    payload: Optional[Any] = Field(default=None, alias="data")
    error: Optional[str] = None

    @model_validator(mode='after')
    def check_status_fields(self) -> 'DatasetResult':
        if self.status == ResultStatus.ERROR:
            if self.payload is not None:
                raise ValueError("error result must not carry data")
            if not self.error:
                raise ValueError("error result requires an error message")
        elif self.error is not None:
            raise ValueError("successful result must not carry error")
        return self

    def to_response(self) -> Dict[str, Any]:
        """Wire form: aliased keys, absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ScaleInfo(BaseModel):
    """Requested scale and a human-readable note on how it was applied."""

    requested: Optional[float] = None
    note: str


class SensorResponse(BaseModel):
    """Combined /sensor response."""

    coordinates: Coordinate
    scale: ScaleInfo
    datasets: Dict[str, DatasetResult]
    timestamp: str

    def to_response(self) -> Dict[str, Any]:
        return {
            'coordinates': self.coordinates.to_dict(),
            'scale': self.scale.model_dump(),
            'datasets': {name: result.to_response() for name, result in self.datasets.items()},
            'timestamp': self.timestamp,
        }
