# ============================================================================
# CLAUDE CONTEXT - REQUEST MODELS
# ============================================================================
# STATUS: Core model - Pydantic models for relay request bodies
# PURPOSE: Validate POST bodies for /sensor, /image and /sensor-data
# EXPORTS: SensorRequest, ImageRequest, ComputeRequest, parse_request
# DEPENDENCIES: pydantic, exceptions
# ============================================================================
"""
Request Body Models.

Each endpoint's JSON body is validated into one of these models. Pydantic
errors are flattened into a single ValidationError message so triggers can
return it verbatim with HTTP 400.

Models:
    SensorRequest  - POST /sensor, POST /            {lat, lon, scale?}
    ComputeRequest - POST /sensor-data               {lat, lon}
    ImageRequest   - POST /image  {lat, lon, dataset, width?, height?, year?, scale?}
"""

from typing import Any, Optional, Type, TypeVar

import pydantic
from pydantic import field_validator

from config.defaults import ImageDefaults
from exceptions import ValidationError
from .geo import Coordinate, finite_number

T = TypeVar('T', bound=pydantic.BaseModel)


def _positive_scale(value: Any) -> Optional[float]:
    if value is None:
        return None
    scale = finite_number(value, 'scale')
    if scale <= 0:
        raise ValueError("scale must be a positive number")
    return scale


def _integer(value: Any, field_name: str) -> int:
    number = finite_number(value, field_name)
    if not number.is_integer():
        raise ValueError(f"{field_name} must be an integer")
    return int(number)


class ComputeRequest(Coordinate):
    """Body of the single-call compute proxy."""
    pass


class SensorRequest(Coordinate):
    """
    Body of the multi-dataset sensor query.

    scale, when given, overrides every dataset's default resolution.
    """

    scale: Optional[float] = None

    @field_validator('scale', mode='before')
    @classmethod
    def validate_scale(cls, v):
        return _positive_scale(v)


class ImageRequest(Coordinate):
    """
    Body of the thumbnail endpoint.

    dataset is checked against the registry by the image service, not here.
    """

    dataset: str
    width: int = ImageDefaults.DEFAULT_WIDTH
    height: int = ImageDefaults.DEFAULT_HEIGHT
    year: Optional[int] = None
    scale: Optional[float] = None

    @field_validator('dataset', mode='before')
    @classmethod
    def validate_dataset(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("dataset must be a non-empty string")
        return v.strip()

    @field_validator('width', 'height', mode='before')
    @classmethod
    def validate_dimension(cls, v, info):
        size = _integer(v, info.field_name)
        if not 1 <= size <= ImageDefaults.MAX_DIMENSION:
            raise ValueError(f"{info.field_name} must be between 1 and {ImageDefaults.MAX_DIMENSION}")
        return size

    @field_validator('year', mode='before')
    @classmethod
    def validate_year(cls, v):
        if v is None:
            return None
        year = _integer(v, 'year')
        if not ImageDefaults.MIN_YEAR <= year <= ImageDefaults.MAX_YEAR:
            raise ValueError(f"year must be between {ImageDefaults.MIN_YEAR} and {ImageDefaults.MAX_YEAR}")
        return year

    @field_validator('scale', mode='before')
    @classmethod
    def validate_scale(cls, v):
        return _positive_scale(v)


def parse_request(model_cls: Type[T], body: Any) -> T:
    """
    Validate a decoded JSON body into a request model.

    Args:
        model_cls: One of the request models above
        body: Decoded JSON (anything json.loads can return)

    Returns:
        Validated model instance

    Raises:
        ValidationError: Body is not an object, or any field is invalid
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        return model_cls.model_validate(body)
    except pydantic.ValidationError as e:
        messages = []
        for error in e.errors():
            field = ".".join(str(part) for part in error.get("loc", ())) or "body"
            if error.get("type") == "missing":
                messages.append(f"Missing required field: {field}")
            elif "error" in error.get("ctx", {}):
                messages.append(str(error["ctx"]["error"]))
            else:
                messages.append(f"{field}: {error.get('msg')}")
        raise ValidationError("; ".join(messages)) from e
