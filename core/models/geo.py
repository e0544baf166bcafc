"""
Geographic Primitives.

Validated point coordinates and the helpers that turn them into
Earth Engine geometry arguments.

Exports:
    Coordinate: WGS84 point with range-checked lat/lon
    finite_number: Shared validator for JSON numeric fields
"""

import math
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, field_validator

from config.defaults import ImageDefaults


def finite_number(value: Any, field_name: str) -> float:
    """
    Accept JSON numbers only.

    Booleans and numeric strings are rejected even though Python could
    coerce them, as are NaN and infinities.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    try:
        number = float(value)
    except OverflowError:
        # JSON integers beyond float range
        raise ValueError(f"{field_name} must be a finite number")
    if not math.isfinite(number):
        raise ValueError(f"{field_name} must be a finite number")
    return number


class Coordinate(BaseModel):
    """
    WGS84 point.

    lat in [-90, 90], lon in [-180, 180]. Supplied per request, never persisted.
    """

    lat: float
    lon: float

    @field_validator('lat', mode='before')
    @classmethod
    def validate_lat(cls, v):
        lat = finite_number(v, 'lat')
        if not -90.0 <= lat <= 90.0:
            raise ValueError("lat must be between -90 and 90")
        return lat

    @field_validator('lon', mode='before')
    @classmethod
    def validate_lon(cls, v):
        lon = finite_number(v, 'lon')
        if not -180.0 <= lon <= 180.0:
            raise ValueError("lon must be between -180 and 180")
        return lon

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lon': self.lon}

    def to_geojson_point(self) -> Dict[str, Any]:
        """GeoJSON point, note the [lon, lat] axis order."""
        return {'type': 'Point', 'coordinates': [self.lon, self.lat]}

    def bounding_square(self, side_meters: float) -> Tuple[float, float, float, float]:
        """
        Square of the given side centred on this point.

        Degrees per metre shrink with cos(lat) along longitude; near the
        poles the longitude span is capped at the full globe.

        Returns:
            (west, south, east, north), clamped to valid WGS84 ranges
        """
        half = side_meters / 2.0
        dlat = half / ImageDefaults.METERS_PER_DEGREE
        cos_lat = math.cos(math.radians(self.lat))
        dlon = 180.0 if cos_lat < 1e-6 else min(180.0, half / (ImageDefaults.METERS_PER_DEGREE * cos_lat))

        west = max(-180.0, self.lon - dlon)
        east = min(180.0, self.lon + dlon)
        south = max(-90.0, self.lat - dlat)
        north = min(90.0, self.lat + dlat)
        return west, south, east, north

    def bounding_ring(self, side_meters: float) -> List[List[float]]:
        """Closed polygon ring (counter-clockwise) for bounding_square."""
        west, south, east, north = self.bounding_square(side_meters)
        return [
            [west, south],
            [east, south],
            [east, north],
            [west, north],
            [west, south],
        ]
