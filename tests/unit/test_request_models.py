"""
Request body validation.
"""

import math

import pytest

from core.models import ComputeRequest, Coordinate, ImageRequest, SensorRequest, parse_request
from exceptions import ValidationError


class TestCoordinate:
    @pytest.mark.parametrize("lat,lon", [(0, 0), (-90, -180), (90, 180), (-2.8, -60.3)])
    def test_accepts_in_range(self, lat, lon):
        point = parse_request(SensorRequest, {"lat": lat, "lon": lon})
        assert (point.lat, point.lon) == (lat, lon)

    @pytest.mark.parametrize("lat", [100, -90.0001, 90.5])
    def test_rejects_lat_out_of_range(self, lat):
        with pytest.raises(ValidationError, match="lat must be between -90 and 90"):
            parse_request(SensorRequest, {"lat": lat, "lon": 0})

    @pytest.mark.parametrize("lon", [180.1, -181, 360])
    def test_rejects_lon_out_of_range(self, lon):
        with pytest.raises(ValidationError, match="lon must be between -180 and 180"):
            parse_request(SensorRequest, {"lat": 0, "lon": lon})

    @pytest.mark.parametrize("value", ["10", True, None, [1], {"v": 1}])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValidationError, match="lat must be a number"):
            parse_request(SensorRequest, {"lat": value, "lon": 0})

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_rejects_non_finite(self, value):
        with pytest.raises(ValidationError, match="finite"):
            parse_request(SensorRequest, {"lat": 0, "lon": value})

    @pytest.mark.parametrize("field", ["lat", "lon"])
    def test_rejects_integer_beyond_float_range(self, field):
        body = {"lat": 0, "lon": 0, field: 10 ** 400}
        with pytest.raises(ValidationError, match=f"{field} must be a finite number"):
            parse_request(SensorRequest, body)

    @pytest.mark.parametrize("body,field", [({"lon": 1}, "lat"), ({"lat": 1}, "lon")])
    def test_missing_field(self, body, field):
        with pytest.raises(ValidationError, match=f"Missing required field: {field}"):
            parse_request(SensorRequest, body)

    def test_both_errors_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_request(SensorRequest, {"lat": 100, "lon": 200})
        assert "lat" in str(exc_info.value) and "lon" in str(exc_info.value)

    @pytest.mark.parametrize("body", [[], "lat", 42, None])
    def test_rejects_non_object_body(self, body):
        with pytest.raises(ValidationError, match="JSON object"):
            parse_request(SensorRequest, body)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_request(ComputeRequest, {"lat": 0})

    def test_bounding_square_clamped_at_pole(self):
        west, south, east, north = Coordinate(lat=89.9, lon=179.9).bounding_square(100_000)
        assert north == 90.0
        assert east == 180.0
        assert -180.0 <= west < east
        assert south < north

    def test_bounding_square_size_at_equator(self):
        west, south, east, north = Coordinate(lat=0, lon=0).bounding_square(111_320)
        assert north - south == pytest.approx(1.0)
        assert east - west == pytest.approx(1.0)


class TestSensorRequest:
    def test_scale_optional(self):
        assert parse_request(SensorRequest, {"lat": 1, "lon": 2}).scale is None

    def test_scale_accepted(self):
        assert parse_request(SensorRequest, {"lat": 1, "lon": 2, "scale": 30}).scale == 30.0

    @pytest.mark.parametrize("scale", [0, -10, -0.5])
    def test_rejects_non_positive_scale(self, scale):
        with pytest.raises(ValidationError, match="scale must be a positive number"):
            parse_request(SensorRequest, {"lat": 1, "lon": 2, "scale": scale})

    @pytest.mark.parametrize("scale", ["30", False])
    def test_rejects_non_numeric_scale(self, scale):
        with pytest.raises(ValidationError, match="scale must be a number"):
            parse_request(SensorRequest, {"lat": 1, "lon": 2, "scale": scale})

    def test_extra_fields_ignored(self):
        request = parse_request(SensorRequest, {"lat": 1, "lon": 2, "datasets": ["x"]})
        assert not hasattr(request, "datasets")


class TestImageRequest:
    def test_defaults(self):
        request = parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": "SRTM Digital Elevation"})
        assert (request.width, request.height) == (512, 512)
        assert request.year is None
        assert request.scale is None

    def test_dataset_is_stripped(self):
        request = parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": "  Global Forest Change "})
        assert request.dataset == "Global Forest Change"

    @pytest.mark.parametrize("dataset", ["", "   ", 7, None])
    def test_rejects_empty_dataset(self, dataset):
        with pytest.raises(ValidationError, match="dataset"):
            parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": dataset})

    def test_missing_dataset(self):
        with pytest.raises(ValidationError, match="Missing required field: dataset"):
            parse_request(ImageRequest, {"lat": 1, "lon": 2})

    def test_integral_float_dimensions_accepted(self):
        request = parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": "x", "width": 256.0})
        assert request.width == 256
        assert isinstance(request.width, int)

    @pytest.mark.parametrize("field,value,message", [
        ("width", 0, "width must be between 1 and 2048"),
        ("height", 2049, "height must be between 1 and 2048"),
        ("width", 10.5, "width must be an integer"),
        ("height", "512", "height must be a number"),
        ("year", 1969, "year must be between 1970 and 2100"),
        ("year", 2023.5, "year must be an integer"),
        ("scale", 0, "scale must be a positive number"),
    ])
    def test_rejects_bad_optional_fields(self, field, value, message):
        with pytest.raises(ValidationError, match=message):
            parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": "x", field: value})

    @pytest.mark.parametrize("field", ["width", "height", "year", "scale"])
    def test_rejects_integer_beyond_float_range(self, field):
        with pytest.raises(ValidationError, match=f"{field} must be a finite number"):
            parse_request(ImageRequest, {"lat": 1, "lon": 2, "dataset": "x", field: 10 ** 400})
