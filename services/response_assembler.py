"""
Sensor Response Assembler.

Wraps the per-dataset results into the /sensor response envelope:

    {
        "coordinates": {"lat": ..., "lon": ...},
        "scale": {"requested": <float|null>, "note": "..."},
        "datasets": {name: DatasetResult, ...},
        "timestamp": "2025-01-01T00:00:00+00:00"
    }
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from core.models import Coordinate, DatasetResult, ScaleInfo, SensorResponse

DEFAULT_SCALE_NOTE = "Using default scales for each dataset"


def scale_note(scale: Optional[float]) -> str:
    if scale is None:
        return DEFAULT_SCALE_NOTE
    value = int(scale) if float(scale).is_integer() else scale
    return f"Custom scale of {value}m applied to all datasets"


def assemble_sensor_response(
    coordinate: Coordinate,
    scale: Optional[float],
    datasets: Dict[str, DatasetResult],
    now: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
) -> SensorResponse:
    return SensorResponse(
        coordinates=coordinate,
        scale=ScaleInfo(requested=scale, note=scale_note(scale)),
        datasets=datasets,
        timestamp=now().isoformat(),
    )
