"""
Sentinel Scene-ID Extraction.

value:compute returns image metadata wrapped in a "result" envelope. For
Sentinel products the acquisition identifier can sit in several places
depending on the collection, so an ordered list of probes is tried and the
first non-empty string wins. The identifier is the part after the last "/"
(e.g. "COPERNICUS/S2_SR/20230715T140051_20230715T140051_T20MQS" yields
"20230715T140051_20230715T140051_T20MQS").

Absence is a normal outcome: any missing or oddly-typed field yields None.

Exports:
    SCENE_ID_PROBES: Ordered probe functions
    extract_scene_id: Apply the probes to a payload
"""

from typing import Any, Callable, List, Optional


def _properties(payload: Any) -> dict:
    properties = payload.get("properties") if isinstance(payload, dict) else None
    return properties if isinstance(properties, dict) else {}


def _probe_id(payload: Any) -> Any:
    return payload.get("id") if isinstance(payload, dict) else None


def _probe_system_index(payload: Any) -> Any:
    return _properties(payload).get("system:index")


def _probe_granule_id(payload: Any) -> Any:
    return _properties(payload).get("GRANULE_ID")


def _probe_product_id(payload: Any) -> Any:
    return _properties(payload).get("PRODUCT_ID")


SCENE_ID_PROBES: List[Callable[[Any], Any]] = [
    _probe_id,
    _probe_system_index,
    _probe_granule_id,
    _probe_product_id,
]


def unwrap_result(payload: Any) -> Any:
    """Strip the {"result": ...} envelope if present."""
    if isinstance(payload, dict) and "result" in payload:
        return payload["result"]
    return payload


def extract_scene_id(dataset_name: str, payload: Any) -> Optional[str]:
    """
    Best-effort scene identifier for a Sentinel dataset.

    Args:
        dataset_name: Registry name; only names containing "Sentinel" are probed
        payload: Raw value:compute response

    Returns:
        Trailing path segment of the first non-empty probe hit, or None
    """
    if "Sentinel" not in dataset_name:
        return None

    image = unwrap_result(payload)
    for probe in SCENE_ID_PROBES:
        value = probe(image)
        if isinstance(value, str) and value.strip():
            scene_id = value.strip().rsplit("/", 1)[-1]
            if scene_id:
                return scene_id
    return None
