# ============================================================================
# CLAUDE CONTEXT - EARTH ENGINE EXPRESSION BUILDER
# ============================================================================
# STATUS: Service Layer - pure functions, no I/O
# PURPOSE: Build Earth Engine REST expression graphs for the relay's queries
# EXPORTS: constant, invoke, dataset_source, select_bands, thumbnail_region,
#          to_compute_request, analyze_sensor_request
# DEPENDENCIES: core.models, services.dataset_registry
# ============================================================================
"""
Earth Engine Expression Builder.

The v1 REST API evaluates serialized expression graphs. A graph is a dict of
named values plus the name of the result:

    {"result": "0", "values": {"0": <ValueNode>}}

A ValueNode is either a constant or a function invocation whose arguments are
themselves ValueNodes:

    {"constantValue": "USGS/SRTMGL1_003"}
    {"functionInvocationValue": {"functionName": "Image.load",
                                 "arguments": {"id": {"constantValue": ...}}}}

The relay only ever builds single-value graphs, so every tree is stored
under the key "0".

Trees built here:

    /sensor   Image.select(Image.load(id), bands)
              Image.select(Collection.first(ImageCollection.load(id)), bands)
    /image    Image.clipToBoundsAndScale(<source>, Polygon(region), width, height)
              with an optional Collection.filter(dateRangeContains) for a year
"""

from typing import Any, Dict, List, Optional, Sequence

from core.models import Coordinate, DatasetKind
from .dataset_registry import DatasetDescriptor

ValueNode = Dict[str, Any]

# Legacy function name understood by the earlier /sensor-data revision
ANALYZE_SENSOR_DATA = "ANALYZE_SENSOR_DATA"
ANALYZE_SENSORS = ("NDVI", "SRTM", "VV")


# ============================================================================
# NODE PRIMITIVES
# ============================================================================

def constant(value: Any) -> ValueNode:
    return {"constantValue": value}


def invoke(function_name: str, **arguments: ValueNode) -> ValueNode:
    """Function invocation node. Arguments must already be ValueNodes."""
    return {
        "functionInvocationValue": {
            "functionName": function_name,
            "arguments": dict(arguments),
        }
    }


# ============================================================================
# DATASET TREES
# ============================================================================

def year_filter(collection: ValueNode, year: int) -> ValueNode:
    """Restrict a collection to items whose system:time_start falls in the calendar year."""
    date_range = invoke(
        "DateRange",
        start=constant(f"{year}-01-01"),
        end=constant(f"{year + 1}-01-01"),
    )
    return invoke(
        "Collection.filter",
        collection=collection,
        filter=invoke(
            "Filter.dateRangeContains",
            leftValue=date_range,
            rightField=constant("system:time_start"),
        ),
    )


def dataset_source(descriptor: DatasetDescriptor, year: Optional[int] = None) -> ValueNode:
    """
    Image node for a dataset.

    IMAGE datasets load the asset directly. COLLECTION datasets take the
    first item of the collection; year, when given, narrows the collection
    first. year is ignored for IMAGE datasets.
    """
    if descriptor.kind == DatasetKind.IMAGE:
        return invoke("Image.load", id=constant(descriptor.remote_id))

    collection = invoke("ImageCollection.load", id=constant(descriptor.remote_id))
    if year is not None:
        collection = year_filter(collection, year)
    return invoke("Collection.first", collection=collection)


def select_bands(image: ValueNode, bands: Sequence[str]) -> ValueNode:
    return invoke("Image.select", input=image, bandSelectors=constant(list(bands)))


def sensor_expression(descriptor: DatasetDescriptor) -> ValueNode:
    """load -> [collection-first ->] select-bands, no date filter."""
    return select_bands(dataset_source(descriptor), descriptor.bands)


def to_compute_request(node: ValueNode) -> Dict[str, Any]:
    """Wrap a tree as a value:compute request body."""
    return {"expression": {"result": "0", "values": {"0": node}}}


# ============================================================================
# THUMBNAILS
# ============================================================================

def thumbnail_region(coordinate: Coordinate, side_meters: float) -> ValueNode:
    """Planar polygon node for the square of side_meters centred on coordinate."""
    return invoke(
        "GeometryConstructors.Polygon",
        coordinates=constant([coordinate.bounding_ring(side_meters)]),
        geodesic=constant(False),
    )


def thumbnail_expression(
    descriptor: DatasetDescriptor,
    coordinate: Coordinate,
    side_meters: float,
    width: int,
    height: int,
    year: Optional[int] = None
) -> Dict[str, Any]:
    """
    Expression graph for a clipped, scaled thumbnail of one dataset.

    Bands are selected from the dataset's visualization preset, not its
    /sensor band list.
    """
    image = select_bands(dataset_source(descriptor, year), descriptor.visualization.bands)
    node = invoke(
        "Image.clipToBoundsAndScale",
        input=image,
        geometry=thumbnail_region(coordinate, side_meters),
        width=constant(width),
        height=constant(height),
    )
    return {"result": "0", "values": {"0": node}}


def thumbnail_request(
    descriptor: DatasetDescriptor,
    coordinate: Coordinate,
    side_meters: float,
    width: int,
    height: int,
    year: Optional[int] = None,
    file_format: str = "PNG"
) -> Dict[str, Any]:
    """Body for POST /v1/projects/{project}/thumbnails."""
    preset = descriptor.visualization
    visualization: Dict[str, Any] = {
        "ranges": [{"min": preset.min, "max": preset.max}],
    }
    if preset.palette:
        visualization["paletteColors"] = list(preset.palette)

    return {
        "expression": thumbnail_expression(descriptor, coordinate, side_meters, width, height, year),
        "fileFormat": file_format,
        "bandIds": list(preset.bands),
        "visualizationOptions": visualization,
    }


# ============================================================================
# COMPUTE PROXY
# ============================================================================

def analyze_sensor_request(coordinate: Coordinate, sensors: Sequence[str] = ANALYZE_SENSORS) -> Dict[str, Any]:
    """value:compute body for the single-call /sensor-data proxy."""
    sensor_list: List[str] = list(sensors)
    return {
        "expression": {
            "function": ANALYZE_SENSOR_DATA,
            "arguments": {
                "geometry": coordinate.to_geojson_point(),
                "sensors": sensor_list,
            },
        },
        "format": "json",
    }
