# ============================================================================
# CLAUDE CONTEXT - DATASET REGISTRY
# ============================================================================
# STATUS: Service Layer - static dataset table
# PURPOSE: Immutable descriptors of the Earth Engine datasets the relay queries
# EXPORTS: DatasetDescriptor, VisualizationPreset, DatasetRegistry,
#          DEFAULT_DATASETS, DEFAULT_REGISTRY
# DEPENDENCIES: core.models.enums
# ============================================================================
"""
Dataset Registry - Explicit Registration (No Decorators!)

Every dataset the relay knows about is listed in DEFAULT_DATASETS below.
If you don't see it there, /sensor does not query it and /image rejects it.

Registration Process:
1. Add a DatasetDescriptor to DEFAULT_DATASETS
2. Done - /sensor picks it up on the next cold start, /image accepts its name

COLLECTION datasets are reduced to "the first available item" of the
collection, with no date filter. That is deterministic but time-unaware:
Earth Engine does not promise which item comes first, so results are not
guaranteed to be the most recent acquisition.

The registry is injected into the services that use it; nothing mutates it.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from core.models.enums import DatasetKind


@dataclass(frozen=True)
class VisualizationPreset:
    """Rendering parameters for /image thumbnails."""
    bands: Tuple[str, ...]
    min: float
    max: float
    palette: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> dict:
        result = {"bands": list(self.bands), "min": self.min, "max": self.max}
        if self.palette:
            result["palette"] = list(self.palette)
        return result


@dataclass(frozen=True)
class DatasetDescriptor:
    """
    One registered Earth Engine dataset.

    Attributes:
        name: Display name, also the key in /sensor responses and the /image selector
        remote_id: Earth Engine asset id
        bands: Bands selected for /sensor, in order
        kind: IMAGE or COLLECTION
        default_scale: Native resolution in metres
        visualization: Thumbnail preset for /image
    """
    name: str
    remote_id: str
    bands: Tuple[str, ...]
    kind: DatasetKind
    default_scale: float
    visualization: VisualizationPreset

    @property
    def is_sentinel(self) -> bool:
        """Sentinel products carry a traceable scene identifier."""
        return "Sentinel" in self.name


# NDVI/EVI green ramp (MODIS scaled values, x0.0001)
_VEGETATION_PALETTE = (
    "FFFFFF", "CE7E45", "DF923D", "F1B555", "FCD163", "99B718", "74A901",
    "66A000", "529400", "3E8601", "207401", "056201", "004C00", "023B01",
    "012E01", "011D01", "011301",
)

DEFAULT_DATASETS: Tuple[DatasetDescriptor, ...] = (
    DatasetDescriptor(
        name="MODIS Vegetation Indices",
        remote_id="MODIS/006/MOD13Q1",
        bands=("NDVI", "EVI"),
        kind=DatasetKind.COLLECTION,
        default_scale=463.3,
        visualization=VisualizationPreset(bands=("NDVI",), min=0, max=9000, palette=_VEGETATION_PALETTE),
    ),
    DatasetDescriptor(
        name="Sentinel-2 Surface Reflectance",
        remote_id="COPERNICUS/S2_SR",
        bands=("B4", "B8"),
        kind=DatasetKind.COLLECTION,
        default_scale=10,
        visualization=VisualizationPreset(bands=("B4", "B3", "B2"), min=0, max=3000),
    ),
    DatasetDescriptor(
        name="Sentinel-1 SAR",
        remote_id="COPERNICUS/S1_GRD",
        bands=("HH", "HV"),
        kind=DatasetKind.COLLECTION,
        default_scale=25,
        visualization=VisualizationPreset(bands=("HH",), min=-25, max=0),
    ),
    DatasetDescriptor(
        name="SRTM Digital Elevation",
        remote_id="USGS/SRTMGL1_003",
        bands=("elevation",),
        kind=DatasetKind.IMAGE,
        default_scale=30,
        visualization=VisualizationPreset(
            bands=("elevation",), min=0, max=3000,
            palette=("0000FF", "00FFFF", "FFFF00", "FF0000", "FFFFFF"),
        ),
    ),
    DatasetDescriptor(
        name="MapBiomas Land Cover",
        remote_id="projects/mapbiomas-public/assets/brazil/lulc/collection9/mapbiomas_collection90_integration_v1",
        bands=("classification_2023",),
        kind=DatasetKind.IMAGE,
        default_scale=30,
        visualization=VisualizationPreset(
            bands=("classification_2023",), min=0, max=69,
            palette=("FFFFFF", "1F8D49", "7DC975", "D6BC74", "FFEFC3", "2532E4", "D4271E"),
        ),
    ),
    DatasetDescriptor(
        name="GEDI Aboveground Biomass",
        remote_id="LARSE/GEDI/GEDI04_B_002",
        bands=("MU", "SE"),
        kind=DatasetKind.IMAGE,
        default_scale=927.7,
        visualization=VisualizationPreset(
            bands=("MU",), min=0, max=400,
            palette=("440154", "3B528B", "21918C", "5EC962", "FDE725"),
        ),
    ),
    DatasetDescriptor(
        name="Global Forest Change",
        remote_id="UMD/hansen/global_forest_change_2023_v1_11",
        bands=("treecover2000", "loss", "gain"),
        kind=DatasetKind.IMAGE,
        default_scale=30,
        visualization=VisualizationPreset(
            bands=("treecover2000",), min=0, max=100, palette=("000000", "00FF00"),
        ),
    ),
)


class DatasetRegistry:
    """
    Read-only, ordered table of DatasetDescriptors keyed by name.

    Iteration follows registration order, which is also the key order
    of the /sensor response.
    """

    def __init__(self, datasets: Iterable[DatasetDescriptor]):
        table = {}
        for descriptor in datasets:
            if descriptor.name in table:
                raise ValueError(f"Duplicate dataset name: {descriptor.name}")
            table[descriptor.name] = descriptor
        self._datasets: Mapping[str, DatasetDescriptor] = MappingProxyType(table)

    def __iter__(self) -> Iterator[DatasetDescriptor]:
        return iter(self._datasets.values())

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, name: object) -> bool:
        return name in self._datasets

    def get(self, name: str) -> DatasetDescriptor:
        """
        Look up a dataset by its display name.

        Raises:
            KeyError: Unknown name
        """
        return self._datasets[name]

    def names(self) -> List[str]:
        return list(self._datasets.keys())


DEFAULT_REGISTRY = DatasetRegistry(DEFAULT_DATASETS)
