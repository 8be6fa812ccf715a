"""
Static boundary data for region classification.

Two kinds of boundaries are held in an immutable :class:`BoundaryTable`:

- Country features: named Polygon/MultiPolygon geometries injected from a
  GeoJSON dataset, each mapped to a region code. ``USA`` and ``CAN`` carry a
  longitude partition that splits them into several leaf codes.
- Region boxes: a fixed list of named rectangles, one per leaf code, covering
  the inhabited continents, ocean basins and both polar caps.

Boxes overlap. Enumeration order is the tie-break: the first matching entry
wins, regardless of box size.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .codes import MAX_REGION_CODE, code_for_path
from .geometry import BoundingBox, Geometry, geometry_from_geojson, is_rectangle_ring

logger = logging.getLogger(__name__)


# ============================================================================
# Region boxes
# Format: name -> ((min_lat, max_lat, min_lng, max_lng), code path)
# A box with min_lng > max_lng crosses the antimeridian.
# ============================================================================

_REGION_BOXES = {
    # Oceans and poles
    "MAJOR.NORTH_PACIFIC": ((0, 66.5, 120, -120), "MAJOR.NORTH_PACIFIC"),
    "MAJOR.SOUTH_PACIFIC": ((-60, 0, 120, -120), "MAJOR.SOUTH_PACIFIC"),
    "MAJOR.NORTH_ATLANTIC": ((0, 66.5, -70, 20), "MAJOR.NORTH_ATLANTIC"),
    "MAJOR.SOUTH_ATLANTIC": ((-60, 0, -70, 20), "MAJOR.SOUTH_ATLANTIC"),
    "MAJOR.INDIAN_OCEAN": ((-60, 30, 20, 120), "MAJOR.INDIAN_OCEAN"),
    "MAJOR.ARCTIC": ((66.5, 90, -180, 180), "MAJOR.ARCTIC"),
    "MAJOR.ANTARCTIC": ((-90, -60, -180, 180), "MAJOR.ANTARCTIC"),

    # North America
    "NORTH_AMERICA.CANADA_WEST": ((49, 75, -140, -100), "NORTH_AMERICA.CANADA_WEST"),
    "NORTH_AMERICA.CANADA_EAST": ((45, 75, -100, -50), "NORTH_AMERICA.CANADA_EAST"),
    "NORTH_AMERICA.USA_WEST": ((30, 49, -125, -105), "NORTH_AMERICA.USA_WEST"),
    "NORTH_AMERICA.USA_CENTRAL": ((25, 49, -105, -85), "NORTH_AMERICA.USA_CENTRAL"),
    "NORTH_AMERICA.USA_EAST": ((25, 49, -85, -65), "NORTH_AMERICA.USA_EAST"),
    "NORTH_AMERICA.MEXICO": ((14, 32, -120, -85), "NORTH_AMERICA.MEXICO"),

    # Asia
    "ASIA.EAST_COAST": ((20, 46, 115, 145), "ASIA.EAST_COAST"),
    "ASIA.CHINA_INLAND": ((20, 45, 85, 115), "ASIA.CHINA_INLAND"),
    "ASIA.SOUTH_EAST": ((-10, 23, 95, 140), "ASIA.SOUTH_EAST"),
    "ASIA.INDIA_NORTH": ((20, 35, 68, 97), "ASIA.INDIA_NORTH"),
    "ASIA.INDIA_SOUTH": ((8, 20, 72, 87), "ASIA.INDIA_SOUTH"),
    "ASIA.CENTRAL": ((35, 45, 50, 90), "ASIA.CENTRAL"),
    "ASIA.MIDDLE_EAST": ((12, 42, 35, 65), "ASIA.MIDDLE_EAST"),

    # Europe
    "EUROPE.WEST": ((43, 58, -10, 5), "EUROPE.WEST"),
    "EUROPE.CENTRAL": ((45, 55, 5, 25), "EUROPE.CENTRAL"),
    "EUROPE.SOUTH": ((36, 45, -10, 25), "EUROPE.SOUTH"),
    "EUROPE.NORTH": ((55, 71, 5, 30), "EUROPE.NORTH"),
    "EUROPE.EAST": ((45, 60, 25, 40), "EUROPE.EAST"),

    # Africa
    "AFRICA.NORTH": ((20, 37, -17, 35), "AFRICA.NORTH"),
    "AFRICA.WEST": ((4, 20, -17, 10), "AFRICA.WEST"),
    "AFRICA.EAST": ((-12, 18, 30, 52), "AFRICA.EAST"),
    "AFRICA.CENTRAL": ((-5, 15, 8, 30), "AFRICA.CENTRAL"),
    "AFRICA.SOUTHERN": ((-35, -8, 10, 41), "AFRICA.SOUTH"),

    # South America
    "SOUTH_AMERICA.BRAZIL.NORTH": ((0, 5, -70, -35), "SOUTH_AMERICA.BRAZIL.NORTH"),
    "SOUTH_AMERICA.BRAZIL.SOUTH": ((-33, -15, -58, -35), "SOUTH_AMERICA.BRAZIL.SOUTH"),
    "SOUTH_AMERICA.BRAZIL.AMAZON": ((-15, 0, -70, -45), "SOUTH_AMERICA.BRAZIL.AMAZON"),
    "SOUTH_AMERICA.ANDES": ((-23, 12, -82, -65), "SOUTH_AMERICA.ANDES"),
    "SOUTH_AMERICA.SOUTHERN_CONE": ((-56, -23, -76, -53), "SOUTH_AMERICA.SOUTHERN_CONE"),
    "SOUTH_AMERICA.CENTRAL": ((-15, 12, -65, -45), "SOUTH_AMERICA.CENTRAL"),
    "SOUTH_AMERICA.CARIBBEAN": ((10, 25, -85, -60), "SOUTH_AMERICA.CARIBBEAN"),

    # Pacific
    "PACIFIC.NORTH_WEST": ((0, 66.5, 140, 180), "SPECIAL.PACIFIC_NORTHWEST"),
    "PACIFIC.NORTH_EAST": ((0, 66.5, -180, -120), "SPECIAL.PACIFIC_NORTHEAST"),
    "PACIFIC.CENTRAL_WEST": ((-30, 0, 150, 180), "SPECIAL.PACIFIC_SOUTHWEST"),
    "PACIFIC.CENTRAL_EAST": ((-30, 0, -180, -120), "SPECIAL.PACIFIC_SOUTHEAST"),

    # Atlantic
    "ATLANTIC.NORTH_WEST": ((0, 66.5, -80, -40), "SPECIAL.ATLANTIC_NORTHWEST"),
    "ATLANTIC.NORTH_EAST": ((0, 66.5, -40, 0), "SPECIAL.ATLANTIC_NORTHEAST"),
    "ATLANTIC.SOUTH_WEST": ((-60, 0, -70, -20), "SPECIAL.ATLANTIC_SOUTHWEST"),
    "ATLANTIC.SOUTH_EAST": ((-60, 0, -20, 20), "SPECIAL.ATLANTIC_SOUTHEAST"),

    # Indian Ocean
    "INDIAN.NORTH": ((0, 30, 55, 100), "SPECIAL.INDIAN_NORTH"),
    "INDIAN.SOUTH": ((-60, 0, 20, 110), "SPECIAL.INDIAN_SOUTH"),

    # Russia
    "ASIA.RUSSIA_WEST": ((45, 66.5, 20, 60), "ASIA.RUSSIA_WEST"),
    "ASIA.RUSSIA_CENTRAL": ((45, 66.5, 60, 120), "ASIA.RUSSIA_CENTRAL"),
    "ASIA.RUSSIA_EAST": ((45, 66.5, 120, 180), "ASIA.RUSSIA_EAST"),

    "ASIA.MONGOLIA": ((41.5, 52, 87, 120), "ASIA.MONGOLIA"),
    "AFRICA.SAHARA": ((15, 35, -17, 35), "AFRICA.SAHARA"),

    "PACIFIC.SOUTH_EAST_DEEP": ((-60, 0, -120, -70), "SPECIAL.PACIFIC_SOUTHEAST_DEEP"),
}


# ============================================================================
# Country features
# ISO 3166-1 alpha-3 -> code path. Countries that straddle several leaf
# codes (BRA, CHN, IND, RUS) are left out so the region boxes resolve them.
# ============================================================================

_COUNTRY_PATHS = {
    "NORTH_AMERICA.MEXICO": ["MEX"],
    "SOUTH_AMERICA.CARIBBEAN": [
        "CUB", "JAM", "HTI", "DOM", "PRI", "BHS", "TTO",
        "GTM", "BLZ", "SLV", "HND", "NIC", "CRI", "PAN",
    ],
    "SOUTH_AMERICA.ANDES": ["COL", "ECU", "PER", "BOL"],
    "SOUTH_AMERICA.SOUTHERN_CONE": ["ARG", "CHL", "URY"],
    "SOUTH_AMERICA.CENTRAL": ["VEN", "GUY", "SUR", "PRY"],
    "EUROPE.WEST": ["GBR", "IRL", "FRA", "BEL", "NLD", "LUX"],
    "EUROPE.CENTRAL": ["DEU", "POL", "CZE", "AUT", "CHE", "SVK", "HUN"],
    "EUROPE.SOUTH": [
        "ESP", "PRT", "ITA", "GRC", "HRV", "SVN", "BIH",
        "SRB", "MNE", "ALB", "MKD", "BGR",
    ],
    "EUROPE.NORTH": ["NOR", "SWE", "FIN", "DNK", "EST", "LVA", "LTU", "ISL"],
    "EUROPE.EAST": ["UKR", "BLR", "MDA", "ROU"],
    "AFRICA.NORTH": ["MAR", "DZA", "TUN", "LBY", "EGY"],
    "AFRICA.WEST": [
        "SEN", "GMB", "GNB", "GIN", "SLE", "LBR", "CIV", "GHA",
        "TGO", "BEN", "NGA", "BFA", "MLI", "NER", "MRT",
    ],
    "AFRICA.EAST": ["ETH", "ERI", "DJI", "SOM", "KEN", "UGA", "TZA", "RWA", "BDI", "SSD"],
    "AFRICA.CENTRAL": ["COD", "COG", "CAF", "CMR", "GAB", "GNQ", "TCD", "SDN"],
    "AFRICA.SOUTH": [
        "ZAF", "NAM", "BWA", "ZWE", "ZMB", "MOZ", "AGO", "MWI", "LSO", "SWZ", "MDG",
    ],
    "ASIA.EAST_COAST": ["JPN", "KOR", "PRK", "TWN"],
    "ASIA.SOUTH_EAST": ["VNM", "THA", "LAO", "KHM", "MMR", "MYS", "SGP", "IDN", "PHL", "BRN"],
    "ASIA.INDIA_NORTH": ["PAK", "NPL", "BTN", "BGD"],
    "ASIA.INDIA_SOUTH": ["LKA"],
    "ASIA.CENTRAL": ["KAZ", "UZB", "TKM", "KGZ", "TJK", "AFG"],
    "ASIA.MONGOLIA": ["MNG"],
    "ASIA.MIDDLE_EAST": [
        "TUR", "SYR", "LBN", "ISR", "JOR", "IRQ", "IRN", "SAU",
        "YEM", "OMN", "ARE", "QAT", "KWT", "BHR",
    ],
}

COUNTRY_REGION_CODES: Mapping[str, int] = MappingProxyType({
    iso: code_for_path(path) for path, isos in _COUNTRY_PATHS.items() for iso in isos
})


@dataclass(frozen=True)
class LongitudePartition:
    """
    Split a matched feature into leaf codes by longitude.

    ``codes[i]`` applies west of ``thresholds[i]``; the last code applies to
    everything east of the final threshold.
    """

    thresholds: tuple[float, ...]
    codes: tuple[int, ...]

    def __post_init__(self):
        if len(self.codes) != len(self.thresholds) + 1:
            raise ValueError(
                f"Partition needs {len(self.thresholds) + 1} codes, got {len(self.codes)}"
            )
        if list(self.thresholds) != sorted(self.thresholds):
            raise ValueError(f"Partition thresholds must be ascending: {self.thresholds}")

    def code_for(self, lng: float) -> int:
        for threshold, code in zip(self.thresholds, self.codes):
            if lng < threshold:
                return code
        return self.codes[-1]


COUNTRY_PARTITIONS: Mapping[str, LongitudePartition] = MappingProxyType({
    "USA": LongitudePartition(
        thresholds=(-115.0, -98.0),
        codes=(
            code_for_path("NORTH_AMERICA.USA_WEST"),
            code_for_path("NORTH_AMERICA.USA_CENTRAL"),
            code_for_path("NORTH_AMERICA.USA_EAST"),
        ),
    ),
    "CAN": LongitudePartition(
        thresholds=(-100.0,),
        codes=(
            code_for_path("NORTH_AMERICA.CANADA_WEST"),
            code_for_path("NORTH_AMERICA.CANADA_EAST"),
        ),
    ),
})


# ============================================================================
# Table types
# ============================================================================

@dataclass(frozen=True)
class RegionBoundaryEntry:
    """A named rectangular region with its code."""

    name: str
    bounds: BoundingBox
    code: int


@dataclass(frozen=True)
class BoundaryFeature:
    """A country geometry mapped to a region code, optionally partitioned."""

    feature_id: str
    geometry: Geometry
    code: int
    partition: LongitudePartition | None = None

    def leaf_code(self, lng: float) -> int:
        """Code for a point already known to match this feature."""
        if self.partition is not None:
            return self.partition.code_for(lng)
        return self.code

    def codes(self) -> tuple[int, ...]:
        if self.partition is not None:
            return self.partition.codes
        return (self.code,)

    def bounding_box(self) -> BoundingBox:
        return self.geometry.bounding_box()


def _check_code(code: int, owner: str) -> None:
    if not 0 <= code <= MAX_REGION_CODE:
        raise ValueError(f"Region code {code} for {owner} does not fit in 16 bits")


REGION_BOUNDARIES: tuple[RegionBoundaryEntry, ...] = tuple(
    RegionBoundaryEntry(name=name, bounds=BoundingBox(*bounds), code=code_for_path(path))
    for name, (bounds, path) in _REGION_BOXES.items()
)


@dataclass(frozen=True)
class BoundaryTable:
    """
    Immutable registry of boundary features and region boxes.

    Built once and shared by reference; iteration order of both tuples is the
    classification tie-break.
    """

    features: tuple[BoundaryFeature, ...] = ()
    entries: tuple[RegionBoundaryEntry, ...] = field(default=REGION_BOUNDARIES)

    def __post_init__(self):
        object.__setattr__(self, "features", tuple(self.features))
        object.__setattr__(self, "entries", tuple(self.entries))
        for feature in self.features:
            for code in feature.codes():
                _check_code(code, feature.feature_id)
        for entry in self.entries:
            _check_code(entry.code, entry.name)

    @classmethod
    def empty(cls) -> BoundaryTable:
        return cls(features=(), entries=())

    @classmethod
    def from_geojson(
        cls,
        source: Path | str | Mapping[str, Any],
        entries: Sequence[RegionBoundaryEntry] = REGION_BOUNDARIES,
    ) -> BoundaryTable:
        return cls(features=load_boundary_features(source), entries=tuple(entries))

    @property
    def is_empty(self) -> bool:
        return not self.features and not self.entries

    def with_features(self, features: Iterable[BoundaryFeature]) -> BoundaryTable:
        return BoundaryTable(features=tuple(features), entries=self.entries)

    def get_entry(self, name: str) -> RegionBoundaryEntry:
        for entry in self.entries:
            if entry.name == name:
                return entry
        raise KeyError(f"Unknown region boundary: {name}")

    def entry_for_code(self, code: int) -> RegionBoundaryEntry | None:
        """First entry carrying ``code``, or None."""
        for entry in self.entries:
            if entry.code == code:
                return entry
        return None


# ============================================================================
# GeoJSON loading
# ============================================================================

def _feature_id(feature: Mapping[str, Any]) -> str | None:
    if feature.get("id"):
        return str(feature["id"])
    properties = feature.get("properties") or {}
    for key in ("ISO_A3", "iso_a3", "ADM0_A3", "adm0_a3"):
        value = properties.get(key)
        if value and value != "-99":
            return str(value)
    return None


def _is_placeholder_box(geometry: Mapping[str, Any]) -> bool:
    if geometry.get("type") != "Polygon":
        return False
    coordinates = geometry.get("coordinates") or []
    return bool(coordinates) and is_rectangle_ring(coordinates[0])


def feature_from_geojson(
    feature: Mapping[str, Any],
    country_codes: Mapping[str, int] = COUNTRY_REGION_CODES,
    partitions: Mapping[str, LongitudePartition] = COUNTRY_PARTITIONS,
) -> BoundaryFeature | None:
    """
    Convert one GeoJSON feature to a :class:`BoundaryFeature`.

    Returns None for rectangle placeholders, unsupported geometry types and
    countries without a code mapping.
    """
    feature_id = _feature_id(feature)
    raw_geometry = feature.get("geometry") or {}
    if feature_id is None or _is_placeholder_box(raw_geometry):
        return None

    geometry = geometry_from_geojson(raw_geometry)
    if geometry is None:
        return None

    partition = partitions.get(feature_id)
    if partition is not None:
        return BoundaryFeature(feature_id, geometry, partition.codes[0], partition)

    code = country_codes.get(feature_id)
    if code is None:
        return None
    return BoundaryFeature(feature_id, geometry, code)


def load_boundary_features(
    source: Path | str | Mapping[str, Any],
    country_codes: Mapping[str, int] = COUNTRY_REGION_CODES,
    partitions: Mapping[str, LongitudePartition] = COUNTRY_PARTITIONS,
) -> tuple[BoundaryFeature, ...]:
    """
    Load country features from a GeoJSON FeatureCollection.

    Parameters
    ----------
    source:
        Path to a ``.geojson`` file, or an already-parsed FeatureCollection.
    country_codes:
        ISO alpha-3 to region code mapping.
    partitions:
        Longitude partitions keyed by ISO alpha-3.

    Returns
    -------
    tuple[BoundaryFeature, ...]
        Features in file order.
    """
    if isinstance(source, Mapping):
        collection = source
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Boundary file not found: {path}")
        logger.info("Loading boundary features from %s...", path)
        with path.open(encoding="utf-8") as handle:
            collection = json.load(handle)

    raw_features = collection.get("features") or []
    features = []
    skipped = 0
    for raw in raw_features:
        feature = feature_from_geojson(raw, country_codes, partitions)
        if feature is None:
            skipped += 1
            logger.debug("Skipping boundary feature %s", _feature_id(raw))
            continue
        features.append(feature)

    logger.info("Loaded %d boundary features (%d skipped)", len(features), skipped)
    return tuple(features)


def load_boundary_table(path: Path | str | None = None) -> BoundaryTable:
    """Region boxes plus, when ``path`` is given, the country features in it."""
    if path is None:
        return default_table()
    return BoundaryTable.from_geojson(path)


@lru_cache(maxsize=1)
def default_table() -> BoundaryTable:
    """Shared table with the built-in region boxes and no country features."""
    return BoundaryTable()
