"""
Region Classification - Map coordinates to fixed region codes and node ids.

Main functionality:
    RegionClassifier: Classify (lat, lng) into a region code
    derive_node_id: Combine a region code with a key digest into a 34-byte id

Boundary data:
    BoundaryTable, load_boundary_table, load_boundary_features, REGION_BOUNDARIES

Rendering support:
    RegionGrid, cells_to_polygons, grid_regions (see also region_classification.plotting)

Basic usage:
    >>> from region_classification import RegionClassifier, derive_node_id
    >>> classifier = RegionClassifier()
    >>> code = classifier.classify(48.85, 2.35)
    >>> node_id = derive_node_id(code, b"public-key")
"""

# Core classification (most users only need this)
from .classifier import RegionClassifier, classify_coordinates, classify_dataframe
from .identifiers import InvalidKeyError, derive_node_id, split_node_id, to_identifier

# Code taxonomy
from .codes import ALL_REGION_CODES, ANONYMOUS, REGION_CODES, code_for_path, is_known_code

# Boundary data
from .boundaries import (
    REGION_BOUNDARIES,
    BoundaryFeature,
    BoundaryTable,
    LongitudePartition,
    RegionBoundaryEntry,
    load_boundary_features,
    load_boundary_table,
)

# Geometry kernel
from .geometry import (
    BoundingBox,
    MultiPolygon,
    Polygon,
    degree_distance,
    great_circle_distance,
    normalize_longitude,
    point_in_bounding_box,
    point_in_multipolygon,
    point_in_polygon,
)

# Region helpers
from .airports import find_nearest_airport
from .regions import estimate_latency_ms, get_region_name, neighboring_regions

# Grid overlay (rendering support)
from .grid_overlay import RegionGrid, cells_to_polygons, grid_regions

__all__ = [
    # Core API
    "RegionClassifier",
    "classify_coordinates",
    "classify_dataframe",
    "derive_node_id",
    "split_node_id",
    "to_identifier",
    "InvalidKeyError",
    # Codes
    "ALL_REGION_CODES",
    "ANONYMOUS",
    "REGION_CODES",
    "code_for_path",
    "is_known_code",
    # Boundaries
    "REGION_BOUNDARIES",
    "BoundaryFeature",
    "BoundaryTable",
    "LongitudePartition",
    "RegionBoundaryEntry",
    "load_boundary_features",
    "load_boundary_table",
    # Geometry
    "BoundingBox",
    "MultiPolygon",
    "Polygon",
    "degree_distance",
    "great_circle_distance",
    "normalize_longitude",
    "point_in_bounding_box",
    "point_in_multipolygon",
    "point_in_polygon",
    # Region helpers
    "find_nearest_airport",
    "estimate_latency_ms",
    "get_region_name",
    "neighboring_regions",
    # Grid overlay
    "RegionGrid",
    "cells_to_polygons",
    "grid_regions",
]

__version__ = "0.1.0"
