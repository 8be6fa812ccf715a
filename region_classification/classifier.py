"""
Coordinate to region-code classification.

A point is resolved against a :class:`~region_classification.boundaries.BoundaryTable`
in a fixed order, stopping at the first step that produces a code:

1. Exact polygon containment over the country features
2. Country bounding-box containment over the same features
3. Region-box containment over the fixed region entries
4. Nearest region-box centroid (degree-space Euclidean distance)

Classification is a total function: invalid input, an empty table or an
unresolvable point all yield the ``ANONYMOUS`` code instead of an error.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import pandas as pd

from .boundaries import BoundaryFeature, BoundaryTable, RegionBoundaryEntry, default_table
from .codes import ANONYMOUS
from .geometry import (
    degree_distance,
    normalize_longitude,
    point_in_region_bounds,
)
from .regions import get_region_name

logger = logging.getLogger(__name__)

MATCH_POLYGON = "polygon"
MATCH_FEATURE_BBOX = "feature_bbox"
MATCH_REGION_BOX = "region_box"
MATCH_NEAREST = "nearest"
MATCH_FALLBACK = "fallback"


def _is_valid_number(value: Any) -> bool:
    if value is None:
        return False
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        # pd.NA, non-numeric strings and ints too large for a float
        return False
    return math.isfinite(number)


class RegionClassifier:
    """
    Classify coordinates against an immutable boundary table.

    The classifier holds no mutable state, so one instance can be shared
    across threads.
    """

    def __init__(self, table: BoundaryTable | None = None):
        self.table = table if table is not None else default_table()

    def __repr__(self) -> str:
        return (
            f"RegionClassifier(features={len(self.table.features)}, "
            f"entries={len(self.table.entries)})"
        )

    # ------------------------------------------------------------------
    # Individual steps
    # ------------------------------------------------------------------

    def find_exact_feature(self, lat: float, lng: float) -> BoundaryFeature | None:
        """First feature whose geometry contains the point."""
        point = (lng, lat)
        for feature in self.table.features:
            if feature.geometry.contains(point):
                return feature
        return None

    def find_feature_by_bbox(self, lat: float, lng: float) -> BoundaryFeature | None:
        """First feature whose bounding box contains the point, antimeridian aware."""
        point = (lng, lat)
        for feature in self.table.features:
            if point_in_region_bounds(point, feature.bounding_box()):
                return feature
        return None

    def find_region_box(self, lat: float, lng: float) -> RegionBoundaryEntry | None:
        """First region entry containing the point, antimeridian aware."""
        point = (lng, lat)
        for entry in self.table.entries:
            if point_in_region_bounds(point, entry.bounds):
                return entry
        return None

    def find_nearest_region(self, lat: float, lng: float) -> RegionBoundaryEntry | None:
        """
        Entry whose box centroid is closest in raw degrees.

        Ties keep the entry seen first in enumeration order.
        """
        nearest = None
        shortest = math.inf
        for entry in self.table.entries:
            center_lat, center_lng = entry.bounds.centroid()
            distance = degree_distance(lat, lng, center_lat, center_lng)
            if distance < shortest:
                shortest = distance
                nearest = entry
        return nearest

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def explain(self, lat: float | None, lng: float | None) -> dict[str, Any]:
        """
        Classify a point and report how the code was found.

        Returns
        -------
        dict with keys:
            - region_code: Region code (always set)
            - region_name: Human-readable taxonomy path
            - match_method: polygon, feature_bbox, region_box, nearest or fallback
            - matched_id: Feature id or entry name that produced the code, or None
        """
        code = ANONYMOUS
        method = MATCH_FALLBACK
        matched_id = None

        if _is_valid_number(lat) and _is_valid_number(lng) and not self.table.is_empty:
            lat = float(lat)
            lng = normalize_longitude(float(lng))

            feature = self.find_exact_feature(lat, lng)
            if feature is not None:
                code, method, matched_id = feature.leaf_code(lng), MATCH_POLYGON, feature.feature_id
            else:
                feature = self.find_feature_by_bbox(lat, lng)
                if feature is not None:
                    code, method, matched_id = (
                        feature.leaf_code(lng),
                        MATCH_FEATURE_BBOX,
                        feature.feature_id,
                    )
                else:
                    entry = self.find_region_box(lat, lng)
                    if entry is not None:
                        code, method, matched_id = entry.code, MATCH_REGION_BOX, entry.name
                    else:
                        entry = self.find_nearest_region(lat, lng)
                        if entry is not None:
                            code, method, matched_id = entry.code, MATCH_NEAREST, entry.name

        return {
            "region_code": code,
            "region_name": get_region_name(code),
            "match_method": method,
            "matched_id": matched_id,
        }

    def classify(self, lat: float | None, lng: float | None) -> int:
        """Region code for a point. Never raises."""
        return self.explain(lat, lng)["region_code"]


def classify_coordinates(
    lat: float | None,
    lng: float | None,
    table: BoundaryTable | None = None,
) -> dict[str, Any]:
    """
    Classify a single coordinate pair.

    Parameters
    ----------
    lat : float or None
        Latitude in decimal degrees
    lng : float or None
        Longitude in decimal degrees (any range; normalized internally)
    table : BoundaryTable or None
        Boundary table to use; defaults to the built-in region boxes

    Returns
    -------
    dict
        See :meth:`RegionClassifier.explain`.
    """
    return RegionClassifier(table).explain(lat, lng)


def classify_dataframe(
    df: pd.DataFrame,
    lat_col: str = "latitude",
    lng_col: str = "longitude",
    classifier: RegionClassifier | None = None,
) -> pd.DataFrame:
    """
    Add region classification columns to a DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame with latitude and longitude columns
    lat_col : str
        Name of latitude column
    lng_col : str
        Name of longitude column
    classifier : RegionClassifier or None
        Classifier to use; defaults to one over the built-in region boxes

    Returns
    -------
    pd.DataFrame
        Copy of the input with ``region_code``, ``region_name`` and
        ``match_method`` columns added
    """
    for column in (lat_col, lng_col):
        if column not in df.columns:
            raise KeyError(f"Missing required column: {column}")

    classifier = classifier or RegionClassifier()
    logger.info("Classifying %d coordinates...", len(df))

    codes = []
    names = []
    methods = []
    for lat, lng in zip(df[lat_col], df[lng_col]):
        result = classifier.explain(lat, lng)
        codes.append(result["region_code"])
        names.append(result["region_name"])
        methods.append(result["match_method"])

    df = df.copy()
    df["region_code"] = pd.Series(codes, index=df.index, dtype="int64")
    df["region_name"] = names
    df["match_method"] = methods

    if len(df) > 0:
        method_counts = df["match_method"].value_counts()
        top_regions = df["region_name"].value_counts().head(5)
        logger.info("  Match methods: %s", dict(method_counts))
        logger.info("  Top regions: %s", dict(top_regions))

    return df
