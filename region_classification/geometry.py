"""
Planar geometry helpers for region classification.

Everything here works in plain equirectangular degrees:
- Longitude normalization into [-180, 180)
- Ray-casting point-in-polygon for Polygon / MultiPolygon rings
- Axis-aligned bounding boxes, including boxes that cross the antimeridian
- Two distance metrics: degree-space Euclidean and Haversine great-circle

Points are ``(x, y)`` tuples in GeoJSON order, i.e. ``(lng, lat)``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

EARTH_RADIUS_KM = 6371.0

Point = tuple[float, float]
Ring = tuple[Point, ...]


# ============================================================================
# Longitude handling
# ============================================================================

def normalize_longitude(lng: float) -> float:
    """Map any finite longitude into the half-open range [-180, 180)."""
    normalized = ((lng + 180.0) % 360.0) - 180.0
    # (-tiny + 180) % 360 can round up to 360.0
    if normalized >= 180.0:
        normalized -= 360.0
    return normalized


# ============================================================================
# Bounding boxes
# ============================================================================

@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box in degrees.

    When ``min_lng > max_lng`` the box crosses the antimeridian and covers
    ``[min_lng, 180]`` plus ``[-180, max_lng]``.
    """

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def crosses_antimeridian(self) -> bool:
        return self.min_lng > self.max_lng

    @property
    def is_degenerate(self) -> bool:
        return self.min_lat >= self.max_lat or self.min_lng == self.max_lng

    def split_antimeridian(self) -> tuple[BoundingBox, ...]:
        """Return one box, or the two non-crossing halves of a crossing box."""
        if not self.crosses_antimeridian:
            return (self,)
        return (
            BoundingBox(self.min_lat, self.max_lat, self.min_lng, 180.0),
            BoundingBox(self.min_lat, self.max_lat, -180.0, self.max_lng),
        )

    def width(self) -> float:
        if self.crosses_antimeridian:
            return (180.0 - self.min_lng) + (self.max_lng + 180.0)
        return self.max_lng - self.min_lng

    def height(self) -> float:
        return self.max_lat - self.min_lat

    def centroid(self) -> tuple[float, float]:
        """
        Centre of the box as ``(lat, lng)``.

        For a crossing box the longitude midpoint is measured eastward from
        ``min_lng`` and normalized, so ``(120, -120)`` centres on -180.
        """
        center_lat = (self.min_lat + self.max_lat) / 2
        if self.crosses_antimeridian:
            center_lng = normalize_longitude(self.min_lng + self.width() / 2)
        else:
            center_lng = (self.min_lng + self.max_lng) / 2
        return center_lat, center_lng

    def intersects(self, other: BoundingBox) -> bool:
        """True if the boxes overlap or share an edge."""
        for mine in self.split_antimeridian():
            for theirs in other.split_antimeridian():
                if (
                    mine.min_lat <= theirs.max_lat
                    and theirs.min_lat <= mine.max_lat
                    and mine.min_lng <= theirs.max_lng
                    and theirs.min_lng <= mine.max_lng
                ):
                    return True
        return False


def point_in_bounding_box(point: Point, box: BoundingBox) -> bool:
    """
    Inclusive containment test on both axes.

    Does not handle wraparound: callers with antimeridian-crossing boxes must
    split them first (see :func:`point_in_region_bounds`). Zero-area boxes
    never contain anything.
    """
    if box.is_degenerate or box.crosses_antimeridian:
        return False
    x, y = point
    return box.min_lng <= x <= box.max_lng and box.min_lat <= y <= box.max_lat


def point_in_region_bounds(point: Point, box: BoundingBox) -> bool:
    """Containment test that treats a crossing box as the union of its halves."""
    return any(point_in_bounding_box(point, part) for part in box.split_antimeridian())


# ============================================================================
# Polygons
# ============================================================================

def point_in_ring(point: Point, ring: Sequence[Sequence[float]]) -> bool:
    """
    Ray-casting test for a single ring of ``(x, y)`` vertices.

    The ring is implicitly closed. An edge counts when exactly one of its
    endpoints lies above the point, so a vertex shared by two edges is never
    counted twice. Rings with fewer than three vertices contain nothing.
    """
    n = len(ring)
    if n < 3:
        return False

    x, y = point
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        if yj != yi and ((yi > y) != (yj > y)):
            x_intercept = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_intercept:
                inside = not inside
        j = i
    return inside


def _ring_bounds(rings: Iterable[Ring]) -> BoundingBox:
    """
    Aggregate box of every vertex.

    When the vertices span more than 180 degrees of longitude the geometry is
    taken to straddle the antimeridian, and the result is a crossing box from
    the westernmost eastern-hemisphere vertex to the easternmost
    western-hemisphere vertex.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    min_east = math.inf
    max_west = -math.inf
    for ring in rings:
        for x, y in ring:
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            min_y = min(min_y, y)
            max_y = max(max_y, y)
            if x >= 0:
                min_east = min(min_east, x)
            else:
                max_west = max(max_west, x)
    if math.isinf(min_x):
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    if max_x - min_x > 180.0:
        return BoundingBox(min_lat=min_y, max_lat=max_y, min_lng=min_east, max_lng=max_west)
    return BoundingBox(min_lat=min_y, max_lat=max_y, min_lng=min_x, max_lng=max_x)


@dataclass(frozen=True)
class Polygon:
    """A single exterior ring of ``(lng, lat)`` vertices."""

    ring: Ring

    @classmethod
    def from_coordinates(cls, coordinates: Iterable[Sequence[float]]) -> Polygon:
        return cls(tuple((float(c[0]), float(c[1])) for c in coordinates))

    @property
    def is_degenerate(self) -> bool:
        return len(self.ring) < 3

    def contains(self, point: Point) -> bool:
        return point_in_ring(point, self.ring)

    def rings(self) -> tuple[Ring, ...]:
        return (self.ring,)

    def bounding_box(self) -> BoundingBox:
        return _ring_bounds(self.rings())


@dataclass(frozen=True)
class MultiPolygon:
    """A set of polygons; the point matches if any member contains it."""

    polygons: tuple[Polygon, ...]

    @property
    def is_degenerate(self) -> bool:
        return all(polygon.is_degenerate for polygon in self.polygons)

    def contains(self, point: Point) -> bool:
        return any(polygon.contains(point) for polygon in self.polygons)

    def rings(self) -> tuple[Ring, ...]:
        return tuple(polygon.ring for polygon in self.polygons)

    def bounding_box(self) -> BoundingBox:
        return _ring_bounds(self.rings())


Geometry = Union[Polygon, MultiPolygon]


def point_in_polygon(point: Point, polygon: Polygon | Sequence[Sequence[float]]) -> bool:
    """Test a point against a :class:`Polygon` or a raw vertex sequence."""
    if isinstance(polygon, Polygon):
        return polygon.contains(point)
    return point_in_ring(point, polygon)


def point_in_multipolygon(point: Point, polygons: MultiPolygon | Iterable[Polygon]) -> bool:
    """True iff any member polygon contains the point."""
    if isinstance(polygons, MultiPolygon):
        return polygons.contains(point)
    return any(point_in_polygon(point, polygon) for polygon in polygons)


def bounding_box_of(geometry: Geometry) -> BoundingBox:
    """Bounding box of a geometry; MultiPolygon boxes aggregate every member ring."""
    return geometry.bounding_box()


def is_rectangle_ring(ring: Sequence[Sequence[float]]) -> bool:
    """
    Detect a five-vertex axis-aligned closed ring.

    Boundary datasets sometimes ship placeholder features that are just a
    country's bounding rectangle; those are dropped on load.
    """
    if len(ring) != 5:
        return False
    min_x, min_y = ring[0][0], ring[0][1]
    max_x, max_y = ring[2][0], ring[2][1]
    return all(
        p[0] == min_x or p[0] == max_x or p[1] == min_y or p[1] == max_y
        for p in ring
    )


def geometry_from_geojson(geometry: Mapping[str, Any] | None) -> Geometry | None:
    """
    Build a :class:`Polygon` or :class:`MultiPolygon` from a GeoJSON geometry.

    Only exterior rings are kept (holes are ignored). Unsupported geometry
    types return None.
    """
    if not geometry:
        return None

    geo_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if geo_type == "Polygon":
        if not coordinates:
            return None
        return Polygon.from_coordinates(coordinates[0])
    if geo_type == "MultiPolygon":
        members = tuple(
            Polygon.from_coordinates(polygon[0]) for polygon in coordinates if polygon
        )
        if not members:
            return None
        return MultiPolygon(members)
    return None


# ============================================================================
# Distances
# ============================================================================

def degree_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Euclidean distance in raw (lat, lng) degrees, no longitude wrap."""
    return math.hypot(lat1 - lat2, lng1 - lng2)


def great_circle_distance(lat1, lng1, lat2, lng2):
    """
    Haversine distance in kilometres (Earth radius 6371 km).

    Accepts scalars or numpy arrays; broadcasting follows numpy rules.
    Returns a float for scalar input.
    """
    lat1_rad, lng1_rad, lat2_rad, lng2_rad = map(np.radians, (lat1, lng1, lat2, lng2))
    dlat = lat2_rad - lat1_rad
    dlng = lng2_rad - lng1_rad

    a = np.sin(dlat / 2) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlng / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    distance = EARTH_RADIUS_KM * c

    if np.ndim(distance) == 0:
        return float(distance)
    return distance
