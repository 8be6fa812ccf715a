"""Region-level helpers: display names, neighbours and rough latency estimates."""

from __future__ import annotations

import math

from .boundaries import BoundaryTable, default_table
from .codes import CODE_PATHS
from .geometry import great_circle_distance

UNKNOWN_REGION_NAME = "Unknown Region"

# Rough one-way latency per kilometre of centroid separation
LATENCY_MS_PER_KM = 0.1


def get_region_name(code: int) -> str:
    """Taxonomy path for a code, e.g. ``"SOUTH_AMERICA > BRAZIL > NORTH"``."""
    path = CODE_PATHS.get(code)
    if path is None:
        return UNKNOWN_REGION_NAME
    return " > ".join(path)


def _require_entry(code: int, table: BoundaryTable):
    entry = table.entry_for_code(code)
    if entry is None:
        raise KeyError(f"No region boundary for code {code}")
    return entry


def neighboring_regions(code: int, table: BoundaryTable | None = None) -> list[int]:
    """
    Codes of regions whose boxes touch or overlap the box of ``code``.

    Results follow table order and exclude ``code`` itself. Codes without a
    box have no neighbours.
    """
    table = table or default_table()
    entry = table.entry_for_code(code)
    if entry is None:
        return []

    neighbours = []
    for other in table.entries:
        if other.code == code or other.code in neighbours:
            continue
        if entry.bounds.intersects(other.bounds):
            neighbours.append(other.code)
    return neighbours


def region_distance_km(code_a: int, code_b: int, table: BoundaryTable | None = None) -> float:
    """Great-circle distance between the centroids of two region boxes."""
    table = table or default_table()
    lat_a, lng_a = _require_entry(code_a, table).bounds.centroid()
    lat_b, lng_b = _require_entry(code_b, table).bounds.centroid()
    return great_circle_distance(lat_a, lng_a, lat_b, lng_b)


def estimate_latency_ms(code_a: int, code_b: int, table: BoundaryTable | None = None) -> int:
    """Whole-millisecond latency estimate from region centroid separation."""
    return math.floor(region_distance_km(code_a, code_b, table) * LATENCY_MS_PER_KM)
