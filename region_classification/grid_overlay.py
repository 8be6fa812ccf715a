"""
Grid overlay geometry for rendering regions.

Regions are drawn on a uniform lat/lng grid: row 0 starts at the north pole,
column 0 at the antimeridian (-180). A set of ``(row, col)`` cells is turned
into a small number of rings by merging horizontally adjacent cells into
strips. Cells in the first and last column are kept in their own west/east
groups so no ring is ever merged across the -180/180 seam.

Rings are lists of ``(lat, lng)`` corners, the order most map libraries take.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .boundaries import BoundaryTable, default_table
from .geometry import BoundingBox, normalize_longitude, point_in_region_bounds

LatLng = tuple[float, float]
Corners = list[LatLng]

REGION_COLORS = {
    "PACIFIC": "#a2d5f2",
    "NORTH_AMERICA": "#ff6b6b",
    "EUROPE": "#4ecdc4",
    "ASIA": "#45b7d1",
    "AFRICA": "#ffeead",
    "SOUTH_AMERICA": "#d4a5a5",
    "ATLANTIC": "#87ceeb",
    "INDIAN": "#7ec0ee",
    "SOUTHERN": "#b0e0e6",
}
DEFAULT_REGION_COLOR = "#888888"


@dataclass(frozen=True)
class RegionGrid:
    """Uniform lat/lng grid; the default gives 10 x 10 degree cells."""

    rows: int = 18
    cols: int = 36

    def __post_init__(self):
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid needs positive rows and cols, got {self.rows}x{self.cols}")

    @property
    def cell_height(self) -> float:
        return 180.0 / self.rows

    @property
    def cell_width(self) -> float:
        return 360.0 / self.cols

    def top_latitude(self, row: int) -> float:
        return 90.0 - row * self.cell_height

    def left_longitude(self, col: int) -> float:
        return -180.0 + col * self.cell_width

    def cell_bounds(self, row: int, col: int) -> BoundingBox:
        return BoundingBox(
            min_lat=self.top_latitude(row + 1),
            max_lat=self.top_latitude(row),
            min_lng=self.left_longitude(col),
            max_lng=self.left_longitude(col + 1),
        )

    def cell_for_point(self, lat: float, lng: float) -> tuple[int, int]:
        """Cell containing a point; the poles and the east edge clamp inward."""
        row = int((90.0 - lat) // self.cell_height)
        col = int((normalize_longitude(lng) + 180.0) // self.cell_width)
        return min(max(row, 0), self.rows - 1), min(max(col, 0), self.cols - 1)


# ============================================================================
# Cells from region boxes
# ============================================================================

def cells_for_bounds(box: BoundingBox, grid: RegionGrid) -> list[tuple[int, int]]:
    """Cells whose centre lies inside ``box``, in row-major order."""
    cells = []
    half_height = grid.cell_height / 2
    half_width = grid.cell_width / 2
    for row in range(grid.rows):
        center_lat = grid.top_latitude(row) - half_height
        for col in range(grid.cols):
            center_lng = grid.left_longitude(col) + half_width
            if point_in_region_bounds((center_lng, center_lat), box):
                cells.append((row, col))
    return cells


def grid_regions(
    table: BoundaryTable | None = None,
    grid: RegionGrid | None = None,
) -> dict[str, dict[str, Any]]:
    """Map each region entry name to ``{"code": ..., "cells": [...]}``."""
    table = table or default_table()
    grid = grid or RegionGrid()
    return {
        entry.name: {"code": entry.code, "cells": cells_for_bounds(entry.bounds, grid)}
        for entry in table.entries
    }


# ============================================================================
# Cell merging
# ============================================================================

def cell_corners(row: int, col: int, grid: RegionGrid) -> Corners:
    """Corners of a cell: top-left, top-right, bottom-right, bottom-left."""
    top = grid.top_latitude(row)
    bottom = grid.top_latitude(row + 1)
    left = grid.left_longitude(col)
    right = grid.left_longitude(col + 1)
    return [(top, left), (top, right), (bottom, right), (bottom, left)]


def merge_strip(cells: Sequence[Corners]) -> Corners:
    """
    Outline a horizontal run of adjacent cells.

    The ring follows the top edge of every cell, the right edge of the last
    cell, the bottom edge in reverse, then the left edge of the first cell.
    """
    top_points = [cell[0] for cell in cells]
    right_edge = [cells[-1][1], cells[-1][2]]
    bottom_points = [cell[3] for cell in cells][::-1]
    left_edge = [cells[0][3], cells[0][0]]
    return top_points + right_edge + bottom_points + left_edge


def merge_cells(cells: Sequence[Corners]) -> list[Corners]:
    """
    Merge cell corner lists into strips, one ring per run of adjacent cells.

    Cells are grouped by top latitude and sorted west to east; a run continues
    while the previous cell's right longitude equals the next cell's left one.
    """
    if not cells:
        return []

    by_row: dict[float, list[Corners]] = {}
    for corners in cells:
        by_row.setdefault(corners[0][0], []).append(corners)

    merged = []
    for top_lat in sorted(by_row, reverse=True):
        row_cells = sorted(by_row[top_lat], key=lambda corners: corners[0][1])
        strip = [row_cells[0]]
        for previous, current in zip(row_cells, row_cells[1:]):
            if previous[1][1] == current[0][1]:
                strip.append(current)
            else:
                merged.append(merge_strip(strip))
                strip = [current]
        merged.append(merge_strip(strip))
    return merged


def cells_to_polygons(cells: Iterable[tuple[int, int]], grid: RegionGrid) -> list[Corners]:
    """
    Convert grid cells to display rings.

    Interior cells are merged together; cells in column 0 and in the last
    column are merged only within their own west and east groups.
    """
    normal_cells = []
    west_cells = []
    east_cells = []
    for row, col in dict.fromkeys(cells):
        corners = cell_corners(row, col, grid)
        if col == 0:
            west_cells.append(corners)
        elif col == grid.cols - 1:
            east_cells.append(corners)
        else:
            normal_cells.append(corners)

    polygons = []
    for group in (normal_cells, west_cells, east_cells):
        polygons.extend(merge_cells(group))
    return polygons


# ============================================================================
# Region boxes as rings
# ============================================================================

def bounds_to_rings(box: BoundingBox) -> list[Corners]:
    """One ring for a box, or two when it crosses the antimeridian."""
    return [
        [
            (part.max_lat, part.min_lng),
            (part.max_lat, part.max_lng),
            (part.min_lat, part.max_lng),
            (part.min_lat, part.min_lng),
        ]
        for part in box.split_antimeridian()
    ]


def format_region_name(name: str) -> str:
    return " > ".join(name.split("."))


def region_color(name: str) -> str:
    return REGION_COLORS.get(name.split(".")[0], DEFAULT_REGION_COLOR)
