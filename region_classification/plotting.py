"""Static rendering of region overlays with matplotlib and cartopy."""

from __future__ import annotations

from pathlib import Path

import cartopy.crs as ccrs
import cartopy.feature as cfeature
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as PolygonPatch

from .boundaries import BoundaryTable, default_table
from .grid_overlay import (
    RegionGrid,
    bounds_to_rings,
    cells_to_polygons,
    format_region_name,
    grid_regions,
    region_color,
)


def plot_region_overlay(
    table: BoundaryTable | None = None,
    grid: RegionGrid | None = None,
    use_grid: bool = True,
    ax=None,
    labels: bool = False,
    coastlines: bool = False,
):
    """
    Draw every region of a boundary table on a PlateCarree map.

    Parameters:
    - table (BoundaryTable): Regions to draw (default: built-in region boxes).
    - grid (RegionGrid): Grid used when ``use_grid`` is True.
    - use_grid (bool): Draw merged grid cells instead of the raw boxes.
    - ax: Existing cartopy GeoAxes; a new figure is created when None.
    - labels (bool): Annotate each region at its box centroid.
    - coastlines (bool): Add Natural Earth coastlines (downloaded on first use).

    Returns the axis.
    """
    table = table or default_table()
    grid = grid or RegionGrid()
    data_crs = ccrs.PlateCarree()

    if ax is None:
        _, ax = plt.subplots(figsize=(14, 7), subplot_kw={"projection": ccrs.PlateCarree()})

    ax.set_global()
    if coastlines:
        ax.add_feature(cfeature.COASTLINE, linewidth=0.6)

    if use_grid:
        regions = grid_regions(table, grid)
        rings_by_name = {name: cells_to_polygons(region["cells"], grid) for name, region in regions.items()}
    else:
        rings_by_name = {entry.name: bounds_to_rings(entry.bounds) for entry in table.entries}

    for name, rings in rings_by_name.items():
        color = region_color(name)
        for ring in rings:
            # Rings are (lat, lng); matplotlib wants (x, y)
            xy = [(lng, lat) for lat, lng in ring]
            ax.add_patch(
                PolygonPatch(
                    xy,
                    closed=True,
                    facecolor=color,
                    edgecolor=color,
                    alpha=0.3,
                    linewidth=1,
                    transform=data_crs,
                )
            )

    if labels:
        for entry in table.entries:
            center_lat, center_lng = entry.bounds.centroid()
            ax.text(
                center_lng,
                center_lat,
                format_region_name(entry.name),
                fontsize=6,
                ha="center",
                transform=data_crs,
            )

    # Equator; the antimeridian is the map edge
    ax.axhline(0, color="red", linewidth=1, alpha=0.8)

    ax.gridlines(linestyle="--", linewidth=0.5, alpha=0.5)
    ax.set_title("Region Overlay")
    return ax


def save_region_overlay(
    output_path: Path | str,
    table: BoundaryTable | None = None,
    grid: RegionGrid | None = None,
    use_grid: bool = True,
    dpi: int = 150,
) -> Path:
    """Render the overlay to an image file and close the figure."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(14, 7), subplot_kw={"projection": ccrs.PlateCarree()})
    try:
        plot_region_overlay(table, grid, use_grid=use_grid, ax=ax)
        fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return output_path
