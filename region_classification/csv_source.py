"""
CSV data source for batch region classification.

Loads point data from a CSV file and coerces the coordinate columns to
numbers so they can go straight into
:func:`region_classification.classifier.classify_dataframe`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

# Alternative spellings normalized to the default column names
COORDINATE_ALIASES = {
    "lat": "latitude",
    "latitude1": "latitude",
    "Latitude": "latitude",
    "lon": "longitude",
    "lng": "longitude",
    "long": "longitude",
    "longitude1": "longitude",
    "Longitude": "longitude",
}


def normalize_coordinate_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename known latitude/longitude spellings unless the target already exists."""
    renames = {}
    for source, target in COORDINATE_ALIASES.items():
        if source in df.columns and target not in df.columns and target not in renames.values():
            renames[source] = target
    return df.rename(columns=renames)


def load_points_csv(
    csv_path: Path | str,
    lat_col: str = "latitude",
    lng_col: str = "longitude",
    limit: int | None = None,
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Load points from a CSV file.

    Parameters
    ----------
    csv_path:
        Path to the CSV file.
    lat_col, lng_col:
        Coordinate column names. The defaults also accept common aliases
        (``lat``, ``lng``, ``lon``, ``latitude1``...).
    limit:
        Optional limit on number of rows to load.
    logger:
        Optional logger for status messages.

    Returns
    -------
    pd.DataFrame
        Data with numeric coordinate columns; unparseable values become NaN.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    if logger:
        logger.info("Loading points from %s...", csv_path)

    df = pd.read_csv(csv_path, nrows=limit, low_memory=False)
    if lat_col == "latitude" and lng_col == "longitude":
        df = normalize_coordinate_columns(df)

    for column in (lat_col, lng_col):
        if column not in df.columns:
            raise KeyError(f"Missing required column: {column}")
        df[column] = pd.to_numeric(df[column], errors="coerce")

    if logger:
        valid = df[lat_col].notna() & df[lng_col].notna()
        logger.info("Loaded %d rows from CSV", len(df))
        logger.info(
            "  Valid coordinates: %d (%.1f%%)",
            valid.sum(),
            100 * valid.sum() / len(df) if len(df) > 0 else 0,
        )

    return df
