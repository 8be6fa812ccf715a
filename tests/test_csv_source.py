"""Tests for CSV point loading."""

import logging

import pandas as pd
import pytest

from region_classification.csv_source import load_points_csv, normalize_coordinate_columns


def _write_csv(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadPointsCsv:
    """Tests for load_points_csv."""

    def test_load_basic_csv(self, tmp_path):
        """Default column names load as numbers."""
        csv_path = _write_csv(
            tmp_path / "points.csv",
            "name,latitude,longitude\nnyc,40.7128,-74.0060\ncalgary,51.0447,-114.0719\n",
        )
        df = load_points_csv(csv_path)

        assert len(df) == 2
        assert df["latitude"].dtype == float
        assert df.loc[0, "longitude"] == pytest.approx(-74.006)

    def test_aliases(self, tmp_path):
        """Common alternative spellings map to latitude/longitude."""
        csv_path = _write_csv(tmp_path / "points.csv", "lat,lng\n1.5,2.5\n")
        df = load_points_csv(csv_path)

        assert list(df.columns) == ["latitude", "longitude"]
        assert df.loc[0, "latitude"] == 1.5

    def test_custom_columns(self, tmp_path):
        csv_path = _write_csv(tmp_path / "points.csv", "y,x\n10,20\n")
        df = load_points_csv(csv_path, lat_col="y", lng_col="x")

        assert df.loc[0, "y"] == 10
        assert df.loc[0, "x"] == 20

    def test_unparseable_values_become_nan(self, tmp_path):
        csv_path = _write_csv(tmp_path / "points.csv", "latitude,longitude\nabc,10\n5,\n")
        df = load_points_csv(csv_path)

        assert pd.isna(df.loc[0, "latitude"])
        assert pd.isna(df.loc[1, "longitude"])

    def test_limit(self, tmp_path):
        rows = "".join(f"{i},{i}\n" for i in range(10))
        csv_path = _write_csv(tmp_path / "points.csv", "latitude,longitude\n" + rows)

        assert len(load_points_csv(csv_path, limit=3)) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_points_csv(tmp_path / "missing.csv")

    def test_missing_column(self, tmp_path):
        csv_path = _write_csv(tmp_path / "points.csv", "latitude,elevation\n1,2\n")
        with pytest.raises(KeyError):
            load_points_csv(csv_path)

    def test_logs_summary(self, tmp_path, caplog):
        csv_path = _write_csv(tmp_path / "points.csv", "latitude,longitude\n1,2\nx,3\n")
        logger = logging.getLogger("test_csv_source")
        with caplog.at_level(logging.INFO, logger="test_csv_source"):
            load_points_csv(csv_path, logger=logger)

        assert "Loaded 2 rows from CSV" in caplog.text
        assert "Valid coordinates: 1 (50.0%)" in caplog.text


class TestNormalizeCoordinateColumns:
    """Tests for alias normalization."""

    def test_existing_target_wins(self):
        df = pd.DataFrame({"latitude": [1.0], "lat": [2.0], "lon": [3.0]})
        result = normalize_coordinate_columns(df)

        assert list(result.columns) == ["latitude", "lat", "longitude"]

    def test_first_alias_wins(self):
        df = pd.DataFrame({"lon": [1.0], "lng": [2.0]})
        result = normalize_coordinate_columns(df)

        assert list(result.columns) == ["longitude", "lng"]
