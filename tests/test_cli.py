"""Tests for the command-line interface."""

import pandas as pd
import pytest

from region_classification.cli import build_parser, main
from region_classification.identifiers import derive_node_id


class TestParser:
    """Tests for argument parsing."""

    def test_point_accepts_negative_longitude(self):
        args = build_parser().parse_args(["point", "40.7128", "-74.0060"])
        assert args.command == "point"
        assert args.longitude == pytest.approx(-74.006)
        assert args.key is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestPointCommand:
    """Tests for the point subcommand."""

    def test_prints_code(self, capsys):
        main(["point", "40.7128", "-74.0060"])
        assert capsys.readouterr().out.split() == ["2012"]

    def test_prints_node_id(self, capsys):
        main(["point", "40.7128", "-74.0060", "--key", "my-public-key"])
        lines = capsys.readouterr().out.split()

        assert lines[0] == "2012"
        assert len(lines[1]) == 68
        assert lines[1] == derive_node_id(2012, "my-public-key").hex()

    def test_with_boundaries(self, capsys, sample_geojson_path):
        main(["--boundaries", str(sample_geojson_path), "point", "48.8566", "2.3522"])
        assert capsys.readouterr().out.split() == ["4000"]

    def test_empty_key_exits(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["point", "0", "0", "--key", ""])
        assert excinfo.value.code == 1

    def test_missing_boundaries_exits(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["--boundaries", str(tmp_path / "missing.geojson"), "point", "0", "0"])
        assert excinfo.value.code == 1


class TestCsvCommand:
    """Tests for the csv subcommand."""

    def test_classifies_file(self, tmp_path):
        input_path = tmp_path / "points.csv"
        input_path.write_text("lat,lon\n40.7128,-74.0060\n51.0447,-114.0719\nbad,0\n", encoding="utf-8")
        output_path = tmp_path / "out" / "classified.csv"

        main(["csv", str(input_path), "--output", str(output_path)])

        result = pd.read_csv(output_path)
        assert list(result["region_code"]) == [2012, 2000, 9000]
        assert "match_method" in result.columns

    def test_missing_column_exits(self, tmp_path):
        input_path = tmp_path / "points.csv"
        input_path.write_text("y,x\n1,2\n", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            main(["csv", str(input_path), "--output", str(tmp_path / "out.csv")])
        assert excinfo.value.code == 1

    def test_empty_file_exits(self, tmp_path):
        input_path = tmp_path / "points.csv"
        input_path.write_text("latitude,longitude\n", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            main(["csv", str(input_path), "--output", str(tmp_path / "out.csv")])
        assert excinfo.value.code == 1
