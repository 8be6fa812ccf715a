"""Smoke tests for overlay rendering."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

import region_classification.plotting as plotting  # noqa: E402
from region_classification.boundaries import default_table  # noqa: E402
from region_classification.cli import main  # noqa: E402
from region_classification.grid_overlay import RegionGrid  # noqa: E402
from region_classification.plotting import plot_region_overlay, save_region_overlay  # noqa: E402


class TestPlotRegionOverlay:
    """Tests for drawing onto a map axis."""

    def test_grid_mode_adds_patches(self):
        ax = plot_region_overlay(default_table(), RegionGrid(), labels=True)
        try:
            assert len(ax.patches) > 0
            assert ax.get_title() == "Region Overlay"
        finally:
            plt.close(ax.figure)

    def test_box_mode_draws_both_halves_of_crossing_boxes(self):
        ax = plot_region_overlay(default_table(), use_grid=False)
        try:
            entries = default_table().entries
            crossing = sum(entry.bounds.crosses_antimeridian for entry in entries)
            assert crossing == 2
            assert len(ax.patches) >= len(entries) + crossing
        finally:
            plt.close(ax.figure)


class TestSaveRegionOverlay:
    """Tests for writing overlay images."""

    def test_writes_png(self, tmp_path):
        output = save_region_overlay(tmp_path / "nested" / "overlay.png", grid=RegionGrid(9, 18))
        assert output.exists()
        assert output.stat().st_size > 0

    def test_cli_overlay(self, tmp_path):
        output = tmp_path / "overlay.png"
        main(["overlay", "--output", str(output), "--rows", "9", "--cols", "18", "--boxes"])
        assert output.exists()

    def test_closes_figure_when_rendering_fails(self, tmp_path, monkeypatch):
        def fail(*args, **kwargs):
            raise RuntimeError("render failed")

        monkeypatch.setattr(plotting, "plot_region_overlay", fail)
        before = set(plt.get_fignums())

        with pytest.raises(RuntimeError):
            save_region_overlay(tmp_path / "overlay.png")

        assert set(plt.get_fignums()) == before
        assert not (tmp_path / "overlay.png").exists()
