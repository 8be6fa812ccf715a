"""Tests for nearest-airport lookup."""

import pytest

from region_classification.airports import MAJOR_AIRPORTS, Airport, find_nearest_airport


class TestFindNearestAirport:
    """Tests for find_nearest_airport."""

    def test_new_york(self):
        airport, distance = find_nearest_airport(40.7128, -74.0060)
        assert airport.code == "JFK"
        assert distance < 30

    def test_london(self):
        airport, distance = find_nearest_airport(51.5074, -0.1278)
        assert airport.code == "LHR"
        assert distance < 30

    def test_across_antimeridian(self):
        """Great-circle distance wraps, so Fiji is closest to Sydney."""
        airport, _ = find_nearest_airport(-17.7, 178.0)
        assert airport.code == "SYD"

    def test_custom_list(self):
        home = Airport("XXX", "Test Field", 0.0, 0.0)
        airport, distance = find_nearest_airport(0.0, 1.0, [home])
        assert airport is home
        assert distance == pytest.approx(111.195, abs=0.01)

    def test_empty_list(self):
        with pytest.raises(ValueError):
            find_nearest_airport(0.0, 0.0, [])

    def test_table(self):
        assert len(MAJOR_AIRPORTS) == 16
        assert len({airport.code for airport in MAJOR_AIRPORTS}) == 16
