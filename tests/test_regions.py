"""Tests for region names, neighbours and latency estimates."""

import math

import pytest

from region_classification.regions import (
    UNKNOWN_REGION_NAME,
    estimate_latency_ms,
    get_region_name,
    neighboring_regions,
    region_distance_km,
)


class TestRegionNames:
    """Tests for get_region_name."""

    def test_known_codes(self):
        assert get_region_name(4000) == "EUROPE > WEST"
        assert get_region_name(6001) == "SOUTH_AMERICA > BRAZIL > NORTH"
        assert get_region_name(9000) == "SPECIAL > ANONYMOUS"

    def test_unknown_code(self):
        assert get_region_name(4999) == UNKNOWN_REGION_NAME == "Unknown Region"


class TestNeighbours:
    """Tests for neighboring_regions."""

    def test_western_europe(self):
        neighbours = neighboring_regions(4000)

        assert {1002, 4001, 4002} <= set(neighbours)
        assert 4000 not in neighbours
        assert 3000 not in neighbours

    def test_no_duplicates(self):
        neighbours = neighboring_regions(1000)
        assert len(neighbours) == len(set(neighbours))

    def test_pacific_neighbours_across_antimeridian(self):
        """North Pacific touches the Russian Far East and the Pacific sub-basins."""
        neighbours = neighboring_regions(1000)
        assert 3052 in neighbours
        assert 9301 in neighbours

    def test_code_without_box(self):
        assert neighboring_regions(9000) == []


class TestLatency:
    """Tests for centroid distance and latency estimates."""

    def test_same_region(self):
        assert region_distance_km(4000, 4000) == 0
        assert estimate_latency_ms(4000, 4000) == 0

    def test_transatlantic(self):
        distance = region_distance_km(4000, 2012)

        assert distance > 5000
        assert estimate_latency_ms(4000, 2012) == math.floor(distance * 0.1)
        assert isinstance(estimate_latency_ms(4000, 2012), int)

    def test_symmetric(self):
        assert region_distance_km(3000, 5004) == pytest.approx(region_distance_km(5004, 3000))

    def test_unknown_code(self):
        with pytest.raises(KeyError):
            estimate_latency_ms(4000, 9000)
