"""Tests for the region-code taxonomy."""

import pytest

from region_classification.codes import (
    ALL_REGION_CODES,
    ANONYMOUS,
    CODE_PATHS,
    MAX_REGION_CODE,
    REGION_CODES,
    code_for_path,
    is_known_code,
    iter_code_paths,
)

BLOCKS = {
    "MAJOR": 1,
    "NORTH_AMERICA": 2,
    "ASIA": 3,
    "EUROPE": 4,
    "AFRICA": 5,
    "SOUTH_AMERICA": 6,
    "SPECIAL": 9,
}


class TestTaxonomy:
    """Tests for the static code table."""

    def test_codes_are_unique(self):
        leaves = list(iter_code_paths())
        assert len(leaves) == len(ALL_REGION_CODES)

    def test_codes_fit_in_16_bits(self):
        assert all(0 <= code <= MAX_REGION_CODE for code in ALL_REGION_CODES)

    def test_codes_fall_in_their_block(self):
        for path, code in iter_code_paths():
            assert code // 1000 == BLOCKS[path[0]], path

    def test_anonymous(self):
        assert ANONYMOUS == 9000
        assert CODE_PATHS[ANONYMOUS] == ("SPECIAL", "ANONYMOUS")

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            REGION_CODES["MAJOR"]["ARCTIC"] = 1
        with pytest.raises(TypeError):
            REGION_CODES["NEW"] = {}


class TestCodeLookup:
    """Tests for path and membership lookups."""

    def test_code_for_path(self):
        assert code_for_path("MAJOR.NORTH_PACIFIC") == 1000
        assert code_for_path("NORTH_AMERICA.USA_EAST") == 2012
        assert code_for_path("SOUTH_AMERICA.BRAZIL.NORTH") == 6001

    def test_unknown_path(self):
        with pytest.raises(KeyError):
            code_for_path("ATLANTIS")
        with pytest.raises(KeyError):
            code_for_path("EUROPE.WEST.PARIS")

    def test_branch_path_is_not_a_code(self):
        with pytest.raises(KeyError):
            code_for_path("SOUTH_AMERICA.BRAZIL")

    def test_is_known_code(self):
        assert is_known_code(4000)
        assert is_known_code(9305)
        assert not is_known_code(4999)
        assert not is_known_code(6000)
