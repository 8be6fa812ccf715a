from pathlib import Path

import pytest

from region_classification.boundaries import BoundaryTable
from region_classification.classifier import RegionClassifier

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def sample_geojson_path():
    return DATA_DIR / "sample_countries.geojson"


@pytest.fixture
def sample_table(sample_geojson_path):
    return BoundaryTable.from_geojson(sample_geojson_path)


@pytest.fixture
def sample_classifier(sample_table):
    return RegionClassifier(sample_table)
