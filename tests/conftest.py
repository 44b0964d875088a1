"""
Pytest configuration and fixtures for geocompact tests.

Markers:
    @pytest.mark.web - Tests that exercise the FastAPI application
    @pytest.mark.cli - Tests that exercise the command-line interface

Usage:
    pytest -m "not web"      # Engine and CLI only
"""

import json

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "web: Web application tests")
    config.addinivalue_line("markers", "cli: Command-line interface tests")


def pytest_collection_modifyitems(config, items):
    """Auto-apply markers based on test file names."""
    for item in items:
        if "app" in item.fspath.basename:
            item.add_marker(pytest.mark.web)
        if "cli" in item.fspath.basename:
            item.add_marker(pytest.mark.cli)


@pytest.fixture
def point():
    """A Point with more decimals than anyone needs."""
    return {"type": "Point", "coordinates": [139.7454331234, 35.6585812345]}


@pytest.fixture
def outlier_line():
    """Five points on a tent shape with a little noise on the slopes."""
    return {
        "type": "LineString",
        "coordinates": [[0, 0], [1, 0.5001], [2, 1], [3, 0.4999], [4, 0]],
    }


@pytest.fixture
def feature_collection():
    """A small real-world style FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "name": "parks",
        "features": [
            {
                "type": "Feature",
                "id": 1,
                "geometry": {"type": "Point", "coordinates": [-122.419415543, 37.774929123]},
                "properties": {"name": "  Dolores  ", "note": None, "tag": "", "area": 15.75},
            },
            {
                "type": "Feature",
                "id": "two",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [
                        [-122.4100000001, 37.7800000001],
                        [-122.4050000002, 37.7800000002],
                        [-122.4000000003, 37.7800000003],
                    ],
                },
                "properties": {"name": "Market St", "lanes": 4, "meta": {"source": None}},
            },
            {
                "type": "Feature",
                "geometry": None,
                "properties": {},
            },
        ],
    }


@pytest.fixture
def pretty_text(feature_collection):
    """The FeatureCollection as indented JSON text."""
    return json.dumps(feature_collection, indent=4)
