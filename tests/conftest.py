"""Shared fixtures for region plugin tests."""

from unittest.mock import AsyncMock

import pytest

from region_provider.plugins.base import ExtractionResult
from region_provider.plugins.registry import PluginRegistry


def make_extraction_result(items, warnings=None, errors=None, success=True):
    """Build an ExtractionResult the way the pipeline returns it."""
    return ExtractionResult(
        items=list(items),
        manifest_version=1,
        success=success,
        warnings=list(warnings or []),
        errors=list(errors or []),
        extraction_time_ms=100,
    )


def make_region_config(**overrides):
    """Build a raw RegionPluginConfig mapping for California."""
    config = {
        "regionId": "california",
        "regionName": "California",
        "description": "California civic data",
        "timezone": "America/Los_Angeles",
        "stateCode": "CA",
        "dataSources": [
            {
                "url": "https://example.com/propositions",
                "dataType": "propositions",
                "contentGoal": "Extract ballot measures",
            },
            {
                "url": "https://example.com/assembly-meetings",
                "dataType": "meetings",
                "contentGoal": "Extract Assembly meetings",
                "category": "Assembly",
            },
            {
                "url": "https://example.com/senate-meetings",
                "dataType": "meetings",
                "contentGoal": "Extract Senate meetings",
                "category": "Senate",
            },
            {
                "url": "https://example.com/representatives",
                "dataType": "representatives",
                "contentGoal": "Extract representatives",
            },
        ],
    }
    config.update(overrides)
    return config


@pytest.fixture
def region_config():
    """Raw California region config."""
    return make_region_config()


@pytest.fixture
def pipeline():
    """Mock extraction pipeline returning no items by default."""
    mock = AsyncMock()
    mock.execute.return_value = make_extraction_result([])
    return mock


@pytest.fixture
def registry():
    """Create a fresh registry for each test."""
    return PluginRegistry()
