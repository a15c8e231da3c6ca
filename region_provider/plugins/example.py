"""Example region plugin serving static mock civic data.

Registered as the local plugin when no declarative region can be loaded,
so the platform always has a local region to serve during development.
"""

from typing import Any, List

from region_provider.observability.logging import get_logger
from region_provider.plugins.base import DataType, PluginHealth, RegionInfo, RegionPlugin

logger = get_logger(__name__)

EXAMPLE_PLUGIN_NAME = "example"

_PROPOSITIONS = [
    {
        "externalId": "prop-2024-001",
        "title": "Example Proposition A",
        "summary": "An example ballot measure used for development and testing.",
        "status": "pending",
        "electionDate": "2024-11-05",
        "sourceUrl": "https://example.com/propositions/2024-001",
    },
    {
        "externalId": "prop-2024-002",
        "title": "Example Proposition B",
        "summary": "Another example ballot measure.",
        "status": "passed",
        "electionDate": "2024-03-05",
        "sourceUrl": "https://example.com/propositions/2024-002",
    },
]

_MEETINGS = [
    {
        "externalId": "meeting-2024-001",
        "title": "Regular Council Session",
        "body": "City Council",
        "scheduledAt": "2024-10-15T18:00:00-07:00",
        "location": "Council Chambers",
        "agendaUrl": "https://example.com/meetings/2024-001/agenda",
    },
]

_REPRESENTATIVES = [
    {
        "externalId": "rep-001",
        "name": "Jane Example",
        "chamber": "Assembly",
        "district": "1",
        "party": "Independent",
        "contactInfo": {"email": "jane.example@example.com"},
    },
    {
        "externalId": "rep-002",
        "name": "John Sample",
        "chamber": "Senate",
        "district": "2",
        "party": "Independent",
    },
]


class ExampleRegionPlugin(RegionPlugin):
    """Region plugin returning mock data. Use as a template for hand-coded plugins."""

    def get_name(self) -> str:
        return EXAMPLE_PLUGIN_NAME

    def get_version(self) -> str:
        return "0.0.0-fallback"

    def get_region_info(self) -> RegionInfo:
        return RegionInfo(
            id=EXAMPLE_PLUGIN_NAME,
            name="Example Region",
            description="A sample region with mock civic data for development and testing",
            timezone="America/Los_Angeles",
            data_source_urls=["https://example.com/civic-data"],
        )

    def get_supported_data_types(self) -> List[DataType]:
        return [DataType.PROPOSITIONS, DataType.MEETINGS, DataType.REPRESENTATIVES]

    async def health_check(self) -> PluginHealth:
        return PluginHealth(
            healthy=self.initialized,
            message="Example fallback provider" if self.initialized else "Plugin not initialized",
        )

    async def fetch_propositions(self) -> List[Any]:
        logger.info("fetching_example_data", data_type=DataType.PROPOSITIONS.value)
        return [dict(item) for item in _PROPOSITIONS]

    async def fetch_meetings(self) -> List[Any]:
        logger.info("fetching_example_data", data_type=DataType.MEETINGS.value)
        return [dict(item) for item in _MEETINGS]

    async def fetch_representatives(self) -> List[Any]:
        logger.info("fetching_example_data", data_type=DataType.REPRESENTATIVES.value)
        return [dict(item) for item in _REPRESENTATIVES]
