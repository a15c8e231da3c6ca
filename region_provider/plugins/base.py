"""Region plugin base classes and interfaces.

This module defines the contract every region plugin implements, the
value types that flow across it, and the pipeline protocol consumed by
declarative plugins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol

if TYPE_CHECKING:
    from region_provider.plugins.models import DataSourceConfig


class DataType(str, Enum):
    """Type of civic data a source provides."""
    PROPOSITIONS = "propositions"
    MEETINGS = "meetings"
    REPRESENTATIVES = "representatives"
    CAMPAIGN_FINANCE = "campaign_finance"


class PluginStatus(str, Enum):
    """Status of a plugin held in a registry slot."""
    ACTIVE = "active"
    ERROR = "error"


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# ============================================================================
# Errors
# ============================================================================

class PluginError(Exception):
    """Base exception for region plugin errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.context = context or {}


class PluginConfigurationError(PluginError):
    """Raised when a plugin cannot be loaded from its configuration."""
    pass


class RegionError(PluginError):
    """Raised when region data cannot be provided by a plugin."""

    def __init__(self, provider: str, data_type: str, original_error: Exception):
        super().__init__(
            f"Region data fetch failed in {provider} for {data_type}: {original_error}",
            context={"provider": provider, "data_type": data_type},
        )
        self.provider = provider
        self.data_type = data_type
        self.original_error = original_error


# ============================================================================
# Value types
# ============================================================================

@dataclass
class PluginHealth:
    """Health report returned by a plugin.

    Attributes:
        healthy: Whether the plugin is operational
        message: Human-readable status message
        last_check: Timestamp of the check
        metadata: Optional plugin-specific details
    """
    healthy: bool
    message: str = ""
    last_check: datetime = field(default_factory=utcnow)
    metadata: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class RegionInfo:
    """Region information exposed by a plugin.

    Attributes:
        id: Region identifier (e.g., "california")
        name: Human-readable region name
        description: Region description
        timezone: IANA timezone of the region
        data_source_urls: URLs of every configured data source
    """
    id: str
    name: str
    description: str
    timezone: str
    data_source_urls: List[str] = field(default_factory=list)


@dataclass
class ExtractionResult:
    """Result of running the extraction pipeline against one data source.

    Attributes:
        items: Extracted items, passed through untouched
        manifest_version: Version of the extraction manifest used
        success: Whether extraction succeeded fully
        warnings: Non-fatal per-item warnings
        errors: Errors reported by the pipeline
        extraction_time_ms: Extraction duration in milliseconds
    """
    items: List[Any] = field(default_factory=list)
    manifest_version: int = 0
    success: bool = True
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    extraction_time_ms: float = 0


@dataclass
class CampaignFinanceResult:
    """Campaign-finance records partitioned by shape."""
    committees: List[Dict[str, Any]] = field(default_factory=list)
    contributions: List[Dict[str, Any]] = field(default_factory=list)
    expenditures: List[Dict[str, Any]] = field(default_factory=list)
    independent_expenditures: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of classified records across all buckets."""
        return (
            len(self.committees)
            + len(self.contributions)
            + len(self.expenditures)
            + len(self.independent_expenditures)
        )


# ============================================================================
# Collaborator protocol
# ============================================================================

class PipelineService(Protocol):
    """Extraction pipeline consumed by declarative plugins."""

    async def execute(
        self,
        source: "DataSourceConfig",
        region_id: str,
    ) -> ExtractionResult:
        """Extract items from a single data source.

        Args:
            source: Data source to extract from
            region_id: Identifier of the region owning the source

        Returns:
            ExtractionResult with the extracted items
        """
        ...


# ============================================================================
# Abstract Base Class
# ============================================================================

class RegionPlugin(ABC):
    """Base class for region plugins.

    Provides default lifecycle implementations so concrete plugins only
    need to implement metadata and data-fetching methods.
    """

    def __init__(self) -> None:
        self.config: Optional[Dict[str, Any]] = None
        self.initialized = False

    @abstractmethod
    def get_name(self) -> str:
        """Return the plugin name."""
        ...

    @abstractmethod
    def get_version(self) -> str:
        """Return the plugin version."""
        ...

    @abstractmethod
    def get_region_info(self) -> RegionInfo:
        """Return information about the region served by this plugin."""
        ...

    @abstractmethod
    def get_supported_data_types(self) -> List[DataType]:
        """Return the distinct data types this plugin can fetch."""
        ...

    @abstractmethod
    async def fetch_propositions(self) -> List[Any]:
        ...

    @abstractmethod
    async def fetch_meetings(self) -> List[Any]:
        ...

    @abstractmethod
    async def fetch_representatives(self) -> List[Any]:
        ...

    async def fetch_campaign_finance(self) -> CampaignFinanceResult:
        """Fetch campaign-finance records.

        Plugins without campaign-finance sources return empty buckets.
        """
        return CampaignFinanceResult()

    async def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin with optional configuration.

        Called once by the registry when the plugin is registered.

        Args:
            config: Plugin configuration dictionary
        """
        self.config = config
        self.initialized = True

    async def health_check(self) -> PluginHealth:
        """Check the health of the plugin.

        Returns:
            PluginHealth describing the plugin state
        """
        return PluginHealth(
            healthy=self.initialized,
            message="Plugin operational" if self.initialized else "Plugin not initialized",
        )

    async def destroy(self) -> None:
        """Release plugin resources.

        Called by the registry when the plugin is replaced or unloaded.
        """
        self.initialized = False
