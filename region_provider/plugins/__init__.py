"""Region plugin system: registry, declarative plugins and loaders."""

from region_provider.plugins.base import (
    CampaignFinanceResult,
    DataType,
    ExtractionResult,
    PipelineService,
    PluginConfigurationError,
    PluginError,
    PluginHealth,
    PluginStatus,
    RegionError,
    RegionInfo,
    RegionPlugin,
)
from region_provider.plugins.declarative import DeclarativeRegionPlugin
from region_provider.plugins.example import ExampleRegionPlugin
from region_provider.plugins.loaders import PluginDefinition, PluginLoader, discover_region_configs
from region_provider.plugins.models import DataSourceConfig, RegionPluginConfig, RegionPluginFile
from region_provider.plugins.placeholders import resolve_config_placeholders
from region_provider.plugins.registry import PluginRegistry, RegisteredPlugin, RegistryStatus

__all__ = [
    "CampaignFinanceResult",
    "DataSourceConfig",
    "DataType",
    "DeclarativeRegionPlugin",
    "ExampleRegionPlugin",
    "ExtractionResult",
    "PipelineService",
    "PluginConfigurationError",
    "PluginDefinition",
    "PluginError",
    "PluginHealth",
    "PluginLoader",
    "PluginRegistry",
    "PluginStatus",
    "RegionError",
    "RegionInfo",
    "RegionPlugin",
    "RegionPluginConfig",
    "RegionPluginFile",
    "RegisteredPlugin",
    "RegistryStatus",
    "discover_region_configs",
    "resolve_config_placeholders",
]
