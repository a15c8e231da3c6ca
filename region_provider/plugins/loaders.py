"""Plugin discovery and loading mechanisms.

This module discovers declarative region configs on disk and turns a
config plus an extraction pipeline into a registered region plugin.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from region_provider.plugins.base import PipelineService, PluginConfigurationError
from region_provider.plugins.declarative import DeclarativeRegionPlugin
from region_provider.plugins.models import RegionPluginConfig, RegionPluginFile
from region_provider.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

FEDERAL_PLUGIN_NAME = "federal"

CONFIG_FILE_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass
class PluginDefinition:
    """Definition of a plugin to load.

    Attributes:
        name: Name to register the plugin under
        config: Raw RegionPluginConfig mapping
    """
    name: str
    config: dict[str, Any] | None = field(default=None)


class PluginLoader:
    """Loader building declarative plugins and registering them.

    Example:
        >>> registry = PluginRegistry()
        >>> loader = PluginLoader(registry)
        >>> plugin = await loader.load_plugin(
        ...     PluginDefinition(name="california", config=config),
        ...     pipeline,
        ... )
    """

    def __init__(self, registry: PluginRegistry) -> None:
        """Initialize the plugin loader.

        Args:
            registry: Plugin registry to load plugins into
        """
        self.registry = registry

    async def load_plugin(
        self,
        definition: PluginDefinition | Mapping[str, Any],
        pipeline: PipelineService | None = None,
    ) -> DeclarativeRegionPlugin:
        """Load a declarative plugin into the local slot.

        Args:
            definition: Plugin name and raw config
            pipeline: Extraction pipeline backing the plugin

        Returns:
            The registered plugin

        Raises:
            PluginConfigurationError: If the pipeline is missing or the
                config is not a valid RegionPluginConfig
            Exception: Whatever the plugin's initialize() raised
        """
        if isinstance(definition, Mapping):
            definition = PluginDefinition(
                name=definition.get("name", ""),
                config=definition.get("config"),
            )
        name = definition.name

        self._require_pipeline(name, pipeline)
        region_config = self._validate_config(name, definition.config)

        logger.info(f"Loading declarative plugin '{name}'")

        plugin = DeclarativeRegionPlugin(region_config, pipeline)
        await self.registry.register_local(name, plugin, definition.config)

        logger.info(
            f"Declarative plugin '{name}' loaded "
            f"(v{plugin.get_version()}, {len(region_config.data_sources)} data sources)"
        )
        return plugin

    async def load_federal_plugin(
        self,
        config: dict[str, Any] | None,
        pipeline: PipelineService | None = None,
    ) -> DeclarativeRegionPlugin:
        """Load the federal declarative plugin into the federal slot.

        Args:
            config: Raw RegionPluginConfig mapping
            pipeline: Extraction pipeline backing the plugin

        Returns:
            The registered plugin

        Raises:
            PluginConfigurationError: If the pipeline is missing or the
                config is not a valid RegionPluginConfig
            Exception: Whatever the plugin's initialize() raised
        """
        self._require_pipeline(FEDERAL_PLUGIN_NAME, pipeline)
        region_config = self._validate_config(FEDERAL_PLUGIN_NAME, config)

        logger.info("Loading federal declarative plugin")

        plugin = DeclarativeRegionPlugin(region_config, pipeline)
        await self.registry.register_federal(FEDERAL_PLUGIN_NAME, plugin, config)

        logger.info(
            f"Federal plugin loaded ({len(region_config.data_sources)} data sources)"
        )
        return plugin

    async def unload_plugin(self) -> None:
        """Unload the local plugin. Does nothing if none is loaded."""
        await self.registry.unregister()

    def _require_pipeline(self, name: str, pipeline: PipelineService | None) -> None:
        if pipeline is None:
            raise PluginConfigurationError(
                f"Cannot load declarative plugin '{name}': the extraction pipeline "
                f"(PipelineService) is not available. Provide a pipeline to load "
                f"declarative plugins.",
                context={"plugin": name, "missing": "pipeline"},
            )

    def _validate_config(self, name: str, config: Any) -> RegionPluginConfig:
        """Check that a raw config resembles a RegionPluginConfig.

        Args:
            name: Plugin name, for error messages
            config: Raw config mapping

        Returns:
            Validated RegionPluginConfig
        """
        if isinstance(config, RegionPluginConfig):
            return config

        has_region_id = isinstance(config, Mapping) and (
            config.get("regionId") or config.get("region_id")
        )
        has_sources = isinstance(config, Mapping) and (
            config.get("dataSources") or config.get("data_sources")
        )
        if not has_region_id or not has_sources:
            raise PluginConfigurationError(
                f"Declarative plugin '{name}' requires a valid RegionPluginConfig "
                f"with regionId and dataSources",
                context={"plugin": name},
            )

        try:
            return RegionPluginConfig.model_validate(config)
        except ValidationError as e:
            raise PluginConfigurationError(
                f"Declarative plugin '{name}' has an invalid RegionPluginConfig: {e}",
                context={"plugin": name, "errors": e.errors()},
            ) from e


def discover_region_configs(regions_dir: str | Path) -> list[RegionPluginFile]:
    """Discover and validate region config files in a directory.

    Reads every JSON and YAML file in filename order.

    Args:
        regions_dir: Directory holding region config files

    Returns:
        Validated region config files; empty if the directory does not exist

    Raises:
        PluginConfigurationError: If a file is malformed or misses a
            required field
    """
    path = Path(regions_dir)
    if not path.is_dir():
        logger.debug(f"Region config directory not found: {regions_dir}")
        return []

    files = sorted(
        p for p in path.iterdir()
        if p.is_file() and p.suffix.lower() in CONFIG_FILE_SUFFIXES
    )

    configs: list[RegionPluginFile] = []
    for file_path in files:
        data = _read_config_file(file_path)
        configs.append(_validate_region_plugin_file(data, file_path.name))
        logger.info(f"Discovered region config '{configs[-1].name}' from {file_path.name}")

    return configs


def _read_config_file(file_path: Path) -> Any:
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PluginConfigurationError(
                f"Invalid JSON in region config file: {file_path.name}",
                context={"file": file_path.name},
            ) from e
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise PluginConfigurationError(
            f"Invalid YAML in region config file: {file_path.name}",
            context={"file": file_path.name},
        ) from e


def _missing(file_name: str, field_name: str) -> PluginConfigurationError:
    return PluginConfigurationError(
        f"Region config '{file_name}' is missing required field '{field_name}'",
        context={"file": file_name, "field": field_name},
    )


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


def _validate_region_plugin_file(data: Any, file_name: str) -> RegionPluginFile:
    """Validate the shape of one discovered config file."""
    if not isinstance(data, dict):
        raise PluginConfigurationError(
            f"Region config '{file_name}' must be an object",
            context={"file": file_name},
        )

    for field_name in ("name", "displayName", "version"):
        if not _is_non_empty_str(data.get(field_name)):
            raise _missing(file_name, field_name)

    if not isinstance(data.get("description"), str):
        raise _missing(file_name, "description")

    config = data.get("config")
    if not isinstance(config, dict):
        raise _missing(file_name, "config")

    if not _is_non_empty_str(config.get("regionId")):
        raise _missing(file_name, "config.regionId")

    sources = config.get("dataSources")
    if not isinstance(sources, list) or not sources:
        raise PluginConfigurationError(
            f"Region config '{file_name}' must have at least one entry in 'config.dataSources'",
            context={"file": file_name},
        )

    for i, source in enumerate(sources):
        for field_name in ("url", "dataType", "contentGoal"):
            if not isinstance(source, dict) or not _is_non_empty_str(source.get(field_name)):
                raise _missing(file_name, f"dataSources[{i}].{field_name}")

    try:
        return RegionPluginFile.model_validate(data)
    except ValidationError as e:
        raise PluginConfigurationError(
            f"Region config '{file_name}' is invalid: {e}",
            context={"file": file_name, "errors": e.errors()},
        ) from e
