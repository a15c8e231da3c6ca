"""Region service orchestrating plugin loading and data syncs.

At startup the service loads two plugins:
- the federal plugin (always loaded, nationwide campaign-finance data)
- the local plugin (the selected region's civic data)

It falls back to the example plugin when no local region can be loaded,
and syncs every supported data type across all active plugins.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from region_provider.config import Settings, get_settings
from region_provider.observability.logging import (
    correlation_id_scope,
    get_logger,
    region_context_scope,
    setup_logging,
)
from region_provider.plugins.base import (
    DataType,
    PipelineService,
    PluginError,
    PluginHealth,
    RegionError,
    RegionInfo,
    RegionPlugin,
    utcnow,
)
from region_provider.plugins.example import EXAMPLE_PLUGIN_NAME, ExampleRegionPlugin
from region_provider.plugins.loaders import (
    PluginDefinition,
    PluginLoader,
    discover_region_configs,
)
from region_provider.plugins.models import RegionPluginFile
from region_provider.plugins.placeholders import resolve_config_placeholders
from region_provider.plugins.registry import PluginRegistry, RegistryStatus

logger = get_logger(__name__)


@dataclass
class SyncResult:
    """Outcome of syncing one data type from one plugin.

    Attributes:
        data_type: Data type that was synced
        plugin_name: Name of the plugin the data came from
        items_processed: Number of items fetched
        errors: Error messages; empty on success
        synced_at: Completion timestamp
        duration_ms: Time spent fetching
    """
    data_type: DataType
    plugin_name: str
    items_processed: int = 0
    errors: list[str] = field(default_factory=list)
    synced_at: datetime = field(default_factory=utcnow)
    duration_ms: float = 0

    @property
    def success(self) -> bool:
        return not self.errors


def _dump_config(file: RegionPluginFile) -> dict[str, Any]:
    return file.config.model_dump(by_alias=True, mode="json", exclude_none=True)


class RegionService:
    """Composition root for the region data layer.

    Example:
        >>> registry = PluginRegistry()
        >>> service = RegionService(registry, pipeline=pipeline)
        >>> await service.start()
        >>> results = await service.sync_all()
        >>> await service.stop()
    """

    def __init__(
        self,
        registry: PluginRegistry,
        loader: PluginLoader | None = None,
        settings: Settings | None = None,
        pipeline: PipelineService | None = None,
    ) -> None:
        """Initialize the region service.

        Args:
            registry: Registry owning the federal and local slots
            loader: Plugin loader; built on ``registry`` if omitted
            settings: Application settings; global settings if omitted
            pipeline: Extraction pipeline backing declarative plugins
        """
        self.registry = registry
        self.loader = loader or PluginLoader(registry)
        self.settings = settings or get_settings()
        self.pipeline = pipeline

        setup_logging(
            json_format=self.settings.observability.format == "json",
            log_level=self.settings.observability.level,
        )

    async def start(self) -> None:
        """Discover region configs and load the federal and local plugins.

        Raises:
            PluginError: If no local plugin is active afterwards
        """
        region_settings = self.settings.region
        try:
            configs = discover_region_configs(region_settings.configs_dir)
        except PluginError as e:
            logger.warning(
                "region_config_discovery_failed",
                configs_dir=str(region_settings.configs_dir),
                error=str(e),
            )
            configs = []

        federal_file = next(
            (c for c in configs if c.name == region_settings.federal_name),
            None,
        )
        local_file = self._select_local(configs)

        await self._load_federal(federal_file, local_file)
        await self._load_local(local_file)

        if not self.registry.has_active():
            raise PluginError(
                "No local region plugin available after initialization",
                context={"status": self.registry.get_status()},
            )

        info = self.get_region_info()
        logger.info(
            "region_service_started",
            local=self.registry.get_active_name(),
            region=info.name,
            federal_loaded=self.registry.get_federal() is not None,
        )

    async def stop(self) -> None:
        """Destroy all loaded plugins."""
        await self.registry.shutdown()
        logger.info("region_service_stopped")

    def get_region_info(self) -> RegionInfo:
        return self._local_plugin().get_region_info()

    def get_supported_data_types(self) -> list[DataType]:
        return self._local_plugin().get_supported_data_types()

    async def health(self) -> PluginHealth | None:
        return await self.registry.get_health()

    def status(self) -> RegistryStatus:
        return self.registry.get_status()

    async def sync_data_type(self, data_type: DataType) -> SyncResult:
        """Sync one data type from the local plugin.

        Args:
            data_type: Data type to sync

        Returns:
            SyncResult; fetch failures are reported in ``errors``
        """
        plugin = self._local_plugin()
        return await self._sync_from(plugin, self.registry.get_active_name() or "local", data_type)

    async def sync_all(self) -> list[SyncResult]:
        """Sync every supported data type from all active plugins, federal first.

        Returns:
            One SyncResult per (plugin, data type)
        """
        results: list[SyncResult] = []
        with correlation_id_scope(f"sync-{uuid4().hex[:12]}"):
            logger.info("sync_started")
            for registered in self.registry.get_all():
                for data_type in registered.instance.get_supported_data_types():
                    results.append(
                        await self._sync_from(registered.instance, registered.name, data_type)
                    )
            logger.info(
                "sync_completed",
                results=len(results),
                failed=sum(1 for r in results if not r.success),
            )
        return results

    def _local_plugin(self) -> RegionPlugin:
        plugin = self.registry.get_local()
        if plugin is None:
            raise PluginError("No active local region plugin")
        return plugin

    def _select_local(self, configs: list[RegionPluginFile]) -> RegionPluginFile | None:
        region_settings = self.settings.region
        candidates = [c for c in configs if c.name != region_settings.federal_name]
        if region_settings.local_region:
            return next(
                (c for c in candidates if c.name == region_settings.local_region),
                None,
            )
        return candidates[0] if candidates else None

    async def _load_federal(
        self,
        federal_file: RegionPluginFile | None,
        local_file: RegionPluginFile | None,
    ) -> None:
        if federal_file is None:
            logger.warning("federal_config_not_found")
            return

        variables: dict[str, str] = {}
        if local_file is not None and local_file.config.state_code:
            variables["stateCode"] = local_file.config.state_code
        else:
            logger.warning("federal_placeholders_unresolved", reason="no local stateCode")

        config = resolve_config_placeholders(_dump_config(federal_file), variables)
        try:
            await self.loader.load_federal_plugin(config, self.pipeline)
        except Exception as e:
            logger.error("federal_plugin_load_failed", error=str(e))

    async def _load_local(self, local_file: RegionPluginFile | None) -> None:
        if local_file is None:
            logger.warning(
                "local_config_not_found",
                local_region=self.settings.region.local_region,
            )
            await self._register_fallback()
            return

        try:
            await self.loader.load_plugin(
                PluginDefinition(name=local_file.name, config=_dump_config(local_file)),
                self.pipeline,
            )
        except Exception as e:
            logger.error("local_plugin_load_failed", plugin=local_file.name, error=str(e))
            await self._register_fallback()

    async def _register_fallback(self) -> None:
        if not self.settings.region.fallback_to_example:
            return
        logger.warning("registering_fallback_plugin", plugin=EXAMPLE_PLUGIN_NAME)
        await self.registry.register_local(EXAMPLE_PLUGIN_NAME, ExampleRegionPlugin())

    async def _sync_from(
        self,
        plugin: RegionPlugin,
        plugin_name: str,
        data_type: DataType,
    ) -> SyncResult:
        """Fetch one data type from one plugin and count the items."""
        start_time = time.monotonic()
        with region_context_scope(plugin=plugin_name, data_type=data_type.value):
            try:
                processed = await self._fetch_count(plugin, data_type)
            except Exception as e:
                error = RegionError(plugin_name, data_type.value, e)
                logger.error("sync_failed", error=str(error))
                return SyncResult(
                    data_type=data_type,
                    plugin_name=plugin_name,
                    errors=[str(error)],
                    duration_ms=round((time.monotonic() - start_time) * 1000, 2),
                )

            duration_ms = round((time.monotonic() - start_time) * 1000, 2)
            logger.info("sync_data_type_completed", items=processed, duration_ms=duration_ms)
            return SyncResult(
                data_type=data_type,
                plugin_name=plugin_name,
                items_processed=processed,
                duration_ms=duration_ms,
            )

    async def _fetch_count(self, plugin: RegionPlugin, data_type: DataType) -> int:
        if data_type == DataType.PROPOSITIONS:
            return len(await plugin.fetch_propositions())
        if data_type == DataType.MEETINGS:
            return len(await plugin.fetch_meetings())
        if data_type == DataType.REPRESENTATIVES:
            return len(await plugin.fetch_representatives())
        if data_type == DataType.CAMPAIGN_FINANCE:
            return (await plugin.fetch_campaign_finance()).total
        raise ValueError(f"No sync handler for data type: {data_type}")
