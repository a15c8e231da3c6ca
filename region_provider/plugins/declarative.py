"""Declarative region plugin.

Bridges a RegionPluginConfig to the RegionPlugin interface. Instead of
custom scraper code, every fetch is delegated to the extraction pipeline,
one call per configured data source.
"""

import asyncio
import time
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from region_provider.observability.logging import get_logger, region_context_scope
from region_provider.plugins.base import (
    CampaignFinanceResult,
    DataType,
    PipelineService,
    PluginHealth,
    RegionInfo,
    RegionPlugin,
)
from region_provider.plugins.campaign_finance import partition_campaign_finance
from region_provider.plugins.models import DataSourceConfig, RegionPluginConfig

logger = get_logger(__name__)

DECLARATIVE_VERSION = "1.0.0-declarative"


class DeclarativeRegionPlugin(RegionPlugin):
    """Region plugin driven entirely by configuration and a pipeline.

    Example:
        >>> plugin = DeclarativeRegionPlugin(config, pipeline)
        >>> await plugin.initialize()
        >>> meetings = await plugin.fetch_meetings()
    """

    def __init__(
        self,
        config: RegionPluginConfig | Mapping[str, Any],
        pipeline: PipelineService,
    ) -> None:
        """Initialize the plugin.

        Args:
            config: Region configuration (model or raw mapping)
            pipeline: Extraction pipeline used for every data source
        """
        super().__init__()
        if not isinstance(config, RegionPluginConfig):
            config = RegionPluginConfig.model_validate(config)
        self.region_config = config
        self.pipeline = pipeline

    def get_name(self) -> str:
        return self.region_config.region_id

    def get_version(self) -> str:
        return DECLARATIVE_VERSION

    def get_region_info(self) -> RegionInfo:
        return RegionInfo(
            id=self.region_config.region_id,
            name=self.region_config.region_name,
            description=self.region_config.description,
            timezone=self.region_config.timezone,
            data_source_urls=[ds.url for ds in self.region_config.data_sources],
        )

    def get_supported_data_types(self) -> List[DataType]:
        # dict keeps first-seen order while dropping duplicates
        return list(dict.fromkeys(ds.data_type for ds in self.region_config.data_sources))

    async def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        if not self.initialized:
            logger.info(
                "declarative_plugin_initialized",
                region_id=self.region_config.region_id,
                data_source_count=len(self.region_config.data_sources),
            )
        await super().initialize(config)

    async def health_check(self) -> PluginHealth:
        source_count = len(self.region_config.data_sources)
        return PluginHealth(
            healthy=self.initialized,
            message=(
                f"Declarative plugin operational: {source_count} data sources configured"
                if self.initialized
                else "Plugin not initialized"
            ),
            metadata={
                "regionId": self.region_config.region_id,
                "dataSourceCount": source_count,
                "supportedTypes": [t.value for t in self.get_supported_data_types()],
            },
        )

    async def destroy(self) -> None:
        logger.info("declarative_plugin_destroyed", region_id=self.region_config.region_id)
        await super().destroy()

    async def fetch_propositions(self) -> List[Any]:
        return await self._fetch_by_data_type(DataType.PROPOSITIONS)

    async def fetch_meetings(self) -> List[Any]:
        return await self._fetch_by_data_type(DataType.MEETINGS)

    async def fetch_representatives(self) -> List[Any]:
        return await self._fetch_by_data_type(DataType.REPRESENTATIVES)

    async def fetch_campaign_finance(self) -> CampaignFinanceResult:
        """Fetch campaign-finance records from every campaign-finance source
        and partition the pooled records by shape.
        """
        if not self.region_config.sources_for(DataType.CAMPAIGN_FINANCE):
            logger.info(
                "no_sources_configured",
                region_id=self.region_config.region_id,
                data_type=DataType.CAMPAIGN_FINANCE.value,
            )
            return CampaignFinanceResult()

        pool = await self._fetch_by_data_type(DataType.CAMPAIGN_FINANCE)
        result = partition_campaign_finance(pool)

        logger.info(
            "campaign_finance_partitioned",
            region_id=self.region_config.region_id,
            pooled=len(pool),
            committees=len(result.committees),
            contributions=len(result.contributions),
            expenditures=len(result.expenditures),
            independent_expenditures=len(result.independent_expenditures),
        )
        return result

    async def _fetch_by_data_type(self, data_type: DataType) -> List[Any]:
        """Fetch every source of a data type and concatenate the items.

        Sources are executed concurrently; items are reassembled in
        configured source order.

        Args:
            data_type: Data type to fetch

        Returns:
            Items from all sources that did not fail
        """
        sources = self.region_config.sources_for(data_type)
        if not sources:
            logger.warning(
                "no_sources_configured",
                region_id=self.region_config.region_id,
                data_type=data_type.value,
            )
            return []

        start_time = time.monotonic()
        with region_context_scope(
            region_id=self.region_config.region_id,
            data_type=data_type.value,
        ):
            per_source = await asyncio.gather(
                *(self._execute_source(source) for source in sources)
            )

        items: List[Any] = []
        for source_items in per_source:
            items.extend(source_items)

        logger.info(
            "fetch_completed",
            region_id=self.region_config.region_id,
            data_type=data_type.value,
            item_count=len(items),
            source_count=len(sources),
            duration_ms=round((time.monotonic() - start_time) * 1000, 2),
        )
        return items

    async def _execute_source(self, source: DataSourceConfig) -> List[Any]:
        """Run the pipeline for one source.

        A failing source contributes no items.
        """
        logger.info(
            "fetching_source",
            source_url=source.url,
            category=source.category,
        )
        try:
            result = await self.pipeline.execute(source, self.region_config.region_id)
            items = list(result.items or [])
            warnings = list(getattr(result, "warnings", None) or [])
            errors = list(getattr(result, "errors", None) or [])
        except Exception as e:
            logger.error(
                "source_fetch_failed",
                source_url=source.url,
                category=source.category,
                error=str(e),
            )
            return []

        if warnings:
            logger.warning(
                "source_fetch_warnings",
                source_url=source.url,
                warnings=warnings,
            )
        if errors:
            logger.error(
                "source_fetch_errors",
                source_url=source.url,
                errors=errors,
                success=getattr(result, "success", None),
            )
        return items
