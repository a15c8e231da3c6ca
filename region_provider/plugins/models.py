"""Pydantic models for declarative region configuration.

These models mirror the persisted JSON format of region configs
(camelCase keys) while exposing snake_case attributes.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from region_provider.plugins.base import DataType


class DataSourceConfig(BaseModel):
    """A single data source the extraction pipeline can extract from."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    url: str = Field(min_length=1)
    data_type: DataType = Field(alias="dataType")
    content_goal: str = Field(default="", alias="contentGoal")
    category: str | None = Field(
        default=None,
        description="Sub-category grouping sources of one data type (e.g. Assembly, Senate)",
    )
    source_type: Literal["html_scrape", "bulk_download", "api"] | None = Field(
        default=None,
        alias="sourceType",
    )
    hints: list[str] = Field(default_factory=list)
    rate_limit_override: float | None = Field(default=None, alias="rateLimitOverride")


class RegionPluginConfig(BaseModel):
    """Declarative configuration of one region plugin."""
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    region_id: str = Field(alias="regionId", min_length=1)
    region_name: str = Field(default="", alias="regionName")
    description: str = Field(default="")
    timezone: str = Field(default="")
    state_code: str | None = Field(
        default=None,
        alias="stateCode",
        description="Two-letter state code used to scope federal data",
    )
    data_sources: tuple[DataSourceConfig, ...] = Field(alias="dataSources", min_length=1)

    def sources_for(self, data_type: DataType) -> list[DataSourceConfig]:
        """Return the sources of a data type in configured order."""
        return [ds for ds in self.data_sources if ds.data_type == data_type]


class RegionPluginFile(BaseModel):
    """A discovered region config file."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    display_name: str = Field(alias="displayName", min_length=1)
    description: str
    version: str = Field(min_length=1)
    config: RegionPluginConfig
