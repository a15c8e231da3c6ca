"""Services built on the region plugin system."""

from region_provider.services.region_service import RegionService, SyncResult

__all__ = ["RegionService", "SyncResult"]
