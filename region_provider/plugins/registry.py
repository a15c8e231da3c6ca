"""Plugin registry for managing region plugin lifecycle.

The registry owns two independent slots: ``federal`` (always loaded,
nationwide data such as FEC campaign finance) and ``local`` (the
user-selected region). Each slot holds at most one plugin.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from region_provider.plugins.base import PluginHealth, PluginStatus, RegionPlugin, utcnow

logger = logging.getLogger(__name__)


class Slot(str, Enum):
    """Registry slot name."""
    FEDERAL = "federal"
    LOCAL = "local"


@dataclass
class RegisteredPlugin:
    """A plugin held in a registry slot.

    Attributes:
        name: Name the plugin was registered under
        instance: Plugin instance, owned by the registry
        status: Whether the plugin initialized successfully
        loaded_at: Timestamp of the registration attempt
        last_error: Initialization error message, if any
    """
    name: str
    instance: RegionPlugin
    status: PluginStatus
    loaded_at: datetime
    last_error: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == PluginStatus.ACTIVE


@dataclass(frozen=True)
class RegistryStatus:
    """Diagnostic snapshot of both registry slots."""
    has_plugin: bool
    federal_loaded: bool
    plugin_name: str | None = None
    plugin_status: str | None = None
    last_error: str | None = None
    loaded_at: datetime | None = None
    federal_name: str | None = None
    federal_status: str | None = None
    federal_last_error: str | None = None
    federal_loaded_at: datetime | None = None


class PluginRegistry:
    """Registry managing the federal and local plugin slots.

    Registering into an occupied slot destroys the previous plugin first.
    Register and unregister on a slot are serialized so a caller never
    observes a half-replaced slot.

    Example:
        >>> registry = PluginRegistry()
        >>> await registry.register_federal("federal", federal_plugin)
        >>> await registry.register_local("california", local_plugin)
        >>> plugin = registry.get_local()
    """

    def __init__(self) -> None:
        """Initialize the plugin registry with both slots empty."""
        self._federal: RegisteredPlugin | None = None
        self._local: RegisteredPlugin | None = None
        self._locks: dict[Slot, asyncio.Lock] = {
            Slot.FEDERAL: asyncio.Lock(),
            Slot.LOCAL: asyncio.Lock(),
        }

    async def register(
        self,
        name: str,
        instance: RegionPlugin,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Register a local plugin.

        Alias for register_local().
        """
        await self.register_local(name, instance, config)

    async def register_local(
        self,
        name: str,
        instance: RegionPlugin,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Register the local region plugin, replacing any existing one.

        Args:
            name: Plugin name
            instance: Plugin instance; ownership passes to the registry
            config: Configuration passed to the plugin's initialize()

        Raises:
            Exception: Whatever the plugin's initialize() raised. The slot
                is left populated with status ``error``.
        """
        await self._register_slot(Slot.LOCAL, name, instance, config)

    async def register_federal(
        self,
        name: str,
        instance: RegionPlugin,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Register the federal plugin, replacing any existing one.

        Args:
            name: Plugin name
            instance: Plugin instance; ownership passes to the registry
            config: Configuration passed to the plugin's initialize()

        Raises:
            Exception: Whatever the plugin's initialize() raised. The slot
                is left populated with status ``error``.
        """
        await self._register_slot(Slot.FEDERAL, name, instance, config)

    async def unregister(self) -> None:
        """Unregister and destroy the local plugin.

        The federal slot is left untouched.
        """
        async with self._locks[Slot.LOCAL]:
            await self._unregister_slot(Slot.LOCAL)

    def get_local(self) -> RegionPlugin | None:
        """Get the local plugin if it is active.

        Returns:
            Local plugin instance or None
        """
        return self._active_instance(self._local)

    def get_federal(self) -> RegionPlugin | None:
        """Get the federal plugin if it is active.

        Returns:
            Federal plugin instance or None
        """
        return self._active_instance(self._federal)

    def get_active(self) -> RegionPlugin | None:
        """Get the active local plugin. Alias for get_local()."""
        return self.get_local()

    def get_active_name(self) -> str | None:
        """Get the name held in the local slot, whatever its status."""
        return self._local.name if self._local else None

    def get_all(self) -> list[RegisteredPlugin]:
        """Get all active plugins, federal first.

        Returns:
            List of active registered plugins
        """
        return [
            registered
            for registered in (self._federal, self._local)
            if registered is not None and registered.is_active
        ]

    def has_active(self) -> bool:
        """Check if the local plugin is registered and active."""
        return self._local is not None and self._local.is_active

    async def get_health(self) -> PluginHealth | None:
        """Get health of the local plugin.

        Never raises: a failing health check is reported as unhealthy.

        Returns:
            PluginHealth, or None if no local plugin is active
        """
        active = self.get_local()
        if active is None:
            return None
        name = self._local.name

        try:
            return await active.health_check()
        except Exception as e:
            logger.error(f"Health check failed for local plugin '{name}': {e}")
            return PluginHealth(healthy=False, message=str(e), last_check=utcnow())

    def get_status(self) -> RegistryStatus:
        """Get a diagnostic snapshot of both slots.

        Returns:
            RegistryStatus for the local and federal slots
        """
        local = self._local
        federal = self._federal
        return RegistryStatus(
            has_plugin=local is not None,
            plugin_name=local.name if local else None,
            plugin_status=local.status.value if local else None,
            last_error=local.last_error if local else None,
            loaded_at=local.loaded_at if local else None,
            federal_loaded=federal is not None and federal.is_active,
            federal_name=federal.name if federal else None,
            federal_status=federal.status.value if federal else None,
            federal_last_error=federal.last_error if federal else None,
            federal_loaded_at=federal.loaded_at if federal else None,
        )

    async def shutdown(self) -> None:
        """Destroy both plugins, federal first.

        A destroy failure in one slot does not prevent cleanup of the other.
        """
        for slot in (Slot.FEDERAL, Slot.LOCAL):
            async with self._locks[slot]:
                await self._unregister_slot(slot)

    def _active_instance(self, registered: RegisteredPlugin | None) -> RegionPlugin | None:
        if registered is not None and registered.is_active:
            return registered.instance
        return None

    def _get_slot(self, slot: Slot) -> RegisteredPlugin | None:
        return self._federal if slot == Slot.FEDERAL else self._local

    def _set_slot(self, slot: Slot, registered: RegisteredPlugin | None) -> None:
        if slot == Slot.FEDERAL:
            self._federal = registered
        else:
            self._local = registered

    async def _register_slot(
        self,
        slot: Slot,
        name: str,
        instance: RegionPlugin,
        config: dict[str, Any] | None,
    ) -> None:
        """Destroy the current occupant, initialize the new plugin and commit."""
        async with self._locks[slot]:
            await self._unregister_slot(slot)

            logger.info(f"Registering {slot.value} plugin: {name}")

            try:
                await instance.initialize(config)
            except Exception as e:
                logger.error(f"Failed to initialize {slot.value} plugin '{name}': {e}")
                self._set_slot(
                    slot,
                    RegisteredPlugin(
                        name=name,
                        instance=instance,
                        status=PluginStatus.ERROR,
                        loaded_at=utcnow(),
                        last_error=str(e),
                    ),
                )
                raise

            self._set_slot(
                slot,
                RegisteredPlugin(
                    name=name,
                    instance=instance,
                    status=PluginStatus.ACTIVE,
                    loaded_at=utcnow(),
                ),
            )
            logger.info(f"Registered {slot.value} plugin: {name}")

    async def _unregister_slot(self, slot: Slot) -> None:
        """Destroy and clear a slot. Callers hold the slot lock."""
        registered = self._get_slot(slot)
        if registered is None:
            return

        logger.info(f"Unregistering {slot.value} plugin: {registered.name}")

        try:
            await registered.instance.destroy()
        except Exception as e:
            logger.error(f"Error destroying {slot.value} plugin '{registered.name}': {e}")

        self._set_slot(slot, None)
