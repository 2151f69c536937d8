"""Base entity classes for NewsPulse integration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.dispatcher import async_dispatcher_connect
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import NewsPulseCoordinator
from .helpers.entity_helpers import create_account_device_info, get_event_signal


class NewsPulseCoordinatorEntity(CoordinatorEntity[NewsPulseCoordinator]):
    """Base entity class for NewsPulse entities with typed coordinator access.

    All entities of one config entry share a single service device.
    """

    _attr_has_entity_name = True

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the entity.

        Args:
            coordinator: NewsPulseCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
        """
        super().__init__(coordinator)
        self._entry = entry
        self._attr_device_info = create_account_device_info(entry)

    @property
    def coordinator(self) -> NewsPulseCoordinator:
        """Return typed coordinator."""
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: NewsPulseCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)

    def listen_signal(
        self, suffix: str, handler: Callable[[dict[str, Any]], None]
    ) -> None:
        """Subscribe to an instance-scoped manager signal for the entity's lifetime."""
        self.async_on_remove(
            async_dispatcher_connect(
                self.hass, get_event_signal(self._entry.entry_id, suffix), handler
            )
        )
