# File: button.py
"""Buttons for NewsPulse integration.

Features:
1) Mark all read: optimistic mark-all through the read-state manager.
2) Refresh: reloads the notification list and the unread badge.
"""

from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import NewsPulseCoordinator
from .entity import NewsPulseCoordinatorEntity

# Set to 1 (serialized) for action buttons that modify state
PARALLEL_UPDATES = 1


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up buttons for NewsPulse integration."""
    coordinator: NewsPulseCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    async_add_entities(
        [
            NewsPulseMarkAllReadButton(coordinator, entry),
            NewsPulseRefreshButton(coordinator, entry),
        ]
    )


class NewsPulseMarkAllReadButton(NewsPulseCoordinatorEntity, ButtonEntity):
    """Button that marks every notification read."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_MARK_ALL_READ
    _attr_icon = const.ICON_MARK_ALL_READ

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the button."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.BUTTON_UID_SUFFIX_MARK_ALL_READ}"
        self.entity_id = const.BUTTON_EID_MARK_ALL_READ

    @property
    def available(self) -> bool:
        """Unavailable while a mark-all is already waiting for the server."""
        return (
            super().available
            and not self.coordinator.read_state_manager.mark_all_in_flight
        )

    async def async_press(self) -> None:
        """Handle the button press event.

        Raises:
            ReconciliationError: If the server rejected the change (the
                notifications are restored to unread).
        """
        await self.coordinator.read_state_manager.async_mark_all_read()


class NewsPulseRefreshButton(NewsPulseCoordinatorEntity, ButtonEntity):
    """Button that reloads the notification list and badge."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_REFRESH
    _attr_icon = const.ICON_REFRESH

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the button."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.BUTTON_UID_SUFFIX_REFRESH}"
        self.entity_id = const.BUTTON_EID_REFRESH

    async def async_press(self) -> None:
        """Handle the button press event."""
        await self.coordinator.async_refresh()
        await self.coordinator.badge_manager.async_refresh()
