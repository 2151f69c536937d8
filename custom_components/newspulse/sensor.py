# File: sensor.py
"""Sensors for the NewsPulse integration.

Sensors Defined in This File (3):

01. NewsPulseUnreadBadgeSensor - unread badge count and presentation
02. NewsPulseNotificationsSensor - filtered notification list
03. NewsPulsePermissionSensor - local notification permission state
"""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import NewsPulseCoordinator
from .engines.permission_engine import PermissionState
from .entity import NewsPulseCoordinatorEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for NewsPulse integration."""
    coordinator: NewsPulseCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    async_add_entities(
        [
            NewsPulseUnreadBadgeSensor(coordinator, entry),
            NewsPulseNotificationsSensor(coordinator, entry),
            NewsPulsePermissionSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
class NewsPulseUnreadBadgeSensor(NewsPulseCoordinatorEntity, SensorEntity):
    """Sensor for the unread badge.

    The state is the raw count; `display` carries the clamped label ("99+")
    and `visible` tells dashboards whether to render the badge at all. Updates
    arrive from the badge manager, not from list refreshes.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_UNREAD_BADGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = const.UNIT_NOTIFICATIONS

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_UNREAD_BADGE}"
        self.entity_id = const.SENSOR_EID_UNREAD_BADGE

    async def async_added_to_hass(self) -> None:
        """Subscribe to badge updates."""
        await super().async_added_to_hass()
        self.listen_signal(const.SIGNAL_SUFFIX_BADGE_UPDATED, self._handle_badge_updated)

    @callback
    def _handle_badge_updated(self, _payload: dict[str, Any]) -> None:
        self.async_write_ha_state()

    @property
    def native_value(self) -> int:
        """Return the unread count."""
        return self.coordinator.badge_manager.count

    @property
    def icon(self) -> str:
        """Return a bell with a badge while there is something unread."""
        if self.coordinator.badge_manager.visible:
            return const.ICON_BADGE_UNREAD
        return const.ICON_BADGE_EMPTY

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose badge presentation and driver state."""
        badge = self.coordinator.badge_manager
        return {
            const.ATTR_DISPLAY: badge.display,
            const.ATTR_VISIBLE: badge.visible,
            const.ATTR_DRIVER_STATE: badge.state,
            const.ATTR_EXTERNAL_COUNT: badge.external_count,
            const.ATTR_AUTO_UPDATE: badge.auto_update,
        }


# ------------------------------------------------------------------------------------------
class NewsPulseNotificationsSensor(NewsPulseCoordinatorEntity, SensorEntity):
    """Sensor for the notification list, narrowed by the active filter.

    The state is the number of visible notifications. The filtered records are
    recomputed on every state write so they always match the store snapshot
    and the current selection.
    """

    _attr_translation_key = const.TRANS_KEY_SENSOR_NOTIFICATIONS
    _attr_icon = const.ICON_NOTIFICATIONS
    _attr_native_unit_of_measurement = const.UNIT_NOTIFICATIONS
    # The record list can outgrow the recorder attribute limit
    _unrecorded_attributes = frozenset({const.ATTR_NOTIFICATIONS})

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_NOTIFICATIONS}"
        self.entity_id = const.SENSOR_EID_NOTIFICATIONS

    @property
    def native_value(self) -> int:
        """Return the number of notifications matching the filter."""
        return len(self.coordinator.filtered_notifications)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the filtered records and list statistics."""
        store = self.coordinator.store
        return {
            const.ATTR_NOTIFICATIONS: self.coordinator.filtered_notifications,
            const.ATTR_FILTER: list(self.coordinator.filter_selection),
            const.ATTR_TOTAL_COUNT: len(store.get_all()),
            const.ATTR_UNREAD_COUNT: store.unread_count,
            const.ATTR_STORE_VERSION: store.version,
            const.ATTR_SETTINGS: self.coordinator.settings.as_dict(),
        }


# ------------------------------------------------------------------------------------------
class NewsPulsePermissionSensor(NewsPulseCoordinatorEntity, SensorEntity):
    """Sensor for the local notification permission state."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_PERMISSION
    _attr_icon = const.ICON_PERMISSION
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = [state.value for state in PermissionState]

    def __init__(self, coordinator: NewsPulseCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_PERMISSION}"
        self.entity_id = const.SENSOR_EID_PERMISSION

    async def async_added_to_hass(self) -> None:
        """Subscribe to permission changes."""
        await super().async_added_to_hass()
        self.listen_signal(
            const.SIGNAL_SUFFIX_PERMISSION_CHANGED, self._handle_permission_changed
        )

    @callback
    def _handle_permission_changed(self, _payload: dict[str, Any]) -> None:
        self.async_write_ha_state()

    @property
    def native_value(self) -> str:
        """Return the permission state."""
        return self.coordinator.local_notification_manager.permission.value
