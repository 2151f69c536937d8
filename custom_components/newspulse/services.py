# File: services.py
"""Defines custom services for the NewsPulse integration.

These services allow direct actions through scripts or automations:
refreshing and filtering the notification list, marking notifications read,
driving the badge, scheduling test notifications and editing notification
settings.

Every service accepts an optional `config_entry_id`; without it the first
loaded NewsPulse entry is used.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import NewsPulseCoordinator
from .helpers.entity_helpers import get_coordinator

# --- Service Schemas ---
ENTRY_SCHEMA = {vol.Optional(const.FIELD_CONFIG_ENTRY_ID): cv.string}

REFRESH_NOTIFICATIONS_SCHEMA = vol.Schema(ENTRY_SCHEMA)

MARK_READ_SCHEMA = vol.Schema(
    {
        **ENTRY_SCHEMA,
        vol.Required(const.FIELD_NOTIFICATION_ID): cv.string,
    }
)

MARK_ALL_READ_SCHEMA = vol.Schema(ENTRY_SCHEMA)

SET_FILTER_SCHEMA = vol.Schema(
    {
        **ENTRY_SCHEMA,
        vol.Required(const.FIELD_CATEGORIES): vol.All(cv.ensure_list, [cv.string]),
    }
)

TOGGLE_FILTER_SCHEMA = vol.Schema(
    {
        **ENTRY_SCHEMA,
        vol.Required(const.FIELD_CATEGORY): cv.string,
    }
)

SEND_TEST_NOTIFICATION_SCHEMA = vol.Schema(
    {
        **ENTRY_SCHEMA,
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Required(const.FIELD_MESSAGE): cv.string,
        vol.Optional(const.FIELD_TYPE, default=const.CATEGORY_NEWS): vol.In(
            const.NOTIFICATION_CATEGORIES
        ),
        vol.Optional(
            const.FIELD_REFERENCE_ID, default=const.DEFAULT_TEST_REFERENCE_ID
        ): vol.Any(cv.positive_int, cv.string),
        vol.Optional(const.FIELD_REFERENCE_TYPE): cv.string,
        vol.Optional(
            const.FIELD_DELAY_SECONDS, default=const.DEFAULT_SCHEDULE_DELAY_SECONDS
        ): vol.Coerce(float),
    }
)

REQUEST_PERMISSION_SCHEMA = vol.Schema(ENTRY_SCHEMA)

SET_BADGE_COUNT_SCHEMA = vol.Schema(
    {
        **ENTRY_SCHEMA,
        vol.Optional(const.FIELD_COUNT): vol.All(vol.Coerce(int), vol.Range(min=0)),
    }
)

SETTINGS_FIELDS = (
    const.FIELD_ENABLE_PUSH,
    const.FIELD_ENABLE_NEWS,
    const.FIELD_ENABLE_LIKE,
    const.FIELD_ENABLE_COMMENT,
    const.FIELD_ENABLE_MENTION,
    const.FIELD_ENABLE_STREAM,
)

UPDATE_SETTINGS_SCHEMA = vol.All(
    vol.Schema(
        {
            **ENTRY_SCHEMA,
            **{vol.Optional(field): cv.boolean for field in SETTINGS_FIELDS},
        }
    ),
    cv.has_at_least_one_key(*SETTINGS_FIELDS),
)


def _get_coordinator(hass: HomeAssistant, call: ServiceCall) -> NewsPulseCoordinator:
    """Resolve the coordinator a service call targets."""
    entry_id = call.data.get(const.FIELD_CONFIG_ENTRY_ID)
    coordinator = get_coordinator(hass, entry_id)
    if coordinator is None:
        if entry_id:
            raise ServiceValidationError(
                const.ERROR_ENTRY_NOT_LOADED_FMT.format(entry_id)
            )
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    return coordinator


def async_setup_services(hass: HomeAssistant) -> None:
    """Register NewsPulse services."""
    if hass.services.has_service(const.DOMAIN, const.SERVICE_REFRESH_NOTIFICATIONS):
        return

    async def handle_refresh_notifications(call: ServiceCall) -> None:
        """Handle reloading the notification list and badge."""
        coordinator = _get_coordinator(hass, call)
        await coordinator.async_refresh()
        await coordinator.badge_manager.async_refresh()
        if not coordinator.last_update_success:
            const.LOGGER.warning(
                "WARNING: Refresh Notifications: %s, keeping last known list",
                const.ERROR_FETCH_FAILED,
            )

    async def handle_mark_read(call: ServiceCall) -> None:
        """Handle marking a single notification read."""
        coordinator = _get_coordinator(hass, call)
        notification_id = call.data[const.FIELD_NOTIFICATION_ID]

        if not await coordinator.read_state_manager.async_mark_one_read(
            notification_id
        ):
            const.LOGGER.warning(
                "WARNING: Mark Read: Notification '%s' not in the current list",
                notification_id,
            )
            return

        const.LOGGER.info("INFO: Notification '%s' marked as read", notification_id)

    async def handle_mark_all_read(call: ServiceCall) -> None:
        """Handle marking every notification read."""
        coordinator = _get_coordinator(hass, call)
        if await coordinator.read_state_manager.async_mark_all_read():
            const.LOGGER.info("INFO: All notifications marked as read")

    async def handle_set_filter(call: ServiceCall) -> None:
        """Handle replacing the category filter."""
        coordinator = _get_coordinator(hass, call)
        selection = await coordinator.async_set_filter(call.data[const.FIELD_CATEGORIES])
        const.LOGGER.debug("DEBUG: Set Filter: %s", selection)

    async def handle_toggle_filter(call: ServiceCall) -> None:
        """Handle toggling one category in the filter."""
        coordinator = _get_coordinator(hass, call)
        selection = await coordinator.async_toggle_filter(call.data[const.FIELD_CATEGORY])
        const.LOGGER.debug("DEBUG: Toggle Filter: %s", selection)

    async def handle_send_test_notification(call: ServiceCall) -> None:
        """Handle scheduling a local test notification."""
        coordinator = _get_coordinator(hass, call)
        notification_type = call.data[const.FIELD_TYPE]
        payload: dict[str, Any] = {
            const.DATA_NOTIFICATION_TYPE: notification_type,
            const.DATA_NOTIFICATION_REFERENCE_ID: call.data[const.FIELD_REFERENCE_ID],
            const.DATA_NOTIFICATION_REFERENCE_TYPE: call.data.get(
                const.FIELD_REFERENCE_TYPE, notification_type
            ),
        }

        schedule_id = await coordinator.local_notification_manager.async_schedule(
            call.data[const.FIELD_TITLE],
            call.data[const.FIELD_MESSAGE],
            payload,
            call.data[const.FIELD_DELAY_SECONDS],
        )
        if schedule_id is None:
            raise HomeAssistantError(const.ERROR_NOT_SCHEDULED)

        const.LOGGER.info("INFO: Test notification scheduled: %s", schedule_id)

    async def handle_request_permission(call: ServiceCall) -> None:
        """Handle asking for notification permission."""
        coordinator = _get_coordinator(hass, call)
        state = await coordinator.local_notification_manager.async_request_permission()
        const.LOGGER.info("INFO: Notification permission: %s", state)

    async def handle_set_badge_count(call: ServiceCall) -> None:
        """Handle setting (or clearing) the external badge count."""
        coordinator = _get_coordinator(hass, call)
        await coordinator.badge_manager.async_set_external_count(
            call.data.get(const.FIELD_COUNT)
        )

    async def handle_update_settings(call: ServiceCall) -> None:
        """Handle changing notification settings."""
        coordinator = _get_coordinator(hass, call)
        changes = {
            field: call.data[field] for field in SETTINGS_FIELDS if field in call.data
        }
        settings = await coordinator.async_update_settings(**changes)
        const.LOGGER.info("INFO: Notification settings updated: %s", settings)

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_REFRESH_NOTIFICATIONS,
        handle_refresh_notifications,
        schema=REFRESH_NOTIFICATIONS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_MARK_READ,
        handle_mark_read,
        schema=MARK_READ_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_MARK_ALL_READ,
        handle_mark_all_read,
        schema=MARK_ALL_READ_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SET_FILTER,
        handle_set_filter,
        schema=SET_FILTER_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_FILTER,
        handle_toggle_filter,
        schema=TOGGLE_FILTER_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SEND_TEST_NOTIFICATION,
        handle_send_test_notification,
        schema=SEND_TEST_NOTIFICATION_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_REQUEST_PERMISSION,
        handle_request_permission,
        schema=REQUEST_PERMISSION_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SET_BADGE_COUNT,
        handle_set_badge_count,
        schema=SET_BADGE_COUNT_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_SETTINGS,
        handle_update_settings,
        schema=UPDATE_SETTINGS_SCHEMA,
    )

    const.LOGGER.info("INFO: NewsPulse services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister NewsPulse services when unloading the integration."""
    services = [
        const.SERVICE_REFRESH_NOTIFICATIONS,
        const.SERVICE_MARK_READ,
        const.SERVICE_MARK_ALL_READ,
        const.SERVICE_SET_FILTER,
        const.SERVICE_TOGGLE_FILTER,
        const.SERVICE_SEND_TEST_NOTIFICATION,
        const.SERVICE_REQUEST_PERMISSION,
        const.SERVICE_SET_BADGE_COUNT,
        const.SERVICE_UPDATE_SETTINGS,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: NewsPulse services have been unregistered")
