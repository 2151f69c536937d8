# File: __init__.py
"""Initialization file for the NewsPulse integration.

Handles setting up the integration from a config entry: building the API
client and coordinator, loading the first notification list, starting the
managers and forwarding the entity platforms.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for list refresh and read-state sync.
- Companion app action routing for local notifications.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import Event, HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from . import const
from .api import NewsPulseApiClient
from .coordinator import NewsPulseCoordinator
from .notification_action_handler import async_handle_notification_action
from .services import async_setup_services, async_unload_services


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for NewsPulse entry: %s", entry.entry_id)

    api = NewsPulseApiClient(
        async_get_clientsession(hass),
        entry.data[const.CONF_URL],
        entry.data.get(const.CONF_API_TOKEN),
    )
    coordinator = NewsPulseCoordinator(hass, entry, api)

    try:
        # Perform the first refresh to load the notification list.
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to load notifications: %s", e)
        raise

    await coordinator.async_load_settings()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
    }

    await coordinator.async_setup_managers()

    # Set up services required by the integration.
    async_setup_services(hass)

    # Forward the setup to supported platforms (sensors, buttons).
    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    # Listen for notification actions from the companion app.
    async def handle_notification_event(event: Event) -> None:
        """Handle notification action events."""
        await async_handle_notification_action(hass, event, entry.entry_id)

    entry.async_on_unload(
        hass.bus.async_listen(const.NOTIFICATION_EVENT, handle_notification_event)
    )
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    const.LOGGER.info("INFO: NewsPulse setup complete for entry: %s", entry.entry_id)
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options changed."""
    const.LOGGER.debug("DEBUG: Options changed, reloading entry %s", entry.entry_id)
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading NewsPulse entry: %s", entry.entry_id)

    # Unload platforms
    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)
        coordinator: NewsPulseCoordinator = entry_data[const.COORDINATOR]
        await coordinator.async_shutdown()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok
