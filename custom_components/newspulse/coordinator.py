# File: coordinator.py
"""Coordinator for the NewsPulse integration.

Refreshes the notification list on a fixed interval, owns the notification
store, the active filter selection and the notification settings, and wires
the three managers (read state, badge, local notifications) together.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from . import const
from .api import NewsPulseApiClient
from .engines.badge_engine import BadgeEngine
from .engines.filter_engine import FilterEngine
from .exceptions import FetchError, NewsPulseApiError, NewsPulseError, ValidationError
from .helpers.entity_helpers import get_event_signal
from .managers import BadgeManager, LocalNotificationManager, ReadStateManager
from .notification_platform import HassNotifyPlatform, NotificationPlatform
from .settings import NotificationSettings
from .store import NotificationStore
from .type_defs import FilterSelection, NotificationRecord


class NewsPulseCoordinator(DataUpdateCoordinator[list[NotificationRecord]]):
    """Coordinator for NewsPulse integration.

    `data` always mirrors the store snapshot. Entities read the filtered view
    through `filtered_notifications`.
    """

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        api: NewsPulseApiClient,
        platform: NotificationPlatform | None = None,
    ) -> None:
        """Initialize the NewsPulseCoordinator.

        Args:
            hass: Home Assistant instance
            config_entry: Entry this coordinator serves
            api: Backend client
            platform: Local notification backend, defaults to the configured
                notify service
        """
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.api = api
        self.store = NotificationStore(api)
        self._filter_selection: FilterSelection = const.DEFAULT_FILTER_SELECTION
        self.settings = NotificationSettings()

        if platform is None:
            platform = HassNotifyPlatform(
                hass,
                config_entry.options.get(
                    const.CONF_NOTIFY_SERVICE,
                    config_entry.data.get(const.CONF_NOTIFY_SERVICE),
                ),
                config_entry.entry_id,
            )

        self.read_state_manager = ReadStateManager(hass, self)
        self.badge_manager = BadgeManager(hass, self)
        self.local_notification_manager = LocalNotificationManager(
            hass, self, platform
        )
        self._remove_store_listener = self.store.async_add_listener(
            self._handle_store_change
        )

    # -------------------------------------------------------------------------------------
    # Setup / Teardown
    # -------------------------------------------------------------------------------------

    async def async_setup_managers(self) -> None:
        """Start the managers once the first list has loaded."""
        await self.read_state_manager.async_setup()
        await self.local_notification_manager.async_setup()
        await self.badge_manager.async_setup()

    async def async_shutdown(self) -> None:
        """Stop badge polling and cancel pending local notifications."""
        await super().async_shutdown()
        self._remove_store_listener()
        await self.badge_manager.async_shutdown()
        await self.local_notification_manager.async_shutdown()
        await self.read_state_manager.async_shutdown()

    # -------------------------------------------------------------------------------------
    # Periodic Refresh
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> list[NotificationRecord]:
        """Reload the full notification list."""
        try:
            records = await self.store.async_load()
        except FetchError as err:
            raise UpdateFailed(str(err)) from err

        async_dispatcher_send(
            self.hass,
            get_event_signal(
                self.config_entry.entry_id, const.SIGNAL_SUFFIX_NOTIFICATIONS_LOADED
            ),
            {"count": len(records), "generation": self.store.generation},
        )
        return records

    @callback
    def _handle_store_change(self) -> None:
        """Push every store change (load, optimistic read, rollback) to entities."""
        self.data = self.store.get_all()
        self.async_update_listeners()

    # -------------------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------------------

    @property
    def filter_selection(self) -> FilterSelection:
        """Return the active category filter."""
        return self._filter_selection

    @property
    def filtered_notifications(self) -> list[NotificationRecord]:
        """Return the store snapshot narrowed to the active filter."""
        return FilterEngine.apply(self.store.get_all(), self._filter_selection)

    async def async_set_filter(self, categories: Iterable[str]) -> FilterSelection:
        """Replace the filter selection.

        Raises:
            ValidationError: If a category is not selectable
        """
        categories = list(categories)
        invalid = FilterEngine.invalid_categories(categories)
        if invalid:
            raise ValidationError(f"Unknown notification categories: {', '.join(invalid)}")
        self._apply_filter(FilterEngine.normalize(categories))
        return self._filter_selection

    async def async_toggle_filter(self, category: str) -> FilterSelection:
        """Toggle one category in the filter selection.

        Raises:
            ValidationError: If the category is not selectable
        """
        if FilterEngine.invalid_categories([category]):
            raise ValidationError(f"Unknown notification category: {category}")
        self._apply_filter(FilterEngine.toggle(self._filter_selection, category))
        return self._filter_selection

    def _apply_filter(self, selection: FilterSelection) -> None:
        if selection == self._filter_selection:
            return
        const.LOGGER.debug(
            "DEBUG: Notification filter changed %s -> %s",
            self._filter_selection,
            selection,
        )
        self._filter_selection = selection
        self.async_update_listeners()

    # -------------------------------------------------------------------------------------
    # Notification Settings
    # -------------------------------------------------------------------------------------

    async def async_load_settings(self) -> NotificationSettings:
        """Hydrate settings from the user profile; defaults are kept on failure."""
        try:
            profile = await self.api.async_fetch_user_profile()
            self.settings = NotificationSettings.from_profile(profile)
        except NewsPulseApiError as err:
            const.LOGGER.warning(
                "WARNING: Failed to load notification settings, using defaults: %s", err
            )
        except vol.Invalid as err:
            const.LOGGER.warning(
                "WARNING: Invalid notification settings in profile, using defaults: %s",
                err,
            )
        return self.settings

    async def async_update_settings(self, **changes: bool) -> NotificationSettings:
        """Change one or more toggles and persist the whole record.

        Raises:
            ValidationError: If a change names an unknown setting
            NewsPulseError: If the backend rejected the update; the previous
                settings are kept
        """
        try:
            updated = self.settings.replace(**changes)
        except TypeError as err:
            raise ValidationError(str(err)) from err

        try:
            await self.api.async_update_user_settings(updated.as_api_dict())
        except NewsPulseApiError as err:
            const.LOGGER.error("ERROR: %s: %s", const.ERROR_SETTINGS_UPDATE_FAILED, err)
            raise NewsPulseError(f"{const.ERROR_SETTINGS_UPDATE_FAILED}: {err}") from err

        self.settings = updated
        self.async_update_listeners()
        return self.settings

    # -------------------------------------------------------------------------------------
    # Unread Count
    # -------------------------------------------------------------------------------------

    async def async_fetch_unread_count(self) -> int:
        """Count unread notifications from a fresh fetch (store untouched).

        Raises:
            NewsPulseApiError: If the fetch fails
        """
        raw_records = await self.api.async_fetch_notifications()
        return BadgeEngine.count_unread(NotificationStore.normalize_records(raw_records))

    async def async_get_unread_count(self) -> int:
        """Return the unread count, or 0 when the backend cannot be reached."""
        try:
            return await self.async_fetch_unread_count()
        except NewsPulseApiError as err:
            const.LOGGER.warning("WARNING: Failed to fetch unread count: %s", err)
            return const.DEFAULT_ZERO

    # -------------------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------------------

    def as_diagnostics(self) -> dict[str, Any]:
        """Return a snapshot of the runtime state."""
        return {
            const.DIAG_STORE: {
                const.DIAG_VERSION: self.store.version,
                const.DIAG_GENERATION: self.store.generation,
                const.DIAG_RECORDS: self.store.get_all(),
            },
            const.DIAG_FILTER: list(self._filter_selection),
            const.DIAG_SETTINGS: self.settings.as_dict(),
            const.DIAG_BADGE: {
                "count": self.badge_manager.count,
                "display": self.badge_manager.display,
                "state": self.badge_manager.state,
                "external_count": self.badge_manager.external_count,
                "auto_update": self.badge_manager.auto_update,
            },
            const.DIAG_PERMISSION: self.local_notification_manager.permission.value,
        }
