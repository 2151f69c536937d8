# File: badge_manager.py
"""Badge Manager - Unread badge driver for NewsPulse.

Owns the badge polling timer and the displayed unread count.

States:
    polling - auto-update enabled and no external count: fetch immediately,
              then every `badge_update_interval` seconds
    idle    - external count set, or auto-update disabled

The badge count is fetched through the coordinator independently of the
notification store, so a badge refresh never replaces the list.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from homeassistant.core import CALLBACK_TYPE, callback
from homeassistant.helpers.event import async_track_time_interval

from .. import const
from ..engines.badge_engine import BadgeEngine
from ..exceptions import NewsPulseApiError
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import NewsPulseCoordinator


class BadgeManager(BaseManager):
    """Drives the unread badge from polling or an external count."""

    def __init__(self, hass: HomeAssistant, coordinator: NewsPulseCoordinator) -> None:
        """Initialize the badge manager."""
        super().__init__(hass, coordinator)
        options = coordinator.config_entry.options
        self._interval = timedelta(
            seconds=options.get(
                const.CONF_BADGE_UPDATE_INTERVAL, const.DEFAULT_BADGE_UPDATE_INTERVAL
            )
        )
        self._auto_update: bool = options.get(
            const.CONF_BADGE_AUTO_UPDATE, const.DEFAULT_BADGE_AUTO_UPDATE
        )
        self._state: str = const.BADGE_STATE_IDLE
        self._count: int = const.DEFAULT_ZERO
        # None until a value is shown; an initial external count never pulses
        self._previous: int | None = None
        self._external_count: int | None = None
        self._unsub_interval: CALLBACK_TYPE | None = None
        self._poll_token: int = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def count(self) -> int:
        """Return the current badge count."""
        return self._count

    @property
    def display(self) -> str | None:
        """Return the badge label ("99+" above 99, None when hidden)."""
        return BadgeEngine.format_display(self._count)

    @property
    def visible(self) -> bool:
        """Return True if the badge should be shown."""
        return BadgeEngine.is_visible(self._count)

    @property
    def state(self) -> str:
        """Return the driver state (idle or polling)."""
        return self._state

    @property
    def external_count(self) -> int | None:
        """Return the externally supplied count, if any."""
        return self._external_count

    @property
    def auto_update(self) -> bool:
        """Return True if polling is enabled."""
        return self._auto_update

    @property
    def interval(self) -> timedelta:
        """Return the polling interval."""
        return self._interval

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def async_setup(self) -> None:
        """Start polling if auto-update is enabled."""
        if self._should_poll():
            await self._async_start_polling()
        const.LOGGER.debug(
            "DEBUG: BadgeManager initialized in state '%s' (interval %s) for entry %s",
            self._state,
            self._interval,
            self.entry_id,
        )

    async def async_shutdown(self) -> None:
        """Cancel the polling timer."""
        self._stop_polling()

    # -------------------------------------------------------------------------
    # Public commands
    # -------------------------------------------------------------------------

    async def async_set_external_count(self, count: int | None) -> None:
        """Display an externally supplied count, or resume polling with None."""
        if count is None:
            const.LOGGER.debug("DEBUG: Badge external count cleared")
            self._external_count = None
            if self._should_poll():
                await self._async_start_polling()
            else:
                self._emit_update()
            return

        self._stop_polling()
        self._external_count = BadgeEngine.sanitize_count(count)
        const.LOGGER.debug("DEBUG: Badge external count set to %s", self._external_count)
        self._set_count(self._external_count)

    async def async_set_auto_update(self, enabled: bool) -> None:
        """Enable or disable badge polling."""
        self._auto_update = enabled
        if self._should_poll():
            if self._state != const.BADGE_STATE_POLLING:
                await self._async_start_polling()
        else:
            self._stop_polling()
            self._emit_update()

    async def async_refresh(self) -> None:
        """Fetch the unread count now, if polling."""
        if self._state == const.BADGE_STATE_POLLING:
            await self._async_poll()

    # -------------------------------------------------------------------------
    # Polling
    # -------------------------------------------------------------------------

    def _should_poll(self) -> bool:
        return self._auto_update and self._external_count is None

    async def _async_start_polling(self) -> None:
        """Enter polling: fetch now, then on the fixed interval."""
        self._stop_polling()
        self._state = const.BADGE_STATE_POLLING
        if self._previous is None:
            self._previous = self._count
        self._unsub_interval = async_track_time_interval(
            self.hass, self._async_poll_tick, self._interval
        )
        await self._async_poll()

    def _stop_polling(self) -> None:
        if self._unsub_interval is not None:
            self._unsub_interval()
            self._unsub_interval = None
        self._state = const.BADGE_STATE_IDLE
        # Results of fetches still in flight are discarded
        self._poll_token += 1

    async def _async_poll_tick(self, _now: datetime) -> None:
        """Handle a polling interval tick."""
        await self._async_poll()

    async def _async_poll(self) -> None:
        poll_token = self._poll_token
        try:
            count = await self.coordinator.async_fetch_unread_count()
        except NewsPulseApiError as err:
            const.LOGGER.warning(
                "WARNING: Failed to fetch unread count, keeping %s: %s",
                self._count,
                err,
            )
            return

        if poll_token != self._poll_token or self._state != const.BADGE_STATE_POLLING:
            const.LOGGER.debug("DEBUG: Discarding badge count fetched after polling stopped")
            return
        self._set_count(count)

    # -------------------------------------------------------------------------
    # Count updates
    # -------------------------------------------------------------------------

    @callback
    def _set_count(self, count: int) -> None:
        """Store a new count, pulsing the badge when it changes to a non-zero value."""
        count = BadgeEngine.sanitize_count(count)
        previous = self._previous
        self._count = count
        self._previous = count

        if BadgeEngine.should_pulse(previous, count):
            const.LOGGER.debug("DEBUG: Badge pulse %s -> %s", previous, count)
            self.hass.bus.async_fire(
                const.EVENT_BADGE_PULSE,
                {
                    const.EVENT_DATA_ENTRY_ID: self.entry_id,
                    const.EVENT_DATA_COUNT: count,
                    const.EVENT_DATA_PREVIOUS: previous,
                },
            )

        self._emit_update(previous=previous)

    def _emit_update(self, **extra: Any) -> None:
        self.emit(
            const.SIGNAL_SUFFIX_BADGE_UPDATED,
            count=self._count,
            display=self.display,
            visible=self.visible,
            state=self._state,
            **extra,
        )
