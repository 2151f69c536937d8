"""Base manager class for NewsPulse managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import async_dispatcher_send

from .. import const
from ..helpers.entity_helpers import get_event_signal

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import NewsPulseCoordinator


class BaseManager(ABC):
    """Base class for all NewsPulse managers with scoped event support.

    Provides:
    - Instance-scoped event emitting (emit)
    - A shutdown hook for timers and pending work

    Subclasses must implement:
    - async_setup(): Initialize state and start any timers
    """

    def __init__(self, hass: HomeAssistant, coordinator: NewsPulseCoordinator) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator owning this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def emit(self, suffix: str, **payload: Any) -> None:
        """Emit instance-scoped event to entities and other managers.

        Args:
            suffix: Signal suffix constant (e.g., const.SIGNAL_SUFFIX_BADGE_UPDATED)
            **payload: Event data dict passed to listeners

        Example:
            self.emit(const.SIGNAL_SUFFIX_BADGE_UPDATED, count=5, previous=3)
        """
        signal = get_event_signal(self.entry_id, suffix)
        const.LOGGER.debug(
            "Emitting event '%s' for instance %s with payload keys: %s",
            suffix,
            self.entry_id,
            list(payload.keys()),
        )
        # Pass payload as single dict argument (dispatcher only supports *args)
        async_dispatcher_send(self.hass, signal, payload)

    @abstractmethod
    async def async_setup(self) -> None:
        """Set up the manager (initialize state, start timers).

        Called once during coordinator initialization.
        """

    async def async_shutdown(self) -> None:
        """Release timers and pending work when the entry unloads."""
