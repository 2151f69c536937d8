"""Diagnostics support for NewsPulse integration.

Exports the entry configuration (token redacted) and the runtime state: the
store snapshot, the active filter, notification settings, badge driver and
permission state.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import NewsPulseCoordinator

TO_REDACT = {const.CONF_API_TOKEN}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: NewsPulseCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return {
        const.DIAG_ENTRY: async_redact_data(dict(entry.data), TO_REDACT),
        const.DIAG_OPTIONS: dict(entry.options),
        **coordinator.as_diagnostics(),
    }
