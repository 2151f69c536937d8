# File: helpers/entity_helpers.py
"""Entity and instance lookup helpers for NewsPulse.

Functions here need Home Assistant objects (hass, config entries).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo

from .. import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from ..coordinator import NewsPulseCoordinator


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Each config entry gets its own signal namespace so several NewsPulse
    accounts never see each other's events.

    Format: 'newspulse_{entry_id}_{suffix}'

    Args:
        entry_id: ConfigEntry.entry_id from coordinator
        suffix: Signal suffix constant from const.py

    Returns:
        Fully qualified signal name scoped to this integration instance
    """
    return f"{const.SIGNAL_PREFIX}{entry_id}_{suffix}"


def get_first_entry_id(hass: HomeAssistant) -> str | None:
    """Retrieve the first loaded NewsPulse config entry ID."""
    domain_entries = hass.data.get(const.DOMAIN)
    if not domain_entries:
        return None
    return next(iter(domain_entries.keys()), None)


def get_coordinator(
    hass: HomeAssistant, entry_id: str | None = None
) -> NewsPulseCoordinator | None:
    """Return the coordinator for an entry (first loaded entry by default)."""
    entry_id = entry_id or get_first_entry_id(hass)
    if entry_id is None:
        return None
    entry_data = hass.data.get(const.DOMAIN, {}).get(entry_id)
    if entry_data is None:
        return None
    return entry_data[const.COORDINATOR]


def find_entry_id_by_prefix(hass: HomeAssistant, prefix: str) -> str | None:
    """Resolve a truncated entry id (as encoded in action strings)."""
    for entry_id in hass.data.get(const.DOMAIN, {}):
        if entry_id[: len(prefix)] == prefix:
            return entry_id
    return None


def create_account_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create the service device grouping all entities of one account."""
    return DeviceInfo(
        identifiers={(const.DOMAIN, config_entry.entry_id)},
        name=config_entry.title,
        manufacturer=const.NEWSPULSE_TITLE,
        model="Notification Center",
        entry_type=DeviceEntryType.SERVICE,
    )
