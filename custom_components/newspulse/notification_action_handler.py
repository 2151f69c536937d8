# File: notification_action_handler.py
"""Handle notification actions from HA companion notifications.

When a user taps the "Open" button of a local NewsPulse notification, the
companion app fires `mobile_app_notification_action`. This handler parses the
action string and hands a NotificationResponse to the listeners of the entry
that scheduled it.

Separation of concerns:
- notification_action_handler.py = "The Router" (INCOMING action callbacks)
- notification_platform.py = "The Voice" (OUTGOING local notifications)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from . import const
from .helpers.entity_helpers import find_entry_id_by_prefix, get_coordinator
from .notification_platform import NotificationResponse

if TYPE_CHECKING:
    from homeassistant.core import Event, HomeAssistant


# =============================================================================
# ParsedAction Dataclass
# =============================================================================


@dataclass
class ParsedAction:
    """Type-safe parsed notification action.

    Action strings are pipe-separated:
    "NEWSPULSE_OPEN|entry_id[:8]|schedule_id|type|referenceId"

    Attributes:
        action_type: The action constant (ACTION_OPEN_NOTIFICATION)
        entry_id: The config entry ID (truncated to 8 chars)
        schedule_id: Id of the scheduled notification
        notification_type: Category of the notification, None if empty
        reference_id: Opaque reference pointer, None if empty

    Example:
        parsed = ParsedAction(
            action_type="NEWSPULSE_OPEN",
            entry_id="abc12345",
            schedule_id="5f0c...",
            notification_type="news",
            reference_id="42",
        )
    """

    action_type: str
    entry_id: str
    schedule_id: str
    notification_type: str | None = None
    reference_id: str | None = None

    @property
    def payload(self) -> dict[str, Any]:
        """Rebuild the routing payload carried by the action.

        Used when the delivering platform no longer knows the schedule id.
        """
        payload: dict[str, Any] = {}
        if self.notification_type:
            payload[const.DATA_NOTIFICATION_TYPE] = self.notification_type
        if self.reference_id:
            payload[const.DATA_NOTIFICATION_REFERENCE_ID] = self.reference_id
        return payload


def parse_notification_action(action_field: str) -> ParsedAction | None:
    """Parse a notification action string into a structured ParsedAction.

    Args:
        action_field: Pipe-separated action string from notification callback

    Returns:
        ParsedAction object if valid, None if foreign or malformed

    Example:
        >>> parsed = parse_notification_action("NEWSPULSE_OPEN|abc12345|s1|news|42")
        >>> parsed.schedule_id  # "s1"
        >>> parsed.payload      # {"type": "news", "referenceId": "42"}
    """
    if not action_field:
        return None

    parts = action_field.split(const.ACTION_SEPARATOR)
    if parts[0] != const.ACTION_OPEN_NOTIFICATION:
        # Actions from other integrations share the same event
        const.LOGGER.debug("DEBUG: Ignoring foreign notification action: %s", action_field)
        return None

    if len(parts) != 5 or not parts[1] or not parts[2]:
        const.LOGGER.warning("WARNING: Invalid action string format: %s", action_field)
        return None

    return ParsedAction(
        action_type=parts[0],
        entry_id=parts[1],
        schedule_id=parts[2],
        notification_type=parts[3] or None,
        reference_id=parts[4] or None,
    )


# =============================================================================
# Action Handler
# =============================================================================


async def async_handle_notification_action(
    hass: HomeAssistant, event: Event, entry_id: str | None = None
) -> None:
    """Route a companion app action to the scheduling entry's listeners.

    Args:
        hass: Home Assistant instance
        event: Event containing the notification action data
        entry_id: When given, only actions addressed to this entry are handled
            (each loaded entry registers its own bus listener)
    """
    action_field = event.data.get(const.NOTIFY_ACTION)
    if not action_field:
        const.LOGGER.debug("DEBUG: No action found in event data: %s", event.data)
        return

    parsed = parse_notification_action(action_field)
    if parsed is None:
        return

    if entry_id is not None:
        if not entry_id.startswith(parsed.entry_id):
            return
    else:
        entry_id = find_entry_id_by_prefix(hass, parsed.entry_id)
    coordinator = get_coordinator(hass, entry_id) if entry_id else None
    if coordinator is None or coordinator.local_notification_manager is None:
        const.LOGGER.warning(
            "WARNING: NewsPulse entry not loaded for truncated ID: %s", parsed.entry_id
        )
        return

    platform = coordinator.local_notification_manager.platform
    # The action string only carries a lossy copy of the payload
    payload = platform.payload_for(parsed.schedule_id)
    if payload is None:
        payload = parsed.payload

    const.LOGGER.debug(
        "DEBUG: Notification %s opened (payload %s)", parsed.schedule_id, payload
    )
    platform.dispatch_response(
        NotificationResponse(
            schedule_id=parsed.schedule_id,
            payload=payload,
            kind=const.RESPONSE_OPENED,
        )
    )
