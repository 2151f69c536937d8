# File: notification_platform.py
"""Local notification platform for the NewsPulse integration.

`NotificationPlatform` is the port the scheduler talks to: permission query and
request, one-shot scheduling and response listeners. `HassNotifyPlatform`
implements it on top of a Home Assistant notify service (typically a mobile
companion app `notify.mobile_app_<device>`).

Action buttons carry their routing context inside the action string:

    NEWSPULSE_OPEN|<entry_id[:8]>|<schedule_id>|<type>|<referenceId>

notification_action_handler.py parses it when the companion app reports a tap.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any
import uuid

from homeassistant.core import CALLBACK_TYPE
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.event import async_call_later

from . import const
from .engines.permission_engine import PermissionState

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import LocalNotificationContent, ScheduleId


@dataclass(frozen=True)
class NotificationResponse:
    """A delivered or tapped local notification.

    Attributes:
        schedule_id: Id returned when the notification was scheduled
        payload: Routing payload (type, referenceId, ...)
        kind: const.RESPONSE_DELIVERED or const.RESPONSE_OPENED
    """

    schedule_id: str
    payload: dict[str, Any] = field(default_factory=dict)
    kind: str = const.RESPONSE_DELIVERED


ResponseListener = Callable[[NotificationResponse], None]


def build_action_string(
    entry_id: str, schedule_id: str, payload: dict[str, Any]
) -> str:
    """Encode an "open" action for a companion app action button."""
    parts = [
        const.ACTION_OPEN_NOTIFICATION,
        entry_id[: const.ACTION_ENTRY_ID_LENGTH],
        schedule_id,
        _action_field(payload.get(const.DATA_NOTIFICATION_TYPE)),
        _action_field(payload.get(const.DATA_NOTIFICATION_REFERENCE_ID)),
    ]
    return const.ACTION_SEPARATOR.join(parts)


def _action_field(value: Any) -> str:
    """Render a payload value for the action string, cut at the separator.

    The full payload is recovered by schedule id; these fields are only a
    fallback for taps arriving after a restart.
    """
    if value is None:
        return ""
    return str(value).split(const.ACTION_SEPARATOR, 1)[0]


def split_notify_service(notify_service: str) -> tuple[str, str]:
    """Split 'notify.mobile_app_x' (or bare 'mobile_app_x') into domain and service."""
    if const.DISPLAY_DOT not in notify_service:
        return const.NOTIFY_DOMAIN, notify_service
    domain, service = notify_service.split(const.DISPLAY_DOT, 1)
    return domain, service


class NotificationPlatform(ABC):
    """Port between the scheduler and whatever actually shows notifications."""

    def __init__(self) -> None:
        """Initialize listener bookkeeping."""
        self._listeners: list[ResponseListener] = []

    @abstractmethod
    async def async_get_permission(self) -> PermissionState:
        """Return the current permission without prompting."""

    @abstractmethod
    async def async_request_permission(self) -> PermissionState:
        """Ask for permission and return the verdict."""

    @abstractmethod
    async def async_schedule_one_shot(
        self, content: LocalNotificationContent, delay_seconds: float
    ) -> ScheduleId:
        """Schedule a single delivery and return its id.

        Raises:
            HomeAssistantError: The platform cannot schedule the notification.
        """

    @abstractmethod
    async def async_cancel_all(self) -> None:
        """Cancel every delivery that has not fired yet."""

    def add_response_listener(self, listener: ResponseListener) -> CALLBACK_TYPE:
        """Register a listener for notification responses.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    def payload_for(self, schedule_id: ScheduleId) -> dict[str, Any] | None:
        """Return the payload a delivered notification carried, if still known."""
        return None

    def dispatch_response(self, response: NotificationResponse) -> None:
        """Deliver a response to every registered listener."""
        for listener in list(self._listeners):
            try:
                listener(response)
            except Exception:  # pylint: disable=broad-exception-caught
                # Listeners run from timer callbacks and bus events; one bad
                # listener must not prevent the others from being called.
                const.LOGGER.exception(
                    "ERROR: Notification response listener failed for %s",
                    response.schedule_id,
                )


class HassNotifyPlatform(NotificationPlatform):
    """Delivers local notifications through a Home Assistant notify service."""

    def __init__(
        self, hass: HomeAssistant, notify_service: str | None, entry_id: str
    ) -> None:
        """Initialize the platform.

        Args:
            hass: Home Assistant instance
            notify_service: 'notify.<service>' to deliver through, or None
            entry_id: Config entry id, encoded into action strings
        """
        super().__init__()
        self.hass = hass
        self.notify_service = notify_service or None
        self.entry_id = entry_id
        self._asked = False
        self._scheduled: dict[ScheduleId, CALLBACK_TYPE] = {}
        self._delivered: dict[ScheduleId, dict[str, Any]] = {}

    @property
    def pending_count(self) -> int:
        """Return the number of deliveries still waiting on their timer."""
        return len(self._scheduled)

    def payload_for(self, schedule_id: ScheduleId) -> dict[str, Any] | None:
        """Return a copy of the payload delivered under this schedule id."""
        payload = self._delivered.get(schedule_id)
        return dict(payload) if payload is not None else None

    def _service_available(self) -> bool:
        if not self.notify_service:
            return False
        domain, service = split_notify_service(self.notify_service)
        return self.hass.services.has_service(domain, service)

    async def async_get_permission(self) -> PermissionState:
        """Return undetermined until asked, then whether the service exists."""
        if not self._asked:
            return PermissionState.UNDETERMINED
        if self._service_available():
            return PermissionState.GRANTED
        return PermissionState.DENIED

    async def async_request_permission(self) -> PermissionState:
        """Grant permission when the configured notify service is registered."""
        self._asked = True
        if self._service_available():
            return PermissionState.GRANTED
        const.LOGGER.warning(
            "WARNING: Notify service '%s' not available, notification permission denied",
            self.notify_service,
        )
        return PermissionState.DENIED

    async def async_schedule_one_shot(
        self, content: LocalNotificationContent, delay_seconds: float
    ) -> ScheduleId:
        """Schedule a delivery through the notify service after a delay."""
        if not self.notify_service:
            raise HomeAssistantError(const.ERROR_NO_NOTIFY_SERVICE)

        schedule_id = uuid.uuid4().hex

        async def _async_fire(_now: datetime) -> None:
            self._scheduled.pop(schedule_id, None)
            await self._async_deliver(schedule_id, content)

        self._scheduled[schedule_id] = async_call_later(
            self.hass, delay_seconds, _async_fire
        )
        const.LOGGER.debug(
            "DEBUG: Scheduled local notification %s in %s seconds",
            schedule_id,
            delay_seconds,
        )
        return schedule_id

    async def async_cancel_all(self) -> None:
        """Cancel every pending delivery timer."""
        if self._scheduled:
            const.LOGGER.debug(
                "DEBUG: Cancelling %s pending local notifications", len(self._scheduled)
            )
        for cancel in self._scheduled.values():
            cancel()
        self._scheduled.clear()

    async def _async_deliver(
        self, schedule_id: ScheduleId, content: LocalNotificationContent
    ) -> None:
        """Call the notify service, then report the delivery to listeners."""
        if not self._service_available():
            const.LOGGER.warning(
                "WARNING: Notify service '%s' no longer available, dropping notification %s",
                self.notify_service,
                schedule_id,
            )
            return

        payload = dict(content[const.NOTIFY_DATA])
        data: dict[str, Any] = {
            **payload,
            const.NOTIFY_TAG: schedule_id,
            const.NOTIFY_ACTIONS: [
                {
                    const.NOTIFY_ACTION: build_action_string(
                        self.entry_id, schedule_id, payload
                    ),
                    const.NOTIFY_TITLE: const.ACTION_TITLE_OPEN,
                }
            ],
        }
        service_data = {
            const.NOTIFY_TITLE: content["title"],
            const.NOTIFY_MESSAGE: content["body"],
            const.NOTIFY_DATA: data,
        }

        domain, service = split_notify_service(self.notify_service or "")
        try:
            await self.hass.services.async_call(
                domain, service, service_data, blocking=True
            )
        except HomeAssistantError as err:
            const.LOGGER.error(
                "ERROR: Failed to deliver local notification %s via '%s.%s': %s",
                schedule_id,
                domain,
                service,
                err,
            )
            return

        const.LOGGER.debug(
            "DEBUG: Delivered local notification %s via '%s.%s'",
            schedule_id,
            domain,
            service,
        )
        self._delivered[schedule_id] = dict(payload)
        while len(self._delivered) > const.DELIVERED_PAYLOAD_HISTORY:
            self._delivered.pop(next(iter(self._delivered)))
        self.hass.bus.async_fire(
            const.EVENT_NOTIFICATION_DELIVERED,
            {
                const.EVENT_DATA_ENTRY_ID: self.entry_id,
                const.EVENT_DATA_SCHEDULE_ID: schedule_id,
                const.EVENT_DATA_PAYLOAD: payload,
            },
        )
        self.dispatch_response(
            NotificationResponse(
                schedule_id=schedule_id,
                payload=payload,
                kind=const.RESPONSE_DELIVERED,
            )
        )
