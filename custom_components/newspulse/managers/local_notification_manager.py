# File: local_notification_manager.py
"""Local Notification Manager - Permission-gated one-shot scheduling.

Validates the request, makes sure notification permission is granted and
hands the content to the notification platform. A denied permission is not an
error: async_schedule() returns None and nothing is scheduled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError

from .. import const
from ..engines.permission_engine import PermissionEngine, PermissionState
from ..exceptions import SchedulingError, ValidationError
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import CALLBACK_TYPE, HomeAssistant

    from ..coordinator import NewsPulseCoordinator
    from ..notification_platform import NotificationPlatform, ResponseListener
    from ..type_defs import LocalNotificationContent, ScheduleId


class LocalNotificationManager(BaseManager):
    """Schedules local notifications through a NotificationPlatform."""

    def __init__(
        self,
        hass: HomeAssistant,
        coordinator: NewsPulseCoordinator,
        platform: NotificationPlatform,
    ) -> None:
        """Initialize the manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator
            platform: Delivery backend (HassNotifyPlatform in production)
        """
        super().__init__(hass, coordinator)
        self.platform = platform
        self._permission = PermissionState.UNDETERMINED

    @property
    def permission(self) -> PermissionState:
        """Return the permission state the scheduler currently holds."""
        return self._permission

    async def async_setup(self) -> None:
        """Read the initial permission without prompting."""
        reported = await self.platform.async_get_permission()
        self._set_permission(PermissionEngine.observe(self._permission, reported))
        const.LOGGER.debug(
            "DEBUG: LocalNotificationManager initialized, permission '%s' for entry %s",
            self._permission,
            self.entry_id,
        )

    async def async_shutdown(self) -> None:
        """Cancel deliveries that have not fired yet."""
        await self.platform.async_cancel_all()

    # -------------------------------------------------------------------------
    # Permission
    # -------------------------------------------------------------------------

    async def async_request_permission(self) -> PermissionState:
        """Ask the platform for permission (no prompt once granted)."""
        if not PermissionEngine.needs_request(self._permission):
            return self._permission
        reported = await self.platform.async_request_permission()
        self._set_permission(PermissionEngine.transition(self._permission, reported))
        return self._permission

    def _set_permission(self, state: PermissionState) -> None:
        if state is self._permission:
            return
        previous = self._permission
        self._permission = state
        const.LOGGER.info(
            "INFO: Notification permission changed from '%s' to '%s'", previous, state
        )
        self.emit(
            const.SIGNAL_SUFFIX_PERMISSION_CHANGED,
            permission=state.value,
            previous=previous.value,
        )

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    async def async_schedule(
        self,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
        delay_seconds: float = const.DEFAULT_SCHEDULE_DELAY_SECONDS,
    ) -> ScheduleId | None:
        """Schedule a one-shot local notification.

        Validation happens before any permission prompt.

        Returns:
            The platform schedule id, or None when permission was not granted.

        Raises:
            ValidationError: Blank title or body, or a negative delay.
            SchedulingError: The platform failed after permission was granted.
        """
        if not title or not title.strip() or not body or not body.strip():
            raise ValidationError(const.ERROR_EMPTY_TITLE_OR_MESSAGE)
        if delay_seconds < 0:
            raise ValidationError(const.ERROR_NEGATIVE_DELAY)

        if not PermissionEngine.can_schedule(await self.async_request_permission()):
            const.LOGGER.info(
                "INFO: Local notification '%s' not scheduled, permission %s",
                title,
                self._permission,
            )
            return None

        content: LocalNotificationContent = {
            "title": title,
            "body": body,
            "data": dict(data or {}),
        }
        try:
            schedule_id = await self.platform.async_schedule_one_shot(
                content, delay_seconds
            )
        except HomeAssistantError as err:
            const.LOGGER.error("ERROR: Failed to schedule local notification: %s", err)
            raise SchedulingError(f"{const.ERROR_SCHEDULING_FAILED}: {err}") from err

        return schedule_id

    def add_response_listener(self, listener: ResponseListener) -> CALLBACK_TYPE:
        """Register a listener for delivered and tapped notifications."""
        return self.platform.add_response_listener(listener)
