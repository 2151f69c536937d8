# File: read_state_manager.py
"""Read-State Manager for NewsPulse integration.

Reconciles optimistic read-state mutations with the backend:
- The local snapshot is updated before the remote call is awaited, so
  entities show the new state immediately.
- A confirmed call needs no further action.
- A rejected call reverts exactly what the command changed and raises
  ReconciliationError. Both mark-one and mark-all roll back the same way.

Only one mark-all may be in flight; a second request while it is pending is
ignored. Mark-one calls are independent and may overlap each other and a
pending mark-all; they all converge towards read=True.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .. import const
from ..exceptions import NewsPulseApiError, ReconciliationError
from .base_manager import BaseManager

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..coordinator import NewsPulseCoordinator
    from ..type_defs import NotificationId


class ReadStateManager(BaseManager):
    """Manager owning optimistic read-state commands."""

    def __init__(self, hass: HomeAssistant, coordinator: NewsPulseCoordinator) -> None:
        """Initialize the read-state manager."""
        super().__init__(hass, coordinator)
        self._mark_all_in_flight = False

    async def async_setup(self) -> None:
        """Set up the read-state manager."""
        const.LOGGER.debug(
            "DEBUG: ReadStateManager ready for instance %s", self.entry_id
        )

    @property
    def mark_all_in_flight(self) -> bool:
        """Return True while a mark-all confirmation is pending."""
        return self._mark_all_in_flight

    def resolve_id(self, raw_id: NotificationId) -> NotificationId | None:
        """Map a caller-supplied id (often a string from a service call) to a record id."""
        for record in self.coordinator.store.get_all():
            record_id = record[const.DATA_NOTIFICATION_ID]
            if record_id == raw_id or str(record_id) == str(raw_id):
                return record_id
        return None

    # =========================================================================
    # Mark one
    # =========================================================================

    async def async_mark_one_read(self, notification_id: NotificationId) -> bool:
        """Mark a single notification read, optimistically.

        Returns:
            False if the id is not in the current list (no-op), True once the
            record is read and confirmed.

        Raises:
            ReconciliationError: The server rejected the change; the local
                flag has been restored.
        """
        store = self.coordinator.store
        resolved_id = self.resolve_id(notification_id)
        if resolved_id is None:
            const.LOGGER.debug(
                "DEBUG: Mark read ignored, notification %s not in list",
                notification_id,
            )
            return False

        command = store.plan_mark_one(resolved_id)
        if command is None:
            return False
        if command.is_noop:
            return True

        store.apply(command)
        self.emit(
            const.SIGNAL_SUFFIX_READ_STATE_CHANGED,
            notification_id=resolved_id,
            read=True,
        )

        try:
            await self.coordinator.api.async_mark_notification_read(resolved_id)
        except NewsPulseApiError as err:
            rolled_back = store.rollback(command)
            const.LOGGER.error(
                "ERROR: Failed to mark notification %s as read: %s (rolled back: %s)",
                resolved_id,
                err,
                rolled_back,
            )
            if rolled_back:
                self.emit(
                    const.SIGNAL_SUFFIX_READ_STATE_CHANGED,
                    notification_id=resolved_id,
                    read=False,
                )
            raise ReconciliationError(
                const.ERROR_MARK_READ_FAILED_FMT.format(resolved_id),
                notification_id=resolved_id,
                rolled_back=rolled_back,
            ) from err

        store.confirm(command)
        return True

    # =========================================================================
    # Mark all
    # =========================================================================

    async def async_mark_all_read(self) -> bool:
        """Mark every notification read, optimistically.

        Returns:
            False if another mark-all is still in flight (request ignored),
            True once the server confirmed.

        Raises:
            ReconciliationError: The server rejected the change; every flag
                this call flipped has been restored.
        """
        if self._mark_all_in_flight:
            const.LOGGER.info(
                "INFO: Mark all read already in progress, ignoring duplicate request"
            )
            return False

        self._mark_all_in_flight = True
        try:
            store = self.coordinator.store
            command = store.plan_mark_all()
            store.apply(command)
            self.emit(
                const.SIGNAL_SUFFIX_READ_STATE_CHANGED,
                notification_id=None,
                read=True,
            )

            try:
                await self.coordinator.api.async_mark_all_notifications_read()
            except NewsPulseApiError as err:
                rolled_back = store.rollback(command)
                const.LOGGER.error(
                    "ERROR: Failed to mark all notifications as read: %s "
                    "(rolled back %s records)",
                    err,
                    len(command.flipped_ids) if rolled_back else 0,
                )
                self.hass.bus.async_fire(
                    const.EVENT_MARK_ALL_READ_FAILED,
                    {
                        const.EVENT_DATA_ENTRY_ID: self.entry_id,
                        const.EVENT_DATA_RESTORED_UNREAD: store.unread_count,
                        const.EVENT_DATA_ERROR: str(err),
                    },
                )
                if rolled_back:
                    self.emit(
                        const.SIGNAL_SUFFIX_READ_STATE_CHANGED,
                        notification_id=None,
                        read=False,
                    )
                raise ReconciliationError(
                    const.ERROR_MARK_ALL_READ_FAILED, rolled_back=rolled_back
                ) from err

            store.confirm(command)
            const.LOGGER.info(
                "INFO: Marked %s notifications as read", len(command.flipped_ids)
            )
            return True
        finally:
            self._mark_all_in_flight = False
