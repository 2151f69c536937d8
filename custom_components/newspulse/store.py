# File: store.py
"""In-memory notification store for the NewsPulse integration.

Holds the authoritative local copy of the user's notification list for the
session. Full loads replace the list wholesale; the read-state manager is the
only other writer, through apply/confirm/rollback of ReadStateCommands.

Every change produces a new snapshot and bumps `version`. Every accepted load
bumps `generation`. Loads carry a request token so a slow response to a
superseded fetch cannot overwrite a newer one.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from . import const
from .engines.badge_engine import BadgeEngine
from .engines.read_state_engine import ReadStateCommand, ReadStateEngine
from .exceptions import FetchError, NewsPulseApiError

if TYPE_CHECKING:
    from .api import NewsPulseApiClient
    from .type_defs import NotificationId, NotificationRecord


class NotificationStore:
    """Owns the versioned snapshot of notification records.

    No persistence: the store lives as long as the config entry is loaded.
    """

    def __init__(self, api: NewsPulseApiClient) -> None:
        """Initialize the store.

        Args:
            api: Backend client used by async_load()
        """
        self._api = api
        self._records: tuple[NotificationRecord, ...] = ()
        self._version: int = 0
        self._generation: int = 0
        self._loaded: bool = False
        self._latest_request: int = 0
        # Optimistic reads not yet confirmed, and reads confirmed this generation
        self._pending: dict[NotificationId, int] = {}
        self._confirmed: set[NotificationId] = set()
        self._listeners: list[Callable[[], None]] = []

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Return the snapshot version (bumped on every change)."""
        return self._version

    @property
    def generation(self) -> int:
        """Return the load generation (bumped on every accepted full load)."""
        return self._generation

    @property
    def loaded(self) -> bool:
        """Return True once a full load has completed."""
        return self._loaded

    @property
    def unread_count(self) -> int:
        """Return the number of unread records in the current snapshot."""
        return BadgeEngine.count_unread(self._records)

    def get_all(self) -> list[NotificationRecord]:
        """Return a copy of the current snapshot in server order."""
        return [dict(record) for record in self._records]  # type: ignore[misc]

    def get(self, notification_id: NotificationId) -> NotificationRecord | None:
        """Return a copy of a single record, or None."""
        record = ReadStateEngine.find(self._records, notification_id)
        return dict(record) if record is not None else None  # type: ignore[return-value]

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def async_add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback invoked after every snapshot change.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(update_callback)

        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener

    def _notify_listeners(self) -> None:
        for update_callback in list(self._listeners):
            update_callback()

    # -------------------------------------------------------------------------
    # Full load
    # -------------------------------------------------------------------------

    async def async_load(self) -> list[NotificationRecord]:
        """Replace the whole list with a fresh fetch from the backend.

        Raises:
            FetchError: If the remote call fails. The previous list is kept.

        Returns:
            The current snapshot. When a newer load was issued while this one
            was in flight, the late response is discarded and the snapshot is
            returned unchanged.
        """
        self._latest_request += 1
        request_token = self._latest_request

        try:
            raw_records = await self._api.async_fetch_notifications()
        except NewsPulseApiError as err:
            const.LOGGER.warning("WARNING: Failed to load notifications: %s", err)
            raise FetchError(f"{const.ERROR_FETCH_FAILED}: {err}") from err

        if request_token != self._latest_request:
            const.LOGGER.debug(
                "DEBUG: Discarding stale notification response (token %s, latest %s)",
                request_token,
                self._latest_request,
            )
            return self.get_all()

        records = self.normalize_records(raw_records)

        # A fetch that raced an optimistic read must not resurrect the unread flag
        if self._pending:
            records = [
                {**record, const.DATA_NOTIFICATION_READ: True}  # type: ignore[misc]
                if record[const.DATA_NOTIFICATION_ID] in self._pending
                else record
                for record in records
            ]

        self._records = tuple(records)
        self._generation += 1
        self._confirmed.clear()
        self._loaded = True
        self._bump()

        const.LOGGER.debug(
            "DEBUG: Loaded %s notifications (%s unread), generation %s",
            len(self._records),
            self.unread_count,
            self._generation,
        )
        return self.get_all()

    @staticmethod
    def normalize_records(raw_records: list[Any]) -> list[NotificationRecord]:
        """Validate server records, preserving server order.

        - Non-dict entries and records without an id are dropped
        - Duplicate ids keep their first occurrence
        - A missing or non-boolean `read` flag is coerced to bool
        """
        records: list[NotificationRecord] = []
        seen: set[Any] = set()
        for raw in raw_records:
            if not isinstance(raw, dict) or raw.get(const.DATA_NOTIFICATION_ID) is None:
                const.LOGGER.warning(
                    "WARNING: Dropping malformed notification record: %s", raw
                )
                continue

            notification_id = raw[const.DATA_NOTIFICATION_ID]
            if notification_id in seen:
                const.LOGGER.warning(
                    "WARNING: Dropping duplicate notification id %s", notification_id
                )
                continue
            seen.add(notification_id)

            record = dict(raw)
            record[const.DATA_NOTIFICATION_READ] = bool(
                raw.get(const.DATA_NOTIFICATION_READ, False)
            )
            records.append(record)  # type: ignore[arg-type]
        return records

    # -------------------------------------------------------------------------
    # Read-state commands (used by ReadStateManager only)
    # -------------------------------------------------------------------------

    def plan_mark_one(self, notification_id: NotificationId) -> ReadStateCommand | None:
        """Plan a mark-one command against the current snapshot."""
        return ReadStateEngine.plan_mark_one(
            self._records,
            notification_id,
            self._generation,
            unconfirmed=self.is_pending(notification_id)
            and notification_id not in self._confirmed,
        )

    def plan_mark_all(self) -> ReadStateCommand:
        """Plan a mark-all command against the current snapshot."""
        return ReadStateEngine.plan_mark_all(self._records, self._generation)

    def is_pending(self, notification_id: NotificationId) -> bool:
        """Return True if a read of this id still awaits server confirmation."""
        return notification_id in self._pending

    def apply(self, command: ReadStateCommand) -> None:
        """Apply an optimistic command and notify listeners."""
        for notification_id in self._tracked_ids(command):
            self._pending[notification_id] = self._pending.get(notification_id, 0) + 1
        if command.is_noop:
            return
        self._records = tuple(ReadStateEngine.apply(self._records, command))
        self._bump()

    def confirm(self, command: ReadStateCommand) -> None:
        """Record that the server confirmed the command."""
        self._release_pending(command)
        if command.generation == self._generation:
            self._confirmed.update(self._tracked_ids(command))

    def rollback(self, command: ReadStateCommand) -> bool:
        """Revert a failed command.

        Only the flags the command flipped are restored, never those another
        command confirmed in the meantime. Nothing is reverted when a newer
        full load has replaced the snapshot the command was applied to.

        Returns:
            True if the snapshot changed.
        """
        self._release_pending(command)
        if command.is_noop:
            return False
        if command.generation != self._generation:
            const.LOGGER.debug(
                "DEBUG: Skipping rollback, snapshot reloaded since command (gen %s -> %s)",
                command.generation,
                self._generation,
            )
            return False

        protected = self._confirmed.union(self._pending)
        self._records = tuple(
            ReadStateEngine.revert(self._records, command, protected)
        )
        self._bump()
        return True

    @staticmethod
    def _tracked_ids(command: ReadStateCommand) -> set[NotificationId]:
        """Ids a command vouches for: those it flipped plus its target."""
        tracked = set(command.flipped_ids)
        if command.target_id is not None:
            tracked.add(command.target_id)
        return tracked

    def _release_pending(self, command: ReadStateCommand) -> None:
        for notification_id in self._tracked_ids(command):
            remaining = self._pending.get(notification_id, 0) - 1
            if remaining > 0:
                self._pending[notification_id] = remaining
            else:
                self._pending.pop(notification_id, None)

    def _bump(self) -> None:
        self._version += 1
        self._notify_listeners()
