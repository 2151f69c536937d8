"""Read-State Engine - Pure logic for optimistic read-state commands.

Mark-one and mark-all are modelled as commands. Planning a command records
exactly which records it flips from unread to read; applying it produces a new
snapshot; reverting it restores only those flags. The manager owns the async
confirmation and decides when to revert.

ARCHITECTURE: Pure logic engine with NO Home Assistant dependencies.
Functions never mutate their inputs.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import NotificationId, NotificationRecord


class ReadStateAction(StrEnum):
    """Kind of read-state command."""

    MARK_ONE = "mark_one"
    MARK_ALL = "mark_all"


@dataclass(frozen=True)
class ReadStateCommand:
    """An optimistic read-state mutation awaiting server confirmation.

    Attributes:
        action: MARK_ONE or MARK_ALL
        target_id: Notification id for MARK_ONE, None for MARK_ALL
        flipped_ids: Ids this command changed from unread to read
        generation: Store load generation the command was planned against
    """

    action: ReadStateAction
    target_id: NotificationId | None
    flipped_ids: frozenset[NotificationId]
    generation: int

    @property
    def is_noop(self) -> bool:
        """Return True if applying the command changes nothing locally."""
        return not self.flipped_ids


class ReadStateEngine:
    """Pure logic engine for planning, applying and reverting read commands."""

    @staticmethod
    def find(
        records: Sequence[NotificationRecord], notification_id: NotificationId
    ) -> NotificationRecord | None:
        """Return the record with the given id, or None."""
        for record in records:
            if record[const.DATA_NOTIFICATION_ID] == notification_id:
                return record
        return None

    @staticmethod
    def plan_mark_one(
        records: Sequence[NotificationRecord],
        notification_id: NotificationId,
        generation: int,
        unconfirmed: bool = False,
    ) -> ReadStateCommand | None:
        """Plan marking a single notification read.

        Args:
            records: Current snapshot
            notification_id: Record to mark
            generation: Store load generation
            unconfirmed: The record reads True only because another command
                is still awaiting the server; the new command then owns the
                flag too, so its own failure can restore it

        Returns:
            None if the id is not in the records (the list may have been
            refreshed underneath the caller); otherwise a command whose
            flipped_ids is empty when the record is already read and settled.
        """
        record = ReadStateEngine.find(records, notification_id)
        if record is None:
            return None

        flipped: frozenset[NotificationId] = frozenset()
        if unconfirmed or not record[const.DATA_NOTIFICATION_READ]:
            flipped = frozenset({notification_id})

        return ReadStateCommand(
            action=ReadStateAction.MARK_ONE,
            target_id=notification_id,
            flipped_ids=flipped,
            generation=generation,
        )

    @staticmethod
    def plan_mark_all(
        records: Sequence[NotificationRecord], generation: int
    ) -> ReadStateCommand:
        """Plan marking every notification read."""
        return ReadStateCommand(
            action=ReadStateAction.MARK_ALL,
            target_id=None,
            flipped_ids=frozenset(
                record[const.DATA_NOTIFICATION_ID]
                for record in records
                if not record[const.DATA_NOTIFICATION_READ]
            ),
            generation=generation,
        )

    @staticmethod
    def apply(
        records: Sequence[NotificationRecord], command: ReadStateCommand
    ) -> list[NotificationRecord]:
        """Return a new record list with the command's flags set to read."""
        return ReadStateEngine._with_read_flag(records, command.flipped_ids, True)

    @staticmethod
    def revert(
        records: Sequence[NotificationRecord],
        command: ReadStateCommand,
        protected_ids: Collection[NotificationId] = (),
    ) -> list[NotificationRecord]:
        """Return a new record list with the command's flags restored to unread.

        Args:
            records: Current snapshot (may differ from the one the command
                was applied to)
            command: The failed command
            protected_ids: Ids another command has since confirmed as read;
                these keep read=True

        Returns:
            New list; records the command did not flip are untouched.
        """
        restore = command.flipped_ids.difference(protected_ids)
        return ReadStateEngine._with_read_flag(records, restore, False)

    @staticmethod
    def _with_read_flag(
        records: Sequence[NotificationRecord],
        ids: Collection[NotificationId],
        read: bool,
    ) -> list[NotificationRecord]:
        """Copy records, setting `read` on those whose id is in ids."""
        updated: list[NotificationRecord] = []
        for record in records:
            if record[const.DATA_NOTIFICATION_ID] in ids:
                new_record = dict(record)
                new_record[const.DATA_NOTIFICATION_READ] = read
                updated.append(new_record)  # type: ignore[arg-type]
            else:
                updated.append(record)
        return updated
