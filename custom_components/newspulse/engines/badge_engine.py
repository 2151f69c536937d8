"""Badge Engine - Pure logic for the unread notification badge.

Provides stateless helpers for:
- Counting unread records (O(n) fallback when no summary endpoint exists)
- Shaping the count for display ("99+" clamp, hidden at zero)
- Deciding when the emphasis pulse fires

ARCHITECTURE: Pure logic engine with NO Home Assistant dependencies.
State (current count, polling handle) belongs in BadgeManager.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from ..type_defs import NotificationRecord


class BadgeEngine:
    """Pure logic engine for unread badge calculations."""

    @staticmethod
    def count_unread(records: Iterable[NotificationRecord]) -> int:
        """Count records whose `read` flag is False."""
        return sum(
            1
            for record in records
            if record.get(const.DATA_NOTIFICATION_READ, False) is False
        )

    @staticmethod
    def is_visible(count: int) -> bool:
        """Return True if the badge should be shown at all."""
        return count > const.DEFAULT_ZERO

    @staticmethod
    def format_display(count: int) -> str | None:
        """Return the badge text for a count.

        Counts above 99 collapse to "99+". Counts at or below zero return None,
        meaning the badge is not rendered.
        """
        if not BadgeEngine.is_visible(count):
            return None
        if count > const.BADGE_DISPLAY_MAX:
            return const.BADGE_OVERFLOW_DISPLAY
        return str(count)

    @staticmethod
    def should_pulse(previous: int | None, new: int) -> bool:
        """Return True if a count change should trigger the emphasis effect.

        The pulse fires once per change to a positive count. A value with no
        predecessor (previous is None) is an initial value and never pulses.
        """
        if previous is None:
            return False
        return new != previous and new > const.DEFAULT_ZERO

    @staticmethod
    def sanitize_count(count: int | None) -> int:
        """Clamp a server-provided or external count to a non-negative int."""
        if count is None:
            return const.DEFAULT_ZERO
        return max(int(count), const.DEFAULT_ZERO)
