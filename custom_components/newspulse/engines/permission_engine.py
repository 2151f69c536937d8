"""Permission Engine - Notification permission state machine.

States:
    undetermined --request--> granted | denied
    denied       --request--> granted | denied
    granted      (sticky for the session)

ARCHITECTURE: Pure logic engine with NO Home Assistant dependencies. The
platform reports states; this engine decides what the scheduler believes.
"""

from __future__ import annotations

from enum import StrEnum

from .. import const


class PermissionState(StrEnum):
    """Platform-reported notification permission."""

    UNDETERMINED = const.PERMISSION_UNDETERMINED
    GRANTED = const.PERMISSION_GRANTED
    DENIED = const.PERMISSION_DENIED


class PermissionEngine:
    """Transition rules for the notification permission state machine."""

    @staticmethod
    def needs_request(state: PermissionState) -> bool:
        """Return True if the platform must be asked before scheduling."""
        return state is not PermissionState.GRANTED

    @staticmethod
    def can_schedule(state: PermissionState) -> bool:
        """Return True if a local notification may be scheduled."""
        return state is PermissionState.GRANTED

    @staticmethod
    def transition(
        current: PermissionState, reported: PermissionState | str
    ) -> PermissionState:
        """Apply a platform report to the current state.

        A granted verdict is sticky: once observed, later reports cannot move
        the session back to denied or undetermined. A request never yields
        undetermined; an undetermined report after a request counts as denied.

        Args:
            current: State the scheduler currently holds
            reported: State returned by the platform request

        Returns:
            The new state
        """
        if current is PermissionState.GRANTED:
            return PermissionState.GRANTED

        reported = PermissionState(reported)
        if reported is PermissionState.UNDETERMINED:
            return PermissionState.DENIED
        return reported

    @staticmethod
    def observe(
        current: PermissionState, reported: PermissionState | str
    ) -> PermissionState:
        """Apply a passive platform read (no request issued).

        Unlike transition(), an undetermined report keeps its meaning here:
        nothing has been asked yet.
        """
        if current is PermissionState.GRANTED:
            return PermissionState.GRANTED
        return PermissionState(reported)
