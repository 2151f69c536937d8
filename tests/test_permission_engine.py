"""Tests for PermissionEngine - notification permission state machine."""

from __future__ import annotations

import pytest

from custom_components.newspulse.engines.permission_engine import (
    PermissionEngine,
    PermissionState,
)


class TestTransitions:
    """Test request transitions."""

    @pytest.mark.parametrize(
        ("current", "reported", "expected"),
        [
            (PermissionState.UNDETERMINED, "granted", PermissionState.GRANTED),
            (PermissionState.UNDETERMINED, "denied", PermissionState.DENIED),
            (PermissionState.DENIED, "granted", PermissionState.GRANTED),
            (PermissionState.DENIED, "denied", PermissionState.DENIED),
        ],
    )
    def test_request_outcomes(
        self, current: PermissionState, reported: str, expected: PermissionState
    ) -> None:
        """A request resolves to whatever the platform grants."""
        assert PermissionEngine.transition(current, reported) is expected

    def test_granted_is_sticky(self) -> None:
        """Once granted, later reports cannot revoke it for the session."""
        assert (
            PermissionEngine.transition(PermissionState.GRANTED, "denied")
            is PermissionState.GRANTED
        )
        assert (
            PermissionEngine.observe(PermissionState.GRANTED, "undetermined")
            is PermissionState.GRANTED
        )

    def test_request_never_yields_undetermined(self) -> None:
        """An unanswered request counts as denied."""
        assert (
            PermissionEngine.transition(PermissionState.UNDETERMINED, "undetermined")
            is PermissionState.DENIED
        )

    def test_observe_keeps_undetermined(self) -> None:
        """A passive read before any request stays undetermined."""
        assert (
            PermissionEngine.observe(PermissionState.UNDETERMINED, "undetermined")
            is PermissionState.UNDETERMINED
        )

    def test_unknown_state_rejected(self) -> None:
        """Platform reports outside the enum are a programming error."""
        with pytest.raises(ValueError):
            PermissionEngine.transition(PermissionState.DENIED, "maybe")


class TestGates:
    """Test scheduling gates."""

    def test_needs_request(self) -> None:
        """Only a granted state skips the request."""
        assert PermissionEngine.needs_request(PermissionState.UNDETERMINED)
        assert PermissionEngine.needs_request(PermissionState.DENIED)
        assert not PermissionEngine.needs_request(PermissionState.GRANTED)

    def test_can_schedule(self) -> None:
        """Scheduling requires granted."""
        assert PermissionEngine.can_schedule(PermissionState.GRANTED)
        assert not PermissionEngine.can_schedule(PermissionState.DENIED)
