"""Exceptions raised by the NewsPulse integration.

All errors derive from HomeAssistantError so service handlers and entity
actions surface them to the user without extra wrapping. A denied
notification permission is NOT an exception: the scheduler returns None.
"""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError, ServiceValidationError


class NewsPulseError(HomeAssistantError):
    """Base class for NewsPulse errors."""


class NewsPulseApiError(NewsPulseError):
    """Raised when the remote API call fails (transport or non-2xx status)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        """Initialize the API error.

        Args:
            message: Human readable reason (server message when available)
            status: HTTP status code, None for transport failures
        """
        super().__init__(message)
        self.status = status


class NewsPulseAuthError(NewsPulseApiError):
    """Raised when the remote API rejects the credentials (HTTP 401)."""


class FetchError(NewsPulseError):
    """Raised when the notification list or profile could not be retrieved."""


class ReconciliationError(NewsPulseError):
    """Raised when the server did not confirm a read-state mutation.

    Attributes:
        notification_id: The affected notification, None for mark-all
        rolled_back: Whether the optimistic change was reverted locally
    """

    def __init__(
        self,
        message: str,
        notification_id: object | None = None,
        rolled_back: bool = True,
    ) -> None:
        """Initialize the reconciliation error."""
        super().__init__(message)
        self.notification_id = notification_id
        self.rolled_back = rolled_back


class SchedulingError(NewsPulseError):
    """Raised when the platform fails to schedule a notification after permission."""


class ValidationError(ServiceValidationError, NewsPulseError):
    """Raised when a local notification request is invalid (empty title/body)."""
