"""Type definitions for NewsPulse data structures.

TypedDicts describe the backend JSON shapes that flow through the store and
entities. Keys mirror the remote API (camelCase) so records can be passed
through untouched for downstream navigation.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator, to avoid circular dependencies.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of server payloads
happens in store.py (normalization) and settings.py (voluptuous schema).
"""

from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

NotificationId = int | str  # Opaque, stable across fetches
Category = str  # One of const.NOTIFICATION_CATEGORIES (or const.CATEGORY_ALL)
FilterSelection = tuple[str, ...]
ScheduleId = str  # Opaque identifier returned by the notification platform
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Notification Records
# =============================================================================


class NotificationRecord(TypedDict):
    """A single notification as returned by GET /api/notifications.

    Only `id`, `type` and `read` are interpreted by the integration. The
    reference and action fields are opaque pointers passed through to
    consumers (dashboards, automations).
    """

    id: NotificationId
    type: Category
    read: bool
    title: NotRequired[str]
    message: NotRequired[str]
    referenceId: NotRequired[Any]
    referenceType: NotRequired[str]
    action: NotRequired[Any]
    actionType: NotRequired[str]
    createdAt: NotRequired[ISODatetime]


# =============================================================================
# Local Notifications
# =============================================================================


class LocalNotificationContent(TypedDict):
    """Content handed to the notification platform for a one-shot delivery."""

    title: str
    body: str
    data: dict[str, Any]


# =============================================================================
# Remote Settings
# =============================================================================


class NotificationSettingsData(TypedDict, total=False):
    """Backend representation of the notification settings record."""

    enablePushNotifications: bool
    enableNewsNotifications: bool
    enableLikeNotifications: bool
    enableCommentNotifications: bool
    enableMentionNotifications: bool
    enableStreamNotifications: bool
