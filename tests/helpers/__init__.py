"""Test helpers for NewsPulse integration tests.

    from tests.helpers import make_record, sample_records, TEST_URL
"""

from __future__ import annotations

from typing import Any

from custom_components.newspulse import const

TEST_ENTRY_ID = "abcdef1234567890"
TEST_URL = "http://newspulse.local:8080"
TEST_API_TOKEN = "secret-token"
TEST_NOTIFY_SERVICE = "notify.mobile_app_test_phone"


def make_record(
    notification_id: int | str,
    notification_type: str = const.CATEGORY_NEWS,
    read: bool = False,
    **extra: Any,
) -> dict[str, Any]:
    """Build a notification record as the backend returns it."""
    return {
        const.DATA_NOTIFICATION_ID: notification_id,
        const.DATA_NOTIFICATION_TYPE: notification_type,
        const.DATA_NOTIFICATION_TITLE: f"Notification {notification_id}",
        const.DATA_NOTIFICATION_MESSAGE: f"Message {notification_id}",
        const.DATA_NOTIFICATION_READ: read,
        **extra,
    }


def sample_records() -> list[dict[str, Any]]:
    """Return five records: three unread across categories, two read."""
    return [
        make_record(1, const.CATEGORY_NEWS),
        make_record(2, const.CATEGORY_COMMENT),
        make_record(3, const.CATEGORY_NEWS, read=True),
        make_record(4, const.CATEGORY_LIKE),
        make_record(
            5,
            const.CATEGORY_PROFILE,
            read=True,
            **{const.DATA_NOTIFICATION_ACTION_TYPE: const.ACTION_TYPE_FOLLOW},
        ),
    ]


def read_flags(records: list[dict[str, Any]]) -> dict[Any, bool]:
    """Map id -> read flag for compact assertions."""
    return {
        record[const.DATA_NOTIFICATION_ID]: record[const.DATA_NOTIFICATION_READ]
        for record in records
    }
