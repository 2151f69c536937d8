# File: settings.py
"""Notification settings record for the NewsPulse integration.

The backend stores notification preferences inside the user profile as a
free-form object. This module pins it to a fixed schema: six independent
booleans, validated with voluptuous on the way in and serialized back with the
exact backend keys on the way out.
"""

from __future__ import annotations

from collections.abc import Mapping
import dataclasses
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from . import const
from .type_defs import NotificationSettingsData

# Dataclass field -> backend key
SETTINGS_FIELD_TO_API: dict[str, str] = {
    const.FIELD_ENABLE_PUSH: const.SETTING_ENABLE_PUSH,
    const.FIELD_ENABLE_NEWS: const.SETTING_ENABLE_NEWS,
    const.FIELD_ENABLE_LIKE: const.SETTING_ENABLE_LIKE,
    const.FIELD_ENABLE_COMMENT: const.SETTING_ENABLE_COMMENT,
    const.FIELD_ENABLE_MENTION: const.SETTING_ENABLE_MENTION,
    const.FIELD_ENABLE_STREAM: const.SETTING_ENABLE_STREAM,
}

NOTIFICATION_SETTINGS_SCHEMA = vol.Schema(
    {vol.Optional(api_key): bool for api_key in SETTINGS_FIELD_TO_API.values()},
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class NotificationSettings:
    """Per-user notification preferences, each independently toggleable."""

    enable_push: bool = True
    enable_news: bool = True
    enable_like: bool = True
    enable_comment: bool = True
    enable_mention: bool = True
    enable_stream: bool = True

    @classmethod
    def from_api(cls, data: Mapping[str, Any] | None) -> NotificationSettings:
        """Build settings from the backend `notificationSettings` object.

        Missing keys take their defaults and unknown keys are dropped.

        Raises:
            vol.Invalid: If a known key carries a non-boolean value
        """
        if not data:
            return cls()

        validated = NOTIFICATION_SETTINGS_SCHEMA(dict(data))
        return cls(
            **{
                field: validated[api_key]
                for field, api_key in SETTINGS_FIELD_TO_API.items()
                if api_key in validated
            }
        )

    @classmethod
    def from_profile(cls, profile: Mapping[str, Any] | None) -> NotificationSettings:
        """Extract settings from a GET /api/user profile payload."""
        profile_settings = (profile or {}).get(const.DATA_PROFILE_SETTINGS) or {}
        return cls.from_api(
            profile_settings.get(const.DATA_PROFILE_NOTIFICATION_SETTINGS)
        )

    def as_api_dict(self) -> NotificationSettingsData:
        """Serialize with the backend keys."""
        return NotificationSettingsData(
            **{
                api_key: getattr(self, field)
                for field, api_key in SETTINGS_FIELD_TO_API.items()
            }
        )

    def as_dict(self) -> dict[str, bool]:
        """Serialize with the integration's snake_case field names."""
        return dataclasses.asdict(self)

    def replace(self, **changes: bool) -> NotificationSettings:
        """Return a copy with the given toggles changed.

        Raises:
            TypeError: If a change names an unknown setting
        """
        return dataclasses.replace(self, **changes)
