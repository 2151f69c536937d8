# File: flow_helpers.py
"""Helpers for the NewsPulse integration's Config and Options flow.

Provides schema builders and input validation, keeping the flow handlers
themselves thin:

- build_user_schema(default) -> vol.Schema
- async_validate_connection(hass, user_input) -> errors_dict (empty = ok)
- build_options_schema(default) -> vol.Schema
- build_options_data(user_input) -> options dict with normalized types
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv, selector
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from . import const
from .api import NewsPulseApiClient
from .exceptions import NewsPulseApiError, NewsPulseAuthError


def normalize_url(url: str) -> str:
    """Return the URL used as the entry's unique id."""
    return url.strip().rstrip("/").lower()


def build_user_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build schema for the backend connection step."""
    default = default or {}
    return vol.Schema(
        {
            vol.Required(
                const.CONF_URL, default=default.get(const.CONF_URL, "")
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.URL)
            ),
            vol.Optional(
                const.CONF_API_TOKEN,
                description={"suggested_value": default.get(const.CONF_API_TOKEN)},
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.PASSWORD)
            ),
            vol.Optional(
                const.CONF_NOTIFY_SERVICE,
                description={"suggested_value": default.get(const.CONF_NOTIFY_SERVICE)},
            ): selector.TextSelector(),
        }
    )


async def async_validate_connection(
    hass: HomeAssistant, user_input: dict[str, Any]
) -> dict[str, str]:
    """Check that the backend is reachable with the given credentials.

    With a token the profile endpoint must accept it. Without one the
    notification endpoint only has to answer (guests simply get no
    notifications).

    Returns:
        Errors dict keyed by "base" (or the field), empty when valid.
    """
    errors: dict[str, str] = {}

    try:
        cv.url(user_input[const.CONF_URL])
    except vol.Invalid:
        errors[const.CONF_URL] = const.CFOP_ERROR_INVALID_URL
        return errors

    api = NewsPulseApiClient(
        async_get_clientsession(hass),
        user_input[const.CONF_URL],
        user_input.get(const.CONF_API_TOKEN),
    )
    try:
        if user_input.get(const.CONF_API_TOKEN):
            await api.async_fetch_user_profile()
        else:
            await api.async_fetch_notifications()
    except NewsPulseAuthError:
        errors["base"] = const.CFOP_ERROR_INVALID_AUTH
    except NewsPulseApiError as err:
        const.LOGGER.debug("DEBUG: Connection check failed: %s", err)
        errors["base"] = const.CFOP_ERROR_CANNOT_CONNECT

    return errors


def build_options_schema(default: dict[str, Any] | None = None) -> vol.Schema:
    """Build schema for refresh intervals, badge polling and notify service."""
    default = default or {}
    default_interval = default.get(
        const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
    )
    default_badge_interval = default.get(
        const.CONF_BADGE_UPDATE_INTERVAL, const.DEFAULT_BADGE_UPDATE_INTERVAL
    )
    default_auto_update = default.get(
        const.CONF_BADGE_AUTO_UPDATE, const.DEFAULT_BADGE_AUTO_UPDATE
    )

    return vol.Schema(
        {
            vol.Required(
                const.CONF_UPDATE_INTERVAL, default=default_interval
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=1,
                    step=1,
                )
            ),
            vol.Required(
                const.CONF_BADGE_UPDATE_INTERVAL, default=default_badge_interval
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    mode=selector.NumberSelectorMode.BOX,
                    min=10,
                    step=1,
                )
            ),
            vol.Required(
                const.CONF_BADGE_AUTO_UPDATE, default=default_auto_update
            ): selector.BooleanSelector(),
            vol.Optional(
                const.CONF_NOTIFY_SERVICE,
                description={"suggested_value": default.get(const.CONF_NOTIFY_SERVICE)},
            ): selector.TextSelector(),
        }
    )


def build_options_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Convert selector output (floats, blanks) into stored option values."""
    # A blank notify service is stored so it overrides the one from setup
    return {
        const.CONF_UPDATE_INTERVAL: int(user_input[const.CONF_UPDATE_INTERVAL]),
        const.CONF_BADGE_UPDATE_INTERVAL: int(
            user_input[const.CONF_BADGE_UPDATE_INTERVAL]
        ),
        const.CONF_BADGE_AUTO_UPDATE: bool(user_input[const.CONF_BADGE_AUTO_UPDATE]),
        const.CONF_NOTIFY_SERVICE: (
            user_input.get(const.CONF_NOTIFY_SERVICE) or ""
        ).strip(),
    }
