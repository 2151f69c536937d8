# File: config_flow.py
"""Config flow for the NewsPulse integration.

A single `user` step collects the backend URL, an optional API token and an
optional notify service for local notifications. The connection is checked
before the entry is created; the normalized URL is the unique id.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import NewsPulseOptionsFlowHandler


class NewsPulseConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for NewsPulse."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Collect and validate the backend connection."""
        errors: dict[str, str] = {}

        if user_input is not None:
            user_input = {key: value for key, value in user_input.items() if value}
            user_input[const.CONF_URL] = user_input.get(const.CONF_URL, "").strip()

            await self.async_set_unique_id(fh.normalize_url(user_input[const.CONF_URL]))
            self._abort_if_unique_id_configured()

            errors = await fh.async_validate_connection(self.hass, user_input)
            if not errors:
                const.LOGGER.info(
                    "INFO: Creating NewsPulse entry for %s", user_input[const.CONF_URL]
                )
                return self.async_create_entry(
                    title=f"{const.NEWSPULSE_TITLE} ({fh.normalize_url(user_input[const.CONF_URL])})",
                    data=user_input,
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_user_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return NewsPulseOptionsFlowHandler(config_entry)
