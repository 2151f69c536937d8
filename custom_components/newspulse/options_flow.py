# File: options_flow.py
"""Options Flow for the NewsPulse integration.

Edits refresh intervals, badge polling and the notify service. Saving the
options reloads the entry (see the update listener in __init__.py).
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class NewsPulseOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for NewsPulse settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options: dict[str, Any] = {}

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and save the options form."""
        self._entry_options = dict(self.config_entry.options)

        if user_input is not None:
            options = fh.build_options_data(user_input)
            const.LOGGER.debug("DEBUG: Saving NewsPulse options: %s", options)
            return self.async_create_entry(title="", data=options)

        default = {
            const.CONF_NOTIFY_SERVICE: self.config_entry.data.get(
                const.CONF_NOTIFY_SERVICE
            ),
            **self._entry_options,
        }
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_options_schema(default),
        )
