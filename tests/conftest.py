"""Shared fixtures for NewsPulse tests."""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.newspulse import const
from custom_components.newspulse.api import NewsPulseApiClient
from custom_components.newspulse.store import NotificationStore

from tests.helpers import (
    TEST_API_TOKEN,
    TEST_ENTRY_ID,
    TEST_NOTIFY_SERVICE,
    TEST_URL,
    sample_records,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a NewsPulse config entry pointing at a test backend."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title=f"{const.NEWSPULSE_TITLE} (test)",
        entry_id=TEST_ENTRY_ID,
        unique_id=TEST_URL,
        data={
            const.CONF_URL: TEST_URL,
            const.CONF_API_TOKEN: TEST_API_TOKEN,
            const.CONF_NOTIFY_SERVICE: TEST_NOTIFY_SERVICE,
        },
        options={
            const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL,
            const.CONF_BADGE_UPDATE_INTERVAL: const.DEFAULT_BADGE_UPDATE_INTERVAL,
            const.CONF_BADGE_AUTO_UPDATE: True,
        },
    )


@pytest.fixture
def mock_api() -> AsyncMock:
    """Return an API client mock serving the sample notification list."""
    api = AsyncMock(spec=NewsPulseApiClient)
    api.async_fetch_notifications.return_value = sample_records()
    api.async_mark_notification_read.return_value = {"success": True}
    api.async_mark_all_notifications_read.return_value = {"success": True}
    api.async_fetch_user_profile.return_value = {
        const.DATA_PROFILE_SETTINGS: {
            const.DATA_PROFILE_NOTIFICATION_SETTINGS: {
                const.SETTING_ENABLE_PUSH: True,
                const.SETTING_ENABLE_LIKE: False,
            }
        }
    }
    api.async_update_user_settings.return_value = {"success": True}
    return api


@pytest.fixture
def mock_coordinator(hass: HomeAssistant, mock_api: AsyncMock) -> MagicMock:
    """Return a coordinator stand-in with a real store for manager tests."""
    coordinator = MagicMock()
    coordinator.config_entry.entry_id = TEST_ENTRY_ID
    coordinator.config_entry.options = {}
    coordinator.api = mock_api
    coordinator.store = NotificationStore(mock_api)
    coordinator.async_fetch_unread_count = AsyncMock(return_value=3)
    return coordinator


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, mock_api: AsyncMock
) -> AsyncGenerator[MockConfigEntry, None]:
    """Set up the integration with a mocked backend, unloading it afterwards."""
    mock_config_entry.add_to_hass(hass)
    with patch(
        "custom_components.newspulse.NewsPulseApiClient", return_value=mock_api
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    yield mock_config_entry

    if hass.data.get(const.DOMAIN, {}).get(mock_config_entry.entry_id):
        await hass.config_entries.async_unload(mock_config_entry.entry_id)
        await hass.async_block_till_done()
