"""Tests for the NewsPulse backend client."""

from __future__ import annotations

import asyncio

import aiohttp
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession
import pytest
from pytest_homeassistant_custom_component.test_util.aiohttp import (
    AiohttpClientMocker,
)

from custom_components.newspulse import const
from custom_components.newspulse.api import NewsPulseApiClient
from custom_components.newspulse.exceptions import NewsPulseApiError, NewsPulseAuthError

from tests.helpers import TEST_API_TOKEN, TEST_URL, sample_records

JSON_HEADERS = {"Content-Type": "application/json"}
API = f"{TEST_URL}/api"


@pytest.fixture
async def client(hass: HomeAssistant) -> NewsPulseApiClient:
    """Return a client bound to the mocked session."""
    return NewsPulseApiClient(async_get_clientsession(hass), f"{TEST_URL}/", TEST_API_TOKEN)


# =============================================================================
# TEST: NOTIFICATIONS
# =============================================================================


class TestNotifications:
    """Test notification endpoints."""

    async def test_fetch(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """The list is returned as sent."""
        aioclient_mock.get(
            f"{API}/notifications", json=sample_records(), headers=JSON_HEADERS
        )

        assert client.base_url == API
        assert await client.async_fetch_notifications() == sample_records()
        assert aioclient_mock.call_count == 1

    async def test_unauthorized_is_empty(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A 401 on the list means no notifications, not an error."""
        aioclient_mock.get(f"{API}/notifications", status=401)
        assert await client.async_fetch_notifications() == []

    async def test_unexpected_payload(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A non-list body is rejected."""
        aioclient_mock.get(
            f"{API}/notifications", json={"items": []}, headers=JSON_HEADERS
        )
        with pytest.raises(NewsPulseApiError):
            await client.async_fetch_notifications()

    async def test_mark_read_non_json_success(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A 2xx without a JSON body reports plain success."""
        aioclient_mock.post(f"{API}/notifications/7/read", text="OK")
        assert await client.async_mark_notification_read(7) is True

    async def test_mark_all_read(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """The bulk endpoint returns the decoded body."""
        aioclient_mock.post(
            f"{API}/notifications/read-all",
            json={"success": True},
            headers=JSON_HEADERS,
        )
        assert await client.async_mark_all_notifications_read() == {"success": True}


# =============================================================================
# TEST: ERROR MAPPING
# =============================================================================


class TestErrors:
    """Test status and transport error mapping."""

    @pytest.mark.parametrize(
        ("status", "message"),
        [
            (403, const.ERROR_API_FORBIDDEN),
            (429, const.ERROR_API_RATE_LIMITED),
            (500, "Request failed with status 500"),
        ],
    )
    async def test_status_errors(
        self,
        client: NewsPulseApiClient,
        aioclient_mock: AiohttpClientMocker,
        status: int,
        message: str,
    ) -> None:
        """Non-2xx responses raise with a readable message and the status."""
        aioclient_mock.post(f"{API}/notifications/1/read", status=status)

        with pytest.raises(NewsPulseApiError) as err_info:
            await client.async_mark_notification_read(1)

        assert err_info.value.status == status
        assert str(err_info.value) == message

    async def test_server_message_preferred(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A JSON error body's message is surfaced."""
        aioclient_mock.put(
            f"{API}/user/settings",
            status=400,
            json={"message": "Invalid settings"},
            headers=JSON_HEADERS,
        )
        with pytest.raises(NewsPulseApiError, match="Invalid settings"):
            await client.async_update_user_settings({})

    async def test_unauthorized_profile(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Outside the list endpoint a 401 is an auth error."""
        aioclient_mock.get(f"{API}/user", status=401)
        with pytest.raises(NewsPulseAuthError):
            await client.async_fetch_user_profile()

    @pytest.mark.parametrize(
        "exc", [aiohttp.ClientError("reset"), asyncio.TimeoutError()]
    )
    async def test_transport_errors(
        self,
        client: NewsPulseApiClient,
        aioclient_mock: AiohttpClientMocker,
        exc: Exception,
    ) -> None:
        """Network failures become NewsPulseApiError without a status."""
        aioclient_mock.get(f"{API}/notifications", exc=exc)
        with pytest.raises(NewsPulseApiError) as err_info:
            await client.async_fetch_notifications()
        assert err_info.value.status is None

    async def test_malformed_json_body(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A JSON content type with an undecodable body is an API error."""
        aioclient_mock.post(
            f"{API}/notifications/1/read", text="<html>oops", headers=JSON_HEADERS
        )
        with pytest.raises(NewsPulseApiError) as err_info:
            await client.async_mark_notification_read(1)
        assert err_info.value.status == 200

    async def test_malformed_json_list(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """A broken list body stays inside the error taxonomy."""
        aioclient_mock.get(f"{API}/notifications", text="{", headers=JSON_HEADERS)
        with pytest.raises(NewsPulseApiError):
            await client.async_fetch_notifications()


class TestSettings:
    """Test profile and settings endpoints."""

    async def test_update_settings(
        self, client: NewsPulseApiClient, aioclient_mock: AiohttpClientMocker
    ) -> None:
        """Settings are sent to the settings endpoint."""
        aioclient_mock.put(
            f"{API}/user/settings", json={"success": True}, headers=JSON_HEADERS
        )
        await client.async_update_user_settings(
            {const.SETTING_ENABLE_PUSH: False}
        )
        assert aioclient_mock.call_count == 1
