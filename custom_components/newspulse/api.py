# File: api.py
"""Client for the NewsPulse backend REST API.

Thin async wrapper around the news backend endpoints the integration consumes:
notification list, read-state mutations, and the user profile/settings.
Transport is aiohttp via Home Assistant's shared client session.

Status handling mirrors the backend contract:
- 401 -> NewsPulseAuthError
- 403, 429 and any other non-2xx -> NewsPulseApiError (server message if JSON)
- Network errors and timeouts -> NewsPulseApiError (status None)
- A JSON content type with an undecodable body -> NewsPulseApiError
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import aiohttp

from . import const
from .exceptions import NewsPulseApiError, NewsPulseAuthError

if TYPE_CHECKING:
    from .type_defs import NotificationId, NotificationSettingsData


class NewsPulseApiClient:
    """Async client for the NewsPulse backend."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        api_token: str | None = None,
        request_timeout: float = const.DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session (owned by Home Assistant)
            url: Backend origin, e.g. "http://localhost:8080"
            api_token: Optional bearer token sent with every request
            request_timeout: Total timeout per request in seconds
        """
        self._session = session
        self._base_url = f"{url.rstrip('/')}{const.API_BASE_PATH}"
        self._api_token = api_token
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)

    @property
    def base_url(self) -> str:
        """Return the API base URL (origin + /api)."""
        return self._base_url

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    async def async_fetch_notifications(self) -> list[dict[str, Any]]:
        """Fetch the current user's notifications in server order.

        An unauthenticated session has no notifications, so a 401 yields an
        empty list instead of an error.
        """
        try:
            result = await self._async_request(
                const.API_METHOD_GET, const.API_ENDPOINT_NOTIFICATIONS
            )
        except NewsPulseAuthError:
            const.LOGGER.debug(
                "DEBUG: Notifications request unauthorized, treating as empty list"
            )
            return []

        if not isinstance(result, list):
            raise NewsPulseApiError(
                f"Unexpected notifications payload type: {type(result).__name__}"
            )
        return result

    async def async_mark_notification_read(
        self, notification_id: NotificationId
    ) -> Any:
        """Confirm a single notification as read on the server."""
        return await self._async_request(
            const.API_METHOD_POST,
            const.API_ENDPOINT_NOTIFICATION_READ.format(notification_id),
        )

    async def async_mark_all_notifications_read(self) -> Any:
        """Confirm every notification of the user as read on the server."""
        return await self._async_request(
            const.API_METHOD_POST, const.API_ENDPOINT_NOTIFICATIONS_READ_ALL
        )

    # -------------------------------------------------------------------------
    # User profile / settings
    # -------------------------------------------------------------------------

    async def async_fetch_user_profile(self) -> dict[str, Any]:
        """Fetch the current user's profile (embeds notification settings)."""
        result = await self._async_request(
            const.API_METHOD_GET, const.API_ENDPOINT_USER
        )
        return result if isinstance(result, dict) else {}

    async def async_update_user_settings(
        self, notification_settings: NotificationSettingsData
    ) -> Any:
        """Persist the notification settings record."""
        return await self._async_request(
            const.API_METHOD_PUT,
            const.API_ENDPOINT_USER_SETTINGS,
            {const.DATA_PROFILE_NOTIFICATION_SETTINGS: dict(notification_settings)},
        )

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _async_request(
        self,
        method: str,
        endpoint: str,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        """Perform a request and decode the response.

        Returns:
            Decoded JSON when the response is JSON, otherwise True.
        """
        url = f"{self._base_url}{endpoint}"
        headers = {"Content-Type": const.API_CONTENT_TYPE_JSON}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"

        try:
            async with self._session.request(
                method,
                url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            ) as response:
                if response.status == 401:
                    raise NewsPulseAuthError(const.ERROR_API_UNAUTHORIZED, 401)
                if response.status == 403:
                    raise NewsPulseApiError(const.ERROR_API_FORBIDDEN, 403)
                if response.status == 429:
                    raise NewsPulseApiError(const.ERROR_API_RATE_LIMITED, 429)
                if response.status >= 400:
                    raise NewsPulseApiError(
                        await self._async_error_message(response), response.status
                    )

                if const.API_CONTENT_TYPE_JSON in response.headers.get(
                    "Content-Type", ""
                ):
                    try:
                        return await response.json()
                    except ValueError as err:
                        const.LOGGER.warning(
                            "WARNING: API %s %s returned malformed JSON: %s",
                            method,
                            endpoint,
                            err,
                        )
                        raise NewsPulseApiError(
                            f"Malformed JSON from {endpoint}", response.status
                        ) from err
                return True

        except asyncio.TimeoutError as err:
            const.LOGGER.warning("WARNING: API %s %s timed out", method, endpoint)
            raise NewsPulseApiError(f"Request to {endpoint} timed out") from err
        except aiohttp.ClientError as err:
            const.LOGGER.warning(
                "WARNING: API error for %s %s: %s", method, endpoint, err
            )
            raise NewsPulseApiError(f"Request to {endpoint} failed: {err}") from err

    @staticmethod
    async def _async_error_message(response: aiohttp.ClientResponse) -> str:
        """Extract the server's error message, falling back to the status."""
        fallback = const.ERROR_API_REQUEST_FAILED_FMT.format(response.status)
        try:
            body = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return fallback
        if isinstance(body, dict) and body.get(const.API_RESPONSE_MESSAGE):
            return str(body[const.API_RESPONSE_MESSAGE])
        return fallback
