"""Tests for BadgeManager polling, external counts and pulse events."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import MagicMock

from freezegun.api import FrozenDateTimeFactory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.dispatcher import async_dispatcher_connect
import pytest
from pytest_homeassistant_custom_component.common import (
    async_capture_events,
    async_fire_time_changed,
)

from custom_components.newspulse import const
from custom_components.newspulse.exceptions import NewsPulseApiError
from custom_components.newspulse.helpers.entity_helpers import get_event_signal
from custom_components.newspulse.managers import BadgeManager

from tests.helpers import TEST_ENTRY_ID


@pytest.fixture
async def manager(
    hass: HomeAssistant, mock_coordinator: MagicMock
) -> AsyncGenerator[BadgeManager, None]:
    """Return a badge manager that has started polling."""
    manager = BadgeManager(hass, mock_coordinator)
    await manager.async_setup()
    yield manager
    await manager.async_shutdown()


async def _tick(hass: HomeAssistant, freezer: FrozenDateTimeFactory, manager: BadgeManager) -> None:
    freezer.tick(manager.interval)
    async_fire_time_changed(hass)
    await hass.async_block_till_done()


# =============================================================================
# TEST: POLLING
# =============================================================================


class TestPolling:
    """Test the polling driver."""

    async def test_setup_fetches_immediately(
        self, manager: BadgeManager, mock_coordinator: MagicMock
    ) -> None:
        """Entering polling fetches once without waiting for the interval."""
        assert manager.state == const.BADGE_STATE_POLLING
        assert manager.count == 3
        assert manager.display == "3"
        assert mock_coordinator.async_fetch_unread_count.await_count == 1

    async def test_interval_polls(
        self,
        hass: HomeAssistant,
        freezer: FrozenDateTimeFactory,
        manager: BadgeManager,
        mock_coordinator: MagicMock,
    ) -> None:
        """Each interval tick fetches the count again."""
        mock_coordinator.async_fetch_unread_count.return_value = 150
        await _tick(hass, freezer, manager)

        assert mock_coordinator.async_fetch_unread_count.await_count == 2
        assert manager.count == 150
        assert manager.display == "99+"

    async def test_failure_keeps_count(
        self,
        hass: HomeAssistant,
        freezer: FrozenDateTimeFactory,
        manager: BadgeManager,
        mock_coordinator: MagicMock,
    ) -> None:
        """A failed fetch leaves the last count displayed and keeps polling."""
        mock_coordinator.async_fetch_unread_count.side_effect = NewsPulseApiError(
            "offline"
        )
        await _tick(hass, freezer, manager)

        assert manager.count == 3
        assert manager.state == const.BADGE_STATE_POLLING

    async def test_disabled_auto_update_stays_idle(
        self, hass: HomeAssistant, mock_coordinator: MagicMock
    ) -> None:
        """With auto-update off nothing is fetched."""
        mock_coordinator.config_entry.options = {const.CONF_BADGE_AUTO_UPDATE: False}
        manager = BadgeManager(hass, mock_coordinator)
        await manager.async_setup()

        assert manager.state == const.BADGE_STATE_IDLE
        assert manager.count == 0
        assert not manager.visible
        mock_coordinator.async_fetch_unread_count.assert_not_awaited()
        await manager.async_shutdown()

    async def test_toggle_auto_update(
        self, manager: BadgeManager, mock_coordinator: MagicMock
    ) -> None:
        """Turning auto-update off stops polling, on restarts it."""
        await manager.async_set_auto_update(False)
        assert manager.state == const.BADGE_STATE_IDLE

        await manager.async_set_auto_update(True)
        assert manager.state == const.BADGE_STATE_POLLING
        assert mock_coordinator.async_fetch_unread_count.await_count == 2

    async def test_shutdown_cancels_timer(
        self,
        hass: HomeAssistant,
        freezer: FrozenDateTimeFactory,
        manager: BadgeManager,
        mock_coordinator: MagicMock,
    ) -> None:
        """No fetch happens after shutdown."""
        await manager.async_shutdown()
        await _tick(hass, freezer, manager)

        assert manager.state == const.BADGE_STATE_IDLE
        assert mock_coordinator.async_fetch_unread_count.await_count == 1


# =============================================================================
# TEST: EXTERNAL COUNT
# =============================================================================


class TestExternalCount:
    """Test externally supplied counts."""

    async def test_external_count_stops_polling(
        self,
        hass: HomeAssistant,
        freezer: FrozenDateTimeFactory,
        manager: BadgeManager,
        mock_coordinator: MagicMock,
    ) -> None:
        """An external count is shown and the timer stops."""
        await manager.async_set_external_count(12)
        await _tick(hass, freezer, manager)

        assert manager.state == const.BADGE_STATE_IDLE
        assert manager.count == 12
        assert manager.external_count == 12
        assert mock_coordinator.async_fetch_unread_count.await_count == 1

    async def test_clearing_external_count_resumes_polling(
        self, manager: BadgeManager, mock_coordinator: MagicMock
    ) -> None:
        """Passing None returns to polling with an immediate fetch."""
        await manager.async_set_external_count(12)
        await manager.async_set_external_count(None)

        assert manager.state == const.BADGE_STATE_POLLING
        assert manager.external_count is None
        assert manager.count == 3

    async def test_negative_external_count_hides_badge(
        self, manager: BadgeManager
    ) -> None:
        """Negative counts clamp to zero."""
        await manager.async_set_external_count(-5)
        assert manager.count == 0
        assert manager.display is None

    async def test_in_flight_fetch_discarded_after_stop(
        self, hass: HomeAssistant, manager: BadgeManager, mock_coordinator: MagicMock
    ) -> None:
        """A fetch resolving after an external count arrives is ignored."""

        async def _fetch_then_override() -> int:
            await manager.async_set_external_count(7)
            return 42

        mock_coordinator.async_fetch_unread_count.side_effect = _fetch_then_override
        await manager.async_set_external_count(None)

        assert manager.count == 7


# =============================================================================
# TEST: PULSE AND SIGNALS
# =============================================================================


class TestPulse:
    """Test emphasis events and badge signals."""

    async def test_first_poll_pulses_from_zero(
        self, hass: HomeAssistant, mock_coordinator: MagicMock
    ) -> None:
        """The badge starts at 0, so a first poll of 5 pulses once."""
        mock_coordinator.async_fetch_unread_count.return_value = 5
        events = async_capture_events(hass, const.EVENT_BADGE_PULSE)
        manager = BadgeManager(hass, mock_coordinator)
        await manager.async_setup()
        await hass.async_block_till_done()

        assert len(events) == 1
        assert events[0].data[const.EVENT_DATA_COUNT] == 5
        assert events[0].data[const.EVENT_DATA_PREVIOUS] == 0
        await manager.async_shutdown()

    async def test_first_poll_of_zero_does_not_pulse(
        self, hass: HomeAssistant, mock_coordinator: MagicMock
    ) -> None:
        """Nothing unread on start-up stays quiet."""
        mock_coordinator.async_fetch_unread_count.return_value = 0
        events = async_capture_events(hass, const.EVENT_BADGE_PULSE)
        manager = BadgeManager(hass, mock_coordinator)
        await manager.async_setup()
        await hass.async_block_till_done()

        assert events == []
        await manager.async_shutdown()

    async def test_initial_external_count_does_not_pulse(
        self, hass: HomeAssistant, mock_coordinator: MagicMock
    ) -> None:
        """An external count supplied before any poll is the initial value."""
        mock_coordinator.config_entry.options = {const.CONF_BADGE_AUTO_UPDATE: False}
        events = async_capture_events(hass, const.EVENT_BADGE_PULSE)
        manager = BadgeManager(hass, mock_coordinator)
        await manager.async_setup()

        await manager.async_set_external_count(8)
        await hass.async_block_till_done()
        assert events == []

        await manager.async_set_external_count(9)
        await hass.async_block_till_done()
        assert len(events) == 1
        await manager.async_shutdown()

    async def test_pulse_once_per_change(
        self,
        hass: HomeAssistant,
        freezer: FrozenDateTimeFactory,
        manager: BadgeManager,
        mock_coordinator: MagicMock,
    ) -> None:
        """3 -> 5 pulses once, 5 -> 5 does not, 5 -> 0 does not."""
        events = async_capture_events(hass, const.EVENT_BADGE_PULSE)

        mock_coordinator.async_fetch_unread_count.return_value = 5
        await _tick(hass, freezer, manager)
        await _tick(hass, freezer, manager)
        mock_coordinator.async_fetch_unread_count.return_value = 0
        await _tick(hass, freezer, manager)

        assert len(events) == 1
        assert events[0].data == {
            const.EVENT_DATA_ENTRY_ID: TEST_ENTRY_ID,
            const.EVENT_DATA_COUNT: 5,
            const.EVENT_DATA_PREVIOUS: 3,
        }
        assert not manager.visible

    async def test_badge_signal_payload(
        self, hass: HomeAssistant, manager: BadgeManager
    ) -> None:
        """Entities receive count, display, visibility and driver state."""
        payloads: list[dict[str, Any]] = []
        unsub = async_dispatcher_connect(
            hass,
            get_event_signal(TEST_ENTRY_ID, const.SIGNAL_SUFFIX_BADGE_UPDATED),
            payloads.append,
        )

        await manager.async_set_external_count(120)
        await hass.async_block_till_done()
        unsub()

        assert payloads[-1] == {
            "count": 120,
            "display": "99+",
            "visible": True,
            "state": const.BADGE_STATE_IDLE,
            "previous": 3,
        }
