"""
Test configuration and fixtures for notification tests.

This module provides:
- A fixed "now" used for mute expiry checks
- Override fixtures (permanent, still active, expired)
- A stored settings document in the camelCase shape

Usage:
    def test_example(settings_record, now):
        level = resolve_notification_level(settings_record, context, now)
"""

from datetime import datetime, timezone

import pytest

from notifications.constants import NotificationLevel
from notifications.tests.factories import (
    NotificationOverrideFactory,
    NotificationSettingsFactory,
)


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def now():
    """Fixed current time, 2024-06-01 12:00 UTC."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def future_timestamp():
    """An expiry one hour after `now`."""
    return "2024-06-01T13:00:00.000Z"


@pytest.fixture
def past_timestamp():
    """An expiry one hour before `now`."""
    return "2024-06-01T11:00:00.000Z"


# =============================================================================
# Override Fixtures
# =============================================================================


@pytest.fixture
def permanent_mute():
    """A mute with no expiry."""
    return NotificationOverrideFactory(level=NotificationLevel.NOTHING.value)


@pytest.fixture
def active_mute(future_timestamp):
    """A mute that has not expired yet."""
    return NotificationOverrideFactory(
        level=NotificationLevel.NOTHING.value, muted_until=future_timestamp
    )


@pytest.fixture
def expired_mute(past_timestamp):
    """A mute that has already expired."""
    return NotificationOverrideFactory(
        level=NotificationLevel.NOTHING.value, muted_until=past_timestamp
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings_record():
    """Default settings for the recipient."""
    return NotificationSettingsFactory(user_id="user-recipient")


@pytest.fixture
def settings_document():
    """A stored settings document with JSON-encoded override maps."""
    return {
        "$id": "settings-1",
        "userId": "user-recipient",
        "globalNotifications": "mentions",
        "desktopNotifications": True,
        "pushNotifications": False,
        "notificationSound": True,
        "quietHoursStart": "22:00",
        "quietHoursEnd": "08:00",
        "quietHoursTimezone": "America/New_York",
        "serverOverrides": '{"server-1": {"level": "nothing"}}',
        "channelOverrides": (
            '{"channel-1": {"level": "all", "mutedUntil": "2024-06-01T13:00:00.000Z"}}'
        ),
        "conversationOverrides": "{}",
    }
