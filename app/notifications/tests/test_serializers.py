"""
Tests for notification request serializers.

Tests cover:
- NotificationOverrideSerializer level and mutedUntil validation
- NotificationSettingsUpdateSerializer partial updates and quiet hours rules
- MuteRequestSerializer durations and default level

Usage:
    pytest app/notifications/tests/test_serializers.py -v
"""

from notifications.serializers import (
    MuteRequestSerializer,
    NotificationOverrideSerializer,
    NotificationSettingsUpdateSerializer,
)
from notifications.types import NotificationOverride


# =============================================================================
# NotificationOverrideSerializer Tests
# =============================================================================


class TestNotificationOverrideSerializer:
    """Tests for NotificationOverrideSerializer."""

    def test_valid_with_expiry(self):
        """A level with a timestamp is accepted."""
        serializer = NotificationOverrideSerializer(
            data={"level": "mentions", "mutedUntil": "2024-06-01T13:00:00.000Z"}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.save() == NotificationOverride(
            level="mentions", muted_until="2024-06-01T13:00:00.000Z"
        )

    def test_expiry_optional(self):
        """mutedUntil may be omitted."""
        serializer = NotificationOverrideSerializer(data={"level": "nothing"})

        assert serializer.is_valid(), serializer.errors
        assert serializer.save().muted_until is None

    def test_rejects_unknown_level(self):
        """Levels are a closed set."""
        serializer = NotificationOverrideSerializer(data={"level": "loud"})

        assert not serializer.is_valid()
        assert "level" in serializer.errors

    def test_rejects_bad_timestamp(self):
        """mutedUntil must parse."""
        serializer = NotificationOverrideSerializer(
            data={"level": "nothing", "mutedUntil": "tomorrow"}
        )

        assert not serializer.is_valid()
        assert "mutedUntil" in serializer.errors


# =============================================================================
# NotificationSettingsUpdateSerializer Tests
# =============================================================================


class TestNotificationSettingsUpdateSerializer:
    """Tests for NotificationSettingsUpdateSerializer."""

    def test_partial_update(self):
        """Only provided fields appear in validated_data."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"globalNotifications": "mentions", "pushNotifications": False}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {
            "global_notifications": "mentions",
            "push_notifications": False,
        }

    def test_quiet_hours_pair(self):
        """Start and end together are accepted."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursStart": "22:00", "quietHoursEnd": "08:00"}
        )

        assert serializer.is_valid(), serializer.errors

    def test_quiet_hours_cleared_together(self):
        """Both bounds can be cleared with null."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursStart": None, "quietHoursEnd": None}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["quiet_hours_start"] is None

    def test_quiet_hours_need_both(self):
        """A lone bound is rejected."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursStart": "22:00"}
        )

        assert not serializer.is_valid()
        assert "quietHoursEnd" in serializer.errors

    def test_quiet_hours_half_cleared(self):
        """Clearing one bound but not the other is rejected."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursStart": "22:00", "quietHoursEnd": None}
        )

        assert not serializer.is_valid()

    def test_quiet_hours_timezone(self):
        """The time zone is accepted and a blank one clears it."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursTimezone": "America/New_York"}
        )
        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {"quiet_hours_timezone": "America/New_York"}

        cleared = NotificationSettingsUpdateSerializer(data={"quietHoursTimezone": ""})
        assert cleared.is_valid(), cleared.errors
        assert cleared.validated_data == {"quiet_hours_timezone": None}

    def test_quiet_hours_format(self):
        """Bounds must be 24-hour HH:mm."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"quietHoursStart": "10pm", "quietHoursEnd": "08:00"}
        )

        assert not serializer.is_valid()
        assert "quietHoursStart" in serializer.errors

    def test_override_maps_become_typed(self):
        """Override maps are converted to NotificationOverride values."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"serverOverrides": {"server-1": {"level": "mentions"}}}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["server_overrides"] == {
            "server-1": NotificationOverride(level="mentions")
        }

    def test_invalid_override_entry(self):
        """A bad entry in an override map is rejected."""
        serializer = NotificationSettingsUpdateSerializer(
            data={"channelOverrides": {"channel-1": {"level": "loud"}}}
        )

        assert not serializer.is_valid()
        assert "channelOverrides" in serializer.errors


# =============================================================================
# MuteRequestSerializer Tests
# =============================================================================


class TestMuteRequestSerializer:
    """Tests for MuteRequestSerializer."""

    def test_default_level_is_nothing(self):
        """Muting without a level silences everything."""
        serializer = MuteRequestSerializer(data={"duration": "8h"})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {"duration": "8h", "level": "nothing"}

    def test_explicit_level(self):
        """A mute can keep mentions."""
        serializer = MuteRequestSerializer(
            data={"duration": "forever", "level": "mentions"}
        )

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data["level"] == "mentions"

    def test_rejects_unknown_duration(self):
        """Durations are a closed set."""
        serializer = MuteRequestSerializer(data={"duration": "2h"})

        assert not serializer.is_valid()
        assert "duration" in serializer.errors
