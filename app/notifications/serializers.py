"""
Serializers for notification settings requests.

These validate what route handlers receive before any settings are built or
changed. Field names follow the camelCase document shape.

Serializers:
    NotificationOverrideSerializer: One {level, mutedUntil} override
    NotificationSettingsUpdateSerializer: Partial settings update
    MuteRequestSerializer: Mute a server, channel or conversation

Usage:
    serializer = MuteRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=400)
"""

from __future__ import annotations

from rest_framework import serializers

from core.validators import validate_clock_time
from notifications.constants import NOTIFICATION_CONFIG, MuteDuration, NotificationLevel
from notifications.muting import parse_timestamp
from notifications.types import NotificationOverride


class NotificationOverrideSerializer(serializers.Serializer):
    """
    Serializer for a single notification override.

    Fields:
        level: Notification level for the target
        mutedUntil: Optional ISO-8601 expiry (omit for no expiry)
    """

    level = serializers.ChoiceField(choices=NotificationLevel.choices)
    mutedUntil = serializers.CharField(
        source="muted_until",
        allow_null=True,
        required=False,
        default=None,
    )

    def validate_mutedUntil(self, value: str | None) -> str | None:
        """Reject timestamps that cannot be parsed."""
        if value and parse_timestamp(value) is None:
            raise serializers.ValidationError(
                "Must be an ISO-8601 timestamp, e.g. 2024-01-01T12:00:00.000Z."
            )
        return value or None

    def create(self, validated_data) -> NotificationOverride:
        return NotificationOverride(**validated_data)


class NotificationSettingsUpdateSerializer(serializers.Serializer):
    """
    Serializer for partial notification settings updates.

    Every field is optional; only the fields present are changed. Quiet hours
    accept null to clear them, and must be set or cleared together.
    """

    globalNotifications = serializers.ChoiceField(
        source="global_notifications",
        choices=NotificationLevel.choices,
        required=False,
    )
    desktopNotifications = serializers.BooleanField(
        source="desktop_notifications", required=False
    )
    pushNotifications = serializers.BooleanField(
        source="push_notifications", required=False
    )
    notificationSound = serializers.BooleanField(
        source="notification_sound", required=False
    )
    quietHoursStart = serializers.CharField(
        source="quiet_hours_start",
        required=False,
        allow_null=True,
        validators=[validate_clock_time],
    )
    quietHoursEnd = serializers.CharField(
        source="quiet_hours_end",
        required=False,
        allow_null=True,
        validators=[validate_clock_time],
    )
    quietHoursTimezone = serializers.CharField(
        source="quiet_hours_timezone",
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=64,
    )
    serverOverrides = serializers.DictField(
        source="server_overrides",
        child=NotificationOverrideSerializer(),
        required=False,
    )
    channelOverrides = serializers.DictField(
        source="channel_overrides",
        child=NotificationOverrideSerializer(),
        required=False,
    )
    conversationOverrides = serializers.DictField(
        source="conversation_overrides",
        child=NotificationOverrideSerializer(),
        required=False,
    )

    def validate_quietHoursTimezone(self, value: str | None) -> str | None:
        """Store a cleared time zone as None."""
        return value or None

    def validate(self, attrs):
        has_start = "quiet_hours_start" in attrs
        has_end = "quiet_hours_end" in attrs
        if has_start != has_end:
            missing = "quietHoursEnd" if has_start else "quietHoursStart"
            raise serializers.ValidationError(
                {missing: ["Quiet hours need both a start and an end."]}
            )
        if has_start and (attrs["quiet_hours_start"] is None) != (
            attrs["quiet_hours_end"] is None
        ):
            raise serializers.ValidationError(
                {"quietHoursEnd": ["Clear both quiet hours bounds together."]}
            )

        for attr in ("server_overrides", "channel_overrides", "conversation_overrides"):
            if attr in attrs:
                attrs[attr] = {
                    target_id: NotificationOverride(**data)
                    for target_id, data in attrs[attr].items()
                }
        return attrs


class MuteRequestSerializer(serializers.Serializer):
    """
    Serializer for mute requests.

    Fields:
        duration: One of 15m, 1h, 8h, 24h, forever
        level: Level while muted (defaults to nothing)
    """

    duration = serializers.ChoiceField(choices=MuteDuration.choices)
    level = serializers.ChoiceField(
        choices=NotificationLevel.choices,
        default=NOTIFICATION_CONFIG.DEFAULT_MUTE_LEVEL,
    )
