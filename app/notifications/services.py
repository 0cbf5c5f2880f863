"""
Notification settings changes.

NotificationSettingsService applies user requests (settings updates, mutes
and unmutes) to a NotificationSettings record and returns the new record.
Persisting the result is the caller's job; settings_to_document() renders it
in the stored shape.

Error Codes:
    VALIDATION_ERROR: The request payload failed validation
    INVALID_SCOPE: The override scope is not server, channel or conversation

Usage:
    from notifications.services import NotificationSettingsService

    result = NotificationSettingsService.mute(
        settings,
        scope=OverrideScope.CHANNEL,
        target_id=channel_id,
        data={"duration": "8h"},
    )
    if result.success:
        save(settings_to_document(result.data))
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from core.services import BaseService, ServiceResult
from notifications.constants import OverrideScope
from notifications.muting import calculate_mute_expiration
from notifications.serializers import (
    MuteRequestSerializer,
    NotificationSettingsUpdateSerializer,
)
from notifications.types import NotificationOverride, NotificationSettings

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from typing import Any


SCOPE_ATTRIBUTES = {
    OverrideScope.SERVER.value: "server_overrides",
    OverrideScope.CHANNEL.value: "channel_overrides",
    OverrideScope.CONVERSATION.value: "conversation_overrides",
}


class NotificationSettingsService(BaseService):
    """
    Stateless operations on NotificationSettings.

    All methods return ServiceResult[NotificationSettings]; the input
    settings are never modified.
    """

    @staticmethod
    def default_settings(user_id: str) -> NotificationSettings:
        """Settings for a user who has never changed anything."""
        return NotificationSettings(user_id=user_id)

    @classmethod
    def update_settings(
        cls,
        settings: NotificationSettings,
        data: Mapping[str, Any],
    ) -> ServiceResult[NotificationSettings]:
        """
        Apply a partial settings update.

        Args:
            settings: Current settings
            data: camelCase payload, validated by
                NotificationSettingsUpdateSerializer

        Returns:
            ServiceResult with the updated settings, or field errors
        """
        serializer = NotificationSettingsUpdateSerializer(data=data)
        if not serializer.is_valid():
            return cls.validation_failure(
                "Invalid notification settings", serializer.errors
            )

        updated = replace(settings, **serializer.validated_data)
        cls.get_logger().info(
            f"Updated notification settings for user {settings.user_id}: "
            f"{sorted(serializer.validated_data)}"
        )
        return ServiceResult.success(updated)

    @classmethod
    def _scope_attribute(cls, scope: str) -> str | None:
        return SCOPE_ATTRIBUTES.get(str(scope))

    @classmethod
    def _invalid_scope(cls, scope: str) -> ServiceResult[NotificationSettings]:
        return ServiceResult.failure(
            f"Unknown override scope: {scope}",
            error_code="INVALID_SCOPE",
            errors={"scope": [f'"{scope}" is not a valid choice.']},
        )

    @classmethod
    def mute(
        cls,
        settings: NotificationSettings,
        scope: str,
        target_id: str,
        data: Mapping[str, Any],
        now: datetime | None = None,
    ) -> ServiceResult[NotificationSettings]:
        """
        Mute a server, channel or conversation.

        Args:
            settings: Current settings
            scope: OverrideScope value
            target_id: Id of the server, channel or conversation
            data: {"duration": MuteDuration, "level": NotificationLevel}
                (level defaults to "nothing")
            now: Current time for the expiry (defaults to timezone.now())

        Returns:
            ServiceResult with the updated settings, or field errors
        """
        attribute = cls._scope_attribute(scope)
        if attribute is None:
            return cls._invalid_scope(scope)

        serializer = MuteRequestSerializer(data=data)
        if not serializer.is_valid():
            return cls.validation_failure("Invalid mute request", serializer.errors)

        duration = serializer.validated_data["duration"]
        override = NotificationOverride(
            level=serializer.validated_data["level"],
            muted_until=calculate_mute_expiration(duration, now),
        )

        overrides = dict(getattr(settings, attribute))
        overrides[target_id] = override

        cls.get_logger().info(
            f"Muted {scope} {target_id} for user {settings.user_id} "
            f"({duration}, level={override.level})"
        )
        return ServiceResult.success(replace(settings, **{attribute: overrides}))

    @classmethod
    def unmute(
        cls,
        settings: NotificationSettings,
        scope: str,
        target_id: str,
    ) -> ServiceResult[NotificationSettings]:
        """
        Remove the override for a server, channel or conversation.

        Unmuting something that is not muted succeeds without changes.
        """
        attribute = cls._scope_attribute(scope)
        if attribute is None:
            return cls._invalid_scope(scope)

        current = getattr(settings, attribute)
        if target_id not in current:
            return ServiceResult.success(settings)

        overrides = {key: value for key, value in current.items() if key != target_id}
        cls.get_logger().info(
            f"Unmuted {scope} {target_id} for user {settings.user_id}"
        )
        return ServiceResult.success(replace(settings, **{attribute: overrides}))
