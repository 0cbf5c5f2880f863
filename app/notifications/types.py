"""
Typed records consumed by the notification side of the engine.

NotificationSettings arrives with its override maps already parsed by
notifications.documents; the resolvers never see stored JSON strings.
All records are frozen. Settings mutations in notifications.services return
new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from core.exceptions import ValidationError
from notifications.constants import NOTIFICATION_CONFIG

if TYPE_CHECKING:
    from collections.abc import Mapping


def _frozen_map(value: Mapping[str, NotificationOverride] | None):
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True)
class NotificationOverride:
    """
    A level override for one server, channel or conversation.

    Attributes:
        level: NotificationLevel value
        muted_until: ISO-8601 expiry; None means the override lasts until it
            is removed
    """

    level: str
    muted_until: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"level": self.level}
        if self.muted_until:
            data["mutedUntil"] = self.muted_until
        return data


@dataclass(frozen=True)
class NotificationSettings:
    """
    Per-user notification settings.

    Override maps are keyed by server, channel or conversation id. Quiet
    hours are "HH:mm" strings on the same clock as the server's TIME_ZONE.
    quiet_hours_timezone is kept so stored documents survive a rewrite; the
    window itself is always read on TIME_ZONE. desktop/push/sound toggles
    only matter to the delivery decision in notifications.triggers.
    """

    user_id: str
    id: str | None = None
    global_notifications: str = NOTIFICATION_CONFIG.DEFAULT_LEVEL
    desktop_notifications: bool = True
    push_notifications: bool = True
    notification_sound: bool = True
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    quiet_hours_timezone: str | None = None
    server_overrides: Mapping[str, NotificationOverride] = field(
        default_factory=dict, hash=False
    )
    channel_overrides: Mapping[str, NotificationOverride] = field(
        default_factory=dict, hash=False
    )
    conversation_overrides: Mapping[str, NotificationOverride] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self):
        # Read-only views over copies of the given maps
        for name in ("server_overrides", "channel_overrides", "conversation_overrides"):
            object.__setattr__(self, name, _frozen_map(getattr(self, name)))


@dataclass(frozen=True)
class NotificationContext:
    """
    Where a message came from.

    Channel messages carry channel_id and its parent server_id; server-wide
    checks carry only server_id; direct messages carry only conversation_id.
    A conversation is never combined with a channel or server.
    """

    channel_id: str | None = None
    server_id: str | None = None
    conversation_id: str | None = None

    def __post_init__(self):
        if self.conversation_id and (self.channel_id or self.server_id):
            raise ValidationError(
                "A notification context is either a channel/server or a conversation",
                error_code="INVALID_NOTIFICATION_CONTEXT",
                details={
                    "conversationId": [
                        "Cannot be combined with channelId or serverId."
                    ]
                },
            )

    @classmethod
    def for_channel(cls, channel_id: str, server_id: str | None = None) -> NotificationContext:
        return cls(channel_id=channel_id, server_id=server_id)

    @classmethod
    def for_server(cls, server_id: str) -> NotificationContext:
        return cls(server_id=server_id)

    @classmethod
    def for_conversation(cls, conversation_id: str) -> NotificationContext:
        return cls(conversation_id=conversation_id)

    @property
    def is_direct(self) -> bool:
        return bool(self.conversation_id)
