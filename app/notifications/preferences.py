"""
Notification level resolution.

This module picks the effective NotificationLevel for a message context:
Channel -> Server -> Global for channel messages, and
Conversation -> Global for direct messages.

Each override tier is skipped when it is absent or its mute has expired, so
an expired override never blocks fallthrough to the next tier. The global
level is always present and ends the chain.

Design Decisions:
    - Tiers are an ordered tuple of LevelTier descriptors, evaluated in order
    - Channel and conversation contexts never mix (NotificationContext
      enforces this), so a DM never consults server/channel overrides
    - Quiet hours are not folded into the level; the delivery decision in
      notifications.triggers handles them separately
    - No caching: expiry depends on the time of the call

Usage:
    from notifications.preferences import resolve_notification_level
    from notifications.types import NotificationContext

    level = resolve_notification_level(
        settings, NotificationContext.for_channel(channel_id, server_id)
    )
    if level == NotificationLevel.NOTHING:
        return
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from notifications.constants import LevelSource
from notifications.muting import is_mute_expired

if TYPE_CHECKING:
    from datetime import datetime

    from notifications.types import (
        NotificationContext,
        NotificationOverride,
        NotificationSettings,
    )

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedNotificationLevel:
    """
    Effective notification level for a context, and where it came from.

    Attributes:
        level: NotificationLevel value
        source: LevelSource value of the deciding tier
        target_id: Id of the channel/server/conversation whose override
            decided (None for the global level)
        muted_until: Expiry of the deciding override, if any
    """

    level: str
    source: str
    target_id: str | None = None
    muted_until: str | None = None

    @property
    def from_override(self) -> bool:
        return self.source != LevelSource.GLOBAL


@dataclass(frozen=True)
class LevelTier:
    """An override map on the settings paired with the context id that keys it."""

    source: str
    overrides_attr: str
    context_attr: str

    def lookup(
        self,
        settings: NotificationSettings,
        context: NotificationContext,
    ) -> tuple[str | None, NotificationOverride | None]:
        target_id = getattr(context, self.context_attr)
        if not target_id:
            return None, None
        return target_id, getattr(settings, self.overrides_attr).get(target_id)


CHANNEL_TIERS: tuple[LevelTier, ...] = (
    LevelTier(LevelSource.CHANNEL.value, "channel_overrides", "channel_id"),
    LevelTier(LevelSource.SERVER.value, "server_overrides", "server_id"),
)

CONVERSATION_TIERS: tuple[LevelTier, ...] = (
    LevelTier(LevelSource.CONVERSATION.value, "conversation_overrides", "conversation_id"),
)


class NotificationLevelResolver:
    """
    Resolves the effective notification level using the hierarchy:
    Channel -> Server -> Global, or Conversation -> Global.
    """

    @staticmethod
    def tiers_for(context: NotificationContext) -> tuple[LevelTier, ...]:
        return CONVERSATION_TIERS if context.is_direct else CHANNEL_TIERS

    @classmethod
    def explain(
        cls,
        settings: NotificationSettings,
        context: NotificationContext,
        now: datetime | None = None,
    ) -> ResolvedNotificationLevel:
        """
        Resolve the level and report the deciding tier.

        Args:
            settings: The recipient's notification settings
            context: Where the message came from
            now: Current time for mute expiry (defaults to timezone.now())

        Returns:
            ResolvedNotificationLevel
        """
        for tier in cls.tiers_for(context):
            target_id, override = tier.lookup(settings, context)
            if override is None:
                continue
            if is_mute_expired(override.muted_until, now):
                logger.debug(
                    f"Skipping expired {tier.source} override {target_id} "
                    f"for user {settings.user_id}"
                )
                continue
            return ResolvedNotificationLevel(
                level=override.level,
                source=tier.source,
                target_id=target_id,
                muted_until=override.muted_until,
            )

        return ResolvedNotificationLevel(
            level=settings.global_notifications,
            source=LevelSource.GLOBAL.value,
        )

    @classmethod
    def resolve(
        cls,
        settings: NotificationSettings,
        context: NotificationContext,
        now: datetime | None = None,
    ) -> str:
        """Return only the effective NotificationLevel value."""
        return cls.explain(settings, context, now).level


def resolve_notification_level(
    settings: NotificationSettings,
    context: NotificationContext,
    now: datetime | None = None,
) -> str:
    return NotificationLevelResolver.resolve(settings, context, now)


def explain_notification_level(
    settings: NotificationSettings,
    context: NotificationContext,
    now: datetime | None = None,
) -> ResolvedNotificationLevel:
    return NotificationLevelResolver.explain(settings, context, now)
