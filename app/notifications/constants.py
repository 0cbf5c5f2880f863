"""
Constants and configuration for notification resolution.

This module centralizes:
- Notification levels, mute durations and override scopes (closed sets)
- Trigger event types and suppression reasons
- Payload formatting limits

Import example:
    from notifications.constants import MuteDuration, NotificationLevel
"""

from datetime import timedelta
from typing import Final

from django.db import models


class NotificationLevel(models.TextChoices):
    """
    How much a user wants to be notified in a context.

    ALL: Every message
    MENTIONS: Direct messages, mentions and replies only
    NOTHING: Muted
    """

    ALL = "all", "All Messages"
    MENTIONS = "mentions", "Only Mentions"
    NOTHING = "nothing", "Nothing"


class MuteDuration(models.TextChoices):
    """Durations offered when muting a server, channel or conversation."""

    FIFTEEN_MINUTES = "15m", "15 Minutes"
    ONE_HOUR = "1h", "1 Hour"
    EIGHT_HOURS = "8h", "8 Hours"
    ONE_DAY = "24h", "24 Hours"
    FOREVER = "forever", "Until I turn it back on"


class OverrideScope(models.TextChoices):
    """Which override map a mute/unmute targets."""

    SERVER = "server", "Server"
    CHANNEL = "channel", "Channel"
    CONVERSATION = "conversation", "Conversation"


class LevelSource(models.TextChoices):
    """Which tier decided the effective notification level."""

    CHANNEL = "channel", "Channel override"
    SERVER = "server", "Server override"
    CONVERSATION = "conversation", "Conversation override"
    GLOBAL = "global", "Global default"


class NotificationEventType(models.TextChoices):
    """Kinds of message events that can trigger a notification."""

    MESSAGE = "message", "Channel message"
    DM = "dm", "Direct message"
    MENTION = "mention", "Mention"
    THREAD_REPLY = "thread_reply", "Reply"


class SuppressionReason(models.TextChoices):
    """Standardized reasons for not notifying a recipient."""

    SENDER_IS_RECIPIENT = "sender_is_recipient", "Sender is the recipient"
    QUIET_HOURS = "quiet_hours", "Recipient is in quiet hours"


# Expiry offsets; FOREVER has no entry because it never expires
MUTE_DURATION_DELTAS: Final[dict[str, timedelta]] = {
    MuteDuration.FIFTEEN_MINUTES.value: timedelta(minutes=15),
    MuteDuration.ONE_HOUR.value: timedelta(hours=1),
    MuteDuration.EIGHT_HOURS.value: timedelta(hours=8),
    MuteDuration.ONE_DAY.value: timedelta(hours=24),
}

# Event types a MENTIONS level still lets through
MENTION_LEVEL_EVENTS: Final[frozenset[str]] = frozenset(
    {
        NotificationEventType.DM.value,
        NotificationEventType.MENTION.value,
        NotificationEventType.THREAD_REPLY.value,
    }
)


class NOTIFICATION_CONFIG:
    """Defaults for notification settings and payloads."""

    DEFAULT_LEVEL: Final[str] = NotificationLevel.ALL.value
    DEFAULT_MUTE_LEVEL: Final[str] = NotificationLevel.NOTHING.value

    # Payload body truncation
    PREVIEW_MAX_LENGTH: Final[int] = 100
    PREVIEW_ELLIPSIS: Final[str] = "..."
