"""
Delivery decisions for message events.

Given a recipient's settings and a message event, decide whether to notify
them and through which channels (sound, desktop, push), then build the
display payload.

Decision Order:
    1. Senders are never notified about their own messages
    2. Quiet hours suppress everything
    3. The effective level (notifications.preferences) must allow the event:
       - all: every event
       - mentions: direct messages, mentions and replies
       - nothing: no events
    4. Otherwise notify, honoring the desktop/push/sound toggles

Usage:
    decision = should_notify_user(settings, event)
    if decision.should_notify:
        payload = build_notification_payload(decision.event_type, payload_data)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from notifications.constants import (
    MENTION_LEVEL_EVENTS,
    NOTIFICATION_CONFIG,
    NotificationEventType,
    NotificationLevel,
    SuppressionReason,
)
from notifications.preferences import resolve_notification_level
from notifications.quiet_hours import is_in_quiet_hours
from notifications.types import NotificationContext

if TYPE_CHECKING:
    from datetime import datetime

    from notifications.types import NotificationSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationEvent:
    """
    A message event as seen by one potential recipient.

    Channel messages set server_id and channel_id; direct messages set
    conversation_id.
    """

    sender_id: str
    recipient_id: str
    server_id: str | None = None
    channel_id: str | None = None
    conversation_id: str | None = None
    mentioned_user_ids: frozenset[str] = field(default_factory=frozenset)
    is_reply_to_recipient: bool = False

    @property
    def context(self) -> NotificationContext:
        if self.conversation_id:
            return NotificationContext.for_conversation(self.conversation_id)
        return NotificationContext(channel_id=self.channel_id, server_id=self.server_id)


@dataclass(frozen=True)
class NotificationDecision:
    """
    Whether and how to notify a recipient.

    Attributes:
        should_notify: Whether to deliver anything
        event_type: NotificationEventType value
        reason: Why delivery was suppressed (None when notifying)
        play_sound: Play the notification sound
        show_desktop: Show a desktop notification
        send_push: Send a push notification
    """

    should_notify: bool
    event_type: str
    reason: str | None = None
    play_sound: bool = False
    show_desktop: bool = False
    send_push: bool = False

    @classmethod
    def suppressed(cls, event_type: str, reason: str) -> NotificationDecision:
        return cls(should_notify=False, event_type=event_type, reason=reason)


@dataclass(frozen=True)
class NotificationPayload:
    """Display content for a delivered notification."""

    title: str
    body: str
    event_type: str
    icon: str | None = None
    url: str = "/"
    data: dict[str, str] = field(default_factory=dict)


def determine_event_type(event: NotificationEvent) -> str:
    if event.conversation_id:
        return NotificationEventType.DM.value
    if event.recipient_id in event.mentioned_user_ids:
        return NotificationEventType.MENTION.value
    if event.is_reply_to_recipient:
        return NotificationEventType.THREAD_REPLY.value
    return NotificationEventType.MESSAGE.value


def is_event_allowed_by_level(level: str, event_type: str) -> bool:
    if level == NotificationLevel.ALL:
        return True
    if level == NotificationLevel.MENTIONS:
        return str(event_type) in MENTION_LEVEL_EVENTS
    return False


def should_notify_user(
    settings: NotificationSettings,
    event: NotificationEvent,
    now: datetime | None = None,
) -> NotificationDecision:
    """
    Decide whether to notify the recipient of an event.

    Args:
        settings: The recipient's notification settings
        event: The message event
        now: Current time for quiet hours and mute expiry

    Returns:
        NotificationDecision
    """
    if event.sender_id == event.recipient_id:
        return NotificationDecision.suppressed(
            NotificationEventType.MESSAGE.value,
            SuppressionReason.SENDER_IS_RECIPIENT.value,
        )

    event_type = determine_event_type(event)

    if is_in_quiet_hours(settings, now):
        logger.debug(f"Quiet hours suppress {event_type} for {event.recipient_id}")
        return NotificationDecision.suppressed(
            event_type, SuppressionReason.QUIET_HOURS.value
        )

    level = resolve_notification_level(settings, event.context, now)
    if not is_event_allowed_by_level(level, event_type):
        return NotificationDecision.suppressed(
            event_type, f"level_{level}_blocks_{event_type}"
        )

    return NotificationDecision(
        should_notify=True,
        event_type=event_type,
        play_sound=settings.notification_sound,
        show_desktop=settings.desktop_notifications,
        send_push=settings.push_notifications,
    )


def truncate_preview(content: str) -> str:
    """Shorten message content to the notification preview length."""
    limit = NOTIFICATION_CONFIG.PREVIEW_MAX_LENGTH
    if len(content) <= limit:
        return content
    ellipsis = NOTIFICATION_CONFIG.PREVIEW_ELLIPSIS
    return content[: limit - len(ellipsis)] + ellipsis


def _build_title(
    event_type: str,
    sender_name: str,
    channel_name: str | None,
    server_name: str | None,
) -> str:
    if event_type == NotificationEventType.DM:
        return sender_name
    if event_type == NotificationEventType.MENTION:
        if channel_name:
            return f"{sender_name} mentioned you in #{channel_name}"
        return f"{sender_name} mentioned you"
    if event_type == NotificationEventType.THREAD_REPLY:
        if channel_name:
            return f"{sender_name} replied in #{channel_name}"
        return f"{sender_name} replied"
    if channel_name and server_name:
        return f"#{channel_name} in {server_name}"
    if channel_name:
        return f"#{channel_name}"
    return sender_name


def build_notification_payload(
    event_type: str,
    sender_name: str,
    message_content: str,
    *,
    sender_avatar_url: str | None = None,
    channel_name: str | None = None,
    server_name: str | None = None,
    message_id: str | None = None,
    channel_id: str | None = None,
    server_id: str | None = None,
    conversation_id: str | None = None,
) -> NotificationPayload:
    """
    Build the title/body shown to the recipient.

    Plain channel messages prefix the body with the sender's name; every
    other event shows the preview alone. url deep-links to the conversation
    or channel (and message, when known).
    """
    preview = truncate_preview(message_content)
    if event_type in (
        NotificationEventType.DM,
        NotificationEventType.MENTION,
        NotificationEventType.THREAD_REPLY,
    ):
        body = preview
    else:
        body = f"{sender_name}: {preview}"

    if conversation_id:
        url = f"/dm/{conversation_id}"
    elif server_id and channel_id:
        url = f"/servers/{server_id}/channels/{channel_id}"
        if message_id:
            url += f"?message={message_id}"
    else:
        url = "/"

    data = {
        key: value
        for key, value in (
            ("messageId", message_id),
            ("channelId", channel_id),
            ("serverId", server_id),
            ("conversationId", conversation_id),
        )
        if value
    }

    return NotificationPayload(
        title=_build_title(event_type, sender_name, channel_name, server_name),
        body=body,
        event_type=str(event_type),
        icon=sender_avatar_url,
        url=url,
        data=data,
    )
