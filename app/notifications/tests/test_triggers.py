"""
Tests for delivery decisions and notification payloads.

Tests cover:
- determine_event_type() for channel messages, DMs, mentions and replies
- is_event_allowed_by_level() across levels
- should_notify_user() ordering: sender, quiet hours, level
- build_notification_payload() titles, bodies, urls and preview truncation

Usage:
    pytest app/notifications/tests/test_triggers.py -v
"""

import pytest

from notifications.constants import NotificationEventType, SuppressionReason
from notifications.tests.factories import (
    NotificationEventFactory,
    NotificationOverrideFactory,
    NotificationSettingsFactory,
)
from notifications.triggers import (
    build_notification_payload,
    determine_event_type,
    is_event_allowed_by_level,
    should_notify_user,
    truncate_preview,
)


# =============================================================================
# Event Classification
# =============================================================================


class TestDetermineEventType:
    """Tests for determine_event_type()."""

    def test_channel_message(self):
        """A plain channel message is a message event."""
        assert determine_event_type(NotificationEventFactory()) == "message"

    def test_direct_message(self):
        """Conversation events are DMs."""
        event = NotificationEventFactory(
            server_id=None, channel_id=None, conversation_id="conversation-1"
        )
        assert determine_event_type(event) == "dm"

    def test_mention(self):
        """Mentioning the recipient makes a mention event."""
        event = NotificationEventFactory(mentioned_user_ids=frozenset({"user-recipient"}))
        assert determine_event_type(event) == "mention"

    def test_reply(self):
        """Replies to the recipient are thread replies."""
        event = NotificationEventFactory(is_reply_to_recipient=True)
        assert determine_event_type(event) == "thread_reply"


class TestIsEventAllowedByLevel:
    """Tests for is_event_allowed_by_level()."""

    @pytest.mark.parametrize("event_type", NotificationEventType.values)
    def test_all_allows_everything(self, event_type):
        """all lets every event through."""
        assert is_event_allowed_by_level("all", event_type) is True

    @pytest.mark.parametrize("event_type", NotificationEventType.values)
    def test_nothing_blocks_everything(self, event_type):
        """nothing blocks every event."""
        assert is_event_allowed_by_level("nothing", event_type) is False

    def test_mentions_level(self):
        """mentions allows DMs, mentions and replies only."""
        assert is_event_allowed_by_level("mentions", "dm") is True
        assert is_event_allowed_by_level("mentions", "mention") is True
        assert is_event_allowed_by_level("mentions", "thread_reply") is True
        assert is_event_allowed_by_level("mentions", "message") is False


# =============================================================================
# should_notify_user Tests
# =============================================================================


class TestShouldNotifyUser:
    """Tests for should_notify_user()."""

    def test_notifies_by_default(self, settings_record, now):
        """Default settings notify on every channel message."""
        decision = should_notify_user(settings_record, NotificationEventFactory(), now)

        assert decision.should_notify is True
        assert decision.reason is None
        assert decision.play_sound is True
        assert decision.show_desktop is True
        assert decision.send_push is True

    def test_sender_never_notified(self, settings_record, now):
        """Senders are not notified about their own messages."""
        event = NotificationEventFactory(sender_id="user-recipient")

        decision = should_notify_user(settings_record, event, now)

        assert decision.should_notify is False
        assert decision.reason == SuppressionReason.SENDER_IS_RECIPIENT

    def test_quiet_hours_suppress(self, now):
        """Quiet hours suppress even mentions."""
        settings_record = NotificationSettingsFactory(
            quiet_hours_start="11:00", quiet_hours_end="13:00"
        )
        event = NotificationEventFactory(
            recipient_id=settings_record.user_id,
            mentioned_user_ids=frozenset({settings_record.user_id}),
        )

        decision = should_notify_user(settings_record, event, now)

        assert decision.should_notify is False
        assert decision.reason == SuppressionReason.QUIET_HOURS
        assert decision.event_type == "mention"

    def test_muted_channel_blocks_message(self, permanent_mute, now):
        """A muted channel blocks plain messages."""
        settings_record = NotificationSettingsFactory(
            channel_overrides={"channel-1": permanent_mute}
        )

        decision = should_notify_user(settings_record, NotificationEventFactory(), now)

        assert decision.should_notify is False
        assert decision.reason == "level_nothing_blocks_message"

    def test_mentions_level_lets_mention_through(self, now):
        """A mentions-only server still notifies on a mention."""
        settings_record = NotificationSettingsFactory(
            user_id="user-recipient",
            server_overrides={"server-1": NotificationOverrideFactory(level="mentions")},
        )
        event = NotificationEventFactory(mentioned_user_ids=frozenset({"user-recipient"}))

        assert should_notify_user(settings_record, event, now).should_notify is True
        assert (
            should_notify_user(settings_record, NotificationEventFactory(), now).reason
            == "level_mentions_blocks_message"
        )

    def test_expired_mute_notifies(self, expired_mute, now):
        """An expired channel mute no longer blocks."""
        settings_record = NotificationSettingsFactory(
            channel_overrides={"channel-1": expired_mute}
        )

        decision = should_notify_user(settings_record, NotificationEventFactory(), now)

        assert decision.should_notify is True

    def test_muted_conversation_blocks_dm(self, permanent_mute, now):
        """DM mutes block direct messages."""
        settings_record = NotificationSettingsFactory(
            conversation_overrides={"conversation-1": permanent_mute}
        )
        event = NotificationEventFactory(
            server_id=None, channel_id=None, conversation_id="conversation-1"
        )

        decision = should_notify_user(settings_record, event, now)

        assert decision.should_notify is False
        assert decision.event_type == "dm"

    def test_toggles_passed_through(self, now):
        """Delivery toggles come from the settings."""
        settings_record = NotificationSettingsFactory(
            push_notifications=False, notification_sound=False
        )

        decision = should_notify_user(settings_record, NotificationEventFactory(), now)

        assert decision.should_notify is True
        assert decision.send_push is False
        assert decision.play_sound is False
        assert decision.show_desktop is True


# =============================================================================
# Payload Tests
# =============================================================================


class TestTruncatePreview:
    """Tests for truncate_preview()."""

    def test_short_content_unchanged(self):
        """Content within the limit is kept."""
        assert truncate_preview("hello") == "hello"

    def test_exact_limit_unchanged(self):
        """100 characters are not truncated."""
        content = "x" * 100
        assert truncate_preview(content) == content

    def test_long_content_truncated(self):
        """Longer content is cut to 97 characters plus an ellipsis."""
        result = truncate_preview("x" * 150)

        assert len(result) == 100
        assert result.endswith("...")


class TestBuildNotificationPayload:
    """Tests for build_notification_payload()."""

    def test_channel_message(self):
        """Channel messages name the channel and prefix the sender."""
        payload = build_notification_payload(
            "message",
            "Alice",
            "hi all",
            channel_name="general",
            server_name="Friends",
            server_id="server-1",
            channel_id="channel-1",
            message_id="message-1",
        )

        assert payload.title == "#general in Friends"
        assert payload.body == "Alice: hi all"
        assert payload.url == "/servers/server-1/channels/channel-1?message=message-1"
        assert payload.data == {
            "messageId": "message-1",
            "channelId": "channel-1",
            "serverId": "server-1",
        }

    def test_direct_message(self):
        """DMs are titled with the sender and link to the conversation."""
        payload = build_notification_payload(
            "dm",
            "Alice",
            "psst",
            sender_avatar_url="https://cdn.example.com/a.png",
            conversation_id="conversation-1",
        )

        assert payload.title == "Alice"
        assert payload.body == "psst"
        assert payload.icon == "https://cdn.example.com/a.png"
        assert payload.url == "/dm/conversation-1"

    def test_mention(self):
        """Mentions say where the user was mentioned."""
        payload = build_notification_payload(
            "mention", "Alice", "@bob look", channel_name="general"
        )

        assert payload.title == "Alice mentioned you in #general"
        assert payload.body == "@bob look"
        assert payload.url == "/"

    def test_reply_without_channel(self):
        """Replies fall back to a short title."""
        payload = build_notification_payload("thread_reply", "Alice", "agreed")
        assert payload.title == "Alice replied"

    def test_long_body_truncated(self):
        """The preview is truncated before the sender prefix is added."""
        payload = build_notification_payload("message", "Alice", "y" * 200)
        assert payload.body == "Alice: " + "y" * 97 + "..."
