"""
Notifications app: notification levels, mutes, quiet hours and triggers.

This app provides:
- Mute expiry and quiet hours evaluation (muting, quiet_hours)
- Effective notification level per message context (preferences)
- Parsing of stored settings documents (documents)
- Settings updates, mutes and unmutes (services)
- The per-recipient delivery decision and payload (triggers)

Usage:
    from notifications.documents import settings_from_document
    from notifications.triggers import NotificationEvent, should_notify_user

    settings = settings_from_document(document)
    decision = should_notify_user(
        settings,
        NotificationEvent(
            sender_id=author_id,
            recipient_id=member_id,
            server_id=server_id,
            channel_id=channel_id,
        ),
    )
    if decision.should_notify:
        ...
"""
