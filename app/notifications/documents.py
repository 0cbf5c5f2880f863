"""
Conversion between stored settings documents and NotificationSettings.

The document store keeps the three override maps as JSON strings. They are
parsed exactly once here; the resolvers only ever see typed maps.

Parsing never raises. Malformed or non-object JSON becomes an empty map, and
individual entries with an unknown level are dropped, both with a warning.

Usage:
    settings = settings_from_document(document)
    level = resolve_notification_level(settings, context)

    document_update = settings_to_document(updated_settings)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from notifications.constants import NOTIFICATION_CONFIG, NotificationLevel
from notifications.types import NotificationOverride, NotificationSettings

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS = {
    "serverOverrides": "server_overrides",
    "channelOverrides": "channel_overrides",
    "conversationOverrides": "conversation_overrides",
}


def parse_override(value: Any) -> NotificationOverride | None:
    """Build one override from its stored dict, or None if unusable."""
    if isinstance(value, NotificationOverride):
        return value
    if not isinstance(value, Mapping):
        return None

    level = value.get("level")
    if level not in NotificationLevel.values:
        return None

    muted_until = value.get("mutedUntil")
    if not isinstance(muted_until, str) or not muted_until:
        muted_until = None
    return NotificationOverride(level=level, muted_until=muted_until)


def parse_overrides(value: Any) -> dict[str, NotificationOverride]:
    """
    Parse a stored override map.

    Accepts the JSON string form, an already decoded dict, or None.

    Returns:
        Dict of id -> NotificationOverride ({} for anything malformed)
    """
    if not value:
        return {}

    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            logger.warning("Ignoring malformed notification overrides JSON")
            return {}

    if not isinstance(value, Mapping):
        logger.warning(
            f"Ignoring notification overrides of type {type(value).__name__}"
        )
        return {}

    overrides: dict[str, NotificationOverride] = {}
    for target_id, raw in value.items():
        override = parse_override(raw)
        if override is None:
            logger.warning(f"Dropping invalid notification override for {target_id}")
            continue
        overrides[str(target_id)] = override
    return overrides


def overrides_to_json(overrides: Mapping[str, NotificationOverride]) -> str:
    return json.dumps(
        {target_id: override.to_dict() for target_id, override in overrides.items()}
    )


def _optional_str(value: Any) -> str | None:
    return str(value) if value else None


def _flag(value: Any) -> bool:
    return True if value is None else bool(value)


def settings_from_document(document: Mapping[str, Any]) -> NotificationSettings:
    """
    Build NotificationSettings from a stored settings document.

    Missing toggles default to True and a missing or unknown global level
    defaults to "all".
    """
    global_level = document.get("globalNotifications")
    if global_level not in NotificationLevel.values:
        global_level = NOTIFICATION_CONFIG.DEFAULT_LEVEL

    document_id = document.get("$id", document.get("id"))

    return NotificationSettings(
        id=_optional_str(document_id),
        user_id=_optional_str(document.get("userId")) or "",
        global_notifications=global_level,
        desktop_notifications=_flag(document.get("desktopNotifications")),
        push_notifications=_flag(document.get("pushNotifications")),
        notification_sound=_flag(document.get("notificationSound")),
        quiet_hours_start=_optional_str(document.get("quietHoursStart")),
        quiet_hours_end=_optional_str(document.get("quietHoursEnd")),
        quiet_hours_timezone=_optional_str(document.get("quietHoursTimezone")),
        **{
            attr: parse_overrides(document.get(key))
            for key, attr in OVERRIDE_FIELDS.items()
        },
    )


def settings_to_document(settings: NotificationSettings) -> dict[str, Any]:
    """
    Render NotificationSettings in the stored document shape.

    Override maps are serialized back to JSON strings. The document id is not
    included; the persistence collaborator addresses documents by id itself.
    """
    document: dict[str, Any] = {
        "userId": settings.user_id,
        "globalNotifications": settings.global_notifications,
        "desktopNotifications": settings.desktop_notifications,
        "pushNotifications": settings.push_notifications,
        "notificationSound": settings.notification_sound,
        "quietHoursStart": settings.quiet_hours_start,
        "quietHoursEnd": settings.quiet_hours_end,
        "quietHoursTimezone": settings.quiet_hours_timezone or "",
    }
    for key, attr in OVERRIDE_FIELDS.items():
        document[key] = overrides_to_json(getattr(settings, attr))
    return document
