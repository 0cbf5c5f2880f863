"""
Constants for server roles and channel permissions.

Permission keys form a closed set. The string values are the keys used in
stored role documents and in channel override allow/deny lists, so they stay
camelCase; Python code refers to them through the Permission enum.

Import example:
    from servers.constants import Permission, PERMISSION_FIELDS
"""

from typing import Final

from django.db import models


class Permission(models.TextChoices):
    """
    Permission keys recognized by the engine.

    ADMINISTRATOR on any assigned role grants every other key and bypasses
    channel overrides.
    """

    READ_MESSAGES = "readMessages", "Read Messages"
    SEND_MESSAGES = "sendMessages", "Send Messages"
    MANAGE_MESSAGES = "manageMessages", "Manage Messages"
    MANAGE_CHANNELS = "manageChannels", "Manage Channels"
    MANAGE_ROLES = "manageRoles", "Manage Roles"
    MANAGE_SERVER = "manageServer", "Manage Server"
    MENTION_EVERYONE = "mentionEveryone", "Mention Everyone"
    ADMINISTRATOR = "administrator", "Administrator"


class PermissionSource(models.TextChoices):
    """Which rule decided a permission check."""

    ADMINISTRATOR = "administrator", "Administrator role"
    USER_OVERRIDE = "user_override", "Channel override for the user"
    ROLE_OVERRIDE = "role_override", "Channel override for a role"
    ROLE_GRANT = "role_grant", "Granted by an assigned role"
    DEFAULT = "default", "No role grants the permission"


# Role dataclass attribute holding each permission flag
PERMISSION_FIELDS: Final[dict[str, str]] = {
    Permission.READ_MESSAGES.value: "read_messages",
    Permission.SEND_MESSAGES.value: "send_messages",
    Permission.MANAGE_MESSAGES.value: "manage_messages",
    Permission.MANAGE_CHANNELS.value: "manage_channels",
    Permission.MANAGE_ROLES.value: "manage_roles",
    Permission.MANAGE_SERVER.value: "manage_server",
    Permission.MENTION_EVERYONE.value: "mention_everyone",
    Permission.ADMINISTRATOR.value: "administrator",
}

PERMISSION_DESCRIPTIONS: Final[dict[str, str]] = {
    Permission.READ_MESSAGES.value: "View channels and read message history",
    Permission.SEND_MESSAGES.value: "Send messages in channels",
    Permission.MANAGE_MESSAGES.value: "Delete and edit messages from other users",
    Permission.MANAGE_CHANNELS.value: "Create, edit, and delete channels",
    Permission.MANAGE_ROLES.value: "Create and modify roles below their highest role",
    Permission.MANAGE_SERVER.value: "Change server name and other server settings",
    Permission.MENTION_EVERYONE.value: "Use @everyone and @here mentions",
    Permission.ADMINISTRATOR.value: "All permissions and bypass channel overrides",
}


class ROLE_CONFIG:
    """Limits applied when validating role records."""

    MAX_NAME_LENGTH: Final[int] = 100
    DEFAULT_COLOR: Final[str] = "#99AAB5"
    MAX_ROLES_PER_ASSIGNMENT: Final[int] = 250
