"""
Typed records consumed by the access side of the engine.

These are frozen dataclasses built once at the record boundary
(servers.services.RoleRecordService) and then passed around unchanged.
Nothing in the engine mutates them; lifecycle helpers on RoleAssignment
return new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from servers.constants import PERMISSION_FIELDS, ROLE_CONFIG, Permission


@dataclass(frozen=True)
class Role:
    """
    A server role.

    Attributes:
        id: Role identifier (the document's $id)
        server_id: Server the role belongs to
        name: Display name
        color: Hex color code like "#5865F2"
        position: Seniority, higher is more senior
        mentionable: Whether the role can be @mentioned
        member_count: Cached count of members holding the role, if known

    The eight permission flags mirror Permission. A role with
    administrator=True is treated as granting every flag.
    """

    id: str
    server_id: str
    name: str
    position: int = 0
    color: str = ROLE_CONFIG.DEFAULT_COLOR
    read_messages: bool = False
    send_messages: bool = False
    manage_messages: bool = False
    manage_channels: bool = False
    manage_roles: bool = False
    manage_server: bool = False
    mention_everyone: bool = False
    administrator: bool = False
    mentionable: bool = False
    member_count: int | None = None

    def grants(self, permission: str) -> bool:
        """Return True if this role grants the permission key."""
        if self.administrator:
            return True
        attribute = PERMISSION_FIELDS.get(str(permission))
        if attribute is None:
            return False
        return bool(getattr(self, attribute))

    @property
    def granted_permissions(self) -> frozenset[str]:
        """Permission keys this role grants, administrator expanded."""
        return frozenset(p.value for p in Permission if self.grants(p))


@dataclass(frozen=True)
class RoleAssignment:
    """
    Roles held by one user in one server.

    Created on the first role grant; once the last role id is removed the
    record should be deleted, which without_role() signals by returning None.
    """

    server_id: str
    user_id: str
    role_ids: tuple[str, ...] = ()
    id: str | None = None

    def has_role(self, role_id: str) -> bool:
        return role_id in self.role_ids

    def with_role(self, role_id: str) -> RoleAssignment:
        """Return an assignment that includes role_id."""
        if role_id in self.role_ids:
            return self
        return replace(self, role_ids=self.role_ids + (role_id,))

    def without_role(self, role_id: str) -> RoleAssignment | None:
        """Return an assignment without role_id, or None if none remain."""
        remaining = tuple(rid for rid in self.role_ids if rid != role_id)
        if not remaining:
            return None
        if len(remaining) == len(self.role_ids):
            return self
        return replace(self, role_ids=remaining)


@dataclass(frozen=True)
class ChannelPermissionOverride:
    """
    Channel-scoped allow/deny sets for one role or one user.

    Exactly one of role_id and user_id is set; the record boundary enforces
    this before an override ever reaches the engine. A key present in both
    allow and deny is denied.
    """

    channel_id: str
    role_id: str | None = None
    user_id: str | None = None
    allow: frozenset[str] = field(default_factory=frozenset)
    deny: frozenset[str] = field(default_factory=frozenset)
    id: str | None = None

    @property
    def targets_user(self) -> bool:
        return bool(self.user_id)

    @property
    def targets_role(self) -> bool:
        return bool(self.role_id)

    def decision_for(self, permission: str) -> bool | None:
        """
        Return False if the key is denied, True if allowed, None otherwise.

        Deny is checked first so a key in both sets is denied.
        """
        key = str(permission)
        if key in self.deny:
            return False
        if key in self.allow:
            return True
        return None
