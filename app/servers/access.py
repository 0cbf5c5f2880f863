"""
Server and channel access summaries.

Route handlers load a user's membership, role assignment, the server's roles
and a channel's overrides, then call into this module to get a compact
answer ("can this user read/send here?") or to enforce a permission.

Key Components:
    resolve_assigned_roles: Map a RoleAssignment to Role records
    applicable_overrides: Keep overrides aimed at the user or their roles
    get_server_access: Server-level permissions for one user
    get_channel_access: Read/send access for one channel
    require_permission: Raise PermissionDeniedError when a check fails

Usage:
    roles = resolve_assigned_roles(assignment, server_roles)
    access = get_channel_access(
        server_id, user_id, roles, channel_overrides,
        is_member=True, is_owner=server.owner_id == user_id,
    )
    if not access.can_send:
        return Response(status=403)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from core.exceptions import PermissionDeniedError
from servers.constants import Permission
from servers.permissions import explain_permission, get_effective_permissions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from servers.types import ChannelPermissionOverride, Role, RoleAssignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServerAccess:
    """Server-level access for one user."""

    server_id: str
    is_server_owner: bool
    is_member: bool
    permissions: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class ChannelAccess:
    """Read/send access for one user in one channel."""

    server_id: str
    is_server_owner: bool
    is_member: bool
    can_read: bool
    can_send: bool


def no_permissions() -> dict[str, bool]:
    return {key: False for key in Permission.values}


def resolve_assigned_roles(
    assignment: RoleAssignment | None,
    server_roles: Iterable[Role],
) -> list[Role]:
    """
    Return the Role records named by a role assignment.

    Role ids without a matching role (deleted roles) are skipped. Roles from
    another server are never returned.
    """
    if assignment is None or not assignment.role_ids:
        return []
    wanted = set(assignment.role_ids)
    return [
        role
        for role in server_roles
        if role.id in wanted and role.server_id == assignment.server_id
    ]


def applicable_overrides(
    overrides: Iterable[ChannelPermissionOverride],
    role_ids: Iterable[str],
    user_id: str,
) -> list[ChannelPermissionOverride]:
    """Keep the overrides that target user_id or one of role_ids."""
    held = set(role_ids)
    return [
        override
        for override in overrides
        if (override.user_id and override.user_id == user_id)
        or (override.role_id and override.role_id in held)
    ]


def get_server_access(
    server_id: str,
    user_id: str,
    assigned_roles: Iterable[Role],
    *,
    is_member: bool,
    is_owner: bool = False,
) -> ServerAccess:
    """
    Compute server-level permissions (no channel overrides).

    The owner always has every permission, even without a membership
    record. Non-members have none.
    """
    if is_owner:
        return ServerAccess(
            server_id=server_id,
            is_server_owner=True,
            is_member=True,
            permissions=get_effective_permissions([], is_owner=True),
        )

    if not is_member:
        return ServerAccess(
            server_id=server_id,
            is_server_owner=False,
            is_member=False,
            permissions=no_permissions(),
        )

    return ServerAccess(
        server_id=server_id,
        is_server_owner=False,
        is_member=True,
        permissions=get_effective_permissions(assigned_roles, user_id=user_id),
    )


def get_channel_access(
    server_id: str,
    user_id: str,
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride] = (),
    *,
    is_member: bool,
    is_owner: bool = False,
) -> ChannelAccess:
    """
    Compute whether a user can read and send in a channel.

    Args:
        server_id: Server owning the channel
        user_id: User requesting access
        assigned_roles: Roles held by the user in the server
        channel_overrides: All overrides of the channel
        is_member: Whether the user is a member of the server
        is_owner: Whether the user owns the server

    Returns:
        ChannelAccess summary
    """
    roles = list(assigned_roles)

    if not is_owner and not is_member:
        return ChannelAccess(
            server_id=server_id,
            is_server_owner=False,
            is_member=False,
            can_read=False,
            can_send=False,
        )

    if is_owner or any(role.administrator for role in roles):
        return ChannelAccess(
            server_id=server_id,
            is_server_owner=is_owner,
            is_member=True,
            can_read=True,
            can_send=True,
        )

    overrides = applicable_overrides(
        channel_overrides, (role.id for role in roles), user_id
    )
    effective = get_effective_permissions(roles, overrides, user_id)
    return ChannelAccess(
        server_id=server_id,
        is_server_owner=False,
        is_member=True,
        can_read=effective[Permission.READ_MESSAGES.value],
        can_send=effective[Permission.SEND_MESSAGES.value],
    )


def require_permission(
    permission: str,
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride] = (),
    user_id: str | None = None,
    *,
    is_owner: bool = False,
) -> None:
    """
    Raise PermissionDeniedError unless the user holds the permission.

    Raises:
        PermissionDeniedError: error_code MISSING_PERMISSION, with the
            permission key and deciding source in details
    """
    if is_owner:
        return

    decision = explain_permission(
        permission, assigned_roles, channel_overrides, user_id
    )
    if decision.granted:
        return

    logger.info(
        f"Denied {decision.permission} to user {user_id} ({decision.source})"
    )
    raise PermissionDeniedError(
        f"Missing permission: {decision.permission}",
        error_code="MISSING_PERMISSION",
        details={
            "permission": decision.permission,
            "source": decision.source,
            "role_id": decision.role_id,
        },
    )
