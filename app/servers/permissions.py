"""
Effective channel permission resolution.

This module decides whether a user holds a permission in a channel, given
the roles assigned to them and the channel's allow/deny overrides.

Resolution Order:
    1. Administrator on any assigned role grants everything
    2. Channel overrides, highest precedence first (first decisive tier wins):
       a. Overrides targeting the user
       b. Overrides targeting each assigned role, senior role first
    3. Base grant from the assigned roles
    4. Default deny

Within one tier deny beats allow, so the full chain reads:
    user-deny > user-allow > senior-role-deny > senior-role-allow > ...
    > junior-role overrides > base role grant

Design Decisions:
    - Overrides are modelled as an ordered chain of OverrideTier values, each
      yielding True, False or None, instead of nested conditionals
    - Overrides for other users, or for roles the user does not hold, are
      ignored rather than rejected
    - Nothing is cached; callers must not reuse decisions across requests

Usage:
    from servers.constants import Permission
    from servers.permissions import explain_permission, resolve_permission

    allowed = resolve_permission(
        Permission.MANAGE_MESSAGES, assigned_roles, channel_overrides, user_id
    )

    decision = explain_permission(
        Permission.SEND_MESSAGES, assigned_roles, channel_overrides, user_id
    )
    logger.info(f"{decision.permission} -> {decision.granted} via {decision.source}")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from servers.constants import PERMISSION_DESCRIPTIONS, Permission, PermissionSource
from servers.hierarchy import sort_roles_by_hierarchy

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from servers.types import ChannelPermissionOverride, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionDecision:
    """
    Outcome of a single permission check.

    Attributes:
        permission: The permission key that was checked
        granted: Whether the permission is held
        source: Which rule decided (PermissionSource value)
        role_id: The deciding role for administrator, role_override and
            role_grant decisions
    """

    permission: str
    granted: bool
    source: str
    role_id: str | None = None


@dataclass(frozen=True)
class OverrideTier:
    """
    One link in the override precedence chain.

    A tier groups every override aimed at the same target (the user, or one
    role). It is decisive when any of its overrides mentions the key.
    """

    source: str
    overrides: tuple[ChannelPermissionOverride, ...]
    role_id: str | None = None

    def decide(self, permission: str) -> bool | None:
        allowed = False
        for override in self.overrides:
            decision = override.decision_for(permission)
            if decision is False:
                return False
            if decision is True:
                allowed = True
        return True if allowed else None


def build_override_chain(
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride],
    user_id: str | None,
) -> tuple[OverrideTier, ...]:
    """
    Build the override tiers for one user, highest precedence first.

    Args:
        assigned_roles: Roles held by the user
        channel_overrides: All overrides of the channel
        user_id: The user being checked (None skips the user tier)

    Returns:
        Tuple of tiers; targets without overrides are omitted
    """
    overrides = tuple(channel_overrides)
    tiers: list[OverrideTier] = []

    if user_id:
        user_overrides = tuple(o for o in overrides if o.user_id == user_id)
        if user_overrides:
            tiers.append(
                OverrideTier(
                    source=PermissionSource.USER_OVERRIDE.value,
                    overrides=user_overrides,
                )
            )

    for role in sort_roles_by_hierarchy(assigned_roles):
        role_overrides = tuple(
            o for o in overrides if o.role_id and o.role_id == role.id
        )
        if role_overrides:
            tiers.append(
                OverrideTier(
                    source=PermissionSource.ROLE_OVERRIDE.value,
                    overrides=role_overrides,
                    role_id=role.id,
                )
            )

    return tuple(tiers)


def _decide(
    permission: str,
    ordered_roles: Sequence[Role],
    chain: Sequence[OverrideTier],
) -> PermissionDecision:
    """Resolve one key against roles already sorted senior first."""
    for role in ordered_roles:
        if role.administrator:
            return PermissionDecision(
                permission=permission,
                granted=True,
                source=PermissionSource.ADMINISTRATOR.value,
                role_id=role.id,
            )

    for tier in chain:
        decision = tier.decide(permission)
        if decision is not None:
            return PermissionDecision(
                permission=permission,
                granted=decision,
                source=tier.source,
                role_id=tier.role_id,
            )

    for role in ordered_roles:
        if role.grants(permission):
            return PermissionDecision(
                permission=permission,
                granted=True,
                source=PermissionSource.ROLE_GRANT.value,
                role_id=role.id,
            )

    return PermissionDecision(
        permission=permission,
        granted=False,
        source=PermissionSource.DEFAULT.value,
    )


def explain_permission(
    permission: str,
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride] = (),
    user_id: str | None = None,
) -> PermissionDecision:
    """
    Resolve a permission and report which rule decided it.

    Args:
        permission: Permission key to check
        assigned_roles: Roles held by the user (already resolved from the
            role assignment)
        channel_overrides: Overrides of the channel being accessed
        user_id: The user being checked

    Returns:
        PermissionDecision with the outcome and its source
    """
    key = str(permission)
    ordered_roles = sort_roles_by_hierarchy(assigned_roles)
    chain = build_override_chain(ordered_roles, channel_overrides, user_id)
    decision = _decide(key, ordered_roles, chain)
    logger.debug(
        f"Permission {key} for user {user_id}: granted={decision.granted} "
        f"source={decision.source} role={decision.role_id}"
    )
    return decision


def resolve_permission(
    permission: str,
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride] = (),
    user_id: str | None = None,
) -> bool:
    """
    Return True if the user holds the permission in the channel.

    See explain_permission() for the arguments and the module docstring for
    the resolution order.
    """
    return explain_permission(
        permission, assigned_roles, channel_overrides, user_id
    ).granted


def get_effective_permissions(
    assigned_roles: Iterable[Role],
    channel_overrides: Iterable[ChannelPermissionOverride] = (),
    user_id: str | None = None,
    is_owner: bool = False,
) -> dict[str, bool]:
    """
    Resolve every permission key at once.

    The server owner and any administrator get every key. Passing no
    overrides yields server-level permissions.

    Returns:
        Dict mapping each permission key to True/False
    """
    if is_owner:
        return {key: True for key in Permission.values}

    ordered_roles = sort_roles_by_hierarchy(assigned_roles)
    chain = build_override_chain(ordered_roles, channel_overrides, user_id)
    return {
        key: _decide(key, ordered_roles, chain).granted for key in Permission.values
    }


def has_permission(permission: str, effective_permissions: dict[str, bool]) -> bool:
    """Check a key in a precomputed map; administrator bypasses the lookup."""
    if effective_permissions.get(Permission.ADMINISTRATOR.value):
        return True
    return bool(effective_permissions.get(str(permission), False))


def is_valid_permission(value: str) -> bool:
    return value in Permission.values


def get_all_permissions() -> list[str]:
    return list(Permission.values)


def get_permission_description(permission: str) -> str:
    return PERMISSION_DESCRIPTIONS.get(str(permission), "")
