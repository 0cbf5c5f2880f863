"""
Role hierarchy ordering.

Roles are ranked by position, higher first. Roles sharing a position are
ordered by id ascending, so the ordering is total and does not depend on the
order the persistence collaborator returned the documents in.

Usage:
    from servers.hierarchy import can_manage_role, sort_roles_by_hierarchy

    senior_first = sort_roles_by_hierarchy(server_roles)
    if can_manage_role(actor_roles, target_role, is_owner=actor_is_owner):
        ...
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from servers.types import Role

logger = logging.getLogger(__name__)


def hierarchy_key(role: Role) -> tuple[int, str]:
    """Sort key placing senior roles first, ties broken by id ascending."""
    return (-role.position, role.id)


def sort_roles_by_hierarchy(roles: Iterable[Role]) -> list[Role]:
    """
    Return roles ordered most senior first.

    The input is not modified. Sorting an already sorted list returns the
    same order.

    Args:
        roles: Roles of a single server

    Returns:
        New list ordered by position descending, then id ascending
    """
    return sorted(roles, key=hierarchy_key)


def get_highest_role(roles: Iterable[Role]) -> Role | None:
    """Return the most senior role, or None if there are no roles."""
    ordered = sort_roles_by_hierarchy(roles)
    return ordered[0] if ordered else None


def can_manage_role(
    user_roles: Iterable[Role],
    target_role: Role,
    is_owner: bool = False,
) -> bool:
    """
    Check whether a user may edit, assign or delete target_role.

    Rules:
        - The server owner can manage every role
        - An administrator can manage every non-administrator role
        - Otherwise the user needs manageRoles on some role, and their
          highest role must sit strictly above the target

    Args:
        user_roles: Roles assigned to the acting user
        target_role: Role being managed
        is_owner: Whether the acting user owns the server

    Returns:
        True if the user can manage the target role
    """
    if is_owner:
        return True

    roles = list(user_roles)

    if any(role.administrator for role in roles) and not target_role.administrator:
        return True

    if not any(role.manage_roles for role in roles):
        return False

    highest = get_highest_role(roles)
    if highest is None:
        return False

    allowed = highest.position > target_role.position
    logger.debug(
        f"Role management check: highest={highest.id}@{highest.position} "
        f"target={target_role.id}@{target_role.position} allowed={allowed}"
    )
    return allowed
