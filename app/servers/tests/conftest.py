"""
Test configuration and fixtures for server role tests.

This module provides:
- A baseline member role and a senior moderator role
- Administrator and owner-style fixtures
- Document fixtures in the stored camelCase shape

Usage:
    def test_example(member_role, moderator_role):
        assert resolve_permission(Permission.SEND_MESSAGES, [member_role])
"""

import pytest

from servers.tests.factories import CHANNEL_ID, SERVER_ID, RoleFactory


# =============================================================================
# Identity Fixtures
# =============================================================================


@pytest.fixture
def user_id():
    """The user whose permissions are being checked."""
    return "user-alice"


@pytest.fixture
def other_user_id():
    """A different user, for overrides that must not apply."""
    return "user-bob"


# =============================================================================
# Role Fixtures
# =============================================================================


@pytest.fixture
def member_role():
    """Junior role that can read and send."""
    return RoleFactory(
        id="role-member",
        name="Member",
        position=1,
        read_messages=True,
        send_messages=True,
    )


@pytest.fixture
def moderator_role():
    """Senior role that can manage messages and roles."""
    return RoleFactory(
        id="role-moderator",
        name="Moderator",
        position=5,
        read_messages=True,
        send_messages=True,
        manage_messages=True,
        manage_roles=True,
    )


@pytest.fixture
def admin_role():
    """Administrator role; grants everything."""
    return RoleFactory(
        id="role-admin",
        name="Admin",
        position=10,
        administrator=True,
    )


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def role_document():
    """A valid role document as returned by the persistence collaborator."""
    return {
        "$id": "role-member",
        "serverId": SERVER_ID,
        "name": "Member",
        "color": "#5865F2",
        "position": 1,
        "readMessages": True,
        "sendMessages": True,
    }


@pytest.fixture
def override_document():
    """A valid role override document denying sendMessages."""
    return {
        "$id": "override-1",
        "channelId": CHANNEL_ID,
        "roleId": "role-member",
        "userId": "",
        "allow": [],
        "deny": ["sendMessages"],
    }


@pytest.fixture
def assignment_document():
    """A valid role assignment document."""
    return {
        "$id": "assignment-1",
        "serverId": SERVER_ID,
        "userId": "user-alice",
        "roleIds": ["role-member", "role-moderator"],
    }
