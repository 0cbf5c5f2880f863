"""
Servers app: roles, role hierarchy and channel permission resolution.

Records are loaded by the persistence collaborator, validated once through
servers.services.RoleRecordService, and then passed to the pure functions in
servers.hierarchy, servers.permissions and servers.access.

Usage:
    from servers.constants import Permission
    from servers.permissions import resolve_permission

    if resolve_permission(Permission.SEND_MESSAGES, roles, overrides, user_id):
        # forward the message to the persistence collaborator
        ...
"""
