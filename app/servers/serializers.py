"""
Serializers for server role records.

These serializers are the validation boundary between stored documents and
the engine. They accept the camelCase document shape, reject anything the
engine must never see, and build the frozen dataclasses from servers.types.

Serializers:
    RoleSerializer: Role document <-> Role
    ChannelPermissionOverrideSerializer: Override document <-> ChannelPermissionOverride
    RoleAssignmentSerializer: Assignment document <-> RoleAssignment

Usage:
    serializer = ChannelPermissionOverrideSerializer(data=document)
    serializer.is_valid(raise_exception=True)
    override = serializer.save()

    # Back to the document shape
    data = RoleSerializer(role).data
"""

from __future__ import annotations

from collections.abc import Mapping

from rest_framework import serializers

from core.validators import validate_hex_color, validate_no_html
from servers.constants import ROLE_CONFIG, Permission
from servers.types import ChannelPermissionOverride, Role, RoleAssignment


class DocumentIdMixin:
    """Accept the persistence collaborator's "$id" key as "id"."""

    def to_internal_value(self, data):
        if isinstance(data, Mapping) and "id" not in data and "$id" in data:
            data = {**data, "id": data["$id"]}
        return super().to_internal_value(data)


class RoleSerializer(DocumentIdMixin, serializers.Serializer):
    """
    Serializer for role documents.

    Fields:
        id: Role id ("$id" accepted)
        serverId: Owning server
        name: Display name, no markup
        color: Hex color, defaults to the neutral role color
        position: Non-negative seniority
        readMessages ... administrator: Permission flags (default False)
        mentionable: Whether the role can be @mentioned
        memberCount: Optional cached member count
    """

    id = serializers.CharField(max_length=64)
    serverId = serializers.CharField(source="server_id", max_length=64)
    name = serializers.CharField(
        max_length=ROLE_CONFIG.MAX_NAME_LENGTH,
        validators=[validate_no_html],
    )
    color = serializers.CharField(
        default=ROLE_CONFIG.DEFAULT_COLOR,
        validators=[validate_hex_color],
    )
    position = serializers.IntegerField(min_value=0, default=0)
    readMessages = serializers.BooleanField(source="read_messages", default=False)
    sendMessages = serializers.BooleanField(source="send_messages", default=False)
    manageMessages = serializers.BooleanField(
        source="manage_messages", default=False
    )
    manageChannels = serializers.BooleanField(
        source="manage_channels", default=False
    )
    manageRoles = serializers.BooleanField(source="manage_roles", default=False)
    manageServer = serializers.BooleanField(source="manage_server", default=False)
    mentionEveryone = serializers.BooleanField(
        source="mention_everyone", default=False
    )
    administrator = serializers.BooleanField(default=False)
    mentionable = serializers.BooleanField(default=False)
    memberCount = serializers.IntegerField(
        source="member_count",
        min_value=0,
        allow_null=True,
        default=None,
    )

    def create(self, validated_data) -> Role:
        return Role(**validated_data)


class ChannelPermissionOverrideSerializer(DocumentIdMixin, serializers.Serializer):
    """
    Serializer for channel permission override documents.

    Exactly one of roleId and userId must be set. Blank strings count as
    unset, matching how the document store writes empty attributes.
    allow and deny only accept known permission keys.
    """

    id = serializers.CharField(max_length=64, allow_null=True, default=None)
    channelId = serializers.CharField(source="channel_id", max_length=64)
    roleId = serializers.CharField(
        source="role_id",
        max_length=64,
        allow_null=True,
        allow_blank=True,
        default=None,
    )
    userId = serializers.CharField(
        source="user_id",
        max_length=64,
        allow_null=True,
        allow_blank=True,
        default=None,
    )
    allow = serializers.ListField(
        child=serializers.ChoiceField(choices=Permission.choices),
        default=list,
    )
    deny = serializers.ListField(
        child=serializers.ChoiceField(choices=Permission.choices),
        default=list,
    )

    def validate(self, attrs):
        role_id = attrs.get("role_id") or None
        user_id = attrs.get("user_id") or None

        if role_id and user_id:
            message = "Set exactly one of roleId or userId, not both."
            raise serializers.ValidationError(
                {"roleId": [message], "userId": [message]}
            )
        if not role_id and not user_id:
            message = "Set exactly one of roleId or userId."
            raise serializers.ValidationError(
                {"roleId": [message], "userId": [message]}
            )

        attrs["role_id"] = role_id
        attrs["user_id"] = user_id
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["allow"] = sorted(data["allow"])
        data["deny"] = sorted(data["deny"])
        return data

    def create(self, validated_data) -> ChannelPermissionOverride:
        return ChannelPermissionOverride(
            id=validated_data.get("id"),
            channel_id=validated_data["channel_id"],
            role_id=validated_data["role_id"],
            user_id=validated_data["user_id"],
            allow=frozenset(validated_data["allow"]),
            deny=frozenset(validated_data["deny"]),
        )


class RoleAssignmentSerializer(DocumentIdMixin, serializers.Serializer):
    """
    Serializer for role assignment documents.

    roleIds may not be empty: an assignment without roles is deleted rather
    than stored. Duplicate ids are collapsed, keeping first-seen order.
    """

    id = serializers.CharField(max_length=64, allow_null=True, default=None)
    serverId = serializers.CharField(source="server_id", max_length=64)
    userId = serializers.CharField(source="user_id", max_length=64)
    roleIds = serializers.ListField(
        source="role_ids",
        child=serializers.CharField(max_length=64),
        allow_empty=False,
        max_length=ROLE_CONFIG.MAX_ROLES_PER_ASSIGNMENT,
    )

    def create(self, validated_data) -> RoleAssignment:
        return RoleAssignment(
            id=validated_data.get("id"),
            server_id=validated_data["server_id"],
            user_id=validated_data["user_id"],
            role_ids=tuple(dict.fromkeys(validated_data["role_ids"])),
        )
