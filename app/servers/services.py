"""
Record loading for the access engine.

RoleRecordService turns raw documents from the persistence collaborator into
validated dataclasses. Documents are validated once here; everything
downstream (hierarchy, permissions, access) trusts its input.

Error Codes:
    INVALID_ROLE: Role document failed validation
    INVALID_OVERRIDE: Channel override document failed validation
    INVALID_ROLE_ASSIGNMENT: Role assignment document failed validation

Usage:
    roles = RoleRecordService.load_roles(role_documents)
    overrides = RoleRecordService.load_overrides(override_documents, strict=False)
    assignment = RoleRecordService.load_assignment(assignment_document)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from rest_framework import serializers

from core.exceptions import ValidationError
from core.services import BaseService, flatten_errors
from servers.serializers import (
    ChannelPermissionOverrideSerializer,
    RoleAssignmentSerializer,
    RoleSerializer,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

    from servers.types import ChannelPermissionOverride, Role, RoleAssignment


class RoleRecordService(BaseService):
    """
    Stateless loaders for role, override and assignment documents.

    Single-record loaders raise core.exceptions.ValidationError with the
    offending fields in details. Bulk loaders either raise on the first bad
    document (strict) or skip it with a warning.
    """

    @classmethod
    def _load(
        cls,
        serializer_class: type[serializers.Serializer],
        document: Mapping[str, Any],
        error_message: str,
        error_code: str,
    ):
        serializer = serializer_class(data=document)
        if not serializer.is_valid():
            raise ValidationError(
                error_message,
                error_code=error_code,
                details=flatten_errors(serializer.errors),
            )
        return serializer.save()

    @classmethod
    def _load_many(
        cls,
        loader,
        documents: Iterable[Mapping[str, Any]],
        strict: bool,
    ) -> list:
        records = []
        for document in documents:
            try:
                records.append(loader(document))
            except ValidationError as e:
                if strict:
                    raise
                document_id = (
                    document.get("$id", document.get("id"))
                    if isinstance(document, Mapping)
                    else None
                )
                cls.get_logger().warning(
                    f"Skipping document {document_id}: "
                    f"{e.error_code} {e.details}"
                )
        return records

    @classmethod
    def load_role(cls, document: Mapping[str, Any]) -> Role:
        """
        Validate a role document.

        Raises:
            ValidationError: INVALID_ROLE with field errors
        """
        return cls._load(RoleSerializer, document, "Invalid role", "INVALID_ROLE")

    @classmethod
    def load_override(cls, document: Mapping[str, Any]) -> ChannelPermissionOverride:
        """
        Validate a channel permission override document.

        Raises:
            ValidationError: INVALID_OVERRIDE with field errors, e.g. unknown
                permission keys or a roleId/userId targeting error
        """
        return cls._load(
            ChannelPermissionOverrideSerializer,
            document,
            "Invalid permission override",
            "INVALID_OVERRIDE",
        )

    @classmethod
    def load_assignment(cls, document: Mapping[str, Any]) -> RoleAssignment:
        """
        Validate a role assignment document.

        Raises:
            ValidationError: INVALID_ROLE_ASSIGNMENT with field errors
        """
        return cls._load(
            RoleAssignmentSerializer,
            document,
            "Invalid role assignment",
            "INVALID_ROLE_ASSIGNMENT",
        )

    @classmethod
    def load_roles(
        cls,
        documents: Iterable[Mapping[str, Any]],
        strict: bool = True,
    ) -> list[Role]:
        return cls._load_many(cls.load_role, documents, strict)

    @classmethod
    def load_overrides(
        cls,
        documents: Iterable[Mapping[str, Any]],
        strict: bool = True,
    ) -> list[ChannelPermissionOverride]:
        return cls._load_many(cls.load_override, documents, strict)
