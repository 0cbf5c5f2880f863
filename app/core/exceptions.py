"""
Base exception classes for application-wide error handling.

This module provides a small exception hierarchy shared by the servers and
notifications apps:
- Consistent error payloads for route handlers
- Machine-readable error codes for client handling
- Field-level details for validation failures

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Record or request validation failures
    └── PermissionDeniedError - Authorization failures

Usage:
    from core.exceptions import PermissionDeniedError, ValidationError

    # Raise with message only
    raise ValidationError("Invalid notification level")

    # Raise with field details
    raise ValidationError(
        "Invalid permission override",
        error_code="INVALID_OVERRIDE",
        details={"allow": ['"banMembers" is not a valid choice.']},
    )

    # Convert to dict for API response
    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=400)

Note:
    The resolution engine itself never raises; these exceptions belong to the
    boundary that builds engine inputs and to authorization helpers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)

    Example:
        try:
            role = RoleRecordService.load_role(document)
        except ValidationError as e:
            logger.warning(f"Rejected role document: {e.error_code}")
            return Response(e.to_dict(), status=400)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Invalid permission override",
                "error_code": "INVALID_OVERRIDE",
                "details": {"roleId": ["Set exactly one of roleId or userId."]}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when a record or request fails validation.

    Use for:
    - Unknown permission keys in an override
    - Overrides targeting both a role and a user, or neither
    - Malformed notification levels, mute durations or quiet-hours clocks
    - Notification contexts mixing a conversation with a channel or server

    The details dict maps each offending field to its error messages, in
    the same shape DRF uses for serializer.errors.
    """

    default_error_code: str = "VALIDATION_ERROR"


class PermissionDeniedError(BaseApplicationError):
    """
    Raised when a user lacks a permission for an operation.

    Example:
        if not resolve_permission(Permission.MANAGE_MESSAGES, roles, overrides, user_id):
            raise PermissionDeniedError(
                "You cannot manage messages in this channel",
                error_code="MISSING_PERMISSION",
                details={"permission": "manageMessages", "channel_id": channel_id},
            )

    Note:
        For authentication failures (missing/invalid session), the session
        collaborator responds directly. Use this for authorization failures.
    """

    default_error_code: str = "PERMISSION_DENIED"
