"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Service Layer Philosophy:
    Services sit between route handlers and the resolution engine. Handlers
    deal with HTTP, the persistence collaborator deals with documents, and
    services validate records once and hand typed values to the engine.

Pattern Comparison:
    - ServiceResult: Use for expected failures (invalid payloads, bad durations)
    - Exceptions: Use where the caller cannot continue (core.exceptions)

Usage:
    from core.services import BaseService, ServiceResult

    class NotificationSettingsService(BaseService):
        @classmethod
        def unmute(cls, settings, scope, target_id) -> ServiceResult[NotificationSettings]:
            ...
            cls.get_logger().info(f"Unmuted {scope} {target_id}")
            return ServiceResult.success(updated)

    # In a route handler
    result = NotificationSettingsService.mute(settings, "server", server_id, data)
    if result.success:
        persist(settings_to_document(result.data))
        return Response(status=204)
    return Response(result.to_response(), status=400)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from typing import Any

    from core.exceptions import BaseApplicationError

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(updated_settings)

        # Validation errors with field details
        return ServiceResult.failure(
            "Invalid mute request",
            error_code="VALIDATION_ERROR",
            errors={"duration": ['"2h" is not a valid choice.']},
        )
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def ok(cls, data: T) -> ServiceResult[T]:
        """Alias for success() - use whichever reads better in context."""
        return cls(success=True, data=data)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_error(cls, exc: BaseApplicationError) -> ServiceResult[T]:
        """
        Create a failed result from an application error.

        The error's details become the field-level errors, so a
        core.exceptions.ValidationError raised by a record loader keeps
        its per-field messages.

        Example:
            try:
                override = RoleRecordService.load_override(document)
            except ValidationError as e:
                return ServiceResult.from_error(e)
        """
        return cls(
            success=False,
            error=exc.message,
            error_code=exc.error_code,
            errors=exc.details or None,
        )

    def to_response(self) -> dict[str, Any]:
        """
        Convert to API response format.

        Returns:
            Dict with success status and data or error details
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {
            "success": False,
            "error": self.error,
        }
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def map(self, func) -> ServiceResult:
        """
        Transform the data if successful.

        Example:
            result = NotificationSettingsService.unmute(settings, "channel", channel_id)
            document = result.map(settings_to_document)
        """
        if self.success and self.data is not None:
            return ServiceResult.success(func(self.data))
        return self  # type: ignore

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services are stateless and perform no I/O of their own
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    def validation_failure(
        cls,
        message: str,
        errors: dict[str, Any],
        error_code: str = "VALIDATION_ERROR",
    ) -> ServiceResult:
        """
        Build a failure result from serializer errors and log it.

        DRF error lists hold ErrorDetail objects; they are flattened to
        plain strings so the result can be rendered or compared directly.

        Args:
            message: Human-readable summary
            errors: serializer.errors (field -> list of messages)
            error_code: Machine-readable code

        Returns:
            ServiceResult.failure with field-level errors
        """
        flattened = flatten_errors(errors)
        cls.get_logger().info(f"{message}: {sorted(flattened)}")
        return ServiceResult.failure(message, error_code=error_code, errors=flattened)


def flatten_errors(errors: dict[str, Any]) -> dict[str, list[str]]:
    """Convert nested DRF error structures into field -> [message] lists."""
    flattened: dict[str, list[str]] = {}
    for field_name, value in errors.items():
        if isinstance(value, dict):
            for nested_name, messages in flatten_errors(value).items():
                flattened[f"{field_name}.{nested_name}"] = messages
        elif isinstance(value, (list, tuple)):
            messages: list[str] = []
            for item in value:
                if isinstance(item, dict):
                    for nested_name, nested in flatten_errors(item).items():
                        flattened[f"{field_name}.{nested_name}"] = nested
                else:
                    messages.append(str(item))
            if messages:
                flattened[field_name] = messages
        else:
            flattened[field_name] = [str(value)]
    return flattened
