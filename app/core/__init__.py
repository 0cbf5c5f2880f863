"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

- Generic, reusable base classes (no domain-specific logic)
- Clear extension points for domain apps
- Infrastructure concerns separated from business logic

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Record and request validation failures
    - PermissionDeniedError: Authorization failures

Validators (import from core.validators):
    - validate_hex_color: Six-digit hex color codes
    - validate_clock_time: 24-hour HH:mm wall-clock times
    - validate_no_html: Reject markup in display names
"""
