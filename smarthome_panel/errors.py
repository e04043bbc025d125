"""
Error taxonomy for the control panel.

Every error is a DRF APIException so it is recovered at the request
boundary and turned into a user-facing message instead of a crash.
"""
from rest_framework import exceptions, status


class NotFoundError(exceptions.NotFound):
    """Raised when an id or name has no matching record."""
    default_detail = 'Not found.'


class ValidationError(exceptions.ValidationError):
    """Raised when a create/update payload fails validation."""


class AuthError(exceptions.AuthenticationFailed):
    """Raised when credentials or tokens do not match."""
    default_detail = 'Invalid email or password.'


class AuthorizationError(exceptions.PermissionDenied):
    """Raised when a non-admin attempts an admin-only mutation."""
    default_detail = 'Admin role required.'


class ExternalServiceError(exceptions.APIException):
    """Raised when the LLM endpoint or another backend fails or times out."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'External service unavailable.'
    default_code = 'external_service_error'
