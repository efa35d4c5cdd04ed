"""
Service error taxonomy.

Each error carries the HTTP status and error code the API layer responds with.
"""
from fastapi import status


class PayrollServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotAuthorized(PayrollServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "NOT_AUTHORIZED"


class ValidationError(PayrollServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class NotFound(PayrollServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(PayrollServiceError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"


class DependencyError(PayrollServiceError):
    """Store or identity-provider failure not otherwise classified."""
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "DEPENDENCY_ERROR"


class IdentityLookupError(DependencyError):
    error_code = "IDENTITY_LOOKUP_FAILED"
