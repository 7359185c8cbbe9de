"""
Domain exceptions.

Services raise these; the handler registered in ``projector.main`` turns
them into JSON responses of the form ``{"detail": ..., "error": ...}``.
"""

from typing import Any, Optional

from fastapi import status


class ProjectorError(Exception):
    """Base exception for all domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "projector_error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFoundError(ProjectorError):
    """Raised when the requested record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(f"{entity_type} '{entity_id}' not found")
        self.entity_type = entity_type
        self.entity_id = entity_id


class UnauthorizedError(ProjectorError):
    """Raised when the requester may not perform an operation on a record."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "unauthorized"

    def __init__(self, operation: str, resource: Optional[str] = None):
        super().__init__(
            f"Not authorized to {operation}" + (f" {resource}" if resource else "")
        )
        self.operation = operation


class AuthenticationError(ProjectorError):
    """Raised when credentials or the bearer token cannot be verified."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_failed"


class ConflictError(ProjectorError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class StoreError(ProjectorError):
    """Raised when the database cannot complete an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "store_error"
