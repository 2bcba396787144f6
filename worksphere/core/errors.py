"""
Error Taxonomy Module

Every failure the services can report maps to exactly one HTTP status code.
Services raise these exceptions; the handler registered in ``worksphere.main``
renders them as ``{"detail": message}``.
"""


class WorkSphereError(Exception):
    """Base class for all application errors."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkSphereError):
    """A required field is missing or a value is malformed."""
    status_code = 400


class AuthenticationError(WorkSphereError):
    """No usable identity was supplied, or credentials were wrong."""
    status_code = 401


class PermissionDeniedError(WorkSphereError):
    """The requester is known but may not perform the action."""
    status_code = 403


class NotFoundError(WorkSphereError):
    """An id lookup missed."""
    status_code = 404


class ConflictError(WorkSphereError):
    """A uniqueness rule would be broken (duplicate username)."""
    status_code = 409


class StorageError(WorkSphereError):
    """The underlying store failed to load or persist a record."""
    status_code = 500
