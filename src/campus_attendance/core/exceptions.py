from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, details: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.details = list(details or [])


class AuthenticationError(DomainError):
    """Raised when there is no session or login credentials are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a single addressed row does not exist."""

    status_code = 404


class ConflictError(DomainError):
    """Raised on duplicates and timetable clashes."""

    status_code = 409

    def __init__(self, message: str, conflicts: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.conflicts = list(conflicts or [])
