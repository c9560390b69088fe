"""Domain errors raised by the membership state machine.

Every error rejects the whole requested operation. They are raised before
any mutation, so a caught error always means the registry is unchanged.
"""

from __future__ import annotations

from membership_shared.schemas.common import ErrorCode, ErrorBody


class RegistryError(Exception):
    """Base exception for all registry errors."""

    code: ErrorCode
    status_code: int = 400

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_body(self) -> ErrorBody:
        return ErrorBody(code=self.code, message=self.message, details=self.details)


class Unauthorized(RegistryError):
    """Caller lacks the role or relationship required for the operation."""

    code = ErrorCode.UNAUTHORIZED
    status_code = 403


class InvalidRole(RegistryError):
    """Target identity has the wrong role for the requested relationship."""

    code = ErrorCode.INVALID_ROLE
    status_code = 422


class ConflictingAffiliation(RegistryError):
    """Target is already affiliated in a way incompatible with the request."""

    code = ErrorCode.CONFLICTING_AFFILIATION
    status_code = 409


class NotFound(RegistryError):
    """Target is not in the relationship the operation assumes."""

    code = ErrorCode.NOT_FOUND
    status_code = 404


class InvariantViolation(RegistryError):
    """Raised by consistency checks when the membership index has drifted."""

    code = ErrorCode.INVARIANT_VIOLATION
    status_code = 500
