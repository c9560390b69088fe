from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field, StringConstraints

MAX_IDENTITY_LENGTH = 128

# Opaque caller/target identity (account address, key fingerprint, ...)
Identity = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_IDENTITY_LENGTH)
]


class UserRole(str, Enum):
    NONE = "none"
    REGULAR = "regular"
    ORGANIZATION = "organization"


# Roles an identity may register with
REGISTRABLE_ROLES: frozenset["UserRole"] = frozenset({UserRole.REGULAR, UserRole.ORGANIZATION})


class ErrorCode(str, Enum):
    UNAUTHORIZED = "unauthorized"
    INVALID_ROLE = "invalid_role"
    CONFLICTING_AFFILIATION = "conflicting_affiliation"
    NOT_FOUND = "not_found"
    INVARIANT_VIOLATION = "invariant_violation"


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
