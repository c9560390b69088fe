"""Identity registration and lookup schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from .common import REGISTRABLE_ROLES, UserRole


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class RegisterRequest(BaseModel):
    """Register (or refresh the profile of) the calling identity."""
    role: UserRole
    profile_ref: str = Field(default="", max_length=512, description="Opaque profile reference, e.g. a content hash")

    @field_validator("role")
    @classmethod
    def _registrable(cls, value: UserRole) -> UserRole:
        if value not in REGISTRABLE_ROLES:
            raise ValueError("role must be 'regular' or 'organization'")
        return value


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class UserResponse(BaseModel):
    """Read view of a user record: role, profile reference and members."""
    identity: str
    role: UserRole
    profile_ref: str = ""
    members: List[str] = Field(default_factory=list)


class MembershipResponse(BaseModel):
    """Affiliation of a single identity."""
    identity: str
    member_of: str | None = None
    manager_of: str | None = None
    member_index: int = 0
