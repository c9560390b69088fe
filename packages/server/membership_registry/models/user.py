"""User record model."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel

from membership_shared.schemas.common import UserRole


class UserRecord(BaseModel):
    identity: str
    role: UserRole = UserRole.NONE
    profile_ref: str = ""
    registered_at: Optional[datetime] = None
    retired_at: Optional[datetime] = None  # set when a deleted Organization is reset

    @property
    def is_retired(self) -> bool:
        return self.retired_at is not None

    @classmethod
    def empty(cls, identity: str) -> "UserRecord":
        """Read view of an identity that never registered."""
        return cls(identity=identity)

    @classmethod
    def new(cls, identity: str, role: UserRole, profile_ref: str) -> "UserRecord":
        return cls(
            identity=identity,
            role=role,
            profile_ref=profile_ref,
            registered_at=datetime.now(timezone.utc),
        )
