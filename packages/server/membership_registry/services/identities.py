"""
Identity registry — identity to user record (role + profile reference).
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from membership_shared.schemas.common import REGISTRABLE_ROLES, UserRole

from ..core.errors import InvalidRole, Unauthorized
from ..models.user import UserRecord

log = structlog.get_logger()


class IdentityRegistry:
    """Owns one UserRecord per registered identity."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}

    def __contains__(self, identity: str) -> bool:
        return identity in self._users

    def __len__(self) -> int:
        return len(self._users)

    def is_registered(self, identity: str) -> bool:
        record = self._users.get(identity)
        return record is not None and not record.is_retired

    def get(self, identity: str) -> UserRecord:
        """Return a copy of the identity's record; unknown identities read as empty."""
        record = self._users.get(identity)
        if record is None:
            return UserRecord.empty(identity)
        return record.model_copy()

    def role_of(self, identity: str) -> UserRole:
        record = self._users.get(identity)
        return record.role if record else UserRole.NONE

    def register(self, identity: str, role: UserRole, profile_ref: str = "") -> UserRecord:
        """Create the caller's record, or refresh its profile reference.

        The role is fixed by the first registration. Registering again with the
        same role only replaces `profile_ref`; a different role, or any
        registration of a deleted Organization, is rejected.
        """
        if not identity:
            raise Unauthorized("caller identity is required")
        role = UserRole(role)
        if role not in REGISTRABLE_ROLES:
            raise InvalidRole(
                f"cannot register with role '{role.value}'",
                details={"identity": identity, "role": role.value},
            )

        existing = self._users.get(identity)
        if existing is None:
            record = UserRecord.new(identity, role, profile_ref)
            self._users[identity] = record
            log.info("identity.registered", identity=identity, role=role.value)
            return record.model_copy()

        if existing.is_retired:
            raise InvalidRole(
                "identity belonged to a deleted organization and cannot register again",
                details={"identity": identity},
            )
        if existing.role != role:
            raise InvalidRole(
                f"role is fixed at registration ({existing.role.value})",
                details={"identity": identity, "role": existing.role.value, "requested": role.value},
            )

        existing.profile_ref = profile_ref
        log.info("identity.profile_updated", identity=identity)
        return existing.model_copy()

    def retire(self, identity: str) -> None:
        """Reset a deleted Organization to the `none` state.

        Only the membership manager calls this, after it has cleared the
        organization's members.
        """
        record = self._users[identity]
        record.role = UserRole.NONE
        record.profile_ref = ""
        record.retired_at = datetime.now(timezone.utc)
        log.info("identity.retired", identity=identity)
