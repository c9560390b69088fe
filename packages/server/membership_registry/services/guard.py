"""
Authorization guard — read-only precondition checks for membership mutations.

Each check raises a typed RegistryError naming the failed precondition. Batch
checks also reject an identity named twice in one batch, with the error its
second application would have raised.
"""

from __future__ import annotations

from typing import Iterable

from membership_shared.schemas.common import UserRole

from ..core.errors import ConflictingAffiliation, InvalidRole, NotFound, Unauthorized
from .identities import IdentityRegistry
from .membership_index import MembershipIndex


class AuthorizationGuard:
    """Predicates over the identity registry and membership index."""

    def __init__(self, identities: IdentityRegistry, index: MembershipIndex) -> None:
        self._identities = identities
        self._index = index

    # --- Caller checks ---

    def require_organization(self, caller: str) -> str:
        """The caller must itself be an Organization; returns it."""
        if self._identities.role_of(caller) != UserRole.ORGANIZATION:
            raise Unauthorized(
                "caller is not an organization",
                details={"caller": caller},
            )
        return caller

    def acting_organization(self, caller: str, *, require_members: bool = False) -> str:
        """Resolve the Organization the caller acts for.

        An Organization acts for itself (optionally only once it has members);
        a Manager acts for the Organization it manages.
        """
        if self._identities.role_of(caller) == UserRole.ORGANIZATION:
            if require_members and self._index.member_count(caller) == 0:
                raise Unauthorized(
                    "organization has no members",
                    details={"caller": caller},
                )
            return caller

        managed = self._index.manager_of(caller)
        if managed is not None:
            return managed

        raise Unauthorized(
            "caller is neither an organization nor a manager",
            details={"caller": caller},
        )

    # --- Target checks ---

    def check_can_join(self, candidates: Iterable[str]) -> None:
        seen: set[str] = set()
        for candidate in candidates:
            if self._identities.role_of(candidate) != UserRole.REGULAR:
                raise InvalidRole(
                    "only regular identities can become members",
                    details={"identity": candidate, "role": self._identities.role_of(candidate).value},
                )
            current = self._index.member_of(candidate)
            if current is not None or candidate in seen:
                raise ConflictingAffiliation(
                    "identity is already a member of an organization",
                    details={"identity": candidate, "organization": current},
                )
            seen.add(candidate)

    def check_are_members(self, organization: str, targets: Iterable[str]) -> None:
        seen: set[str] = set()
        for target in targets:
            if target in seen or self._index.member_of(target) != organization:
                raise NotFound(
                    "identity is not a member of this organization",
                    details={"identity": target, "organization": organization},
                )
            seen.add(target)

    def check_can_promote(self, organization: str, candidates: Iterable[str]) -> None:
        seen: set[str] = set()
        for candidate in candidates:
            if self._index.member_of(candidate) != organization:
                raise InvalidRole(
                    "only current members can become managers",
                    details={"identity": candidate, "organization": organization},
                )
            current = self._index.manager_of(candidate)
            if current is not None or candidate in seen:
                raise ConflictingAffiliation(
                    "identity is already a manager",
                    details={"identity": candidate, "organization": current or organization},
                )
            seen.add(candidate)

    def check_are_managers(self, organization: str, targets: Iterable[str]) -> None:
        seen: set[str] = set()
        for target in targets:
            if target in seen or self._index.manager_of(target) != organization:
                raise NotFound(
                    "identity is not a manager of this organization",
                    details={"identity": target, "organization": organization},
                )
            seen.add(target)
