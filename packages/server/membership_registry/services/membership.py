"""
Membership manager — the membership state machine.

Every public operation follows read-validate-then-write: the authorization
guard checks the caller and every identity in the batch first, and the
membership index is only touched once all checks pass. A rejected call
therefore leaves the registry exactly as it was.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from membership_shared.schemas.common import UserRole
from membership_shared.schemas.membership import MembershipEventType
from membership_shared.schemas.users import MembershipResponse, UserResponse

from ..core.errors import RegistryError
from ..core.events import EventLog
from .guard import AuthorizationGuard
from .identities import IdentityRegistry
from .membership_index import MembershipIndex

log = structlog.get_logger()


class MembershipManager:
    """Mutating operations over the identity registry and membership index."""

    def __init__(
        self,
        identities: IdentityRegistry,
        index: MembershipIndex,
        events: EventLog | None = None,
    ) -> None:
        self.identities = identities
        self.index = index
        self.events = events if events is not None else EventLog()
        self.guard = AuthorizationGuard(identities, index)

    # --- Reads ---

    def get_user(self, identity: str) -> UserResponse:
        record = self.identities.get(identity)
        members = self.index.members(identity) if record.role == UserRole.ORGANIZATION else []
        return UserResponse(
            identity=identity,
            role=record.role,
            profile_ref=record.profile_ref,
            members=members,
        )

    def member_of(self, identity: str) -> str | None:
        return self.index.member_of(identity)

    def manager_of(self, identity: str) -> str | None:
        return self.index.manager_of(identity)

    def member_index(self, identity: str) -> int:
        return self.index.index_of(identity)

    def membership(self, identity: str) -> MembershipResponse:
        return MembershipResponse(
            identity=identity,
            member_of=self.index.member_of(identity),
            manager_of=self.index.manager_of(identity),
            member_index=self.index.index_of(identity),
        )

    # --- Registration ---

    def register(self, caller: str, role: UserRole, profile_ref: str = "") -> UserResponse:
        try:
            self.identities.register(caller, role, profile_ref)
        except RegistryError as exc:
            self._rejected("register", caller, exc)
            raise
        self.events.record(MembershipEventType.USER_REGISTERED, actor=caller, identities=[caller])
        return self.get_user(caller)

    # --- Members ---

    def organization_add_members(self, caller: str, to_add: Sequence[str]) -> str:
        """Append regular, unaffiliated identities to the caller's organization.

        A Manager adds on behalf of the organization it manages. Returns the
        organization the members were added to.
        """
        to_add = list(to_add)
        try:
            organization = self.guard.acting_organization(caller)
            self.guard.check_can_join(to_add)
        except RegistryError as exc:
            self._rejected("add_members", caller, exc)
            raise

        for candidate in to_add:
            self.index.append_member(organization, candidate)

        log.info("membership.members_added", organization=organization, caller=caller, count=len(to_add))
        self.events.record(
            MembershipEventType.MEMBERS_ADDED, actor=caller, organization=organization, identities=to_add
        )
        return organization

    def organization_remove_members(self, caller: str, to_remove: Sequence[str]) -> str:
        """Remove members from the organization the caller acts for.

        Callers are the organization itself (once it has members) or one of
        its managers. A removed manager loses the manager role first.
        """
        to_remove = list(to_remove)
        try:
            organization = self.guard.acting_organization(caller, require_members=True)
            self.guard.check_are_members(organization, to_remove)
        except RegistryError as exc:
            self._rejected("remove_members", caller, exc)
            raise

        for target in to_remove:
            if self.index.manager_of(target) is not None:
                self.index.clear_manager(target)
            self.index.remove_member(organization, target)

        log.info("membership.members_removed", organization=organization, caller=caller, count=len(to_remove))
        self.events.record(
            MembershipEventType.MEMBERS_REMOVED, actor=caller, organization=organization, identities=to_remove
        )
        return organization

    # --- Managers ---

    def organization_add_managers(self, caller: str, to_add: Sequence[str]) -> str:
        to_add = list(to_add)
        try:
            organization = self.guard.require_organization(caller)
            self.guard.check_can_promote(organization, to_add)
        except RegistryError as exc:
            self._rejected("add_managers", caller, exc)
            raise

        for candidate in to_add:
            self.index.set_manager(organization, candidate)

        log.info("membership.managers_added", organization=organization, count=len(to_add))
        self.events.record(
            MembershipEventType.MANAGERS_ADDED, actor=caller, organization=organization, identities=to_add
        )
        return organization

    def organization_remove_managers(self, caller: str, to_remove: Sequence[str]) -> str:
        to_remove = list(to_remove)
        try:
            organization = self.guard.require_organization(caller)
            self.guard.check_are_managers(organization, to_remove)
        except RegistryError as exc:
            self._rejected("remove_managers", caller, exc)
            raise

        for target in to_remove:
            self.index.clear_manager(target)

        log.info("membership.managers_removed", organization=organization, count=len(to_remove))
        self.events.record(
            MembershipEventType.MANAGERS_REMOVED, actor=caller, organization=organization, identities=to_remove
        )
        return organization

    # --- Deletion ---

    def delete_organization(self, caller: str) -> list[str]:
        """Delete the caller's organization and cascade through its members.

        Managers cannot delete. Every former member keeps its own record but
        loses member_of, member_index and manager_of. Returns the former members.
        """
        try:
            organization = self.guard.require_organization(caller)
        except RegistryError as exc:
            self._rejected("delete_organization", caller, exc)
            raise

        former = self.index.clear_organization(organization)
        self.identities.retire(organization)

        log.info("membership.organization_deleted", organization=organization, former_members=len(former))
        self.events.record(
            MembershipEventType.ORGANIZATION_DELETED, actor=caller, organization=organization, identities=former
        )
        return former

    def _rejected(self, operation: str, caller: str, exc: RegistryError) -> None:
        log.info(
            "membership.rejected",
            operation=operation,
            caller=caller,
            code=exc.code.value,
            reason=exc.message,
            details=exc.details,
        )
