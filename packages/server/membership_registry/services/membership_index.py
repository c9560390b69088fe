"""
Membership index — who belongs to which Organization, and at what position.

Stores:
- members: organization → ordered list of member identities
- member_of: identity → organization
- manager_of: identity → organization
- member_index: identity → position in members[organization]

The list and the position map are always updated together. The mutating
primitives assume their preconditions were checked by the membership manager;
they do not re-validate.
"""

from __future__ import annotations

import copy
from typing import Any, Optional

from ..core.errors import InvariantViolation


class MembershipIndex:
    """Parallel list + position map with O(1) swap-remove."""

    def __init__(self) -> None:
        self._members: dict[str, list[str]] = {}
        self._member_of: dict[str, str] = {}
        self._manager_of: dict[str, str] = {}
        self._member_index: dict[str, int] = {}

    # --- Readers ---

    def member_of(self, identity: str) -> Optional[str]:
        return self._member_of.get(identity)

    def manager_of(self, identity: str) -> Optional[str]:
        return self._manager_of.get(identity)

    def index_of(self, identity: str) -> int:
        return self._member_index.get(identity, 0)

    def members(self, organization: str) -> list[str]:
        return list(self._members.get(organization, ()))

    def member_count(self, organization: str) -> int:
        return len(self._members.get(organization, ()))

    def organizations(self) -> list[str]:
        """Organizations that currently have at least one member."""
        return [org for org, members in self._members.items() if members]

    # --- Mutating primitives ---

    def append_member(self, organization: str, identity: str) -> int:
        members = self._members.setdefault(organization, [])
        members.append(identity)
        position = len(members) - 1
        self._member_of[identity] = organization
        self._member_index[identity] = position
        return position

    def remove_member(self, organization: str, identity: str) -> None:
        members = self._members[organization]
        position = self._member_index[identity]
        last = members[-1]

        members[position] = last
        self._member_index[last] = position
        members.pop()

        del self._member_of[identity]
        del self._member_index[identity]
        if not members:
            del self._members[organization]

    def set_manager(self, organization: str, identity: str) -> None:
        self._manager_of[identity] = organization

    def clear_manager(self, identity: str) -> None:
        self._manager_of.pop(identity, None)

    def clear_organization(self, organization: str) -> list[str]:
        """Drop every member's relations to `organization`; returns the former members."""
        former = self._members.pop(organization, [])
        for identity in former:
            del self._member_of[identity]
            del self._member_index[identity]
            if self._manager_of.get(identity) == organization:
                del self._manager_of[identity]
        return former

    # --- Diagnostics ---

    def snapshot(self) -> dict[str, Any]:
        return {
            "members": copy.deepcopy(self._members),
            "member_of": dict(self._member_of),
            "manager_of": dict(self._manager_of),
            "member_index": dict(self._member_index),
        }

    def verify(self) -> None:
        """Raise InvariantViolation if the list and the relation maps disagree."""
        listed: set[str] = set()
        for organization, members in self._members.items():
            for position, identity in enumerate(members):
                if identity in listed:
                    raise InvariantViolation(
                        "identity listed more than once",
                        details={"identity": identity, "organization": organization},
                    )
                listed.add(identity)
                if self._member_of.get(identity) != organization:
                    raise InvariantViolation(
                        "member list and member_of disagree",
                        details={"identity": identity, "organization": organization},
                    )
                if self._member_index.get(identity) != position:
                    raise InvariantViolation(
                        "member index is stale",
                        details={"identity": identity, "organization": organization, "position": position},
                    )

        if set(self._member_of) != listed or set(self._member_index) != listed:
            raise InvariantViolation("relation maps reference identities missing from member lists")

        for identity, organization in self._manager_of.items():
            if self._member_of.get(identity) != organization:
                raise InvariantViolation(
                    "manager is not a member of the organization it manages",
                    details={"identity": identity, "organization": organization},
                )
