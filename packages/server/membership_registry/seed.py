"""
Seed the registry from a YAML file.

Format:

    users:
      - {identity: acme, role: organization, profile_ref: Qm...}
      - {identity: alice, role: regular}
    organizations:
      - identity: acme
        members: [alice]
        managers: [alice]

Everything goes through the membership manager, so a seed file that breaks a
membership rule fails with the same error the API would return. The seed is
rehearsed on a scratch store first; a failing seed leaves the live store
untouched.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field

from membership_shared.schemas.common import Identity, UserRole

from .core.store import create_store
from .services.membership import MembershipManager

log = structlog.get_logger()


class SeedUser(BaseModel):
    identity: Identity
    role: UserRole
    profile_ref: str = ""


class SeedOrganization(BaseModel):
    identity: Identity
    members: list[Identity] = Field(default_factory=list)
    managers: list[Identity] = Field(default_factory=list)


class SeedData(BaseModel):
    users: list[SeedUser] = Field(default_factory=list)
    organizations: list[SeedOrganization] = Field(default_factory=list)


def load_seed(path: str | Path) -> SeedData:
    """Load and validate a seed file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return SeedData.model_validate(raw)


def apply_seed(manager: MembershipManager, seed: SeedData) -> None:
    """Apply the seed as one unit: all of it, or none of it."""
    _apply(create_store().manager, seed)
    _apply(manager, seed)
    log.info("seed.applied", users=len(seed.users), organizations=len(seed.organizations))


def _apply(manager: MembershipManager, seed: SeedData) -> None:
    for user in seed.users:
        manager.register(user.identity, user.role, user.profile_ref)

    for org in seed.organizations:
        if org.members:
            manager.organization_add_members(org.identity, org.members)
        if org.managers:
            manager.organization_add_managers(org.identity, org.managers)
