"""
Organization membership endpoints. All act on the caller's organization.

POST   /api/v1/organization/members            — Add members (organization or manager)
POST   /api/v1/organization/members/remove     — Remove members (organization or manager)
POST   /api/v1/organization/managers           — Promote members to managers (organization)
POST   /api/v1/organization/managers/remove    — Demote managers (organization)
DELETE /api/v1/organization                    — Delete the organization (organization)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from membership_shared.schemas.membership import BatchResult, IdentityBatchRequest

from ...core.auth import get_caller
from ...core.store import get_manager
from ...services.membership import MembershipManager

router = APIRouter()


def _result(manager: MembershipManager, organization: str, identities: list[str]) -> BatchResult:
    return BatchResult(
        organization=organization,
        identities=identities,
        members=manager.index.members(organization),
    )


@router.post("/members", response_model=BatchResult, tags=["Organization"])
async def add_members(
    body: IdentityBatchRequest,
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    organization = manager.organization_add_members(caller, body.identities)
    return _result(manager, organization, body.identities)


@router.post("/members/remove", response_model=BatchResult, tags=["Organization"])
async def remove_members(
    body: IdentityBatchRequest,
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    organization = manager.organization_remove_members(caller, body.identities)
    return _result(manager, organization, body.identities)


@router.post("/managers", response_model=BatchResult, tags=["Organization"])
async def add_managers(
    body: IdentityBatchRequest,
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    organization = manager.organization_add_managers(caller, body.identities)
    return _result(manager, organization, body.identities)


@router.post("/managers/remove", response_model=BatchResult, tags=["Organization"])
async def remove_managers(
    body: IdentityBatchRequest,
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    organization = manager.organization_remove_managers(caller, body.identities)
    return _result(manager, organization, body.identities)


@router.delete("", response_model=BatchResult, tags=["Organization"])
async def delete_organization(
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    """Delete the caller's organization. Lists the former members."""
    former = manager.delete_organization(caller)
    return BatchResult(organization=caller, identities=former, members=[])
