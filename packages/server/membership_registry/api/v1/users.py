"""
Identity endpoints.

PUT    /api/v1/users/me                        — Register the caller (or update its profile)
GET    /api/v1/users/{identity}                — Role, profile reference and members
GET    /api/v1/users/{identity}/membership     — member_of, manager_of, member_index
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from membership_shared.schemas.users import MembershipResponse, RegisterRequest, UserResponse

from ...core.auth import get_caller
from ...core.store import get_manager
from ...services.membership import MembershipManager

router = APIRouter()


@router.put("/me", response_model=UserResponse, tags=["Users"])
async def register(
    body: RegisterRequest,
    caller: str = Depends(get_caller),
    manager: MembershipManager = Depends(get_manager),
):
    """Register the calling identity. The role cannot change after the first call."""
    return manager.register(caller, body.role, body.profile_ref)


@router.get("/{identity}", response_model=UserResponse, tags=["Users"])
async def get_user(
    identity: str,
    manager: MembershipManager = Depends(get_manager),
):
    """Read a user record. Unregistered identities read as role 'none'."""
    return manager.get_user(identity)


@router.get("/{identity}/membership", response_model=MembershipResponse, tags=["Users"])
async def get_membership(
    identity: str,
    manager: MembershipManager = Depends(get_manager),
):
    return manager.membership(identity)
