"""
API v1 Router

Caller identity comes from the Authorization header; organization-scoped
operations act on the caller's own organization (or the one it manages).
"""

from fastapi import APIRouter
from . import events, organization, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(organization.router, prefix="/organization", tags=["Organization"])
router.include_router(events.router, prefix="/events", tags=["Events"])


@router.get("/", tags=["API"])
async def api_root():
    """API root — returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/users/me",
            "/users/{identity}",
            "/users/{identity}/membership",
            "/organization/members",
            "/organization/managers",
            "/organization",
            "/events",
        ],
    }
