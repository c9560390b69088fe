"""
GET /api/v1/events?after=<sequence> — replay membership events after a cursor.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from membership_shared.schemas.membership import EventReplayResponse

from ...core.store import get_manager
from ...services.membership import MembershipManager

router = APIRouter()


@router.get("", response_model=EventReplayResponse, tags=["Events"])
async def replay_events(
    after: int = Query(0, ge=0),
    manager: MembershipManager = Depends(get_manager),
):
    events, reset = manager.events.replay(after)
    return EventReplayResponse(data=events, reset=reset, last_sequence=manager.events.last_sequence)
