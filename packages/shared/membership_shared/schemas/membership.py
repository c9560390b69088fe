"""
Membership batch operation and event schemas.

Covers: batch add/remove requests for members and managers, batch results,
and the event records emitted after each successful mutation.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import Identity


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class MembershipEventType(str, Enum):
    USER_REGISTERED = "user.registered"
    MEMBERS_ADDED = "members.added"
    MEMBERS_REMOVED = "members.removed"
    MANAGERS_ADDED = "managers.added"
    MANAGERS_REMOVED = "managers.removed"
    ORGANIZATION_DELETED = "organization.deleted"


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class IdentityBatchRequest(BaseModel):
    """Body for every batch membership operation."""
    identities: List[Identity] = Field(default_factory=list, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class BatchResult(BaseModel):
    """Outcome of a successful batch operation."""
    organization: str
    identities: List[str]
    members: List[str] = Field(default_factory=list)


class MembershipEvent(BaseModel):
    sequence: int
    type: MembershipEventType
    actor: str
    organization: Optional[str] = None
    identities: List[str] = Field(default_factory=list)
    created_at: datetime


class EventReplayResponse(BaseModel):
    """Events after a cursor. `reset` is set when the cursor fell out of the buffer."""
    data: List[MembershipEvent]
    reset: bool = False
    last_sequence: int = 0
