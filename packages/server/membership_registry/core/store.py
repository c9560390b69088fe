"""
Process-wide registry store.

The store owns the identity registry, the membership index and the event log,
and hands the membership manager to request handlers. Tests build their own
store with `create_store()` instead of touching the cached one.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from ..services.identities import IdentityRegistry
from ..services.membership import MembershipManager
from ..services.membership_index import MembershipIndex
from .config import get_settings
from .events import BUFFER_SIZE, EventLog


@dataclass
class RegistryStore:
    identities: IdentityRegistry
    index: MembershipIndex
    events: EventLog
    manager: MembershipManager


def create_store(event_buffer_size: int = BUFFER_SIZE) -> RegistryStore:
    identities = IdentityRegistry()
    index = MembershipIndex()
    events = EventLog(event_buffer_size)
    return RegistryStore(
        identities=identities,
        index=index,
        events=events,
        manager=MembershipManager(identities, index, events),
    )


@lru_cache
def get_store() -> RegistryStore:
    return create_store(get_settings().event_buffer_size)


def get_manager() -> MembershipManager:
    """FastAPI dependency returning the shared membership manager."""
    return get_store().manager
