"""
In-memory membership event log.

Features:
- Monotonic sequence ids, one event per successful mutation
- Circular buffer bounded by `event_buffer_size`
- Cursor-based replay with reset when the cursor is older than the buffer
- Synchronous subscribers notified after each append
"""

from __future__ import annotations

from collections import deque
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import structlog

from membership_shared.schemas.membership import MembershipEvent, MembershipEventType

log = structlog.get_logger()

BUFFER_SIZE = 500

Subscriber = Callable[[MembershipEvent], None]


class EventLog:
    """Bounded buffer of membership events with replay and fan-out."""

    def __init__(self, buffer_size: int = BUFFER_SIZE) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        self._buffer: deque[MembershipEvent] = deque(maxlen=buffer_size)
        self._sequence = 0
        self._subscribers: list[Subscriber] = []

    @property
    def last_sequence(self) -> int:
        return self._sequence

    def record(
        self,
        event_type: MembershipEventType,
        actor: str,
        organization: Optional[str] = None,
        identities: Iterable[str] = (),
    ) -> MembershipEvent:
        """Append an event and notify subscribers."""
        self._sequence += 1
        event = MembershipEvent(
            sequence=self._sequence,
            type=event_type,
            actor=actor,
            organization=organization,
            identities=list(identities),
            created_at=datetime.now(timezone.utc),
        )
        self._buffer.append(event)

        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                # Mutation is already applied; observer failures are only logged
                log.exception("events.subscriber_failed", sequence=event.sequence, type=event.type.value)
        return event

    def replay(self, after: int = 0) -> tuple[list[MembershipEvent], bool]:
        """
        Return events with sequence greater than `after`.

        Returns (events, reset). `reset` is True when events between the cursor
        and the oldest buffered event were dropped; the caller then gets the
        whole buffer and should refresh its view of the registry.
        """
        if not self._buffer:
            return [], False

        oldest = self._buffer[0].sequence
        if after < oldest - 1:
            return list(self._buffer), True
        return [e for e in self._buffer if e.sequence > after], False

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)
        log.debug("events.subscribed", subscribers=len(self._subscribers))

    def unsubscribe(self, subscriber: Subscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)
            log.debug("events.unsubscribed", subscribers=len(self._subscribers))
