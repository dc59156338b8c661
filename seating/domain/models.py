"""Domain models representing the event aggregate.

These are plain domain objects mutated in place by the allocation engine.
Django ORM models are in seating/models.py (persistence layer).
"""

from dataclasses import dataclass, field

from seating.domain.lifecycle import EventState
from seating.domain.value_objects import (
    ApplicationId,
    EventId,
    ParticipantId,
    PreferenceRank,
    Seats,
    SessionId,
    SlotId,
)


@dataclass
class Participant:
    """Domain representation of a Participant."""

    id: ParticipantId
    name: str
    carried_points: int = 0


@dataclass
class Application:
    """A participant's ranked interest in one session."""

    id: ApplicationId
    session_id: SessionId
    participant_id: ParticipantId
    rank: PreferenceRank
    score: int | None = None


@dataclass
class Session:
    """Domain representation of a Session."""

    id: SessionId
    name: str
    seats: Seats
    description: str | None = None
    assigned: list[ParticipantId] = field(default_factory=list)
    applications: list[Application] = field(default_factory=list)

    def is_full(self) -> bool:
        return len(self.assigned) >= self.seats.value

    def remaining_seats(self) -> int:
        return max(0, self.seats.value - len(self.assigned))


@dataclass
class Slot:
    """Domain representation of a Slot. Session order is significant."""

    id: SlotId
    name: str
    description: str | None = None
    sessions: list[Session] = field(default_factory=list)

    def find_session(self, session_id: SessionId) -> Session | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None


@dataclass
class Event:
    """Domain representation of an Event. Slot order is significant."""

    id: EventId
    name: str
    description: str | None = None
    state: EventState = EventState.NOT_OPENED_YET
    slots: list[Slot] = field(default_factory=list)
    participants: dict[ParticipantId, Participant] = field(default_factory=dict)

    def find_slot(self, slot_id: SlotId) -> Slot | None:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def sessions(self) -> list[Session]:
        """Return every session of every slot, in stored order."""
        return [session for slot in self.slots for session in slot.sessions]
