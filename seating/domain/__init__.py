from seating.domain.lifecycle import EventState
from seating.domain.models import Application, Event, Participant, Session, Slot
from seating.domain.value_objects import (
    ApplicationId,
    EventId,
    ParticipantId,
    PreferenceRank,
    Seats,
    SessionId,
    SlotId,
)

__all__ = [
    "Application",
    "Event",
    "EventState",
    "Participant",
    "Session",
    "Slot",
    "ApplicationId",
    "EventId",
    "ParticipantId",
    "PreferenceRank",
    "Seats",
    "SessionId",
    "SlotId",
]
