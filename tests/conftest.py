"""Pytest configuration and shared fixtures."""

from uuid import UUID

import pytest

from seating.domain import (
    Application,
    ApplicationId,
    Event,
    EventId,
    EventState,
    Participant,
    ParticipantId,
    PreferenceRank,
    Seats,
    Session,
    SessionId,
    Slot,
    SlotId,
)
from seating.services.event_service import EventService
from seating.stores import InMemoryEventStore


class EventBuilder:
    """Build an event aggregate directly, bypassing the service layer."""

    def __init__(self, name: str = "Summer School", state: EventState = EventState.OPEN_FOR_REGISTRATION) -> None:
        self.event = Event(id=EventId.new(), name=name, state=state)

    def slot(self, name: str, **seats_by_session: int) -> Slot:
        slot = Slot(
            id=SlotId.new(),
            name=name,
            sessions=[
                Session(id=SessionId.new(), name=session_name, seats=Seats(seats))
                for session_name, seats in seats_by_session.items()
            ],
        )
        self.event.slots.append(slot)
        return slot

    def participant(self, name: str, carried_points: int = 0) -> Participant:
        participant = Participant(id=ParticipantId.new(), name=name, carried_points=carried_points)
        self.event.participants[participant.id] = participant
        return participant

    def apply(
        self,
        participant: Participant,
        session: Session,
        rank: PreferenceRank = PreferenceRank.FIRST,
        token: int | None = None,
    ) -> Application:
        application_id = ApplicationId(UUID(int=token)) if token is not None else ApplicationId.new()
        application = Application(
            id=application_id,
            session_id=session.id,
            participant_id=participant.id,
            rank=rank,
        )
        session.applications.append(application)
        return application


@pytest.fixture
def builder() -> EventBuilder:
    return EventBuilder()


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def service(store: InMemoryEventStore) -> EventService:
    return EventService(store)
