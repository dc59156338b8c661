"""Event service - all business logic reachable by callers lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors

Every mutating operation runs inside ``EventStore.lock_event`` so no two
callers change the same event at once.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from seating.domain.errors import (
    EventNotFoundError,
    InvalidEventIdError,
    InvalidNameError,
    InvalidPreferencesError,
    InvalidStateTransitionError,
    ParticipantNotFoundError,
    RegistrationClosedError,
    SessionNotFoundError,
    SlotNotFoundError,
)
from seating.domain.lifecycle import REGISTRATION_STATES, EventState, transition
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
from seating.engine import DecisionTrace, run_allocation
from seating.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionAssignment:
    """Read model of one session's outcome."""

    slot_name: str
    session_name: str
    seats: int
    remaining_seats: int
    participant_names: tuple[str, ...] = ()


def _clean_name(value: str, field: str) -> str:
    name = (value or "").strip()
    if not name:
        raise InvalidNameError(field)
    return name


def _clean_description(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class EventService:
    """Service for event setup, registration and seat distribution."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(self._parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(self, name: str, description: str | None = None) -> Event:
        """Create an event in the NOT_OPENED_YET state.

        Raises:
            InvalidNameError: If the name is blank.
        """
        event = Event(
            id=EventId.new(),
            name=_clean_name(name, "Event"),
            description=_clean_description(description),
        )
        self._store.save_event(event)
        logger.info("Created event %s (%s)", event.name, event.id.value)
        return event

    def delete_event(self, event_id: str) -> None:
        """Delete an event with its slots, sessions and participants.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        if not self._store.delete_event(self._parse_event_id(event_id)):
            raise EventNotFoundError(event_id)
        logger.info("Deleted event %s", event_id)

    def add_slot(self, event_id: str, name: str, description: str | None = None) -> Slot:
        """Append a slot to the event's slot order."""
        slot = Slot(
            id=SlotId.new(),
            name=_clean_name(name, "Slot"),
            description=_clean_description(description),
        )
        with self._locked(event_id) as event:
            event.slots.append(slot)
        return slot

    def edit_slot(
        self,
        event_id: str,
        slot_id: str,
        name: str,
        description: str | None = None,
    ) -> Slot:
        """Rename a slot and replace its description. Slot order is kept.

        Raises:
            InvalidNameError: If the name is blank.
            SlotNotFoundError: If the slot is not part of the event.
        """
        cleaned = _clean_name(name, "Slot")
        with self._locked(event_id) as event:
            slot = self._find_slot(event, slot_id)
            slot.name = cleaned
            slot.description = _clean_description(description)
        return slot

    def delete_slot(self, event_id: str, slot_id: str) -> None:
        """Remove a slot together with its sessions, seats and applications.

        Raises:
            SlotNotFoundError: If the slot is not part of the event.
        """
        with self._locked(event_id) as event:
            slot = self._find_slot(event, slot_id)
            event.slots.remove(slot)

    def add_session(
        self,
        event_id: str,
        slot_id: str,
        name: str,
        seats: int,
        description: str | None = None,
    ) -> Session:
        """Append a session to a slot.

        Raises:
            ValueError: If seats is outside 1..MAX_SEATS.
            SlotNotFoundError: If the slot is not part of the event.
        """
        session = Session(
            id=SessionId.new(),
            name=_clean_name(name, "Session"),
            seats=Seats(seats),
            description=_clean_description(description),
        )
        with self._locked(event_id) as event:
            slot = self._find_slot(event, slot_id)
            slot.sessions.append(session)
        return session

    def edit_session(
        self,
        event_id: str,
        slot_id: str,
        session_id: str,
        name: str,
        seats: int,
        description: str | None = None,
    ) -> Session:
        """Update a session's name, seat count and description.

        Seats already given out are kept even if the new count is lower.

        Raises:
            ValueError: If seats is outside 1..MAX_SEATS.
            SlotNotFoundError: If the slot is not part of the event.
            SessionNotFoundError: If the session is not part of the slot.
        """
        cleaned = _clean_name(name, "Session")
        new_seats = Seats(seats)
        with self._locked(event_id) as event:
            session = self._find_session(self._find_slot(event, slot_id), session_id)
            session.name = cleaned
            session.seats = new_seats
            session.description = _clean_description(description)
        return session

    def delete_session(self, event_id: str, slot_id: str, session_id: str) -> None:
        """Remove a session with its seats and pending applications.

        Raises:
            SlotNotFoundError: If the slot is not part of the event.
            SessionNotFoundError: If the session is not part of the slot.
        """
        with self._locked(event_id) as event:
            slot = self._find_slot(event, slot_id)
            slot.sessions.remove(self._find_session(slot, session_id))

    def register_participant(self, event_id: str, name: str) -> Participant:
        """Register a participant with no carried points."""
        participant = Participant(id=ParticipantId.new(), name=_clean_name(name, "Participant"))
        with self._locked(event_id) as event:
            event.participants[participant.id] = participant
        return participant

    def rename_participant(self, event_id: str, participant_id: str, name: str) -> Participant:
        """Change the name a participant is listed under.

        Raises:
            InvalidNameError: If the name is blank.
            ParticipantNotFoundError: If the participant is not registered.
        """
        cleaned = _clean_name(name, "Participant")
        with self._locked(event_id) as event:
            participant = self._find_participant(event, participant_id)
            participant.name = cleaned
        return participant

    def remove_participant(self, event_id: str, participant_id: str) -> None:
        """Remove a participant together with their seats and pending applications.

        Raises:
            ParticipantNotFoundError: If the participant is not registered.
        """
        with self._locked(event_id) as event:
            participant = self._find_participant(event, participant_id)
            del event.participants[participant.id]
            for session in event.sessions():
                session.assigned = [pid for pid in session.assigned if pid != participant.id]
                session.applications = [
                    app for app in session.applications if app.participant_id != participant.id
                ]

    def set_registration_state(self, event_id: str, target: EventState) -> Event:
        """Open or close registration before any allocation has run.

        Raises:
            InvalidStateTransitionError: If target is not a registration state
                or the move is not in the transition table.
        """
        with self._locked(event_id) as event:
            if target not in REGISTRATION_STATES:
                raise InvalidStateTransitionError(event.state.value, target.value)
            event.state = transition(event.state, target)
        logger.info("Event %s is now %s", event.name, event.state.value)
        return event

    def submit_preferences(
        self,
        event_id: str,
        participant_id: str,
        slot_id: str,
        first: str | None = None,
        second: str | None = None,
        third: str | None = None,
    ) -> list[Application]:
        """Replace a participant's ranked choices for one slot.

        Raises:
            RegistrationClosedError: If the event is not open for registration.
            ParticipantNotFoundError: If the participant is not registered.
            SlotNotFoundError: If the slot is not part of the event.
            InvalidPreferencesError: If the participant has no name, picks
                repeat a session, or name a session outside the slot.
        """
        picks = [
            (raw, rank)
            for raw, rank in (
                (first, PreferenceRank.FIRST),
                (second, PreferenceRank.SECOND),
                (third, PreferenceRank.THIRD),
            )
            if raw
        ]
        with self._locked(event_id) as event:
            if event.state is not EventState.OPEN_FOR_REGISTRATION:
                raise RegistrationClosedError()
            participant = self._find_participant(event, participant_id)
            if not participant.name.strip():
                raise InvalidPreferencesError("Participant must set a name before choosing sessions")
            slot = self._find_slot(event, slot_id)

            chosen: list[tuple[Session, PreferenceRank]] = []
            for raw, rank in picks:
                session = self._find_pick(slot, raw)
                if any(existing.id == session.id for existing, _ in chosen):
                    raise InvalidPreferencesError("Preferences must name distinct sessions")
                chosen.append((session, rank))

            for session in slot.sessions:
                session.applications = [
                    app for app in session.applications if app.participant_id != participant.id
                ]

            created = []
            for session, rank in chosen:
                application = Application(
                    id=ApplicationId.new(),
                    session_id=session.id,
                    participant_id=participant.id,
                    rank=rank,
                )
                session.applications.append(application)
                created.append(application)
        return created

    def close_and_distribute(self, event_id: str) -> list[dict[str, Any]]:
        """Run the allocation for an event open for registration.

        Returns the decision trace of the run.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            InvalidStateTransitionError: If the event is not open for registration.
        """
        trace = DecisionTrace()
        with self._locked(event_id) as event:
            run_allocation(event, trace=trace)
        logger.info("Distributed seats for event %s in %d decisions", event.name, len(trace))
        return trace.as_list()

    def get_assignments(self, event_id: str) -> list[SessionAssignment]:
        """Return every session with its assigned participant names.

        Names are only filled in once the event is FINISHED.
        """
        event = self.get_event(event_id)
        finished = event.state is EventState.FINISHED
        result = []
        for slot in event.slots:
            for session in slot.sessions:
                names: tuple[str, ...] = ()
                if finished:
                    names = tuple(
                        event.participants[pid].name
                        for pid in session.assigned
                        if pid in event.participants
                    )
                result.append(
                    SessionAssignment(
                        slot_name=slot.name,
                        session_name=session.name,
                        seats=session.seats.value,
                        remaining_seats=session.remaining_seats(),
                        participant_names=names,
                    )
                )
        return result

    @contextmanager
    def _locked(self, event_id: str) -> Iterator[Event]:
        with self._store.lock_event(self._parse_event_id(event_id)) as event:
            if event is None:
                raise EventNotFoundError(event_id)
            yield event

    @staticmethod
    def _parse_event_id(event_id: str) -> EventId:
        try:
            return EventId.from_string(event_id)
        except (TypeError, ValueError, AttributeError) as exc:
            raise InvalidEventIdError() from exc

    @staticmethod
    def _find_slot(event: Event, slot_id: str) -> Slot:
        try:
            slot = event.find_slot(SlotId.from_string(slot_id))
        except (TypeError, ValueError, AttributeError):
            slot = None
        if slot is None:
            raise SlotNotFoundError(slot_id)
        return slot

    @staticmethod
    def _find_session(slot: Slot, session_id: str) -> Session:
        try:
            session = slot.find_session(SessionId.from_string(session_id))
        except (TypeError, ValueError, AttributeError):
            session = None
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    @staticmethod
    def _find_participant(event: Event, participant_id: str) -> Participant:
        try:
            participant = event.participants.get(ParticipantId.from_string(participant_id))
        except (TypeError, ValueError, AttributeError):
            participant = None
        if participant is None:
            raise ParticipantNotFoundError(participant_id)
        return participant

    @staticmethod
    def _find_pick(slot: Slot, session_id: str) -> Session:
        try:
            session = slot.find_session(SessionId.from_string(session_id))
        except (TypeError, ValueError, AttributeError):
            session = None
        if session is None:
            raise InvalidPreferencesError("Chosen session does not belong to this slot")
        return session
