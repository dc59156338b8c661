"""Django ORM implementation of the EventStore."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.db import transaction

from seating import models
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
from seating.stores.interfaces import EventStore

logger = logging.getLogger(__name__)


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def list_events(self) -> list[Event]:
        return [self._to_domain(row) for row in self._queryset()]

    def get_event(self, event_id: EventId) -> Event | None:
        row = self._queryset().filter(id=event_id.value).first()
        if row is None:
            return None
        return self._to_domain(row)

    def save_event(self, event: Event) -> None:
        with transaction.atomic():
            self._write(event)

    def delete_event(self, event_id: EventId) -> bool:
        # Slots, sessions, participants, seats and applications cascade.
        with transaction.atomic():
            deleted, _ = models.Event.objects.filter(id=event_id.value).delete()
        return deleted > 0

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[Event | None]:
        # The whole block runs in one transaction; an exception rolls back
        # every write made through this store.
        with transaction.atomic():
            row = self._queryset().select_for_update().filter(id=event_id.value).first()
            if row is None:
                yield None
                return
            event = self._to_domain(row)
            yield event
            self._write(event)

    def _queryset(self):
        return models.Event.objects.prefetch_related(
            "participants",
            "slots__sessions__applications",
            "slots__sessions__seat_assignments",
        )

    def _to_domain(self, row: models.Event) -> Event:
        participants = {
            ParticipantId(p.id): Participant(
                id=ParticipantId(p.id),
                name=p.name,
                carried_points=p.carried_points,
            )
            for p in row.participants.all()
        }
        slots = [
            Slot(
                id=SlotId(slot_row.id),
                name=slot_row.name,
                description=slot_row.description,
                sessions=[self._session_to_domain(s) for s in slot_row.sessions.all()],
            )
            for slot_row in row.slots.all()
        ]
        return Event(
            id=EventId(row.id),
            name=row.name,
            description=row.description,
            state=EventState(row.state),
            slots=slots,
            participants=participants,
        )

    def _session_to_domain(self, row: models.Session) -> Session:
        return Session(
            id=SessionId(row.id),
            name=row.name,
            description=row.description,
            seats=Seats(row.seats),
            assigned=[ParticipantId(seat.participant_id) for seat in row.seat_assignments.all()],
            applications=[
                Application(
                    id=ApplicationId(app.id),
                    session_id=SessionId(row.id),
                    participant_id=ParticipantId(app.participant_id),
                    rank=PreferenceRank(app.rank),
                    score=app.score,
                )
                for app in row.applications.all()
            ],
        )

    def _write(self, event: Event) -> None:
        event_row, _ = models.Event.objects.update_or_create(
            id=event.id.value,
            defaults={
                "name": event.name,
                "description": event.description,
                "state": event.state.value,
            },
        )

        for participant in event.participants.values():
            models.Participant.objects.update_or_create(
                id=participant.id.value,
                defaults={
                    "event": event_row,
                    "name": participant.name,
                    "carried_points": participant.carried_points,
                },
            )
        event_row.participants.exclude(
            id__in=[pid.value for pid in event.participants]
        ).delete()

        slot_ids = []
        for slot_position, slot in enumerate(event.slots):
            slot_row, _ = models.Slot.objects.update_or_create(
                id=slot.id.value,
                defaults={
                    "event": event_row,
                    "name": slot.name,
                    "description": slot.description,
                    "position": slot_position,
                },
            )
            slot_ids.append(slot.id.value)

            session_ids = []
            for session_position, session in enumerate(slot.sessions):
                session_row = self._write_session(slot_row, session, session_position, event)
                session_ids.append(session_row.id)
            slot_row.sessions.exclude(id__in=session_ids).delete()

        event_row.slots.exclude(id__in=slot_ids).delete()

    def _write_session(
        self,
        slot_row: models.Slot,
        session: Session,
        position: int,
        event: Event,
    ) -> models.Session:
        session_row, _ = models.Session.objects.update_or_create(
            id=session.id.value,
            defaults={
                "slot": slot_row,
                "name": session.name,
                "description": session.description,
                "seats": session.seats.value,
                "position": position,
            },
        )

        session_row.seat_assignments.all().delete()
        models.Seat.objects.bulk_create(
            [
                models.Seat(session=session_row, participant_id=pid.value, position=index)
                for index, pid in enumerate(session.assigned)
            ]
        )

        pending = []
        for application in session.applications:
            if application.participant_id not in event.participants:
                logger.warning(
                    "Not persisting application %s: participant %s not in event %s",
                    application.id.value,
                    application.participant_id.value,
                    event.name,
                )
                continue
            pending.append(application)

        session_row.applications.exclude(id__in=[app.id.value for app in pending]).delete()
        for index, application in enumerate(pending):
            models.Application.objects.update_or_create(
                id=application.id.value,
                defaults={
                    "session": session_row,
                    "participant_id": application.participant_id.value,
                    "rank": application.rank.value,
                    "score": application.score,
                    "position": index,
                },
            )
        return session_row
