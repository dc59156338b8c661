"""Management command to open or close registration for an event."""

from django.core.management.base import BaseCommand, CommandError

from seating.domain.errors import DomainError
from seating.domain.lifecycle import EventState
from seating.services.event_service import EventService
from seating.stores.django_store import DjangoEventStore

TARGETS = {
    "open": EventState.OPEN_FOR_REGISTRATION,
    "close": EventState.NOT_OPENED_YET,
}


class Command(BaseCommand):
    help = "Open or close registration for an event that has not been distributed yet"

    def add_arguments(self, parser):
        parser.add_argument("event_id", help="UUID of the event")
        parser.add_argument("state", choices=sorted(TARGETS), help="Registration state to set")

    def handle(self, *args, **options):
        service = EventService(DjangoEventStore())
        try:
            event = service.set_registration_state(options["event_id"], TARGETS[options["state"]])
        except DomainError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(f"Event {event.name} is now {event.state.value}")
