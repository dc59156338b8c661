"""Management command to close registration and distribute seats for an event."""

from django.core.management.base import BaseCommand, CommandError

from seating.domain.errors import DomainError
from seating.services.event_service import EventService
from seating.stores.django_store import DjangoEventStore


class Command(BaseCommand):
    help = "Close registration for an event and assign seats in every slot"

    def add_arguments(self, parser):
        parser.add_argument("event_id", help="UUID of the event")

    def handle(self, *args, **options):
        # A failed run is rolled back with the transaction, so the stored event stays open.
        service = EventService(DjangoEventStore())
        try:
            decisions = service.close_and_distribute(options["event_id"])
        except DomainError as exc:
            raise CommandError(str(exc)) from exc

        seated = sum(1 for decision in decisions if decision["kind"] == "assign")
        self.stdout.write(
            self.style.SUCCESS(f"Distributed seats: {seated} assigned in {len(decisions)} decisions")
        )
