"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from seating.domain import Event, EventId


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def save_event(self, event: Event) -> None:
        """Insert or replace the whole event aggregate."""
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> bool:
        """Delete an event with everything it owns.

        Waits for any current holder of the event's lock. Returns False if
        the event does not exist.
        """
        ...

    @abstractmethod
    def lock_event(self, event_id: EventId) -> AbstractContextManager[Event | None]:
        """Take exclusive ownership of an event for the duration of a block.

        Yields the event (or None if it does not exist). No other caller may
        lock the same event until the block exits. Changes made to the
        yielded event are persisted when the block exits normally.
        """
        ...
