"""In-memory implementation of the EventStore."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from seating.domain import Event, EventId
from seating.stores.interfaces import EventStore


class InMemoryEventStore(EventStore):
    """Dict-backed event store.

    Events are held by reference, so a locked event is mutated in place and
    partial changes survive an exception raised inside ``lock_event``.
    Locks exist only for stored events.
    """

    def __init__(self, events: list[Event] | None = None) -> None:
        self._events: dict[EventId, Event] = {}
        self._locks: dict[EventId, threading.Lock] = {}
        self._guard = threading.Lock()
        for event in events or []:
            self.save_event(event)

    def list_events(self) -> list[Event]:
        return list(self._events.values())

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def save_event(self, event: Event) -> None:
        with self._guard:
            self._locks.setdefault(event.id, threading.Lock())
            self._events[event.id] = event

    def delete_event(self, event_id: EventId) -> bool:
        with self._guard:
            lock = self._locks.get(event_id)
        if lock is None:
            return False
        with lock, self._guard:
            self._locks.pop(event_id, None)
            return self._events.pop(event_id, None) is not None

    @contextmanager
    def lock_event(self, event_id: EventId) -> Iterator[Event | None]:
        with self._guard:
            lock = self._locks.get(event_id)
        if lock is None:
            yield None
            return
        with lock:
            # None if the event was deleted while waiting.
            yield self._events.get(event_id)
