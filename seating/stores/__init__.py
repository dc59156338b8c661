"""Event stores."""

from seating.stores.interfaces import EventStore
from seating.stores.memory_store import InMemoryEventStore

__all__ = ["EventStore", "InMemoryEventStore"]
