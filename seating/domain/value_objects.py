"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID, uuid4

MAX_SEATS = 10000


@dataclass(frozen=True, order=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())


@dataclass(frozen=True, order=True)
class SlotId:
    """Unique identifier for a Slot."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())


@dataclass(frozen=True, order=True)
class SessionId:
    """Unique identifier for a Session."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())


@dataclass(frozen=True, order=True)
class ParticipantId:
    """Unique identifier for a Participant."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())


@dataclass(frozen=True, order=True)
class ApplicationId:
    """Unique identifier for an Application.

    Compared as an opaque token when two applications carry the same score.
    """

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def new(cls) -> Self:
        return cls(value=uuid4())


@dataclass(frozen=True)
class Seats:
    """Seat capacity of a session, between 1 and MAX_SEATS."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Seats must be at least 1")
        if self.value > MAX_SEATS:
            raise ValueError(f"Seats cannot exceed {MAX_SEATS}")


class PreferenceRank(Enum):
    """Declared preference of a participant for one session of a slot."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    NO_PREFERENCE = "no_preference"
