"""Domain error codes for the seating module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_NAME = "INVALID_NAME"
    INVALID_PREFERENCES = "INVALID_PREFERENCES"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class SlotNotFoundError(DomainError):
    """Raised when a slot does not belong to the event."""

    def __init__(self, slot_id: str) -> None:
        super().__init__(
            code=ErrorCode.SLOT_NOT_FOUND,
            message="Slot not found",
        )
        self.slot_id = slot_id


class SessionNotFoundError(DomainError):
    """Raised when a session does not belong to the slot."""

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_FOUND,
            message="Session not found",
        )
        self.session_id = session_id


class ParticipantNotFoundError(DomainError):
    """Raised when a participant is not registered for the event."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(
            code=ErrorCode.PARTICIPANT_NOT_FOUND,
            message="Participant not found",
        )
        self.participant_id = participant_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidNameError(DomainError):
    """Raised when a required name is blank."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_NAME,
            message=f"{field} name cannot be empty",
        )


class InvalidPreferencesError(DomainError):
    """Raised when submitted preferences cannot be accepted."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PREFERENCES,
            message=reason,
        )


class RegistrationClosedError(DomainError):
    """Raised when preferences are submitted outside the registration window."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.REGISTRATION_CLOSED,
            message="Event is not open for registration",
        )


class InvalidStateTransitionError(DomainError):
    """Raised when a lifecycle transition is not in the transition table."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATE_TRANSITION,
            message=f"Cannot move event from {current} to {target}",
        )
        self.current = current
        self.target = target
