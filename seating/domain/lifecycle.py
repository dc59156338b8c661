"""Event lifecycle as an explicit finite-state machine."""

from enum import Enum

from seating.domain.errors import InvalidStateTransitionError


class EventState(Enum):
    """Lifecycle states of an Event."""

    NOT_OPENED_YET = "not_opened_yet"
    OPEN_FOR_REGISTRATION = "open_for_registration"
    ASSIGNING_SEATS = "assigning_seats"
    FINISHED = "finished"


# Same-state moves are always accepted and are not listed here.
TRANSITIONS: dict[EventState, frozenset[EventState]] = {
    EventState.NOT_OPENED_YET: frozenset({EventState.OPEN_FOR_REGISTRATION}),
    EventState.OPEN_FOR_REGISTRATION: frozenset(
        {EventState.NOT_OPENED_YET, EventState.ASSIGNING_SEATS}
    ),
    EventState.ASSIGNING_SEATS: frozenset({EventState.FINISHED}),
    EventState.FINISHED: frozenset(),
}

REGISTRATION_STATES = frozenset(
    {EventState.NOT_OPENED_YET, EventState.OPEN_FOR_REGISTRATION}
)


def can_transition(current: EventState, target: EventState) -> bool:
    """Return True if moving from current to target is allowed."""
    return current is target or target in TRANSITIONS[current]


def transition(current: EventState, target: EventState) -> EventState:
    """Return the target state, or raise if the move is not in the table.

    Raises:
        InvalidStateTransitionError: If the transition is not allowed.
    """
    if not can_transition(current, target):
        raise InvalidStateTransitionError(current.value, target.value)
    return target
