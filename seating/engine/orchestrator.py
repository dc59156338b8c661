"""Drive a full allocation run for an event."""

import logging

from seating.domain.errors import InvalidStateTransitionError
from seating.domain.lifecycle import EventState, transition
from seating.domain.models import Event

from .allocator import allocate_slot
from .scoring import rank_applications
from .trace import DecisionTrace

logger = logging.getLogger(__name__)


def run_allocation(event: Event, *, trace: DecisionTrace | None = None) -> None:
    """Close registration and distribute seats for every slot of the event.

    The caller must hold exclusive ownership of the event for the whole
    call. Every session is ranked once, up front, from a snapshot of the
    participants' carried points; slots are then allocated in stored order.
    Points written during allocation are only read by a later run.

    There is no rollback. If the run is interrupted the event stays in
    ASSIGNING_SEATS with partial mutations applied.

    Raises:
        InvalidStateTransitionError: If the event is not open for registration.
    """
    if event.state is not EventState.OPEN_FOR_REGISTRATION:
        raise InvalidStateTransitionError(event.state.value, EventState.ASSIGNING_SEATS.value)

    event.state = transition(event.state, EventState.ASSIGNING_SEATS)
    logger.info("Allocating seats for event %s (%d slots)", event.name, len(event.slots))

    snapshot = {pid: participant.carried_points for pid, participant in event.participants.items()}
    for session in event.sessions():
        rank_applications(session, snapshot)

    for slot in event.slots:
        allocate_slot(slot, event.participants, trace=trace)

    event.state = transition(event.state, EventState.FINISHED)
    logger.info(
        "Finished allocation for event %s: %d seats assigned",
        event.name,
        sum(len(session.assigned) for session in event.sessions()),
    )
