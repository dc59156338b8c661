"""Greedy seat allocation for one slot.

Each pass looks at the head of every session queue, takes the best one and
either seats its participant or, when the session is already full, purges
that session's queue. Queues must already be ranked (see scoring.py).
"""

import logging
from collections.abc import Mapping

from seating.domain.models import Participant, Session, Slot
from seating.domain.value_objects import ParticipantId, PreferenceRank

from .trace import DecisionTrace

logger = logging.getLogger(__name__)

# Participants who got a worse outcome carry more priority into later slots.
CARRY_OVER_POINTS: dict[PreferenceRank, int] = {
    PreferenceRank.FIRST: 0,
    PreferenceRank.SECOND: 5,
    PreferenceRank.THIRD: 10,
    PreferenceRank.NO_PREFERENCE: 15,
}


def select_session(slot: Slot) -> Session | None:
    """Return the session whose best pending application scores highest.

    Ties between sessions go to the session that comes later in slot order.
    Returns None when no session has a pending application.
    """
    best_score: int | None = None
    winner: Session | None = None
    for session in slot.sessions:
        if not session.applications:
            continue
        score = session.applications[0].score or 0
        if best_score is None or score >= best_score:
            best_score = score
            winner = session
    return winner


def _withdraw_participant(slot: Slot, participant_id: ParticipantId) -> None:
    for session in slot.sessions:
        session.applications = [
            app for app in session.applications if app.participant_id != participant_id
        ]


def allocate_slot(
    slot: Slot,
    participants: Mapping[ParticipantId, Participant],
    *,
    trace: DecisionTrace | None = None,
) -> None:
    """Seat participants of one slot until every session queue is drained."""

    while (session := select_session(slot)) is not None:
        if session.is_full():
            purged = len(session.applications)
            logger.info(
                "No more seats for session %s, discarding %d pending applications",
                session.name,
                purged,
            )
            session.applications = []
            if trace is not None:
                trace.record_exhaust(slot=slot, session=session, purged=purged)
            continue

        application = session.applications.pop(0)
        participant_id = application.participant_id
        session.assigned.append(participant_id)
        logger.debug(
            "Seated participant %s with %s points (%s) in session %s",
            participant_id.value,
            application.score,
            application.rank.value,
            session.name,
        )
        if trace is not None:
            trace.record_assign(slot=slot, session=session, application=application)

        # One seat per participant per slot.
        _withdraw_participant(slot, participant_id)

        participant = participants.get(participant_id)
        if participant is not None:
            participant.carried_points = CARRY_OVER_POINTS[application.rank]
