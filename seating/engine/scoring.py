"""Scoring and ranking of pending applications."""

import logging
from collections.abc import Mapping
from functools import cmp_to_key

from seating.domain.models import Application, Session
from seating.domain.value_objects import ApplicationId, ParticipantId, PreferenceRank

logger = logging.getLogger(__name__)

PREFERENCE_BONUS: dict[PreferenceRank, int] = {
    PreferenceRank.FIRST: 15,
    PreferenceRank.SECOND: 10,
    PreferenceRank.THIRD: 5,
    PreferenceRank.NO_PREFERENCE: 0,
}


def preference_bonus(rank: PreferenceRank) -> int:
    return PREFERENCE_BONUS[rank]


def compute_score(application: Application, carried_points: int) -> int:
    """Score = points carried from earlier slots + bonus for the declared rank."""
    return carried_points + preference_bonus(application.rank)


def compare_applications(
    a: tuple[int, ApplicationId],
    b: tuple[int, ApplicationId],
) -> int:
    """Compare two (score, id) pairs, best first.

    Higher score sorts first. On equal score the greater identifier sorts
    first; the identifier is an opaque token, so the result is reproducible
    for fixed identifiers and otherwise arbitrary. This is the tie rule and
    it is not weighted for fairness.
    """
    a_score, a_id = a
    b_score, b_id = b
    if a_score != b_score:
        return -1 if a_score > b_score else 1
    if a_id != b_id:
        return -1 if a_id > b_id else 1
    return 0


_ranking_key = cmp_to_key(compare_applications)


def rank_applications(
    session: Session,
    carried_points: Mapping[ParticipantId, int],
) -> list[Application]:
    """Score every pending application of a session and order the queue best-first.

    Applications whose participant is missing from ``carried_points`` are
    dropped with a warning. The score is stored on each application and the
    session queue is replaced by the ranked list, which is also returned.
    Re-running with unchanged input gives the same queue.
    """
    kept: list[Application] = []
    for application in session.applications:
        points = carried_points.get(application.participant_id)
        if points is None:
            logger.warning(
                "Dropping application %s for session %s: participant %s not found",
                application.id.value,
                session.name,
                application.participant_id.value,
            )
            continue
        application.score = compute_score(application, points)
        kept.append(application)

    kept.sort(key=lambda app: _ranking_key((app.score or 0, app.id)))
    session.applications = kept
    return kept
