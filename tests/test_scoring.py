"""Unit tests for application scoring and ranking.

Run with: pytest tests/test_scoring.py -v
"""

import logging
from uuid import UUID

import pytest

from seating.domain import ApplicationId, ParticipantId, PreferenceRank
from seating.engine.scoring import (
    compare_applications,
    compute_score,
    preference_bonus,
    rank_applications,
)


def _points(builder):
    return {pid: p.carried_points for pid, p in builder.event.participants.items()}


class TestScore:
    """Tests for the score formula."""

    @pytest.mark.parametrize(
        ("rank", "bonus"),
        [
            (PreferenceRank.FIRST, 15),
            (PreferenceRank.SECOND, 10),
            (PreferenceRank.THIRD, 5),
            (PreferenceRank.NO_PREFERENCE, 0),
        ],
    )
    def test_preference_bonus_table(self, rank, bonus):
        """Each declared rank maps to a fixed bonus."""
        assert preference_bonus(rank) == bonus

    def test_score_adds_carried_points(self, builder):
        """Score is carried points plus the rank bonus."""
        slot = builder.slot("Morning", Math=1)
        ada = builder.participant("Ada", carried_points=10)
        application = builder.apply(ada, slot.sessions[0], PreferenceRank.THIRD)
        assert compute_score(application, ada.carried_points) == 15

    def test_first_never_scores_below_no_preference(self, builder):
        """With equal carried points a First choice outranks No preference."""
        slot = builder.slot("Morning", Math=1)
        ada = builder.participant("Ada")
        first = builder.apply(ada, slot.sessions[0], PreferenceRank.FIRST)
        none = builder.apply(ada, slot.sessions[0], PreferenceRank.NO_PREFERENCE)
        for carried in (0, 5, 10, 15):
            assert compute_score(first, carried) >= compute_score(none, carried)


class TestComparator:
    """Tests for the (score, id) comparator."""

    def test_higher_score_first(self):
        """A higher score sorts before a lower one regardless of id."""
        low_id = ApplicationId(UUID(int=1))
        high_id = ApplicationId(UUID(int=9))
        assert compare_applications((20, low_id), (15, high_id)) < 0
        assert compare_applications((15, high_id), (20, low_id)) > 0

    def test_equal_score_greater_id_first(self):
        """On equal score the greater identifier sorts first."""
        low_id = ApplicationId(UUID(int=1))
        high_id = ApplicationId(UUID(int=9))
        assert compare_applications((15, high_id), (15, low_id)) < 0
        assert compare_applications((15, low_id), (15, high_id)) > 0

    def test_identical_pairs_compare_equal(self):
        """The same pair compares equal to itself."""
        app_id = ApplicationId(UUID(int=4))
        assert compare_applications((10, app_id), (10, app_id)) == 0


class TestRankApplications:
    """Tests for ranking a session queue."""

    def test_orders_best_first_and_stores_scores(self, builder):
        """Queue is sorted by descending score and scores are written back."""
        slot = builder.slot("Morning", Math=3)
        math = slot.sessions[0]
        ada = builder.participant("Ada")
        grace = builder.participant("Grace", carried_points=10)
        alan = builder.participant("Alan")
        builder.apply(ada, math, PreferenceRank.SECOND, token=1)
        builder.apply(grace, math, PreferenceRank.THIRD, token=2)
        builder.apply(alan, math, PreferenceRank.FIRST, token=3)

        ranked = rank_applications(math, _points(builder))

        assert [app.participant_id for app in ranked] == [alan.id, grace.id, ada.id]
        assert [app.score for app in ranked] == [15, 15, 10]
        assert math.applications == ranked

    def test_tie_broken_by_greater_identifier(self, builder):
        """Equal scores are ordered by identifier, greatest first."""
        slot = builder.slot("Morning", Math=1)
        math = slot.sessions[0]
        ada = builder.participant("Ada")
        grace = builder.participant("Grace")
        builder.apply(ada, math, token=1)
        builder.apply(grace, math, token=2)

        ranked = rank_applications(math, _points(builder))

        assert [app.participant_id for app in ranked] == [grace.id, ada.id]

    def test_drops_applications_of_unknown_participants(self, builder, caplog):
        """Applications referencing a missing participant are removed and logged."""
        slot = builder.slot("Morning", Math=1)
        math = slot.sessions[0]
        ada = builder.participant("Ada")
        builder.apply(ada, math)
        ghost = builder.participant("Ghost")
        builder.apply(ghost, math)
        del builder.event.participants[ghost.id]

        with caplog.at_level(logging.WARNING, logger="seating.engine.scoring"):
            ranked = rank_applications(math, _points(builder))

        assert [app.participant_id for app in ranked] == [ada.id]
        assert "not found" in caplog.text

    def test_ranking_is_idempotent(self, builder):
        """Re-ranking unchanged input yields the same queue and scores."""
        slot = builder.slot("Morning", Math=2)
        math = slot.sessions[0]
        for index, rank in enumerate(PreferenceRank):
            builder.apply(builder.participant(f"P{index}"), math, rank)

        first = [(app.id, app.score) for app in rank_applications(math, _points(builder))]
        second = [(app.id, app.score) for app in rank_applications(math, _points(builder))]

        assert first == second

    def test_empty_queue(self, builder):
        """A session without applications ranks to an empty queue."""
        slot = builder.slot("Morning", Math=1)
        assert rank_applications(slot.sessions[0], {ParticipantId.new(): 0}) == []
