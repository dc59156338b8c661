"""Unit tests for the per-slot greedy scheduler.

Run with: pytest tests/test_allocator.py -v
"""

import logging

from seating.domain import PreferenceRank
from seating.engine import DecisionTrace, allocate_slot, rank_applications, select_session


def _rank(builder, slot):
    points = {pid: p.carried_points for pid, p in builder.event.participants.items()}
    for session in slot.sessions:
        rank_applications(session, points)


class TestSelectSession:
    """Tests for picking the next session to serve."""

    def test_returns_none_without_pending_applications(self, builder):
        """A slot with empty queues is done."""
        slot = builder.slot("Morning", Math=1, Art=1)
        assert select_session(slot) is None

    def test_highest_head_score_wins(self, builder):
        """The session whose queue head scores highest is chosen."""
        slot = builder.slot("Morning", Math=1, Art=1)
        math, art = slot.sessions
        builder.apply(builder.participant("Ada"), math, PreferenceRank.FIRST)
        builder.apply(builder.participant("Grace"), art, PreferenceRank.SECOND)
        _rank(builder, slot)

        assert select_session(slot) is math

    def test_tie_goes_to_later_session(self, builder):
        """On equal head scores the session later in slot order wins."""
        slot = builder.slot("Morning", Math=1, Art=1, Music=1)
        math, art, music = slot.sessions
        builder.apply(builder.participant("Ada"), math, PreferenceRank.FIRST)
        builder.apply(builder.participant("Grace"), art, PreferenceRank.FIRST)
        builder.apply(builder.participant("Alan"), music, PreferenceRank.SECOND)
        _rank(builder, slot)

        assert select_session(slot) is art


class TestAllocateSlot:
    """Tests for running the scheduler over one slot."""

    def test_seats_best_application_and_drains_queues(self, builder):
        """Every queue is empty once the slot is done."""
        slot = builder.slot("Morning", Math=1, Art=1)
        math, art = slot.sessions
        ada = builder.participant("Ada")
        grace = builder.participant("Grace")
        builder.apply(ada, math, PreferenceRank.FIRST)
        builder.apply(grace, art, PreferenceRank.FIRST)
        _rank(builder, slot)

        allocate_slot(slot, builder.event.participants)

        assert math.assigned == [ada.id]
        assert art.assigned == [grace.id]
        assert math.applications == [] and art.applications == []

    def test_full_session_purges_remaining_queue(self, builder, caplog):
        """When the winning session is full its whole queue is discarded."""
        slot = builder.slot("Morning", Math=1, Art=1)
        math, art = slot.sessions
        ada = builder.participant("Ada")
        grace = builder.participant("Grace")
        builder.apply(ada, math, PreferenceRank.FIRST, token=2)
        builder.apply(grace, math, PreferenceRank.FIRST, token=1)
        builder.apply(grace, art, PreferenceRank.SECOND, token=3)
        _rank(builder, slot)
        trace = DecisionTrace()

        with caplog.at_level(logging.INFO, logger="seating.engine.allocator"):
            allocate_slot(slot, builder.event.participants, trace=trace)

        assert math.assigned == [ada.id]
        assert art.assigned == [grace.id]
        kinds = [decision["kind"] for decision in trace.as_list()]
        assert kinds == ["assign", "exhaust", "assign"]
        assert trace.as_list()[1]["purged"] == 1
        assert "No more seats" in caplog.text

    def test_participant_holds_one_seat_per_slot(self, builder):
        """Seating a participant withdraws their other applications in the slot."""
        slot = builder.slot("Morning", Math=5, Art=5)
        math, art = slot.sessions
        ada = builder.participant("Ada")
        builder.apply(ada, math, PreferenceRank.FIRST)
        builder.apply(ada, art, PreferenceRank.SECOND)
        _rank(builder, slot)

        allocate_slot(slot, builder.event.participants)

        assert math.assigned == [ada.id]
        assert art.assigned == []

    def test_carried_points_are_overwritten_by_granted_rank(self, builder):
        """Points carried forward depend only on the rank just granted."""
        slot = builder.slot("Morning", Math=1, Art=1, Music=1, Drama=1)
        math, art, music, drama = slot.sessions
        first = builder.participant("First", carried_points=15)
        second = builder.participant("Second", carried_points=15)
        third = builder.participant("Third", carried_points=15)
        none = builder.participant("None", carried_points=15)
        builder.apply(first, math, PreferenceRank.FIRST)
        builder.apply(second, art, PreferenceRank.SECOND)
        builder.apply(third, music, PreferenceRank.THIRD)
        builder.apply(none, drama, PreferenceRank.NO_PREFERENCE)
        _rank(builder, slot)

        allocate_slot(slot, builder.event.participants)

        assert first.carried_points == 0
        assert second.carried_points == 5
        assert third.carried_points == 10
        assert none.carried_points == 15

    def test_participant_without_application_is_not_assigned(self, builder):
        """A participant who applied nowhere in the slot is simply left out."""
        slot = builder.slot("Morning", Math=2)
        ada = builder.participant("Ada")
        idle = builder.participant("Idle", carried_points=7)
        builder.apply(ada, slot.sessions[0])
        _rank(builder, slot)

        allocate_slot(slot, builder.event.participants)

        assert slot.sessions[0].assigned == [ada.id]
        assert idle.carried_points == 7

    def test_trace_records_assignment_details(self, builder):
        """Assign decisions carry participant, rank and score."""
        slot = builder.slot("Morning", Math=1)
        ada = builder.participant("Ada", carried_points=5)
        builder.apply(ada, slot.sessions[0], PreferenceRank.SECOND)
        _rank(builder, slot)
        trace = DecisionTrace()

        allocate_slot(slot, builder.event.participants, trace=trace)

        (decision,) = trace.as_list()
        assert decision["decision_id"] == "d-000001"
        assert decision["participant_id"] == str(ada.id.value)
        assert decision["rank"] == "second"
        assert decision["score"] == 15
