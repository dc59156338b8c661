"""Unit tests for the event lifecycle transition table.

Run with: pytest tests/test_lifecycle.py -v
"""

import pytest

from seating.domain.errors import ErrorCode, InvalidStateTransitionError
from seating.domain.lifecycle import EventState, can_transition, transition

ALLOWED = [
    (EventState.NOT_OPENED_YET, EventState.OPEN_FOR_REGISTRATION),
    (EventState.OPEN_FOR_REGISTRATION, EventState.NOT_OPENED_YET),
    (EventState.OPEN_FOR_REGISTRATION, EventState.ASSIGNING_SEATS),
    (EventState.ASSIGNING_SEATS, EventState.FINISHED),
]

REJECTED = [
    (EventState.NOT_OPENED_YET, EventState.ASSIGNING_SEATS),
    (EventState.NOT_OPENED_YET, EventState.FINISHED),
    (EventState.OPEN_FOR_REGISTRATION, EventState.FINISHED),
    (EventState.ASSIGNING_SEATS, EventState.OPEN_FOR_REGISTRATION),
    (EventState.ASSIGNING_SEATS, EventState.NOT_OPENED_YET),
    (EventState.FINISHED, EventState.OPEN_FOR_REGISTRATION),
    (EventState.FINISHED, EventState.NOT_OPENED_YET),
    (EventState.FINISHED, EventState.ASSIGNING_SEATS),
]


class TestTransitions:
    """Tests for the lifecycle state machine."""

    @pytest.mark.parametrize(("current", "target"), ALLOWED)
    def test_allowed_transitions(self, current, target):
        """Transitions listed in the table return the target state."""
        assert can_transition(current, target)
        assert transition(current, target) is target

    @pytest.mark.parametrize("state", list(EventState))
    def test_same_state_is_a_no_op(self, state):
        """Moving to the current state is always accepted."""
        assert transition(state, state) is state

    @pytest.mark.parametrize(("current", "target"), REJECTED)
    def test_rejected_transitions(self, current, target):
        """Anything not in the table raises InvalidStateTransitionError."""
        assert not can_transition(current, target)
        with pytest.raises(InvalidStateTransitionError) as excinfo:
            transition(current, target)
        assert excinfo.value.code is ErrorCode.INVALID_STATE_TRANSITION
        assert excinfo.value.current == current.value
        assert excinfo.value.target == target.value
