"""Seat allocation engine."""

from .allocator import CARRY_OVER_POINTS, allocate_slot, select_session
from .orchestrator import run_allocation
from .scoring import (
    PREFERENCE_BONUS,
    compare_applications,
    compute_score,
    preference_bonus,
    rank_applications,
)
from .trace import DecisionTrace

__all__ = [
    "CARRY_OVER_POINTS",
    "PREFERENCE_BONUS",
    "DecisionTrace",
    "allocate_slot",
    "compare_applications",
    "compute_score",
    "preference_bonus",
    "rank_applications",
    "run_allocation",
    "select_session",
]
