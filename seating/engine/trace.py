"""Decision trace for allocation runs."""

from dataclasses import dataclass, field
from typing import Any

from seating.domain.models import Application, Session, Slot

ASSIGN = "assign"
EXHAUST = "exhaust"


@dataclass(slots=True)
class DecisionTrace:
    """Collect scheduler decisions in the order they are taken."""

    _sequence: int = 0
    _items: list[dict[str, Any]] = field(default_factory=list)

    def record_assign(self, *, slot: Slot, session: Session, application: Application) -> None:
        self._record(
            {
                "kind": ASSIGN,
                "slot_id": str(slot.id.value),
                "session_id": str(session.id.value),
                "participant_id": str(application.participant_id.value),
                "rank": application.rank.value,
                "score": application.score,
            }
        )

    def record_exhaust(self, *, slot: Slot, session: Session, purged: int) -> None:
        self._record(
            {
                "kind": EXHAUST,
                "slot_id": str(slot.id.value),
                "session_id": str(session.id.value),
                "purged": purged,
            }
        )

    def _record(self, payload: dict[str, Any]) -> None:
        self._sequence += 1
        self._items.append({"decision_id": f"d-{self._sequence:06d}", **payload})

    def as_list(self) -> list[dict[str, Any]]:
        """Return decisions in sequence order."""
        return [dict(item) for item in self._items]

    def __len__(self) -> int:
        return len(self._items)
