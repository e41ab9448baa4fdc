# leadhub/domain/interest.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .types import MatchResult


class InterestState(str, Enum):
    idle = "Idle"
    evaluating = "Evaluating"
    warning_shown = "WarningShown"
    submitting = "Submitting"
    done = "Done"
    failed = "Failed"


class InvalidTransition(RuntimeError):
    pass


# allowed (from -> to) moves
_TRANSITIONS: dict[InterestState, set[InterestState]] = {
    InterestState.idle: {InterestState.evaluating},
    InterestState.evaluating: {InterestState.submitting, InterestState.warning_shown},
    InterestState.warning_shown: {InterestState.idle, InterestState.submitting},
    InterestState.submitting: {InterestState.done, InterestState.failed},
    InterestState.failed: {InterestState.idle, InterestState.submitting},
    InterestState.done: set(),
}


class InterestFlow:
    """
    Interest flow for one (buyer, property) pair.

    Idle -> Evaluating -> (Submitting | WarningShown); WarningShown -> Idle on
    cancel or Submitting on confirm; Submitting -> Done | Failed. A failed
    submission can be retried with the match result already held, without
    evaluating again.
    """

    def __init__(self) -> None:
        self.state = InterestState.idle
        self.match: MatchResult | None = None
        self.mismatch_acknowledged = False

    def _move(self, to: InterestState) -> None:
        if to not in _TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {to.value}")
        self.state = to

    def evaluate(self, evaluator: Callable[[], MatchResult]) -> MatchResult:
        self._move(InterestState.evaluating)
        self.match = evaluator()
        self.mismatch_acknowledged = False
        if self.match.matches:
            self._move(InterestState.submitting)
        else:
            self._move(InterestState.warning_shown)
        return self.match

    def cancel(self) -> None:
        self._move(InterestState.idle)
        self.match = None

    def confirm(self) -> None:
        self._move(InterestState.submitting)
        self.mismatch_acknowledged = True

    def succeeded(self) -> None:
        self._move(InterestState.done)

    def failed(self) -> None:
        self._move(InterestState.failed)

    def retry(self) -> None:
        """Re-enter Submitting from Failed, keeping the earlier match result."""
        if self.match is None:
            raise InvalidTransition("retry without a prior evaluation")
        self._move(InterestState.submitting)

    def reset(self) -> None:
        self._move(InterestState.idle)
        self.match = None
        self.mismatch_acknowledged = False

    @property
    def can_submit(self) -> bool:
        return self.state == InterestState.submitting


@dataclass(frozen=True)
class BuyerSnapshot:
    buyer_id: int
    score: int
    score_tier: str
    full_name: str
    phone: str
    email: str
    budget: float | None
    locations: tuple[str, ...]
    property_types: tuple[str, ...]


@dataclass(frozen=True)
class PropertyRef:
    property_id: int
    marketer_id: int


def build_lead_payload(buyer: BuyerSnapshot, prop: PropertyRef) -> dict[str, Any]:
    """
    Lead row as stored for the marketer. Buyer qualification is copied, not
    referenced, so later profile edits do not change the lead.
    """
    return {
        "buyer_id": buyer.buyer_id,
        "marketer_id": prop.marketer_id,
        "property_id": prop.property_id,
        "buyer_score": buyer.score,
        "buyer_score_tier": buyer.score_tier,
        "buyer_name": buyer.full_name,
        "buyer_phone": buyer.phone,
        "buyer_email": buyer.email,
        "buyer_budget": buyer.budget,
        "buyer_locations": list(buyer.locations),
        "buyer_property_types": list(buyer.property_types),
        "status": "New",
    }
