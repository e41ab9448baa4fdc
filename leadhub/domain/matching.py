# leadhub/domain/matching.py
from __future__ import annotations

from .parsing import distinct_keys, normalize_key, to_float
from .types import BuyerInput, MatchResult, PropertyInput, ReasonCode

# Allowed overage above budget, as a fraction (0.05 == 5%). 0.0 is strict: price > budget fails.
BUDGET_TOLERANCE_PCT = 0.0


def budget_exceeded(price: float, budget: float | None, tolerance_pct: float = BUDGET_TOLERANCE_PCT) -> bool:
    b = to_float(budget)
    if b is None or b <= 0:
        # no usable budget declared -> no constraint
        return False
    p = to_float(price) or 0.0
    return p > b * (1.0 + max(0.0, tolerance_pct))


def location_mismatch(location: str, preferred: tuple[str, ...]) -> bool:
    wanted = distinct_keys(preferred)
    if not wanted:
        return False
    return normalize_key(location) not in wanted


def type_mismatch(property_type: str, preferred: tuple[str, ...]) -> bool:
    wanted = distinct_keys(preferred)
    if not wanted:
        return False
    return normalize_key(property_type) not in wanted


def evaluate_match(
    buyer: BuyerInput,
    prop: PropertyInput,
    *,
    budget_tolerance_pct: float = BUDGET_TOLERANCE_PCT,
) -> MatchResult:
    """
    Check a property against a buyer's stated preferences.

    Every criterion is evaluated; reasons come back in the fixed order
    budget, location, type. Empty preference lists never produce a reason.
    """
    reasons: list[ReasonCode] = []

    if budget_exceeded(prop.price, buyer.budget, budget_tolerance_pct):
        reasons.append(ReasonCode.budget_exceeded)
    if location_mismatch(prop.location, buyer.locations):
        reasons.append(ReasonCode.location_mismatch)
    if type_mismatch(prop.type, buyer.property_types):
        reasons.append(ReasonCode.type_mismatch)

    return MatchResult(matches=not reasons, reasons=tuple(reasons))
