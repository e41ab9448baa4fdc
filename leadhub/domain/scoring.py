# leadhub/domain/scoring.py
from __future__ import annotations

import math

from .parsing import distinct_keys, to_float
from .types import BuyerInput, BuyingIntent, ScoreResult, ScoreTier

# (min budget, points), highest band first
BUDGET_BANDS: tuple[tuple[float, int], ...] = (
    (10_000_000, 50),
    (5_000_000, 40),
    (3_000_000, 30),
    (2_000_000, 20),
    (1_000_000, 10),
)
BUDGET_MAX_POINTS = 50

INTENT_POINTS: dict[BuyingIntent, int] = {
    BuyingIntent.cash: 30,
    BuyingIntent.installment: 15,
    BuyingIntent.mortgage: 15,
}

BREADTH_POINTS_PER_SELECTION = 5
BREADTH_MAX_POINTS = 20

HOT_MIN_SCORE = 70
WARM_MIN_SCORE = 40


def tier_for_score(score: int) -> ScoreTier:
    """The only place a tier is derived. Callers never pick a tier themselves."""
    if score >= HOT_MIN_SCORE:
        return ScoreTier.hot
    if score >= WARM_MIN_SCORE:
        return ScoreTier.warm
    return ScoreTier.cold


def budget_points(budget: float | None) -> int:
    b = to_float(budget)
    if b is None or b <= 0:
        return 0
    for floor, points in BUDGET_BANDS:
        if b >= floor:
            return min(points, BUDGET_MAX_POINTS)
    return 0


def intent_points(intent: BuyingIntent | None) -> int:
    if intent is None:
        return 0
    return INTENT_POINTS.get(intent, 0)


def breadth_points(locations: tuple[str, ...], property_types: tuple[str, ...]) -> int:
    selections = len(distinct_keys(locations)) + len(distinct_keys(property_types))
    return min(BREADTH_MAX_POINTS, selections * BREADTH_POINTS_PER_SELECTION)


def _clamp(x: float) -> int:
    if math.isnan(x):
        return 0
    return int(max(0, min(100, round(x))))


def compute_score(buyer: BuyerInput) -> ScoreResult:
    """
    Lead score for a buyer profile.

    Sum of three capped components (budget, intent, breadth), clamped to
    0..100. A buyer with nothing declared scores 0 / Cold.
    """
    components = {
        "budget": budget_points(buyer.budget),
        "intent": intent_points(buyer.buying_intent),
        "breadth": breadth_points(buyer.locations, buyer.property_types),
    }
    score = _clamp(sum(components.values()))
    return ScoreResult(score=score, tier=tier_for_score(score), components=components)


def explain(result: ScoreResult) -> str:
    parts = " | ".join(f"{k}={v}" for k, v in result.components.items())
    return f"score={result.score} tier={result.tier.value} | {parts}"
