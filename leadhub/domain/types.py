# leadhub/domain/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ScoreTier(str, Enum):
    hot = "Hot"
    warm = "Warm"
    cold = "Cold"


class BuyingIntent(str, Enum):
    cash = "Cash"
    installment = "Installment"
    mortgage = "Mortgage"


class PropertyType(str, Enum):
    apartment = "Apartment"
    villa = "Villa"
    townhouse = "Townhouse"
    duplex = "Duplex"
    commercial = "Commercial"


class ReasonCode(str, Enum):
    # declaration order is the display order
    budget_exceeded = "budgetExceeded"
    location_mismatch = "locationMismatch"
    type_mismatch = "typeMismatch"


@dataclass(frozen=True)
class BuyerInput:
    budget: float | None
    locations: tuple[str, ...] = ()
    property_types: tuple[str, ...] = ()
    buying_intent: BuyingIntent | None = None


@dataclass(frozen=True)
class PropertyInput:
    price: float
    location: str
    type: str


@dataclass(frozen=True)
class ScoreResult:
    score: int
    tier: ScoreTier
    # per-component points, for explain output only
    components: dict[str, int] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class MatchResult:
    matches: bool
    reasons: tuple[ReasonCode, ...] = ()
