from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

PropertyTypeName = Literal["Apartment", "Villa", "Townhouse", "Duplex", "Commercial"]
BuyingIntentName = Literal["Cash", "Installment", "Mortgage"]
TierName = Literal["Hot", "Warm", "Cold"]
ReasonName = Literal["budgetExceeded", "locationMismatch", "typeMismatch"]


def _clean_list(values: list[str]) -> list[str]:
    # drop blanks and repeats, keep first-seen order
    out: list[str] = []
    for v in values:
        v = v.strip()
        if v and v not in out:
            out.append(v)
    return out


class BuyerCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=160)
    email: str = Field(..., min_length=3, max_length=255)
    phone: str = Field(..., min_length=3, max_length=40)
    budget: float = Field(..., gt=0)
    locations: list[str] = Field(default_factory=list)
    property_types: list[PropertyTypeName] = Field(default_factory=list)
    buying_intent: BuyingIntentName | None = None

    @field_validator("locations")
    @classmethod
    def _locations(cls, v: list[str]) -> list[str]:
        return _clean_list(v)

    @field_validator("property_types")
    @classmethod
    def _types(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class BuyerUpdate(BaseModel):
    full_name: str | None = Field(default=None, min_length=1, max_length=160)
    phone: str | None = Field(default=None, min_length=3, max_length=40)
    budget: float | None = Field(default=None, gt=0)
    locations: list[str] | None = None
    property_types: list[PropertyTypeName] | None = None
    buying_intent: BuyingIntentName | None = None

    @field_validator("locations", "property_types")
    @classmethod
    def _lists(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _clean_list(v)


class BuyerOut(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str
    budget: float
    locations: list[str]
    property_types: list[str]
    buying_intent: str | None = None
    score: int = Field(..., ge=0, le=100)
    score_tier: TierName
    created_at: datetime
    updated_at: datetime


class ScoreOut(BaseModel):
    score: int = Field(..., ge=0, le=100)
    tier: TierName
    components: dict[str, int]
    explain: str


class PropertyCreate(BaseModel):
    marketer_id: int
    title: str = Field(..., min_length=1, max_length=255)
    type: PropertyTypeName
    location: str = Field(..., min_length=1, max_length=120)
    price: float = Field(..., gt=0)
    status: Literal["Available", "Sold Out", "Reserved"] = "Available"


class PropertyOut(BaseModel):
    id: int
    marketer_id: int
    title: str
    type: str
    location: str
    price: float
    status: str
    created_at: datetime


class MatchOut(BaseModel):
    matches: bool
    reasons: list[ReasonName]
    message_keys: list[str]


class InterestCreate(BaseModel):
    buyer_id: int
    confirm_mismatch: bool = False


class LeadOut(BaseModel):
    id: int
    buyer_id: int
    marketer_id: int
    property_id: int

    buyer_score: int
    buyer_score_tier: TierName
    buyer_name: str
    buyer_phone: str
    buyer_email: str
    buyer_budget: float | None = None
    buyer_locations: list[str]
    buyer_property_types: list[str]

    status: Literal["New", "Contacted", "Deal", "Lost"]
    mismatch_acknowledged: bool
    created_at: datetime

    # listing summary
    property_title: str | None = None
    property_location: str | None = None
    property_price: float | None = None


class InterestOut(BaseModel):
    state: Literal["WarningShown", "Done"]
    matches: bool
    reasons: list[ReasonName]
    message_keys: list[str]
    lead: LeadOut | None = None


class LeadStatusUpdate(BaseModel):
    status: Literal["New", "Contacted", "Deal", "Lost"]
