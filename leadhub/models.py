# leadhub/models.py
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .domain.types import BuyingIntent, PropertyType, ScoreTier


class Base(DeclarativeBase):
    pass


def _values(e: type[enum.Enum]) -> list[str]:
    # persist the wire value ("Hot"), not the member name ("hot")
    return [m.value for m in e]


# -----------------------------
# Core enums
# -----------------------------
class LeadStatus(str, enum.Enum):
    new = "New"
    contacted = "Contacted"
    deal = "Deal"
    lost = "Lost"


class PropertyStatus(str, enum.Enum):
    available = "Available"
    sold_out = "Sold Out"
    reserved = "Reserved"


# -----------------------------
# Models
# -----------------------------
class Buyer(Base):
    __tablename__ = "buyers"
    __table_args__ = (UniqueConstraint("email", name="uq_buyer_email"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    full_name: Mapped[str] = mapped_column(String(160))
    email: Mapped[str] = mapped_column(String(255), index=True)
    phone: Mapped[str] = mapped_column(String(40))

    budget: Mapped[float] = mapped_column(Float)
    locations: Mapped[list[str]] = mapped_column(JSON, default=list)
    property_types: Mapped[list[str]] = mapped_column(JSON, default=list)
    buying_intent: Mapped[BuyingIntent | None] = mapped_column(
        Enum(BuyingIntent, values_callable=_values), nullable=True
    )

    # written only through BuyerRepository.apply_score
    score: Mapped[int] = mapped_column(Integer, default=0)
    score_tier: Mapped[ScoreTier] = mapped_column(
        Enum(ScoreTier, values_callable=_values), default=ScoreTier.cold, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    marketer_id: Mapped[int] = mapped_column(Integer, index=True)

    title: Mapped[str] = mapped_column(String(255))
    type: Mapped[PropertyType] = mapped_column(Enum(PropertyType, values_callable=_values), index=True)
    location: Mapped[str] = mapped_column(String(120), index=True)
    price: Mapped[float] = mapped_column(Float)

    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus, values_callable=_values), default=PropertyStatus.available
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class Lead(Base):
    __tablename__ = "leads"
    __table_args__ = (
        # closes the check-then-insert race on double submission
        UniqueConstraint("buyer_id", "property_id", name="uq_lead_buyer_property"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    buyer_id: Mapped[int] = mapped_column(Integer, index=True)
    marketer_id: Mapped[int] = mapped_column(Integer, index=True)
    property_id: Mapped[int] = mapped_column(Integer, index=True)

    # snapshot of the buyer at time of interest
    buyer_score: Mapped[int] = mapped_column(Integer, default=0, index=True)
    buyer_score_tier: Mapped[ScoreTier] = mapped_column(Enum(ScoreTier, values_callable=_values), index=True)
    buyer_name: Mapped[str] = mapped_column(String(160))
    buyer_phone: Mapped[str] = mapped_column(String(40))
    buyer_email: Mapped[str] = mapped_column(String(255))
    buyer_budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    buyer_locations: Mapped[list[str]] = mapped_column(JSON, default=list)
    buyer_property_types: Mapped[list[str]] = mapped_column(JSON, default=list)

    status: Mapped[LeadStatus] = mapped_column(
        Enum(LeadStatus, values_callable=_values), default=LeadStatus.new, index=True
    )
    mismatch_acknowledged: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
