# leadhub/adapters/repos/buyers.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.types import ScoreResult
from ...models import Buyer

# profile fields that feed the lead score
SCORED_FIELDS = ("budget", "locations", "property_types", "buying_intent")

_EDITABLE_FIELDS = ("full_name", "phone", *SCORED_FIELDS)


class BuyerRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, buyer_id: int) -> Buyer | None:
        return (await self.session.execute(select(Buyer).where(Buyer.id == buyer_id))).scalars().first()

    async def get_by_email(self, email: str) -> Buyer | None:
        q = select(Buyer).where(Buyer.email == email.strip().lower())
        return (await self.session.execute(q)).scalars().first()

    async def add(
        self,
        *,
        full_name: str,
        email: str,
        phone: str,
        budget: float,
        locations: list[str],
        property_types: list[str],
        buying_intent: Any = None,
    ) -> Buyer:
        buyer = Buyer(
            full_name=full_name,
            email=email.strip().lower(),
            phone=phone,
            budget=float(budget),
            locations=list(locations),
            property_types=list(property_types),
            buying_intent=buying_intent,
        )
        self.session.add(buyer)
        await self.session.flush()
        return buyer

    async def update(self, buyer: Buyer, changes: dict[str, Any]) -> set[str]:
        """
        Apply profile edits. Returns the names of fields whose value changed.
        Score fields are not editable here; see apply_score.
        """
        changed: set[str] = set()
        for name, value in changes.items():
            if name not in _EDITABLE_FIELDS or value is None:
                continue
            if name in ("locations", "property_types"):
                value = list(value)
            if getattr(buyer, name) != value:
                setattr(buyer, name, value)
                changed.add(name)
        if changed:
            buyer.updated_at = datetime.utcnow()
            await self.session.flush()
        return changed

    async def apply_score(self, buyer: Buyer, result: ScoreResult) -> Buyer:
        # score and tier always travel together
        buyer.score = result.score
        buyer.score_tier = result.tier
        buyer.updated_at = datetime.utcnow()
        await self.session.flush()
        return buyer
