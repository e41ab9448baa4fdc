# leadhub/adapters/repos/leads.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.types import ScoreTier
from ...models import Lead, LeadStatus, Property


class LeadRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, lead_id: int) -> Lead | None:
        return (await self.session.execute(select(Lead).where(Lead.id == lead_id))).scalars().first()

    async def find(self, *, buyer_id: int, property_id: int) -> Lead | None:
        q = select(Lead).where(
            Lead.buyer_id == buyer_id,
            Lead.property_id == property_id,
        )
        return (await self.session.execute(q)).scalars().first()

    async def create(self, payload: dict[str, Any], *, mismatch_acknowledged: bool = False) -> Lead:
        """
        Insert a lead from a payload built by domain.interest.build_lead_payload.

        Natural key: (buyer_id, property_id). A duplicate surfaces as
        sqlalchemy.exc.IntegrityError from the flush; callers decide what it means.
        """
        data = dict(payload)
        data["buyer_score_tier"] = ScoreTier(data["buyer_score_tier"])
        data["status"] = LeadStatus(data.get("status") or LeadStatus.new.value)

        lead = Lead(**data, mismatch_acknowledged=mismatch_acknowledged)
        self.session.add(lead)
        await self.session.flush()
        return lead

    async def list_for_marketer(
        self,
        marketer_id: int,
        *,
        tier: ScoreTier | None = None,
        limit: int = 200,
    ) -> list[tuple[Lead, Property]]:
        q = (
            select(Lead, Property)
            .join(Property, Property.id == Lead.property_id)
            .where(Lead.marketer_id == marketer_id)
            .order_by(desc(Lead.buyer_score), desc(Lead.created_at), desc(Lead.id))
            .limit(limit)
        )
        if tier is not None:
            q = q.where(Lead.buyer_score_tier == tier)
        return [(lead, prop) for lead, prop in (await self.session.execute(q)).all()]

    async def list_properties_for_buyer(self, buyer_id: int) -> list[Property]:
        q = (
            select(Property)
            .join(Lead, Lead.property_id == Property.id)
            .where(Lead.buyer_id == buyer_id)
            .order_by(desc(Lead.created_at), desc(Lead.id))
        )
        return list((await self.session.execute(q)).scalars().all())

    async def set_status(self, lead: Lead, status: LeadStatus) -> Lead:
        lead.status = status
        lead.updated_at = datetime.utcnow()
        await self.session.flush()
        return lead
