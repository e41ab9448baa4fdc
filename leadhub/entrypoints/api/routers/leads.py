# leadhub/entrypoints/api/routers/leads.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import require_api_key
from ....db import get_session
from ....domain.types import ScoreTier
from ....models import Lead, LeadStatus, Property
from ....schemas import LeadOut, LeadStatusUpdate
from ....service_layer.errors import LeadNotFound
from ....service_layer.leads import marketer_leads, update_lead_status

router = APIRouter(tags=["leads"], dependencies=[Depends(require_api_key)])


def lead_out(lead: Lead, prop: Property | None = None) -> LeadOut:
    return LeadOut(
        id=lead.id,
        buyer_id=lead.buyer_id,
        marketer_id=lead.marketer_id,
        property_id=lead.property_id,
        buyer_score=lead.buyer_score,
        buyer_score_tier=lead.buyer_score_tier.value,
        buyer_name=lead.buyer_name,
        buyer_phone=lead.buyer_phone,
        buyer_email=lead.buyer_email,
        buyer_budget=lead.buyer_budget,
        buyer_locations=list(lead.buyer_locations or []),
        buyer_property_types=list(lead.buyer_property_types or []),
        status=lead.status.value,
        mismatch_acknowledged=bool(lead.mismatch_acknowledged),
        created_at=lead.created_at,
        property_title=prop.title if prop is not None else None,
        property_location=prop.location if prop is not None else None,
        property_price=prop.price if prop is not None else None,
    )


@router.get("/marketers/{marketer_id}/leads", response_model=list[LeadOut])
async def list_marketer_leads(
    marketer_id: int,
    tier: str | None = Query(default=None),
    limit: int = Query(200, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> list[LeadOut]:
    tier_filter: ScoreTier | None = None
    if tier is not None:
        try:
            tier_filter = ScoreTier(tier)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid tier: {tier}")

    rows = await marketer_leads(session, marketer_id, tier=tier_filter, limit=limit)
    return [lead_out(lead, prop) for lead, prop in rows]


@router.patch("/leads/{lead_id}/status", response_model=LeadOut)
async def patch_lead_status(
    lead_id: int,
    body: LeadStatusUpdate,
    session: AsyncSession = Depends(get_session),
) -> LeadOut:
    try:
        lead = await update_lead_status(session, lead_id, LeadStatus(body.status))
    except LeadNotFound:
        raise HTTPException(status_code=404, detail="Lead not found")
    await session.commit()
    return lead_out(lead)
