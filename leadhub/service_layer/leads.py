# leadhub/service_layer/leads.py
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.buyers import BuyerRepository
from ..adapters.repos.leads import LeadRepository
from ..domain.types import ScoreTier
from ..models import Lead, LeadStatus, Property
from .errors import BuyerNotFound, LeadNotFound

log = logging.getLogger(__name__)


async def update_lead_status(session: AsyncSession, lead_id: int, status: LeadStatus) -> Lead:
    """
    Marketer workflow transition. Only status moves; the buyer snapshot is
    never touched after creation.
    """
    repo = LeadRepository(session)
    lead = await repo.get(lead_id)
    if lead is None:
        raise LeadNotFound(lead_id)

    previous = lead.status
    await repo.set_status(lead, status)
    log.info("lead %s status %s -> %s", lead_id, previous.value, status.value)
    return lead


async def marketer_leads(
    session: AsyncSession,
    marketer_id: int,
    *,
    tier: ScoreTier | None = None,
    limit: int = 200,
) -> list[tuple[Lead, Property]]:
    # hottest first, newest first within the same score; each lead with its listing
    return await LeadRepository(session).list_for_marketer(marketer_id, tier=tier, limit=limit)


async def buyer_interests(session: AsyncSession, buyer_id: int) -> list[Property]:
    if await BuyerRepository(session).get(buyer_id) is None:
        raise BuyerNotFound(buyer_id)
    return await LeadRepository(session).list_properties_for_buyer(buyer_id)
