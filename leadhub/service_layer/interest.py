# leadhub/service_layer/interest.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.buyers import BuyerRepository
from ..adapters.repos.leads import LeadRepository
from ..adapters.repos.properties import PropertyRepository
from ..config import settings
from ..domain.interest import (
    BuyerSnapshot,
    InterestFlow,
    InterestState,
    PropertyRef,
    build_lead_payload,
)
from ..domain.matching import evaluate_match
from ..domain.parsing import buyer_input_from_record, property_input_from_record
from ..domain.types import MatchResult
from ..models import Buyer, Lead, Property
from .errors import AlreadyInterested, BuyerNotFound, LeadPersistenceError, PropertyNotFound

log = logging.getLogger(__name__)


@dataclass
class InterestOutcome:
    state: InterestState
    match: MatchResult
    lead: Lead | None = None


def snapshot_buyer(buyer: Buyer) -> BuyerSnapshot:
    return BuyerSnapshot(
        buyer_id=buyer.id,
        score=int(buyer.score or 0),
        score_tier=buyer.score_tier.value,
        full_name=buyer.full_name,
        phone=buyer.phone,
        email=buyer.email,
        budget=buyer.budget,
        locations=tuple(buyer.locations or ()),
        property_types=tuple(buyer.property_types or ()),
    )


async def _load(session: AsyncSession, buyer_id: int, property_id: int) -> tuple[Buyer, Property]:
    buyer = await BuyerRepository(session).get(buyer_id)
    if buyer is None:
        raise BuyerNotFound(buyer_id)
    prop = await PropertyRepository(session).get(property_id)
    if prop is None:
        raise PropertyNotFound(property_id)
    return buyer, prop


def _tolerance(budget_tolerance_pct: float | None) -> float:
    if budget_tolerance_pct is None:
        return float(settings.MATCH_BUDGET_TOLERANCE_PCT)
    return float(budget_tolerance_pct)


async def check_match(
    session: AsyncSession,
    buyer_id: int,
    property_id: int,
    *,
    budget_tolerance_pct: float | None = None,
) -> MatchResult:
    """Evaluate only; nothing is written."""
    buyer, prop = await _load(session, buyer_id, property_id)
    return evaluate_match(
        buyer_input_from_record(buyer),
        property_input_from_record(prop),
        budget_tolerance_pct=_tolerance(budget_tolerance_pct),
    )


async def _submit(
    session: AsyncSession,
    flow: InterestFlow,
    payload: dict[str, Any],
    attempts: int,
) -> Lead:
    leads = LeadRepository(session)
    attempt = 0
    while True:
        attempt += 1
        try:
            # savepoint: a failed attempt must not undo earlier work in the caller's transaction
            async with session.begin_nested():
                lead = await leads.create(payload, mismatch_acknowledged=flow.mismatch_acknowledged)
        except IntegrityError as e:
            # lost the race against a concurrent submission for the same pair
            flow.failed()
            raise AlreadyInterested(payload["buyer_id"], payload["property_id"]) from e
        except SQLAlchemyError as e:
            flow.failed()
            log.warning(
                "lead write failed buyer=%s property=%s attempt=%s/%s: %s",
                payload["buyer_id"], payload["property_id"], attempt, attempts, e,
            )
            if attempt >= attempts:
                raise LeadPersistenceError(str(e)) from e
            # same payload, same match result
            flow.retry()
            continue

        flow.succeeded()
        return lead


async def express_interest(
    session: AsyncSession,
    buyer_id: int,
    property_id: int,
    *,
    confirm_mismatch: bool = False,
    budget_tolerance_pct: float | None = None,
    attempts: int | None = None,
) -> InterestOutcome:
    """
    Run the interest flow for a buyer and a property.

    - matched: the lead is created directly.
    - mismatched, not confirmed: nothing is written; the outcome carries the
      reasons with state WarningShown.
    - mismatched, confirmed: the lead is created with the same payload as a
      match (mismatch_acknowledged is recorded alongside).

    Raises AlreadyInterested if a lead exists for the pair (before or during
    the write), LeadPersistenceError if the write keeps failing.
    """
    buyer, prop = await _load(session, buyer_id, property_id)

    leads = LeadRepository(session)
    if await leads.find(buyer_id=buyer_id, property_id=property_id):
        raise AlreadyInterested(buyer_id, property_id)

    flow = InterestFlow()
    match = flow.evaluate(
        lambda: evaluate_match(
            buyer_input_from_record(buyer),
            property_input_from_record(prop),
            budget_tolerance_pct=_tolerance(budget_tolerance_pct),
        )
    )

    if flow.state == InterestState.warning_shown:
        if not confirm_mismatch:
            log.info(
                "interest warning buyer=%s property=%s reasons=%s",
                buyer_id, property_id, [r.value for r in match.reasons],
            )
            return InterestOutcome(state=flow.state, match=match)
        flow.confirm()

    payload = build_lead_payload(
        snapshot_buyer(buyer),
        PropertyRef(property_id=prop.id, marketer_id=prop.marketer_id),
    )
    lead = await _submit(session, flow, payload, max(1, attempts or settings.LEAD_WRITE_ATTEMPTS))

    log.info(
        "lead %s created buyer=%s property=%s tier=%s override=%s",
        lead.id, buyer_id, property_id, payload["buyer_score_tier"], flow.mismatch_acknowledged,
    )
    return InterestOutcome(state=flow.state, match=match, lead=lead)
