# leadhub/service_layer/scoring.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..adapters.repos.buyers import SCORED_FIELDS, BuyerRepository
from ..config import settings
from ..domain.parsing import buyer_input_from_record
from ..domain.scoring import compute_score, explain
from ..domain.types import ScoreResult
from ..models import Buyer
from .errors import BuyerNotFound, DuplicateBuyer

log = logging.getLogger(__name__)


async def score_buyer(session: AsyncSession, buyer: Buyer) -> ScoreResult:
    """
    Recompute and persist score + tier for a buyer row.
    Idempotent: same profile in, same score out.
    """
    result = compute_score(buyer_input_from_record(buyer))
    await BuyerRepository(session).apply_score(buyer, result)
    log.debug("buyer %s rescored: %s", buyer.id, explain(result))
    return result


async def register_buyer(session: AsyncSession, **fields: Any) -> Buyer:
    repo = BuyerRepository(session)
    if await repo.get_by_email(fields["email"]):
        raise DuplicateBuyer(f"Buyer with email {fields['email']!r} already exists")

    try:
        # a concurrent registration can pass the lookup above; uq_buyer_email decides
        async with session.begin_nested():
            buyer = await repo.add(**fields)
    except IntegrityError as e:
        raise DuplicateBuyer(f"Buyer with email {fields['email']!r} already exists") from e

    result = await score_buyer(session, buyer)
    log.info("buyer %s registered score=%s tier=%s", buyer.id, result.score, result.tier.value)
    return buyer


async def update_buyer_profile(
    session: AsyncSession,
    buyer_id: int,
    changes: dict[str, Any],
    *,
    rescore: bool | None = None,
) -> Buyer:
    """
    Apply profile edits; rescore when a scored field changed and rescoring is
    enabled (RESCORE_ON_PROFILE_UPDATE unless overridden).
    """
    repo = BuyerRepository(session)
    buyer = await repo.get(buyer_id)
    if buyer is None:
        raise BuyerNotFound(buyer_id)

    changed = await repo.update(buyer, changes)

    if rescore is None:
        rescore = settings.RESCORE_ON_PROFILE_UPDATE
    if rescore and changed.intersection(SCORED_FIELDS):
        await score_buyer(session, buyer)

    return buyer
