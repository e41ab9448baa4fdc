# leadhub/entrypoints/api/routers/properties.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import require_api_key
from ..reasons import message_keys
from .buyers import property_out
from .leads import lead_out
from ....adapters.repos.properties import PropertyRepository
from ....db import get_session
from ....domain.interest import InterestState
from ....domain.types import PropertyType
from ....models import PropertyStatus
from ....schemas import InterestCreate, InterestOut, MatchOut, PropertyCreate, PropertyOut
from ....service_layer.errors import (
    AlreadyInterested,
    BuyerNotFound,
    LeadPersistenceError,
    PropertyNotFound,
)
from ....service_layer.interest import check_match, express_interest

log = logging.getLogger(__name__)

router = APIRouter(tags=["properties"], dependencies=[Depends(require_api_key)])


@router.post("/properties", response_model=PropertyOut, status_code=201)
async def create_property(
    body: PropertyCreate,
    session: AsyncSession = Depends(get_session),
) -> PropertyOut:
    prop = await PropertyRepository(session).add(
        marketer_id=body.marketer_id,
        title=body.title,
        type=PropertyType(body.type),
        location=body.location,
        price=body.price,
        status=PropertyStatus(body.status),
    )
    await session.commit()
    return property_out(prop)


@router.get("/properties/{property_id}", response_model=PropertyOut)
async def get_property(
    property_id: int,
    session: AsyncSession = Depends(get_session),
) -> PropertyOut:
    prop = await PropertyRepository(session).get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return property_out(prop)


@router.get("/properties/{property_id}/match", response_model=MatchOut)
async def match_property(
    property_id: int,
    buyer_id: int = Query(...),
    session: AsyncSession = Depends(get_session),
) -> MatchOut:
    try:
        result = await check_match(session, buyer_id, property_id)
    except (BuyerNotFound, PropertyNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))

    reasons = [r.value for r in result.reasons]
    return MatchOut(matches=result.matches, reasons=reasons, message_keys=message_keys(reasons))


@router.post("/properties/{property_id}/interest", response_model=InterestOut)
async def create_interest(
    property_id: int,
    body: InterestCreate,
    response: Response,
    session: AsyncSession = Depends(get_session),
) -> InterestOut:
    """
    Express interest. A mismatch without confirm_mismatch returns the
    reasons and writes nothing; resend with confirm_mismatch=true to proceed.
    """
    try:
        outcome = await express_interest(
            session,
            body.buyer_id,
            property_id,
            confirm_mismatch=body.confirm_mismatch,
        )
    except (BuyerNotFound, PropertyNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyInterested as e:
        raise HTTPException(status_code=409, detail=str(e))
    except LeadPersistenceError:
        log.exception("interest not saved buyer=%s property=%s", body.buyer_id, property_id)
        raise HTTPException(
            status_code=503,
            detail="Could not save your interest. Please try again.",
            headers={"Retry-After": "1"},
        )

    reasons = [r.value for r in outcome.match.reasons]
    if outcome.state == InterestState.warning_shown:
        return InterestOut(
            state=outcome.state.value,
            matches=False,
            reasons=reasons,
            message_keys=message_keys(reasons),
        )

    await session.commit()
    response.status_code = 201
    return InterestOut(
        state=outcome.state.value,
        matches=outcome.match.matches,
        reasons=reasons,
        message_keys=message_keys(reasons),
        lead=lead_out(outcome.lead),
    )
