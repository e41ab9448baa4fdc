# leadhub/entrypoints/api/routers/buyers.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import require_api_key
from ....adapters.repos.buyers import BuyerRepository
from ....db import get_session
from ....domain.parsing import buyer_input_from_record, to_intent
from ....domain.scoring import compute_score, explain
from ....models import Buyer, Property
from ....schemas import BuyerCreate, BuyerOut, BuyerUpdate, PropertyOut, ScoreOut
from ....service_layer.errors import BuyerNotFound, DuplicateBuyer
from ....service_layer.leads import buyer_interests
from ....service_layer.scoring import register_buyer, update_buyer_profile

router = APIRouter(tags=["buyers"], dependencies=[Depends(require_api_key)])


def buyer_out(b: Buyer) -> BuyerOut:
    return BuyerOut(
        id=b.id,
        full_name=b.full_name,
        email=b.email,
        phone=b.phone,
        budget=b.budget,
        locations=list(b.locations or []),
        property_types=list(b.property_types or []),
        buying_intent=b.buying_intent.value if b.buying_intent else None,
        score=b.score,
        score_tier=b.score_tier.value,
        created_at=b.created_at,
        updated_at=b.updated_at,
    )


def property_out(p: Property) -> PropertyOut:
    return PropertyOut(
        id=p.id,
        marketer_id=p.marketer_id,
        title=p.title,
        type=p.type.value,
        location=p.location,
        price=p.price,
        status=p.status.value,
        created_at=p.created_at,
    )


@router.post("/buyers", response_model=BuyerOut, status_code=201)
async def create_buyer(
    body: BuyerCreate,
    session: AsyncSession = Depends(get_session),
) -> BuyerOut:
    fields = body.model_dump()
    fields["buying_intent"] = to_intent(fields["buying_intent"])
    try:
        buyer = await register_buyer(session, **fields)
    except DuplicateBuyer as e:
        raise HTTPException(status_code=409, detail=str(e))
    await session.commit()
    return buyer_out(buyer)


@router.get("/buyers/{buyer_id}", response_model=BuyerOut)
async def get_buyer(
    buyer_id: int,
    session: AsyncSession = Depends(get_session),
) -> BuyerOut:
    buyer = await BuyerRepository(session).get(buyer_id)
    if buyer is None:
        raise HTTPException(status_code=404, detail="Buyer not found")
    return buyer_out(buyer)


@router.patch("/buyers/{buyer_id}", response_model=BuyerOut)
async def patch_buyer(
    buyer_id: int,
    body: BuyerUpdate,
    session: AsyncSession = Depends(get_session),
) -> BuyerOut:
    changes = body.model_dump(exclude_unset=True)
    if "buying_intent" in changes:
        changes["buying_intent"] = to_intent(changes["buying_intent"])
    try:
        buyer = await update_buyer_profile(session, buyer_id, changes)
    except BuyerNotFound:
        raise HTTPException(status_code=404, detail="Buyer not found")
    await session.commit()
    return buyer_out(buyer)


@router.get("/buyers/{buyer_id}/score", response_model=ScoreOut)
async def preview_score(
    buyer_id: int,
    session: AsyncSession = Depends(get_session),
) -> ScoreOut:
    """Score breakdown for the buyer's current profile. Nothing is persisted."""
    buyer = await BuyerRepository(session).get(buyer_id)
    if buyer is None:
        raise HTTPException(status_code=404, detail="Buyer not found")
    result = compute_score(buyer_input_from_record(buyer))
    return ScoreOut(
        score=result.score,
        tier=result.tier.value,
        components=dict(result.components),
        explain=explain(result),
    )


@router.get("/buyers/{buyer_id}/interests", response_model=list[PropertyOut])
async def list_interests(
    buyer_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[PropertyOut]:
    try:
        props = await buyer_interests(session, buyer_id)
    except BuyerNotFound:
        raise HTTPException(status_code=404, detail="Buyer not found")
    return [property_out(p) for p in props]
