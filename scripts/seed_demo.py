from __future__ import annotations

import argparse
import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.adapters.repos.buyers import BuyerRepository
from leadhub.adapters.repos.properties import PropertyRepository
from leadhub.db import AsyncSessionLocal, engine, init_schema
from leadhub.domain.types import BuyingIntent, PropertyType
from leadhub.models import Property
from leadhub.service_layer.scoring import register_buyer

DEMO_BUYERS = [
    dict(
        full_name="Demo Cash Buyer",
        email="cash.buyer@example.com",
        phone="+201000000001",
        budget=5_000_000,
        locations=["New Cairo"],
        property_types=["Apartment"],
        buying_intent=BuyingIntent.cash,
    ),
    dict(
        full_name="Demo Browser",
        email="browser@example.com",
        phone="+201000000002",
        budget=500_000,
        locations=[],
        property_types=[],
        buying_intent=None,
    ),
]

DEMO_PROPERTIES = [
    ("Zamalek Nile View", PropertyType.villa, "Zamalek", 3_200_000),
    ("Heliopolis Flat", PropertyType.apartment, "Heliopolis", 2_900_000),
    ("New Cairo Compound Unit", PropertyType.apartment, "New Cairo", 4_500_000),
]


async def _seed_properties(session: AsyncSession, marketer_id: int) -> int:
    repo = PropertyRepository(session)
    created = 0
    for title, ptype, location, price in DEMO_PROPERTIES:
        # naive idempotent behavior: uniqueness on title per marketer
        existing = (
            await session.execute(
                select(Property).where(Property.marketer_id == marketer_id, Property.title == title)
            )
        ).scalars().first()
        if existing:
            continue
        await repo.add(marketer_id=marketer_id, title=title, type=ptype, location=location, price=price)
        created += 1
    return created


async def seed_demo(marketer_id: int = 1) -> dict[str, int]:
    await init_schema(engine)

    buyers = 0
    async with AsyncSessionLocal() as session:
        repo = BuyerRepository(session)
        for data in DEMO_BUYERS:
            if await repo.get_by_email(data["email"]):
                continue
            await register_buyer(session, **data)
            buyers += 1
        props = await _seed_properties(session, marketer_id)
        await session.commit()

    return {"buyers": buyers, "properties": props}


async def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--marketer-id", type=int, default=1, help="Owner of the demo properties")
    args = parser.parse_args()

    res = await seed_demo(args.marketer_id)
    print(f"Seeded demo data: {res}")


if __name__ == "__main__":
    asyncio.run(main())
