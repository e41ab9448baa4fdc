# leadhub/adapters/repos/properties.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...domain.types import PropertyType
from ...models import Property, PropertyStatus


class PropertyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, property_id: int) -> Property | None:
        return (await self.session.execute(select(Property).where(Property.id == property_id))).scalars().first()

    async def add(
        self,
        *,
        marketer_id: int,
        title: str,
        type: PropertyType,
        location: str,
        price: float,
        status: PropertyStatus = PropertyStatus.available,
    ) -> Property:
        prop = Property(
            marketer_id=marketer_id,
            title=title,
            type=type,
            location=location.strip(),
            price=float(price),
            status=status,
        )
        self.session.add(prop)
        await self.session.flush()
        return prop
