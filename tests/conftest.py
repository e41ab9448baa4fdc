# tests/conftest.py
import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leadhub.config import settings
from leadhub.db import enable_sqlite_savepoints, get_session, init_schema
from leadhub.domain.types import BuyingIntent, PropertyType
from leadhub.entrypoints.fastapi_app import create_app
from leadhub.adapters.repos.properties import PropertyRepository
from leadhub.service_layer.scoring import register_buyer


@pytest.fixture
async def engine():
    """
    Fresh in-memory DB per test. StaticPool makes all connections share the same
    in-memory database for the lifetime of this engine fixture.
    """
    engine = enable_sqlite_savepoints(
        create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    await init_schema(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def async_session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=True)


@pytest.fixture
async def zamalek_buyer(async_session_maker):
    async with async_session_maker() as session:
        b = await register_buyer(
            session,
            full_name="Nour Hassan",
            email="nour@example.com",
            phone="+201001112223",
            budget=3_000_000,
            locations=["Zamalek"],
            property_types=["Villa"],
            buying_intent=BuyingIntent.mortgage,
        )
        await session.commit()
        return b


@pytest.fixture
async def properties(async_session_maker):
    """over_budget, mismatched and match properties, all owned by marketer 7."""
    async with async_session_maker() as session:
        repo = PropertyRepository(session)
        over = await repo.add(
            marketer_id=7, title="Nile Villa", type=PropertyType.villa, location="Zamalek", price=3_200_000
        )
        mism = await repo.add(
            marketer_id=7, title="Heliopolis Flat", type=PropertyType.apartment, location="Heliopolis", price=2_900_000
        )
        ok = await repo.add(
            marketer_id=7, title="Zamalek Villa", type=PropertyType.villa, location="zamalek ", price=2_500_000
        )
        await session.commit()
        return {"over_budget": over, "mismatched": mism, "match": ok}


@pytest.fixture
async def client(async_session_maker, monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", None)
    app = create_app()

    async def _session_override():
        async with async_session_maker() as s:
            yield s

    app.dependency_overrides[get_session] = _session_override

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
