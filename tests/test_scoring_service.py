import pytest

from leadhub.adapters.repos.buyers import BuyerRepository
from leadhub.config import settings
from leadhub.domain.scoring import compute_score, tier_for_score
from leadhub.domain.parsing import buyer_input_from_record
from leadhub.domain.types import BuyingIntent, ScoreTier
from leadhub.service_layer.errors import BuyerNotFound, DuplicateBuyer
from leadhub.service_layer.scoring import register_buyer, update_buyer_profile


async def test_register_scores_immediately(async_session_maker):
    async with async_session_maker() as session:
        buyer = await register_buyer(
            session,
            full_name="Omar Adel",
            email="  Omar@Example.com ",
            phone="+201000000000",
            budget=5_000_000,
            locations=["New Cairo"],
            property_types=["Apartment"],
            buying_intent=BuyingIntent.cash,
        )
        await session.commit()

    assert buyer.email == "omar@example.com"
    assert buyer.score == compute_score(buyer_input_from_record(buyer)).score
    assert buyer.score_tier == ScoreTier.hot
    assert buyer.score_tier == tier_for_score(buyer.score)


async def test_register_rejects_duplicate_email(async_session_maker, zamalek_buyer):
    async with async_session_maker() as session:
        with pytest.raises(DuplicateBuyer):
            await register_buyer(
                session,
                full_name="Someone Else",
                email="NOUR@example.com",
                phone="+20",
                budget=1,
                locations=[],
                property_types=[],
            )


async def test_profile_edit_rescores(async_session_maker, zamalek_buyer, monkeypatch):
    monkeypatch.setattr(settings, "RESCORE_ON_PROFILE_UPDATE", True)
    before = zamalek_buyer.score

    async with async_session_maker() as session:
        buyer = await update_buyer_profile(
            session, zamalek_buyer.id, {"buying_intent": BuyingIntent.cash, "budget": 10_000_000}
        )
        await session.commit()

    assert buyer.score > before
    assert buyer.score_tier == ScoreTier.hot


async def test_profile_edit_without_rescoring_keeps_score(async_session_maker, zamalek_buyer, monkeypatch):
    monkeypatch.setattr(settings, "RESCORE_ON_PROFILE_UPDATE", False)

    async with async_session_maker() as session:
        buyer = await update_buyer_profile(session, zamalek_buyer.id, {"budget": 10_000_000})
        await session.commit()

    assert buyer.budget == 10_000_000
    assert buyer.score == zamalek_buyer.score
    assert buyer.score_tier == zamalek_buyer.score_tier


async def test_contact_edit_does_not_rescore(async_session_maker, zamalek_buyer):
    async with async_session_maker() as session:
        repo = BuyerRepository(session)
        buyer = await repo.get(zamalek_buyer.id)
        # plant a stale score to see whether anything recomputes it
        buyer.score = 1
        await session.flush()

        buyer = await update_buyer_profile(session, zamalek_buyer.id, {"phone": "+209999"}, rescore=True)
        assert buyer.phone == "+209999"
        assert buyer.score == 1


async def test_update_unknown_buyer(async_session_maker):
    async with async_session_maker() as session:
        with pytest.raises(BuyerNotFound):
            await update_buyer_profile(session, 12345, {"budget": 1})


async def test_score_fields_not_editable_directly(async_session_maker, zamalek_buyer):
    async with async_session_maker() as session:
        repo = BuyerRepository(session)
        buyer = await repo.get(zamalek_buyer.id)
        changed = await repo.update(buyer, {"score": 99, "score_tier": ScoreTier.hot})
        assert changed == set()
        assert buyer.score == zamalek_buyer.score


async def test_concurrent_duplicate_email_maps_to_duplicate_buyer(async_session_maker, zamalek_buyer, monkeypatch):
    # the losing registration looked the email up before the winner committed
    async def _not_found_yet(self, email):
        return None

    monkeypatch.setattr(BuyerRepository, "get_by_email", _not_found_yet)

    async with async_session_maker() as session:
        other = await register_buyer(
            session,
            full_name="Salma Hany",
            email="salma@example.com",
            phone="+202",
            budget=2_000_000,
            locations=[],
            property_types=[],
        )
        with pytest.raises(DuplicateBuyer):
            await register_buyer(
                session,
                full_name="Nour Again",
                email="nour@example.com",
                phone="+203",
                budget=1_000_000,
                locations=[],
                property_types=[],
            )
        await session.commit()

    async with async_session_maker() as session:
        assert await BuyerRepository(session).get(other.id) is not None
        assert (await BuyerRepository(session).get(zamalek_buyer.id)).full_name == zamalek_buyer.full_name
