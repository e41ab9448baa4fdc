import pytest

from leadhub.domain.matching import BUDGET_TOLERANCE_PCT, evaluate_match
from leadhub.domain.types import BuyerInput, MatchResult, PropertyInput, ReasonCode

ZAMALEK_VILLA_BUYER = BuyerInput(budget=3_000_000, locations=("Zamalek",), property_types=("Villa",))


def test_over_budget_only():
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=3_200_000, location="Zamalek", type="Villa"))
    assert res == MatchResult(matches=False, reasons=(ReasonCode.budget_exceeded,))


def test_location_and_type_mismatch_in_order():
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=2_900_000, location="Heliopolis", type="Apartment"))
    assert res.matches is False
    assert res.reasons == (ReasonCode.location_mismatch, ReasonCode.type_mismatch)


def test_empty_preferences_never_block():
    buyer = BuyerInput(budget=3_000_000, locations=(), property_types=())
    res = evaluate_match(buyer, PropertyInput(price=2_000_000, location="anywhere", type="Commercial"))
    assert res == MatchResult(matches=True, reasons=())


def test_all_three_fail_in_fixed_order():
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=9_000_000, location="Maadi", type="Duplex"))
    assert [r.value for r in res.reasons] == ["budgetExceeded", "locationMismatch", "typeMismatch"]


def test_price_equal_to_budget_matches():
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=3_000_000, location="Zamalek", type="Villa"))
    assert res.matches is True


def test_location_and_type_compare_case_insensitively():
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=1, location="  zamalek ", type="villa"))
    assert res.matches is True


@pytest.mark.parametrize(
    "buyer",
    [
        BuyerInput(budget=1_000_000, locations=(), property_types=("Villa",)),
        BuyerInput(budget=1_000_000, locations=("Zamalek",), property_types=()),
        BuyerInput(budget=1_000_000),
    ],
)
def test_empty_dimension_is_unconstrained(buyer):
    res = evaluate_match(buyer, PropertyInput(price=500_000, location="Giza", type="Commercial"))
    if buyer.locations:
        assert ReasonCode.location_mismatch in res.reasons
    else:
        assert ReasonCode.location_mismatch not in res.reasons
    if buyer.property_types:
        assert ReasonCode.type_mismatch in res.reasons
    else:
        assert ReasonCode.type_mismatch not in res.reasons


def test_default_tolerance_is_strict():
    assert BUDGET_TOLERANCE_PCT == 0.0
    res = evaluate_match(ZAMALEK_VILLA_BUYER, PropertyInput(price=3_000_001, location="Zamalek", type="Villa"))
    assert res.reasons == (ReasonCode.budget_exceeded,)


def test_tolerance_allows_small_overage():
    prop = PropertyInput(price=3_150_000, location="Zamalek", type="Villa")
    assert evaluate_match(ZAMALEK_VILLA_BUYER, prop, budget_tolerance_pct=0.05).matches is True
    over = PropertyInput(price=3_150_001, location="Zamalek", type="Villa")
    assert evaluate_match(ZAMALEK_VILLA_BUYER, over, budget_tolerance_pct=0.05).reasons == (ReasonCode.budget_exceeded,)


def test_negative_tolerance_is_treated_as_strict():
    prop = PropertyInput(price=3_000_000, location="Zamalek", type="Villa")
    assert evaluate_match(ZAMALEK_VILLA_BUYER, prop, budget_tolerance_pct=-0.5).matches is True


def test_match_is_total_over_odd_but_valid_inputs():
    buyers = [
        BuyerInput(budget=None),
        BuyerInput(budget=0, locations=("",), property_types=("",)),
        BuyerInput(budget=-10, locations=("Zamalek", "zamalek"), property_types=("Villa",)),
    ]
    props = [
        PropertyInput(price=0, location="", type=""),
        PropertyInput(price=1e15, location="Zamalek", type="Villa"),
    ]
    for b in buyers:
        for p in props:
            res = evaluate_match(b, p)
            assert res.matches is (len(res.reasons) == 0)
            assert list(res.reasons) == sorted(res.reasons, key=list(ReasonCode).index)
