import pytest

from leadhub.domain.interest import (
    BuyerSnapshot,
    InterestFlow,
    InterestState,
    InvalidTransition,
    PropertyRef,
    build_lead_payload,
)
from leadhub.domain.types import MatchResult, ReasonCode

MATCH = MatchResult(matches=True)
MISMATCH = MatchResult(matches=False, reasons=(ReasonCode.budget_exceeded,))


def test_match_goes_straight_to_submitting():
    flow = InterestFlow()
    flow.evaluate(lambda: MATCH)
    assert flow.state == InterestState.submitting
    assert flow.can_submit
    flow.succeeded()
    assert flow.state == InterestState.done
    assert flow.mismatch_acknowledged is False


def test_mismatch_blocks_until_confirmed():
    flow = InterestFlow()
    flow.evaluate(lambda: MISMATCH)
    assert flow.state == InterestState.warning_shown
    assert not flow.can_submit

    flow.confirm()
    assert flow.state == InterestState.submitting
    assert flow.mismatch_acknowledged is True


def test_cancel_returns_to_idle_without_lead():
    flow = InterestFlow()
    flow.evaluate(lambda: MISMATCH)
    flow.cancel()
    assert flow.state == InterestState.idle
    assert flow.match is None


def test_failed_submission_retries_with_same_match():
    calls = []

    def _evaluate():
        calls.append(1)
        return MISMATCH

    flow = InterestFlow()
    flow.evaluate(_evaluate)
    flow.confirm()
    flow.failed()
    assert flow.state == InterestState.failed

    flow.retry()
    assert flow.state == InterestState.submitting
    assert flow.match is MISMATCH
    assert flow.mismatch_acknowledged is True
    assert len(calls) == 1


def test_failed_can_go_back_to_idle_and_start_over():
    flow = InterestFlow()
    flow.evaluate(lambda: MATCH)
    flow.failed()
    flow.reset()
    assert flow.state == InterestState.idle
    flow.evaluate(lambda: MATCH)
    assert flow.state == InterestState.submitting


@pytest.mark.parametrize("action", ["confirm", "cancel", "succeeded", "failed", "retry"])
def test_illegal_moves_from_idle(action):
    flow = InterestFlow()
    with pytest.raises(InvalidTransition):
        getattr(flow, action)()


def test_done_is_terminal():
    flow = InterestFlow()
    flow.evaluate(lambda: MATCH)
    flow.succeeded()
    with pytest.raises(InvalidTransition):
        flow.evaluate(lambda: MATCH)


def test_cannot_submit_from_warning_without_confirm():
    flow = InterestFlow()
    flow.evaluate(lambda: MISMATCH)
    with pytest.raises(InvalidTransition):
        flow.succeeded()


def test_payload_snapshots_buyer_qualification():
    buyer = BuyerSnapshot(
        buyer_id=1,
        score=55,
        score_tier="Warm",
        full_name="Nour Hassan",
        phone="+20100",
        email="nour@example.com",
        budget=3_000_000.0,
        locations=("Zamalek",),
        property_types=("Villa",),
    )
    prop = PropertyRef(property_id=10, marketer_id=7)

    payload = build_lead_payload(buyer, prop)
    assert payload["buyer_score"] == 55
    assert payload["buyer_score_tier"] == "Warm"
    assert payload["marketer_id"] == 7
    assert payload["status"] == "New"
    assert payload["buyer_locations"] == ["Zamalek"]
