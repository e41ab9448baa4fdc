# leadhub/entrypoints/api/reasons.py
from __future__ import annotations

from typing import Iterable

from ...domain.types import ReasonCode

# reason code -> translation key used by the web client
REASON_MESSAGE_KEYS: dict[str, str] = {
    ReasonCode.budget_exceeded.value: "interestButton.mismatchReasons.budgetExceeded",
    ReasonCode.location_mismatch.value: "interestButton.mismatchReasons.locationMismatch",
    ReasonCode.type_mismatch.value: "interestButton.mismatchReasons.typeMismatch",
}


def reason_message_key(code: ReasonCode | str) -> str:
    """Unknown codes fall back to the raw code."""
    raw = getattr(code, "value", code)
    return REASON_MESSAGE_KEYS.get(raw, raw)


def message_keys(codes: Iterable[ReasonCode | str]) -> list[str]:
    return [reason_message_key(c) for c in codes]
