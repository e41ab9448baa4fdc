# leadhub/domain/parsing.py
from __future__ import annotations

import math
from typing import Any, Iterable

from .types import BuyerInput, BuyingIntent, PropertyInput


def to_float(x: Any) -> float | None:
    if x is None or x == "":
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    if math.isnan(v):
        return None
    return v


def normalize_key(value: str | None) -> str:
    """Case-folded, whitespace-trimmed identifier used for set membership."""
    if not value:
        return ""
    return " ".join(value.split()).casefold()


def distinct_keys(values: Iterable[str] | None) -> set[str]:
    """Normalized distinct non-blank entries of a preference list."""
    out: set[str] = set()
    for v in values or ():
        k = normalize_key(v)
        if k:
            out.add(k)
    return out


def to_intent(x: Any) -> BuyingIntent | None:
    if x is None or x == "":
        return None
    if isinstance(x, BuyingIntent):
        return x
    try:
        return BuyingIntent(str(getattr(x, "value", x)))
    except ValueError:
        return None


def buyer_input_from_record(rec: Any) -> BuyerInput:
    """
    Build the engine input from a buyer row (ORM object or plain mapping).
    Accepts either snake_case attributes or dict keys.
    """
    def _get(name: str) -> Any:
        if isinstance(rec, dict):
            return rec.get(name)
        return getattr(rec, name, None)

    return BuyerInput(
        budget=to_float(_get("budget")),
        locations=tuple(_get("locations") or ()),
        property_types=tuple(_get("property_types") or ()),
        buying_intent=to_intent(_get("buying_intent")),
    )


def property_input_from_record(rec: Any) -> PropertyInput:
    def _get(name: str) -> Any:
        if isinstance(rec, dict):
            return rec.get(name)
        return getattr(rec, name, None)

    raw_type = _get("type")
    return PropertyInput(
        price=to_float(_get("price")) or 0.0,
        location=str(_get("location") or ""),
        type=str(getattr(raw_type, "value", raw_type) or ""),
    )
