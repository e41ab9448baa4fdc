# leadhub/entrypoints/api/routers/health.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ..deps import require_api_key
from ....config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/debug/config", dependencies=[Depends(require_api_key)])
def debug_config() -> dict[str, Any]:
    return {
        "ENV": settings.ENV,
        "LEADHUB_DB_URL": settings.LEADHUB_DB_URL,
        "API_KEY_SET": bool(settings.API_KEY),
        "MATCH_BUDGET_TOLERANCE_PCT": settings.MATCH_BUDGET_TOLERANCE_PCT,
        "RESCORE_ON_PROFILE_UPDATE": settings.RESCORE_ON_PROFILE_UPDATE,
        "LEAD_WRITE_ATTEMPTS": settings.LEAD_WRITE_ATTEMPTS,
    }
