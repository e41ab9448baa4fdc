# leadhub/entrypoints/fastapi_app.py
from __future__ import annotations

import logging

from fastapi import FastAPI

from ..config import settings
from ..db import engine, init_schema
from .api.routers import buyers, health, leads, properties


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title="LeadHub - Buyer Leads")

    @app.on_event("startup")
    async def _startup() -> None:
        await init_schema(engine)

    # Routers
    app.include_router(health.router)
    app.include_router(buyers.router)
    app.include_router(properties.router)
    app.include_router(leads.router)

    return app
