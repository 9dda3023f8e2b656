"""FastAPI entrypoint for the bakery fulfillment service."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from fulfillment.api.v1.api import api_router
from fulfillment.core.config import settings
from fulfillment.db import session as db_session
from fulfillment.db.base import Base
from fulfillment.db.seed import ensure_seed_data

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
    logger.info("[BOOTSTRAP] Business timezone: %s", settings.business_timezone)
    Base.metadata.create_all(bind=db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            ensure_seed_data(session)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
