"""Health check routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from portfolio_cms.data.db import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Report whether the API can reach its database."""
    try:
        with get_session() as session:
            session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "healthy", "database": "connected"}
