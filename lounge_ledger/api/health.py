"""
Health check endpoint.

Reports database connectivity and whether the books balance.
An unbalanced ledger means an entry slipped past validation and
needs an accountant's attention, so it shows up as "degraded".
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lounge_ledger.models.base import get_db
from lounge_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        integrity = LedgerService(db).check_integrity()
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return {
            "status": "degraded",
            "service": "lounge-ledger",
            "database": "unhealthy",
            "ledger": "unknown",
        }

    ledger_status = "balanced" if integrity["is_balanced"] else "unbalanced"
    return {
        "status": "healthy" if integrity["is_balanced"] else "degraded",
        "service": "lounge-ledger",
        "database": "healthy",
        "ledger": ledger_status,
    }
