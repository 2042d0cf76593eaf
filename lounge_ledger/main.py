"""
Lounge Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lounge_ledger.config import get_settings
from lounge_ledger.api.accounts import router as accounts_router
from lounge_ledger.api.events import router as events_router
from lounge_ledger.api.expenses import router as expenses_router
from lounge_ledger.api.health import router as health_router
from lounge_ledger.api.journal import router as journal_router
from lounge_ledger.api.reports import router as reports_router
from lounge_ledger.api.sync import router as sync_router
from lounge_ledger.models.base import Base, SessionLocal, engine
from lounge_ledger.services.chart_service import ChartOfAccountsService

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables in development and make sure the chart exists."""
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)

    if settings.ENVIRONMENT == "development":
        # Elsewhere the schema is managed by Alembic migrations.
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ChartOfAccountsService(db).seed_defaults()
        db.commit()
    finally:
        db.close()

    yield

    logger.info("Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    description="Double-entry accounting for a restaurant and lounge POS",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(journal_router)
app.include_router(expenses_router)
app.include_router(events_router)
app.include_router(sync_router)
app.include_router(reports_router)
