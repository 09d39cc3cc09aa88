# main.py
# Role: Application entry point for the shared-expense ledger.
#       Initializes logging and the FastAPI app, creates database tables,
#       seeds default categories, and registers all route modules.

"""
Main FastAPI app for the shared-expense ledger.

Here we only:
- set up logging
- create DB tables and seed default categories
- create the FastAPI app and its error handlers
- include route modules
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from db import Base, engine, SessionLocal
from app.errors import register_error_handlers
from app.logging_config import setup_logging
from app.routes_root import router as root_router
from app.routes_transactions import router as transactions_router
from app.routes_people import router as people_router
from app.routes_categories import router as categories_router
from app.routes_totals import router as totals_router
from app.routes_archives import router as archives_router
from app.routes_upload import router as upload_router
from app.services.ledger_store import LedgerStore
from app.services.registry import CategoryRegistry

setup_logging()
logger = logging.getLogger(__name__)


def init_db() -> None:
    """
    Create tables (only if they don't exist yet) and seed default categories.
    Set SEED_DEFAULT_CATEGORIES=0 to skip the seeding.
    """
    Base.metadata.create_all(bind=engine)

    if os.getenv("SEED_DEFAULT_CATEGORIES", "1").strip().lower() in ("0", "false", "no", "off"):
        return

    db = SessionLocal()
    try:
        CategoryRegistry(LedgerStore(db)).seed_defaults()
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Ledger API started")
    yield


# FastAPI application instance
app = FastAPI(title="Shared Expense Ledger", lifespan=lifespan)

# Every error becomes {"error": "..."} with the mapped status
register_error_handlers(app)

# -------------------------------------------------------------------
# Include routers
# -------------------------------------------------------------------

# Root / health
app.include_router(root_router)

# Active transactions: list, clear, delete, assign, categorize
app.include_router(transactions_router)

# CSV upload with duplicate rejection
app.include_router(upload_router)

# Person and category registries
app.include_router(people_router)
app.include_router(categories_router)

# Per-person totals and archives
app.include_router(totals_router)
app.include_router(archives_router)
