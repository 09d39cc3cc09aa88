# app/deps.py
# Role: Shared request-scoped dependencies.
#       Provides the SQLAlchemy session and the services built around it.
#       Nothing here is a process-wide handle: every request gets its own
#       session and its own LedgerStore.

"""
Shared dependencies for the ledger app.
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from db import SessionLocal
from app.services.archive_engine import ArchiveEngine
from app.services.ledger_store import LedgerStore
from app.services.registry import CategoryRegistry, PersonRegistry


# -------------------------------------------------------------------
# Database dependency
# -------------------------------------------------------------------

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session and ensures it is closed.

    Typical usage in routes:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# -------------------------------------------------------------------
# Services
# -------------------------------------------------------------------

def get_store(db: Session = Depends(get_db)) -> LedgerStore:
    return LedgerStore(db)


def get_people(store: LedgerStore = Depends(get_store)) -> PersonRegistry:
    return PersonRegistry(store)


def get_categories(store: LedgerStore = Depends(get_store)) -> CategoryRegistry:
    return CategoryRegistry(store)


def get_archive_engine(store: LedgerStore = Depends(get_store)) -> ArchiveEngine:
    return ArchiveEngine(store)
