# routes_totals.py
"""
Per-person totals over the active transactions.
"""

from fastapi import APIRouter, Depends

from app.deps import get_archive_engine
from app.services.archive_engine import ArchiveEngine

router = APIRouter(prefix="/api/totals", tags=["totals"])


@router.get("")
def get_totals(engine: ArchiveEngine = Depends(get_archive_engine)):
    """
    [{person, total}] sorted by person name.

    Unassigned transactions are left out, so the totals add up to the
    assigned amounts only.
    """
    return [{"person": t.name, "total": float(t.total)} for t in engine.active_totals()]
