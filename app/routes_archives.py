# routes_archives.py
"""
Routes for creating and browsing archives.
"""

from fastapi import APIRouter, Depends

from app.deps import get_archive_engine
from app.schemas import ArchiveIn, archive_to_dict, transaction_to_dict
from app.services.archive_engine import ArchiveEngine
from app.services.validators import parse_id

router = APIRouter(prefix="/api/archives", tags=["archives"])


@router.post("", status_code=201)
def create_archive(payload: ArchiveIn, engine: ArchiveEngine = Depends(get_archive_engine)):
    """
    Freeze every active transaction into a new archive.
    400 {"error": "no active transactions"} when there is nothing to archive.
    """
    result = engine.create_archive(payload.name, payload.description)
    return archive_to_dict(result.archive)


@router.get("")
def list_archives(engine: ArchiveEngine = Depends(get_archive_engine)):
    return [archive_to_dict(a) for a in engine.list_archives()]


@router.get("/{archive_id}")
def get_archive(archive_id: str, engine: ArchiveEngine = Depends(get_archive_engine)):
    return archive_to_dict(engine.get_archive(parse_id(archive_id, "archive ID")))


@router.get("/{archive_id}/transactions")
def get_archive_transactions(archive_id: str, engine: ArchiveEngine = Depends(get_archive_engine)):
    transactions = engine.get_archived_transactions(parse_id(archive_id, "archive ID"))
    return [transaction_to_dict(tx) for tx in transactions]
