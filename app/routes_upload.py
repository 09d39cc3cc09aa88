# routes_upload.py
"""
CSV upload: parse a statement and ingest its non-duplicate rows.
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from app.deps import get_categories, get_store
from app.errors import ValidationError
from app.schemas import transaction_to_dict
from app.services.csv_import import parse_statement
from app.services.import_helpers import ingest_records
from app.services.ledger_store import LedgerStore
from app.services.registry import CategoryRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload-csv")
async def upload_csv(
    file: UploadFile | None = File(None),
    store: LedgerStore = Depends(get_store),
    categories: CategoryRegistry = Depends(get_categories),
):
    """
    Responsibilities:
    - Read the uploaded CSV statement
    - Parse it into normalized records (parse_statement)
    - Insert every record that is not an exact duplicate
    - Report inserted transactions and the number of skipped rows
    """
    if file is None:
        raise ValidationError("No file uploaded")

    content = await file.read()

    try:
        records, skipped_unparsed = parse_statement(content, file.filename)
    except ValueError as e:
        logger.warning("Could not read CSV %r: %s", file.filename, e)
        raise ValidationError("Error reading CSV file")

    created, skipped_dupes = ingest_records(store, records, categories.by_name())

    logger.info(
        "[upload-csv] %s: %d inserted, %d skipped",
        file.filename,
        len(created),
        skipped_unparsed + skipped_dupes,
    )

    return {
        "message": "CSV uploaded successfully",
        "transactions": [transaction_to_dict(tx) for tx in created],
        "skipped_rows": skipped_unparsed + skipped_dupes,
    }
