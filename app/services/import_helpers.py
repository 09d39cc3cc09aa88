# app/services/import_helpers.py
#
# Import Helper Functions
# Feeds parsed CSV records into the Ledger Store, rejecting exact duplicates.

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models import Category, Transaction
from app.errors import LedgerError
from app.services.ledger_store import DedupKey, LedgerStore

logger = logging.getLogger(__name__)


# ---- Record Conversion ----

def dedup_key_from_record(record: Dict[str, Any]) -> DedupKey:
    return DedupKey(
        description=record["description"],
        amount=record["amount"],
        transaction_date=record.get("transaction_date"),
        posted_date=record.get("posted_date"),
        card_number=record.get("card_number") or None,
    )


def match_category(csv_category: Optional[str], categories_by_name: Mapping[str, Category]) -> Optional[str]:
    """
    Exact-name lookup of the CSV category text. Unknown names stay uncategorized.
    """
    if not csv_category:
        return None
    category = categories_by_name.get(csv_category)
    return category.id if category is not None else None


# ---- Ingestion ----

def ingest_records(
    store: LedgerStore,
    records: Iterable[Dict[str, Any]],
    categories_by_name: Mapping[str, Category] | None = None,
) -> Tuple[List[Transaction], int]:
    """
    Create one transaction per non-duplicate record.

    The dedup check runs against every stored transaction, archived or not,
    and each insert commits before the next check, so repeats inside the same
    file are caught too. Returns (created, skipped).
    """
    categories_by_name = categories_by_name or {}
    created: List[Transaction] = []
    skipped = 0

    for i, record in enumerate(records, start=1):
        try:
            key = dedup_key_from_record(record)
            if store.find_duplicate(key) > 0:
                logger.info(
                    "Skipping duplicate transaction #%d: %s, amount: %s",
                    i,
                    key.description,
                    key.amount,
                )
                skipped += 1
                continue

            tx = store.create_transaction(
                description=key.description,
                amount=key.amount,
                file_name=record.get("file_name"),
                transaction_date=key.transaction_date,
                posted_date=key.posted_date,
                card_number=key.card_number,
                category_id=match_category(record.get("category"), categories_by_name),
            )
            created.append(tx)
        except LedgerError as e:
            logger.error("Error inserting transaction #%d: %s", i, e.message)
            skipped += 1

    logger.info("Ingested %d transactions, skipped %d", len(created), skipped)
    return created, skipped
