# app/services/ledger_store.py
"""
Ledger Store: owns transactions, their assignment sets, and the
active/archived partition.

One LedgerStore wraps one request-scoped session (see app/deps.py).
Writes commit on their own unless they run inside an outer
unit_of_work(), which is how the archive engine groups its steps.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy import select, update, delete

from models import Category, Transaction
from app.errors import NotFound
from app.services.base import SessionService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DedupKey:
    """
    The five fields that identify an ingestion record.
    Two records matching on all five are duplicates, archived or not.
    """

    description: str
    amount: Decimal
    transaction_date: Optional[date] = None
    posted_date: Optional[date] = None
    card_number: Optional[str] = None


def _null_safe_eq(column, value):
    if value is None:
        return column.is_(None)
    return column == value


class LedgerStore(SessionService):

    # ---- Reads ----

    def get_transaction(self, transaction_id: str) -> Transaction:
        tx = self.session.get(Transaction, transaction_id)
        if tx is None:
            raise NotFound("Transaction not found")
        return tx

    def list_active(self, for_update: bool = False) -> List[Transaction]:
        """Active transactions, newest upload first."""
        stmt = (
            select(Transaction)
            .where(Transaction.archive_id.is_(None))
            .order_by(Transaction.date_uploaded.desc())
        )
        if for_update:
            # Row locks where the backend has them; SQLite relies on BEGIN IMMEDIATE
            stmt = stmt.with_for_update()
        return list(self.session.scalars(stmt))

    def list_archived(self, archive_id: str) -> List[Transaction]:
        """Transactions frozen into the given archive, newest upload first."""
        stmt = (
            select(Transaction)
            .where(Transaction.archive_id == archive_id)
            .order_by(Transaction.date_uploaded.desc())
        )
        return list(self.session.scalars(stmt))

    def find_duplicate(self, key: DedupKey) -> int:
        """
        Count transactions matching the dedup key (NULLs compare equal).
        """
        stmt = select(Transaction.id).where(
            Transaction.description == key.description,
            Transaction.amount == key.amount,
            _null_safe_eq(Transaction.transaction_date, key.transaction_date),
            _null_safe_eq(Transaction.posted_date, key.posted_date),
            _null_safe_eq(Transaction.card_number, key.card_number),
        )
        return len(self.session.scalars(stmt).all())

    # ---- Writes ----

    def create_transaction(
        self,
        description: str,
        amount: Decimal,
        file_name: Optional[str] = None,
        transaction_date: Optional[date] = None,
        posted_date: Optional[date] = None,
        card_number: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> Transaction:
        """
        Insert a new active, unassigned transaction.

        Duplicate detection is the caller's job (see find_duplicate).
        """
        tx = Transaction(
            description=description,
            amount=amount,
            assigned_to=[],
            file_name=file_name,
            transaction_date=transaction_date,
            posted_date=posted_date,
            card_number=card_number,
            category_id=category_id,
            archive_id=None,
        )
        with self.unit_of_work():
            self.session.add(tx)
            self.session.flush()
        return tx

    def assign(self, transaction_id: str, person_ids: Iterable[str]) -> Transaction:
        """
        Replace the whole assigned_to set of one transaction.

        Callers compute the full new set; an empty list unassigns everyone.
        """
        with self.unit_of_work():
            tx = self.get_transaction(transaction_id)
            tx.assigned_to = list(person_ids)
        logger.debug("Transaction %s assigned to %s", transaction_id, tx.assigned_to)
        return tx

    def set_category(self, transaction_id: str, category_id: Optional[str]) -> Transaction:
        with self.unit_of_work():
            tx = self.get_transaction(transaction_id)
            if category_id is not None and self.session.get(Category, category_id) is None:
                raise NotFound("Category not found")
            tx.category_id = category_id
        return tx

    def delete(self, transaction_id: str) -> None:
        # No existence pre-check: deleting an unknown id is a no-op
        with self.unit_of_work():
            self.session.execute(delete(Transaction).where(Transaction.id == transaction_id))

    def clear_active(self) -> int:
        """
        Delete every active transaction. Archived ones are never touched.
        """
        with self.unit_of_work():
            result = self.session.execute(
                delete(Transaction).where(Transaction.archive_id.is_(None))
            )
        logger.info("Cleared %d active transactions", result.rowcount)
        return result.rowcount

    def unassign_person(self, person_id: str) -> int:
        """
        Remove person_id from assigned_to of every transaction, active and archived.

        Archive snapshots are not recomputed. Returns the number of rows touched.
        """
        touched = 0
        with self.unit_of_work():
            for tx in self.session.scalars(select(Transaction)):
                assigned = tx.assigned_to or []
                if person_id in assigned:
                    tx.assigned_to = [pid for pid in assigned if pid != person_id]
                    touched += 1
        logger.info("Unassigned person %s from %d transactions", person_id, touched)
        return touched

    def move_all_active_to(
        self,
        archive_id: str,
        transaction_ids: Optional[Iterable[str]] = None,
    ) -> int:
        """
        Set archive_id on currently active transactions.

        With transaction_ids, only those (still active) rows are moved;
        without, every active row is swept. Returns the number moved.
        """
        stmt = (
            update(Transaction)
            .where(Transaction.archive_id.is_(None))
            .values(archive_id=archive_id)
            .execution_options(synchronize_session=False)
        )
        if transaction_ids is not None:
            stmt = stmt.where(Transaction.id.in_(list(transaction_ids)))

        with self.unit_of_work():
            result = self.session.execute(stmt)
        return result.rowcount
