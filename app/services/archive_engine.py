# app/services/archive_engine.py
"""
Archive Engine: freezes every active transaction into a new Archive.

create_archive() runs as one unit of work on the request's session:

    read active set -> compute splits -> insert archive
    -> sweep the transactions read -> insert per-person totals

Either every step commits or none does. The unit of work takes the write
lock before the active set is read, so no other session can assign, delete
or add transactions until the archive commits. The sweep still only moves
the ids read in the first step and rolls the archive back if the count
differs.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy import select

from models import Archive, ArchivePersonTotal, Person
from app.errors import Conflict, NotFound, PreconditionFailed
from app.services.ledger_store import LedgerStore
from app.services.split_calculator import PersonTotal, compute_totals, grand_total

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round2(d: Decimal) -> Decimal:
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class ArchiveResult:
    archive: Archive
    person_totals: List[PersonTotal] = field(default_factory=list)


class ArchiveEngine:
    def __init__(self, store: LedgerStore):
        self.store = store
        self.session = store.session

    def _people_by_id(self) -> dict:
        return {pid: name for pid, name in self.session.execute(select(Person.id, Person.name))}

    def active_totals(self) -> List[PersonTotal]:
        """Split Calculator over the current active set."""
        return compute_totals(self.store.list_active(), self._people_by_id())

    def create_archive(self, name: Optional[str], description: Optional[str]) -> ArchiveResult:
        with self.store.unit_of_work(lock=True):
            active = self.store.list_active(for_update=True)
            if not active:
                raise PreconditionFailed("no active transactions")

            totals = compute_totals(active, self._people_by_id())

            # Unassigned actives count towards transaction_count but not total_amount
            archive = Archive(
                name=name or None,
                description=description or None,
                transaction_count=len(active),
                total_amount=round2(grand_total(totals)),
            )
            self.session.add(archive)
            self.session.flush()

            moved = self.store.move_all_active_to(archive.id, [tx.id for tx in active])
            if moved != len(active):
                logger.warning(
                    "Archive %s: expected to move %d transactions, moved %d",
                    archive.id,
                    len(active),
                    moved,
                )
                raise Conflict("active transactions changed while archiving; retry")

            for total in totals:
                self.session.add(
                    ArchivePersonTotal(
                        archive_id=archive.id,
                        person_id=total.person_id,
                        person_name=total.name,
                        total_amount=round2(total.total),
                    )
                )
            self.session.flush()

        logger.info(
            "Created archive %s: %d transactions, total %s, %d people",
            archive.id,
            archive.transaction_count,
            archive.total_amount,
            len(totals),
        )
        return ArchiveResult(archive=archive, person_totals=totals)

    def get_archive(self, archive_id: str) -> Archive:
        archive = self.session.get(Archive, archive_id)
        if archive is None:
            raise NotFound("Archive not found")
        return archive

    def list_archives(self) -> List[Archive]:
        """Newest first."""
        stmt = select(Archive).order_by(Archive.archived_at.desc())
        return list(self.session.scalars(stmt))

    def get_archived_transactions(self, archive_id: str):
        self.get_archive(archive_id)
        return self.store.list_archived(archive_id)
