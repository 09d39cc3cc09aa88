# models.py
# Role: SQLAlchemy ORM models for the shared-expense ledger.
#       Defines people, categories, transactions (with their assignment sets
#       and active/archived partition), archives and frozen per-person totals.

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from db import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Person(Base):
    """
    Someone who can be assigned a share of a transaction.
    """

    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Hex color code, e.g. "#FF7043"
    color = Column(String(7), nullable=True)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)


class Transaction(Base):
    """
    ORM model representing a single shared expense.

    Each row is either active (archive_id is NULL) or frozen into an archive.
    The move from active to archived is one-way: archive_id is never cleared.
    assigned_to holds the ids of the people sharing the amount equally.
    """

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)

    # Bank-provided description / merchant name
    description = Column(String(500), nullable=False)

    # Signed amount, two decimal places
    amount = Column(Numeric(12, 2), nullable=False)

    # List of Person ids; replaced as a whole, never mutated in place
    assigned_to = Column(JSON, nullable=False, default=list)

    # Provenance of ingestion
    date_uploaded = Column(DateTime, nullable=False, default=_utcnow, index=True)
    file_name = Column(String(255), nullable=True, index=True)
    transaction_date = Column(Date, nullable=True, index=True)
    posted_date = Column(Date, nullable=True)
    card_number = Column(String(20), nullable=True)

    category_id = Column(
        String(36),
        ForeignKey("categories.id", onupdate="CASCADE", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # NULL = active; set once by the archive engine
    archive_id = Column(String(36), ForeignKey("archives.id"), nullable=True, index=True)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    @property
    def is_active(self) -> bool:
        return self.archive_id is None


class Archive(Base):
    """
    Immutable snapshot of a batch of transactions.

    transaction_count counts every transaction swept into the archive,
    assigned or not, while total_amount only sums the per-person splits of
    assigned transactions. The two are intentionally not reconciled.
    """

    __tablename__ = "archives"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    archived_at = Column(DateTime, nullable=False, default=_utcnow, index=True)
    transaction_count = Column(Integer, nullable=False, default=0)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    person_totals = relationship(
        "ArchivePersonTotal",
        back_populates="archive",
        cascade="all, delete-orphan",
        order_by="ArchivePersonTotal.person_name",
    )


class ArchivePersonTotal(Base):
    """
    One person's share of an archive, frozen at archive time.

    person_name is captured when the archive is created rather than joined
    live, so the row keeps its meaning after the person is renamed or deleted.
    """

    __tablename__ = "archive_person_totals"
    __table_args__ = (UniqueConstraint("archive_id", "person_id"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    archive_id = Column(
        String(36),
        ForeignKey("archives.id", onupdate="CASCADE", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    person_id = Column(
        String(36),
        ForeignKey("people.id", onupdate="CASCADE", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    person_name = Column(String(100), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    archive = relationship("Archive", back_populates="person_totals")
