# app/schemas.py
# Role: Request bodies (pydantic) and JSON serializers for the ORM models.

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from models import Archive, ArchivePersonTotal, Category, Person, Transaction


# -------------------------------------------------------------------
# Request bodies
# -------------------------------------------------------------------

class PersonIn(BaseModel):
    name: str
    email: Optional[str] = None


class CategoryIn(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None


class AssignIn(BaseModel):
    # Full replacement set; [] (or null) unassigns everyone
    assigned_to: Optional[List[str]] = None


class CategoryAssignIn(BaseModel):
    category_id: Optional[str] = None


class ArchiveIn(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


# -------------------------------------------------------------------
# Serializers
# -------------------------------------------------------------------

def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _money(value) -> float:
    return float(value) if value is not None else 0.0


def transaction_to_dict(tx: Transaction) -> Dict[str, Any]:
    return {
        "id": tx.id,
        "description": tx.description,
        "amount": _money(tx.amount),
        "assigned_to": list(tx.assigned_to or []),
        "date_uploaded": _iso(tx.date_uploaded),
        "file_name": tx.file_name,
        "transaction_date": _iso(tx.transaction_date),
        "posted_date": _iso(tx.posted_date),
        "card_number": tx.card_number,
        "category_id": tx.category_id,
        "archive_id": tx.archive_id,
        "is_active": tx.is_active,
        "created_at": _iso(tx.created_at),
        "updated_at": _iso(tx.updated_at),
    }


def person_to_dict(person: Person) -> Dict[str, Any]:
    return {
        "id": person.id,
        "name": person.name,
        "email": person.email,
        "created_at": _iso(person.created_at),
        "updated_at": _iso(person.updated_at),
    }


def category_to_dict(category: Category) -> Dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "color": category.color,
        "created_at": _iso(category.created_at),
        "updated_at": _iso(category.updated_at),
    }


def person_total_to_dict(row: ArchivePersonTotal) -> Dict[str, Any]:
    return {"name": row.person_name, "total": _money(row.total_amount)}


def archive_to_dict(archive: Archive) -> Dict[str, Any]:
    return {
        "id": archive.id,
        "name": archive.name,
        "description": archive.description,
        "archived_at": _iso(archive.archived_at),
        "transaction_count": archive.transaction_count,
        "total_amount": _money(archive.total_amount),
        "person_totals": [person_total_to_dict(row) for row in archive.person_totals],
        "created_at": _iso(archive.created_at),
        "updated_at": _iso(archive.updated_at),
    }
