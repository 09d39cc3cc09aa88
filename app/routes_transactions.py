# routes_transactions.py
"""
Routes for the active transaction list, assignment and category edits.
"""

import logging

from fastapi import APIRouter, Depends

from app.deps import get_store
from app.schemas import AssignIn, CategoryAssignIn, transaction_to_dict
from app.services.ledger_store import LedgerStore
from app.services.validators import parse_id, parse_id_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("")
def list_transactions(store: LedgerStore = Depends(get_store)):
    """
    Active (non-archived) transactions, newest upload first.
    """
    return [transaction_to_dict(tx) for tx in store.list_active()]


@router.delete("")
def clear_transactions(store: LedgerStore = Depends(get_store)):
    """
    Delete every active transaction. Archived transactions are untouched.
    """
    deleted = store.clear_active()
    return {"message": "All transactions cleared successfully", "deleted": deleted}


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: str, store: LedgerStore = Depends(get_store)):
    store.delete(parse_id(transaction_id, "transaction ID"))
    return {"message": "Transaction deleted successfully"}


@router.put("/{transaction_id}/assign")
def assign_transaction(
    transaction_id: str,
    payload: AssignIn,
    store: LedgerStore = Depends(get_store),
):
    """
    Replace the transaction's assigned_to set with the given person ids.
    """
    tx_id = parse_id(transaction_id, "transaction ID")
    person_ids = parse_id_list(payload.assigned_to, "person ID")
    tx = store.assign(tx_id, person_ids)
    return transaction_to_dict(tx)


@router.put("/{transaction_id}/category")
def update_transaction_category(
    transaction_id: str,
    payload: CategoryAssignIn,
    store: LedgerStore = Depends(get_store),
):
    tx_id = parse_id(transaction_id, "transaction ID")

    # "" clears the category just like null
    category_id = None
    if payload.category_id:
        category_id = parse_id(payload.category_id, "category ID")

    tx = store.set_category(tx_id, category_id)
    return transaction_to_dict(tx)
