# app/services/split_calculator.py
#
# Split Calculator
# Derives per-person totals from a set of transactions by equal-share division.

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping


@dataclass
class PersonTotal:
    person_id: str
    name: str
    total: Decimal


def to_dec(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def compute_shares(amount, assigned_to: List[str]) -> Dict[str, Decimal]:
    """
    Equal split of one transaction: each of the N assignees owes amount / N.
    No rounding is applied. An empty assignment yields no shares at all.
    """
    if not assigned_to:
        return {}
    amount = to_dec(amount)
    per = amount / len(assigned_to)
    shares: Dict[str, Decimal] = {}
    for pid in assigned_to:
        shares[pid] = shares.get(pid, Decimal("0")) + per
    return shares


def compute_totals(transactions: Iterable, people_by_id: Mapping[str, str]) -> List[PersonTotal]:
    """
    transactions: objects with .amount and .assigned_to
    people_by_id: person id -> name, used to label and order the result

    Unassigned transactions are excluded entirely, so the grand total is the
    sum of assigned amounts only. Ids with no known person are dropped.
    Result is sorted by name (case-sensitive).
    """
    running: Dict[str, Decimal] = {}
    for tx in transactions:
        for pid, share in compute_shares(tx.amount, tx.assigned_to or []).items():
            running[pid] = running.get(pid, Decimal("0")) + share

    totals = [
        PersonTotal(person_id=pid, name=people_by_id[pid], total=total)
        for pid, total in running.items()
        if pid in people_by_id
    ]
    totals.sort(key=lambda t: t.name)
    return totals


def grand_total(totals: Iterable[PersonTotal]) -> Decimal:
    return sum((t.total for t in totals), Decimal("0"))
