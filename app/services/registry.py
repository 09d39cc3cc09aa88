# app/services/registry.py
"""
Person and category registries.

Plain CRUD around uniquely-named entities. Both share the request's
LedgerStore so that person deletion and its unassign sweep commit together.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select, update

from models import Category, Person, Transaction
from app.errors import NotFound
from app.services.ledger_store import LedgerStore
from app.services.validators import validate_hex_color, validate_name

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Food & Dining", "Restaurants, groceries, food delivery", "#FF7043"),
    ("Transportation", "Gas, public transit, rideshare, parking", "#42A5F5"),
    ("Shopping", "Retail purchases, online shopping", "#AB47BC"),
    ("Entertainment", "Movies, concerts, streaming services", "#66BB6A"),
    ("Utilities", "Electric, gas, water, internet, phone", "#FFA726"),
    ("Health & Fitness", "Medical expenses, pharmacy, insurance, gym membership", "#EF5350"),
    ("Travel", "Flights, hotels, vacation expenses", "#26C6DA"),
    ("Fees", "Bank fees, interest charges, service fees", "#8D6E63"),
    ("Pets", "Pet care, grooming, supplies, insurance", "#13AFAD"),
    ("Other", "Miscellaneous expenses", "#78909C"),
]


class PersonRegistry:
    def __init__(self, store: LedgerStore):
        self.store = store
        self.session = store.session

    def list(self) -> List[Person]:
        return list(self.session.scalars(select(Person).order_by(Person.name)))

    def get(self, person_id: str) -> Person:
        person = self.session.get(Person, person_id)
        if person is None:
            raise NotFound("Person not found")
        return person

    def create(self, name: str, email: Optional[str] = None) -> Person:
        person = Person(name=validate_name(name), email=email or None)
        with self.store.unit_of_work(conflict_message="Person with this name already exists"):
            self.session.add(person)
            self.session.flush()
        logger.info("Created person %s (%s)", person.name, person.id)
        return person

    def delete(self, person_id: str) -> None:
        """
        Strip the person from every transaction (active and archived), then
        delete them. Archive snapshots keep the captured name.
        """
        with self.store.unit_of_work():
            person = self.get(person_id)
            self.store.unassign_person(person_id)
            self.session.delete(person)
        logger.info("Deleted person %s", person_id)


class CategoryRegistry:
    def __init__(self, store: LedgerStore):
        self.store = store
        self.session = store.session

    def list(self) -> List[Category]:
        return list(self.session.scalars(select(Category).order_by(Category.name)))

    def get(self, category_id: str) -> Category:
        category = self.session.get(Category, category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    def by_name(self) -> dict:
        return {c.name: c for c in self.list()}

    def create(
        self,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        category = Category(
            name=validate_name(name),
            description=description or None,
            color=validate_hex_color(color),
        )
        with self.store.unit_of_work(conflict_message="Category with this name already exists"):
            self.session.add(category)
            self.session.flush()
        return category

    def update(
        self,
        category_id: str,
        name: str,
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        name = validate_name(name)
        color = validate_hex_color(color)
        with self.store.unit_of_work(conflict_message="Category with this name already exists"):
            category = self.get(category_id)
            category.name = name
            category.description = description or None
            category.color = color
            self.session.flush()
        return category

    def delete(self, category_id: str) -> None:
        """
        Delete a category; transactions pointing at it fall back to no category.
        """
        with self.store.unit_of_work():
            category = self.get(category_id)
            self.session.execute(
                update(Transaction)
                .where(Transaction.category_id == category_id)
                .values(category_id=None)
                .execution_options(synchronize_session=False)
            )
            self.session.delete(category)

    def seed_defaults(self) -> int:
        """
        Insert the default categories when the table is empty.
        Returns how many were added.
        """
        count = self.session.scalar(select(func.count(Category.id)))
        if count:
            return 0
        with self.store.unit_of_work():
            for name, description, color in DEFAULT_CATEGORIES:
                self.session.add(Category(name=name, description=description, color=color))
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
