# routes_categories.py
"""
Routes for the category registry.
"""

from fastapi import APIRouter, Depends

from app.deps import get_categories
from app.schemas import CategoryIn, category_to_dict
from app.services.registry import CategoryRegistry
from app.services.validators import parse_id

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def list_categories(categories: CategoryRegistry = Depends(get_categories)):
    return [category_to_dict(c) for c in categories.list()]


@router.post("", status_code=201)
def create_category(payload: CategoryIn, categories: CategoryRegistry = Depends(get_categories)):
    category = categories.create(payload.name, payload.description, payload.color)
    return category_to_dict(category)


@router.put("/{category_id}")
def update_category(
    category_id: str,
    payload: CategoryIn,
    categories: CategoryRegistry = Depends(get_categories),
):
    category = categories.update(
        parse_id(category_id, "category ID"),
        payload.name,
        payload.description,
        payload.color,
    )
    return category_to_dict(category)


@router.delete("/{category_id}")
def delete_category(category_id: str, categories: CategoryRegistry = Depends(get_categories)):
    # Transactions in this category become uncategorized
    categories.delete(parse_id(category_id, "category ID"))
    return {"message": "Category deleted successfully"}
