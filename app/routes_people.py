# routes_people.py
"""
Routes for the person registry.
"""

from fastapi import APIRouter, Depends

from app.deps import get_people
from app.schemas import PersonIn, person_to_dict
from app.services.registry import PersonRegistry
from app.services.validators import parse_id

router = APIRouter(prefix="/api/people", tags=["people"])


@router.get("")
def list_people(people: PersonRegistry = Depends(get_people)):
    return [person_to_dict(p) for p in people.list()]


@router.post("", status_code=201)
def create_person(payload: PersonIn, people: PersonRegistry = Depends(get_people)):
    person = people.create(payload.name, payload.email)
    return person_to_dict(person)


@router.delete("/{person_id}")
def delete_person(person_id: str, people: PersonRegistry = Depends(get_people)):
    """
    Remove the person from every transaction (active and archived), then delete them.
    """
    people.delete(parse_id(person_id, "person ID"))
    return {"message": "Person deleted successfully"}
