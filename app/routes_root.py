# routes_root.py
"""
Root / basic endpoints (health, landing).
"""

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get("/", include_in_schema=False)
def read_root():
    """
    Landing endpoint: point browsers at the API docs.
    """
    return RedirectResponse(url="/docs", status_code=302)


@router.get("/health")
def health():
    return {"status": "ok"}
