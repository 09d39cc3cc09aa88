# app/services/validators.py
#
# Input validation helpers shared by the routes and services.
# All of them raise app.errors.ValidationError (HTTP 400) on bad input.

import re
import uuid

from app.errors import ValidationError

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def parse_id(value: str | None, label: str = "ID") -> str:
    """
    Normalize a UUID string, e.g. for a path parameter.
    """
    if value is None or str(value).strip() == "":
        raise ValidationError(f"{label} is required")
    try:
        return str(uuid.UUID(str(value).strip()))
    except ValueError:
        raise ValidationError(f"Invalid {label}")


def parse_id_list(values, label: str = "ID") -> list[str]:
    """
    Normalize a list of UUID strings, dropping repeats but keeping first-seen order.
    """
    seen: list[str] = []
    for value in values or []:
        parsed = parse_id(value, label)
        if parsed not in seen:
            seen.append(parsed)
    return seen


def validate_name(name: str | None) -> str:
    if name is None or name.strip() == "":
        raise ValidationError("name cannot be empty")
    return name.strip()


def validate_hex_color(color: str | None) -> str | None:
    # Empty color is allowed and stored as NULL
    if color is None or color == "":
        return None
    if not HEX_COLOR_RE.match(color):
        raise ValidationError("color must be in hex format (#RRGGBB)")
    return color
