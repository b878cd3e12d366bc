from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} nije ispravno")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} mora imati najmanje {min_len} karaktera")
    return value


def require_year(value, field_name: str = "Godina") -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} nije ispravna")
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} nije ispravna")
    if year < 1900 or year > 9999:
        raise ValidationError(f"{field_name} nije ispravna")
    return year


def optional_number(value, field_name: str) -> Optional[float]:
    """None/blank -> None, otherwise a float; anything else is a ValidationError."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} nije ispravan broj")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} nije ispravan broj")


def require_role(value) -> Role:
    try:
        return Role(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Nepoznata rola")
