from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Uloge korisnika, od najjače prema najslabijoj."""

    SYSTEM_ARCHITECT = "SYSTEM_ARCHITECT"
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    CREW = "CREW"


GOD_MODE_ROLES = frozenset({Role.SYSTEM_ARCHITECT.value, Role.SUPER_ADMIN.value})


class VacationStatus(str, Enum):
    """Stanje zahtjeva za godišnji odmor."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    RETURNED = "RETURNED"
    CANCELLED = "CANCELLED"
