from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; `permissions` are the explicitly granted keys and are
    ignored for god-mode roles.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    permissions: frozenset = field(default_factory=frozenset)
    is_active: bool = True
    vacation_entitlement: Optional[float] = None
    vacation_carryover: float = 0.0
