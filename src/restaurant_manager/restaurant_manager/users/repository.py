from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self) -> Sequence[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        permissions: Sequence[str],
        vacation_entitlement: Optional[float],
        vacation_carryover: float,
    ) -> int:
        raise NotImplementedError

    def update_user(self, user: User) -> bool:
        """Persist every field of ``user``; the permission set is replaced."""

        raise NotImplementedError

    def set_active(self, *, user_id: int, is_active: bool) -> bool:
        raise NotImplementedError
