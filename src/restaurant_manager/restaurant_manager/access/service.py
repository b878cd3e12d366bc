"""Access guard used by every permission-gated use case.

Resolves the current user from storage (never trusting role/permissions
cached in the session) and asks the evaluator whether a permission key is
granted. "Not logged in" and "logged in but not allowed" surface as two
different exceptions so callers can respond differently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import AuthenticationError, PermissionDeniedError
from ..permissions.evaluator import PermissionPolicy
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessResult:
    ok: bool
    user: Optional[User] = None


class AccessService:
    def __init__(self, users: UserRepository, *, policy: Optional[PermissionPolicy] = None):
        self._users = users
        self._policy = policy or PermissionPolicy()

    @property
    def policy(self) -> PermissionPolicy:
        return self._policy

    def get_user_for_access(self, user_id: Optional[int]) -> User:
        if user_id is None:
            raise AuthenticationError("Niste prijavljeni.")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise AuthenticationError("Niste prijavljeni.")
        if not user.is_active:
            raise PermissionDeniedError("Korisnik je deaktiviran.")
        return user

    def can(self, user: User, required: str) -> bool:
        return self._policy.allows(user.role, user.permissions, required)

    def require_permission(self, user_id: Optional[int], required: str) -> User:
        user = self.get_user_for_access(user_id)
        if not self.can(user, required):
            logger.info("Permission %s denied for user_id=%s (role=%s)", required, user.user_id, user.role.value)
            raise PermissionDeniedError()
        return user

    def try_require_permission(self, user_id: Optional[int], required: str) -> AccessResult:
        """Like require_permission, but reports failure instead of raising.

        Used by pages that show a "no permission" view.
        """

        try:
            return AccessResult(ok=True, user=self.require_permission(user_id, required))
        except (AuthenticationError, PermissionDeniedError):
            return AccessResult(ok=False)
