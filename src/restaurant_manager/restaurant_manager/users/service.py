from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..access.service import AccessService
from ..common.validators import optional_number, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..permissions.catalog import sanitize_permission_keys
from ..presets.repository import RolePresetRepository
from ..vacation.model import YearlyAllowance
from ..vacation.repository import VacationRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Pogrešan email ili lozinka")

        try:
            ok = isinstance(password, str) and check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for user_id=%s", user.user_id)
            raise AuthenticationError("Pogrešan email ili lozinka")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            email=user.email,
            role=user.role,
        )


def _allowance_rows(rows: Optional[Iterable[Mapping]]) -> list[YearlyAllowance]:
    """Per-year overrides from form rows; rows without a numeric year and days are skipped."""
    out: list[YearlyAllowance] = []
    for row in rows or []:
        try:
            year = int(row["year"])
            days = float(row["days"])
        except (KeyError, TypeError, ValueError):
            continue
        out.append(YearlyAllowance(year=year, days=days))
    return out


class UserService:
    """Use case: manage users (admin).

    Every operation requires ``users:manage`` except listing, which needs
    ``users:access``. New users get the role preset when no explicit
    permission list is given.
    """

    def __init__(
        self,
        users: UserRepository,
        presets: RolePresetRepository,
        vacations: VacationRepository,
        access: AccessService,
    ):
        self._users = users
        self._presets = presets
        self._vacations = vacations
        self._access = access

    def list_users(self, *, current_user_id: Optional[int]) -> Sequence[User]:
        self._access.require_permission(current_user_id, "users:access")
        return self._users.list_all()

    def _unique_email(self, email: str, *, user_id: Optional[int] = None) -> str:
        email = require_non_empty(email, "Email").lower()
        existing = self._users.get_by_email(email)
        if existing and existing.user_id != user_id:
            raise ValidationError("Korisnik sa ovim emailom već postoji.")
        return email

    def _default_permissions(self, role: Role) -> list[str]:
        if self._access.policy.is_god_mode(role):
            return []
        return sanitize_permission_keys(self._presets.get_keys(role) or [])

    def create_user(
        self,
        *,
        current_user_id: Optional[int],
        full_name: str,
        email: str,
        password: str,
        role: Role,
        permissions: Optional[Iterable[str]] = None,
        vacation_entitlement=None,
        vacation_carryover=None,
        allowances: Optional[Iterable[Mapping]] = None,
    ) -> int:
        admin = self._access.require_permission(current_user_id, "users:manage")

        full_name = require_non_empty(full_name, "Ime i prezime")
        email = self._unique_email(email)
        require_min_length(password, "Lozinka", MIN_PASSWORD_LENGTH)

        keys = self._default_permissions(role) if permissions is None else sanitize_permission_keys(permissions)
        carryover = optional_number(vacation_carryover, "Prenos")

        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            permissions=keys,
            vacation_entitlement=optional_number(vacation_entitlement, "Broj dana odmora"),
            vacation_carryover=carryover if carryover is not None else 0.0,
        )
        self._vacations.upsert_allowances(user_id=user_id, allowances=_allowance_rows(allowances))

        logger.info("User %s (%s) created by user_id=%s", user_id, role.value, admin.user_id)
        return user_id

    def update_user(
        self,
        *,
        current_user_id: Optional[int],
        user_id: int,
        full_name: str,
        email: str,
        role: Role,
        permissions: Optional[Iterable[str]] = None,
        password: Optional[str] = None,
        vacation_entitlement=None,
        vacation_carryover=None,
        allowances: Optional[Iterable[Mapping]] = None,
    ) -> User:
        """Update profile, role and vacation inputs.

        Omitted ``permissions``, ``password``, entitlement and carryover keep
        their stored values; allowance rows are upserted per year.
        """
        admin = self._access.require_permission(current_user_id, "users:manage")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("Korisnik ne postoji.")

        changes = {
            "full_name": require_non_empty(full_name, "Ime i prezime"),
            "email": self._unique_email(email, user_id=user.user_id),
            "role": role,
        }
        if permissions is not None:
            changes["permissions"] = frozenset(sanitize_permission_keys(permissions))
        if isinstance(password, str) and password.strip():
            require_min_length(password, "Lozinka", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(password)

        entitlement = optional_number(vacation_entitlement, "Broj dana odmora")
        if entitlement is not None:
            changes["vacation_entitlement"] = entitlement
        carryover = optional_number(vacation_carryover, "Prenos")
        if carryover is not None:
            changes["vacation_carryover"] = carryover

        updated = replace(user, **changes)
        if not self._users.update_user(updated):
            raise ValidationError("Izmena korisnika nije uspela")
        self._vacations.upsert_allowances(user_id=user.user_id, allowances=_allowance_rows(allowances))

        logger.info("User %s updated by user_id=%s", user.user_id, admin.user_id)
        return updated

    def deactivate_user(self, *, current_user_id: Optional[int], user_id: int) -> None:
        admin = self._access.require_permission(current_user_id, "users:manage")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise ValidationError("Korisnik ne postoji.")
        if user.user_id == admin.user_id:
            raise ValidationError("Ne možete deaktivirati sopstveni nalog.")

        if not self._users.set_active(user_id=user.user_id, is_active=False):
            raise ValidationError("Deaktivacija korisnika nije uspela")
        logger.info("User %s deactivated by user_id=%s", user.user_id, admin.user_id)
