from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from ..access.service import AccessService
from ..common.datetime_utils import format_ddmmyyyy, today_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_VACATION_ALLOWANCE, VACATION_YEAR_MIN
from ..core.enums import VacationStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .workdays import count_vacation_days, earliest_allowed_start
from .carryover import compute_carryover_for_year
from .model import BlockedDay, VacationBalance, VacationRequest
from .repository import VacationRepository

logger = logging.getLogger(__name__)

DECISION_STATUSES = frozenset({VacationStatus.APPROVED, VacationStatus.REJECTED, VacationStatus.RETURNED})
EDITABLE_STATUSES = frozenset({VacationStatus.PENDING, VacationStatus.RETURNED})
CANCELLABLE_STATUSES = frozenset({VacationStatus.PENDING, VacationStatus.APPROVED})


@dataclass(frozen=True)
class VacationSettings:
    first_year: int = VACATION_YEAR_MIN
    default_allowance: float = DEFAULT_VACATION_ALLOWANCE
    # Rollout phase allows backdating to 1 January while history is backfilled.
    rollout_phase: bool = True


class VacationService:
    """Use cases: vacation requests, blocked days and balances."""

    def __init__(
        self,
        vacations: VacationRepository,
        users: UserRepository,
        access: AccessService,
        *,
        settings: Optional[VacationSettings] = None,
        today: Callable[[], date] = today_local,
    ):
        self._vacations = vacations
        self._users = users
        self._access = access
        self._settings = settings or VacationSettings()
        self._today = today

    @property
    def settings(self) -> VacationSettings:
        return self._settings

    # -------- Helpers --------
    def _count_days(self, start: date, end: date) -> int:
        if end < start:
            raise ValidationError("Datum završetka mora biti nakon datuma početka")

        earliest = earliest_allowed_start(self._today(), rollout_phase=self._settings.rollout_phase)
        if start < earliest:
            raise ValidationError(f"Najraniji dozvoljeni početak je {format_ddmmyyyy(earliest)}")

        blocked = {b.day for b in self._vacations.list_blocked_days()}
        days = count_vacation_days(start, end, blocked)
        if days == 0:
            raise ValidationError("Odabrani period nema radnih dana.")
        return days

    def _get_request(self, request_id: int) -> VacationRequest:
        req = self._vacations.get_request(request_id=int(request_id))
        if not req:
            raise ValidationError("Zahtjev nije pronađen.")
        return req

    # -------- Requests --------
    def create_request(self, *, current_user_id: Optional[int], start: date, end: date) -> int:
        user = self._access.require_permission(current_user_id, "vacation:create")
        days = self._count_days(start, end)
        request_id = self._vacations.create_request(user_id=user.user_id, start_date=start, end_date=end, days=days)
        logger.info("Vacation request %s created by user_id=%s (%s days)", request_id, user.user_id, days)
        return request_id

    def update_request(self, *, current_user_id: Optional[int], request_id: int, start: date, end: date) -> None:
        user = self._access.get_user_for_access(current_user_id)
        req = self._get_request(request_id)
        if req.user_id != user.user_id:
            raise AuthorizationError("Nije vaš zahtjev.")
        if req.status not in EDITABLE_STATUSES:
            raise ValidationError("Zahtjev se više ne može mijenjati.")

        days = self._count_days(start, end)
        if not self._vacations.update_request_period(request_id=req.request_id, start_date=start, end_date=end, days=days):
            raise ValidationError("Izmjena zahtjeva nije uspjela")

    def set_status(self, *, current_user_id: Optional[int], request_id: int, status: VacationStatus) -> None:
        user = self._access.require_permission(current_user_id, "vacation:approve")
        if status not in DECISION_STATUSES:
            raise ValidationError("Status nije dozvoljen")

        req = self._get_request(request_id)
        if not self._vacations.set_status(request_id=req.request_id, status=status, decided_by=user.user_id):
            raise ValidationError("Promjena statusa nije uspjela")
        logger.info("Vacation request %s -> %s by user_id=%s", req.request_id, status.value, user.user_id)

    def cancel_request(self, *, current_user_id: Optional[int], request_id: int) -> None:
        user = self._access.get_user_for_access(current_user_id)
        req = self._get_request(request_id)
        if req.user_id != user.user_id:
            raise AuthorizationError("Nije vaš zahtjev.")
        if req.status not in CANCELLABLE_STATUSES:
            raise ValidationError("Ne možete otkazati ovaj zahtjev.")

        if not self._vacations.set_status(request_id=req.request_id, status=VacationStatus.CANCELLED):
            raise ValidationError("Otkazivanje nije uspjelo")

    def delete_request(self, *, current_user_id: Optional[int], request_id: int) -> None:
        user = self._access.get_user_for_access(current_user_id)
        req = self._get_request(request_id)
        if req.user_id != user.user_id and not self._access.can(user, "vacation:approve"):
            raise AuthorizationError("Nije vaš zahtjev.")

        if not self._vacations.delete_request(request_id=req.request_id):
            raise ValidationError("Brisanje nije uspjelo")

    def list_my_requests(self, *, current_user_id: Optional[int]) -> Sequence[VacationRequest]:
        user = self._access.get_user_for_access(current_user_id)
        return self._vacations.list_requests(user_id=user.user_id, limit=DEFAULT_LIST_LIMIT)

    def list_pending(self, *, current_user_id: Optional[int]) -> Sequence[VacationRequest]:
        self._access.require_permission(current_user_id, "vacation:approve")
        return self._vacations.list_requests(status=VacationStatus.PENDING, limit=DEFAULT_LIST_LIMIT)

    # -------- Blocked days --------
    def list_blocked_days(self) -> Sequence[BlockedDay]:
        return self._vacations.list_blocked_days()

    def add_blocked_day(self, *, current_user_id: Optional[int], day: date, reason: str) -> int:
        self._access.require_permission(current_user_id, "vacation:blocked_days")
        reason = require_non_empty(reason, "Razlog")
        if any(b.day == day for b in self._vacations.list_blocked_days()):
            raise ValidationError("Dan je već blokiran")
        return self._vacations.add_blocked_day(day=day, reason=reason)

    def remove_blocked_day(self, *, current_user_id: Optional[int], blocked_day_id: int) -> None:
        self._access.require_permission(current_user_id, "vacation:blocked_days")
        if not self._vacations.remove_blocked_day(blocked_day_id=int(blocked_day_id)):
            raise ValidationError("Blokirani dan nije pronađen")

    # -------- Balances --------
    def _balance_for(self, user: User, year: int) -> VacationBalance:
        # History is reloaded on every call; balances are never cached.
        allowances = self._vacations.get_allowances(user_id=user.user_id)
        used_by_year = self._vacations.get_used_days_by_year(user_id=user.user_id)
        default_allowance = (
            user.vacation_entitlement if user.vacation_entitlement is not None else self._settings.default_allowance
        )

        result = compute_carryover_for_year(
            allowances,
            used_by_year,
            default_allowance,
            user.vacation_carryover,
            int(year),
            first_year=self._settings.first_year,
        )
        used = used_by_year.get(int(year), 0)
        return VacationBalance(
            user_id=user.user_id,
            year=int(year),
            allowance=result.allowance,
            carried_over=result.carried_over,
            total=result.total,
            used=used,
            remaining=result.total - used,
        )

    def get_balance(self, *, current_user_id: Optional[int], year: int, user_id: Optional[int] = None) -> VacationBalance:
        current = self._access.get_user_for_access(current_user_id)
        if user_id is None or int(user_id) == current.user_id:
            return self._balance_for(current, year)

        self._access.require_permission(current.user_id, "vacation:access")
        target = self._users.get_by_id(int(user_id))
        if not target:
            raise ValidationError("Korisnik ne postoji.")
        return self._balance_for(target, year)

    def get_team_balances(self, *, current_user_id: Optional[int], year: int) -> list[VacationBalance]:
        self._access.require_permission(current_user_id, "vacation:access")
        return [self._balance_for(u, year) for u in self._users.list_active()]
