from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import VacationStatus
from .model import BlockedDay, VacationRequest, YearlyAllowance


class VacationRepository(Protocol):
    # Requests
    def create_request(self, *, user_id: int, start_date: date, end_date: date, days: float) -> int:
        raise NotImplementedError

    def get_request(self, *, request_id: int) -> Optional[VacationRequest]:
        raise NotImplementedError

    def update_request_period(self, *, request_id: int, start_date: date, end_date: date, days: float) -> bool:
        """Store the new period and move the request back to PENDING."""

        raise NotImplementedError

    def set_status(self, *, request_id: int, status: VacationStatus, decided_by: Optional[int] = None) -> bool:
        raise NotImplementedError

    def delete_request(self, *, request_id: int) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[VacationStatus] = None,
        limit: int = 200,
    ) -> Sequence[VacationRequest]:
        raise NotImplementedError

    # Allowances and usage
    def get_allowances(self, *, user_id: int) -> Mapping[int, YearlyAllowance]:
        raise NotImplementedError

    def upsert_allowances(self, *, user_id: int, allowances: Sequence[YearlyAllowance]) -> None:
        raise NotImplementedError

    def get_used_days_by_year(self, *, user_id: int) -> Mapping[int, float]:
        """Sum of APPROVED request days per calendar year of the start date."""

        raise NotImplementedError

    # Blocked days
    def list_blocked_days(self) -> Sequence[BlockedDay]:
        raise NotImplementedError

    def add_blocked_day(self, *, day: date, reason: str) -> int:
        raise NotImplementedError

    def remove_blocked_day(self, *, blocked_day_id: int) -> bool:
        raise NotImplementedError
