from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import VacationStatus


@dataclass(frozen=True)
class VacationRequest:
    request_id: int
    user_id: int
    start_date: date
    end_date: date
    days: float
    status: VacationStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None


@dataclass(frozen=True)
class YearlyAllowance:
    """Explicit per-year entitlement override for one user."""

    year: int
    days: float


@dataclass(frozen=True)
class BlockedDay:
    blocked_day_id: int
    day: date
    reason: str


@dataclass(frozen=True)
class VacationBalance:
    """Read-only view rendered on vacation pages; never persisted."""

    user_id: int
    year: int
    allowance: float
    carried_over: float
    total: float
    used: float
    remaining: float
