from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import AbstractSet


def count_vacation_days(start: date, end: date, blocked: AbstractSet[date] = frozenset()) -> int:
    """Working days (Mon-Fri) in [start, end] that are not blocked."""

    total = 0
    current = start
    while current <= end:
        if current.weekday() < 5 and current not in blocked:
            total += 1
        current += timedelta(days=1)
    return total


def earliest_allowed_start(today: date, *, rollout_phase: bool) -> date:
    """Earliest start date a new request may use.

    During the rollout phase requests can be backdated to 1 January of the
    current year (to backfill history); afterwards at most one month back.
    """

    if rollout_phase:
        return date(today.year, 1, 1)

    year, month = (today.year, today.month - 1) if today.month > 1 else (today.year - 1, 12)
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
