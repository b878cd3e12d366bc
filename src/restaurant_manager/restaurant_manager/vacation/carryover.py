"""Multi-year vacation carryover.

Unused days roll forward year by year starting at the first tracked year.
The user's pre-existing banked balance only enters at that first year. A year
where more was used than available forwards zero, never a negative balance.

Everything here is a pure function of its arguments: callers reload the
history from storage and recompute whenever they need a figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.constants import VACATION_YEAR_MIN


@dataclass(frozen=True)
class CarryoverResult:
    allowance: float
    carried_over: float
    total: float


def _allowance_for(allowances_by_year: Mapping[int, object], year: int, default_allowance: float) -> float:
    entry = allowances_by_year.get(year)
    if entry is None:
        return default_allowance
    days = entry.get("days") if isinstance(entry, Mapping) else getattr(entry, "days", None)
    return default_allowance if days is None else days


def compute_carryover_for_year(
    allowances_by_year: Mapping[int, object],
    used_by_year: Mapping[int, float],
    default_allowance: float,
    default_carryover: float,
    target_year: int,
    *,
    first_year: Optional[int] = None,
) -> CarryoverResult:
    """Allowance, carried-over days and total for `target_year`.

    `allowances_by_year` maps year -> anything with `days` (a YearlyAllowance
    or a ``{"days": n}`` mapping); missing years use `default_allowance`.
    `used_by_year` maps year -> approved days; missing years count as 0.
    """

    first = VACATION_YEAR_MIN if first_year is None else int(first_year)

    if target_year <= first:
        allowance = _allowance_for(allowances_by_year, target_year, default_allowance)
        carried_over = max(0, default_carryover) if target_year == first else 0
        return CarryoverResult(allowance=allowance, carried_over=carried_over, total=allowance + carried_over)

    remaining_prev = 0
    for y in range(first, target_year):
        allowance_y = _allowance_for(allowances_by_year, y, default_allowance)
        carry_into_y = default_carryover if y == first else remaining_prev
        total_y = allowance_y + carry_into_y
        used_y = used_by_year.get(y, 0) or 0
        remaining_prev = max(0, total_y - used_y)

    carried_over = max(0, remaining_prev)
    allowance = _allowance_for(allowances_by_year, target_year, default_allowance)
    return CarryoverResult(allowance=allowance, carried_over=carried_over, total=allowance + carried_over)
