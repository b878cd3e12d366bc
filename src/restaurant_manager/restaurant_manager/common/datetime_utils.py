from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_ddmmyyyy(value: date) -> str:
    """Display format used across the app: DD.MM.YYYY."""
    return value.strftime("%d.%m.%Y")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
