from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Tanggal tidak valid: {value!r}")


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError):
        raise ValidationError(f"Bulan tidak valid: {value!r}")
    return parsed.year, parsed.month


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


@dataclass(frozen=True)
class DateInterval:
    """Closed date interval, both ends inclusive."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError("Tanggal akhir tidak boleh sebelum tanggal awal")

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateInterval":
        last_day = calendar.monthrange(year, month)[1]
        return cls(start=date(year, month, 1), end=date(year, month, last_day))

    @classmethod
    def for_week(cls, day: date) -> "DateInterval":
        # Weeks start on Monday.
        start = day - timedelta(days=day.weekday())
        return cls(start=start, end=start + timedelta(days=6))
