from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import DateInterval, parse_iso_date, parse_month
from ..core.constants import ALL_CLASSES
from ..core.enums import AttendanceStatus, RecapPeriod, STATUS_ORDER
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RecapRow:
    """Per-student attendance counts over one interval."""

    student_id: int
    name: str
    class_name: str
    present: int
    sick: int
    excused: int
    absent: int
    sleeping: int
    total_hours: int
    presence_percentage: int

    def count(self, status: AttendanceStatus) -> int:
        return {
            AttendanceStatus.PRESENT: self.present,
            AttendanceStatus.SICK: self.sick,
            AttendanceStatus.EXCUSED: self.excused,
            AttendanceStatus.ABSENT: self.absent,
            AttendanceStatus.SLEEPING: self.sleeping,
        }[status]

    def to_dict(self) -> dict:
        data = {"student_id": self.student_id, "name": self.name, "class": self.class_name}
        for status in STATUS_ORDER:
            data[status.value.lower()] = self.count(status)
        data["total_hours"] = self.total_hours
        data["presence_percentage"] = self.presence_percentage
        return data


@dataclass(frozen=True)
class RecapFilter:
    """Recap view state: period kind, month, reference day and class."""

    period: RecapPeriod
    month: str
    reference_date: date
    class_name: str = ALL_CLASSES

    @classmethod
    def from_args(cls, args: Mapping[str, str], *, today: date) -> "RecapFilter":
        try:
            period = RecapPeriod((args.get("period") or RecapPeriod.MONTHLY.value).lower())
        except ValueError:
            raise ValidationError(f"Periode tidak dikenal: {args.get('period')}")

        month = (args.get("month") or today.strftime("%Y-%m")).strip()
        parse_month(month)
        date_s = args.get("date")
        return cls(
            period=period,
            month=month,
            reference_date=parse_iso_date(date_s) if date_s else today,
            class_name=(args.get("class") or ALL_CLASSES).strip() or ALL_CLASSES,
        )

    @property
    def class_filter(self) -> Optional[str]:
        return None if self.class_name == ALL_CLASSES else self.class_name

    def interval(self) -> DateInterval:
        if self.period is RecapPeriod.WEEKLY:
            return DateInterval.for_week(self.reference_date)
        year, month = parse_month(self.month)
        return DateInterval.for_month(year, month)

    @property
    def period_label(self) -> str:
        """Suffix used in export file names."""
        if self.period is RecapPeriod.WEEKLY:
            return f"minggu-{self.interval().start.isoformat()}"
        return self.month
