from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import DEFAULT_LESSON_HOUR
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one lesson hour on one day."""

    attendance_id: int
    student_id: int
    work_date: date
    lesson_hour: int
    status: AttendanceStatus
    taken_by: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "student_id": self.student_id,
            "date": self.work_date.isoformat(),
            "lesson_hour": self.lesson_hour,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceEntry:
    """Upsert payload keyed by (student_id, work_date, lesson_hour)."""

    student_id: int
    work_date: date
    lesson_hour: int
    status: AttendanceStatus
    taken_by: Optional[str] = None

    @property
    def key(self) -> tuple[int, date, int]:
        return (self.student_id, self.work_date, self.lesson_hour)


@dataclass(frozen=True)
class AttendanceSheetQuery:
    """Which class sheet is open: class, date and lesson hour."""

    class_name: str
    work_date: date
    lesson_hour: int = DEFAULT_LESSON_HOUR

    @classmethod
    def from_args(cls, args: Mapping[str, str], *, today: date) -> "AttendanceSheetQuery":
        date_s = args.get("date")
        return cls(
            class_name=require_non_empty(args.get("class") or "", "Kelas"),
            work_date=parse_iso_date(date_s) if date_s else today,
            lesson_hour=require_positive_int(args.get("lesson_hour") or DEFAULT_LESSON_HOUR, "Jam pelajaran"),
        )
