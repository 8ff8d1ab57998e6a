from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..audit.service import AuditService
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..students.service import class_names
from .model import AttendanceEntry, AttendanceSheetQuery
from .repository import AttendanceRepository


@dataclass(frozen=True)
class SheetRow:
    student_id: int
    name: str
    nis: str
    status: str

    def to_dict(self) -> dict:
        return {"student_id": self.student_id, "name": self.name, "nis": self.nis, "status": self.status}


def _parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus.parse(str(value))
    except ValueError:
        raise ValidationError(f"Status absensi tidak dikenal: {value}")


class AttendanceService:
    """Use cases: fill in and save the per-lesson attendance sheet of one class."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository, audit: AuditService):
        self._attendance = attendance
        self._students = students
        self._audit = audit

    def class_names(self) -> list[str]:
        return class_names(self._students.list_all())

    def _students_in(self, class_name: str) -> list[Student]:
        return [s for s in self._students.list_all() if s.class_name == class_name]

    def class_sheet(self, query: AttendanceSheetQuery) -> list[SheetRow]:
        """Students of the class, pre-filled with statuses already saved for that date and hour."""
        students = self._students_in(query.class_name)
        existing = {
            r.student_id: r.status
            for r in self._attendance.list_for_students([s.student_id for s in students])
            if r.work_date == query.work_date and r.lesson_hour == query.lesson_hour
        }
        return [
            SheetRow(
                student_id=s.student_id,
                name=s.name,
                nis=s.nis,
                status=existing.get(s.student_id, AttendanceStatus.PRESENT).value,
            )
            for s in students
        ]

    def save_class_attendance(
        self,
        query: AttendanceSheetQuery,
        statuses: Mapping[int, object],
        *,
        actor_email: str,
        actor_id: Optional[str] = None,
        fill_status: Optional[object] = None,
    ) -> int:
        """Upsert one entry per student in the class.

        Students without an explicit status get ``fill_status`` (``Hadir`` by default).
        """
        if query.lesson_hour < 1:
            raise ValidationError("Jam pelajaran minimal 1")

        students = self._students_in(query.class_name)
        if not students:
            raise ValidationError(f"Tidak ada siswa di kelas {query.class_name}")

        known = {s.student_id for s in students}
        parsed = {int(k): _parse_status(v) for k, v in statuses.items()}
        unknown = sorted(set(parsed) - known)
        if unknown:
            raise ValidationError(f"Siswa tidak terdaftar di kelas {query.class_name}: {unknown}")

        default = _parse_status(fill_status) if fill_status else AttendanceStatus.PRESENT
        entries = [
            AttendanceEntry(
                student_id=s.student_id,
                work_date=query.work_date,
                lesson_hour=query.lesson_hour,
                status=parsed.get(s.student_id, default),
                taken_by=actor_id,
            )
            for s in students
        ]
        saved = self._attendance.upsert_many(entries)
        self._audit.record(
            f"Menyimpan absensi jam ke-{query.lesson_hour} untuk kelas {query.class_name} "
            f"pada tanggal {query.work_date.isoformat()}.",
            actor_email,
        )
        return saved
