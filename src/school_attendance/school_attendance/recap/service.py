from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_month
from ..core.constants import (
    CLASS_RECAP_EMPTY_PERCENTAGE,
    PARENT_HISTORY_PREVIEW,
    PARENT_OVERVIEW_EMPTY_PERCENTAGE,
    STUDENT_DETAIL_EMPTY_PERCENTAGE,
)
from ..core.enums import ExportFormat, RecapPeriod
from ..core.exceptions import AuthorizationError, NotFoundError
from ..students.repository import StudentRepository
from .aggregator import build_recap, daily_overview, student_history, summarize_student
from .classifier import classify_presence, needs_warning, status_badge
from .export import SHEET_KEYS, SHEET_NAME, export_filename, to_pdf_table, to_sheet_records
from .model import RecapFilter, RecapRow
from .writers import write_csv, write_pdf, write_xlsx

logger = logging.getLogger(__name__)

_MONTHS = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)

_MIMETYPES = {
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.CSV: "text/csv",
    ExportFormat.PDF: "application/pdf",
}


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    mimetype: str


def _history_item(record) -> dict:
    return {
        "date": record.work_date.isoformat(),
        "lesson_hour": record.lesson_hour,
        "status": record.status.value,
        "badge": status_badge(record.status),
    }


class RecapService:
    """Read side: recaps, exports, student detail, parent overview and the daily dashboard."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def class_recap(self, filt: RecapFilter) -> list[RecapRow]:
        return build_recap(
            self._attendance.list_all(),
            self._students.list_all(),
            filt.interval(),
            filt.class_filter,
            empty_percentage=CLASS_RECAP_EMPTY_PERCENTAGE,
        )

    def _title(self, filt: RecapFilter) -> str:
        scope = f"Kelas {filt.class_filter}" if filt.class_filter else "Semua Kelas"
        if filt.period is RecapPeriod.WEEKLY:
            interval = filt.interval()
            period = f"{interval.start:%d/%m/%Y} - {interval.end:%d/%m/%Y}"
        else:
            year, month = parse_month(filt.month)
            period = f"{_MONTHS[month - 1]} {year}"
        return f"Rekap Absensi {scope} - {period}"

    def export(self, filt: RecapFilter, fmt: ExportFormat) -> ExportFile:
        rows = self.class_recap(filt)
        if fmt is ExportFormat.PDF:
            headers, body = to_pdf_table(rows)
            content = write_pdf(self._title(filt), headers, body)
        elif fmt is ExportFormat.CSV:
            content = write_csv(to_sheet_records(rows), columns=SHEET_KEYS)
        else:
            content = write_xlsx(to_sheet_records(rows), SHEET_NAME, columns=SHEET_KEYS)

        filename = export_filename(filt.class_name, filt.period_label, fmt)
        logger.info("Exported %s recap rows to %s", len(rows), filename)
        return ExportFile(filename=filename, content=content, mimetype=_MIMETYPES[fmt])

    def student_detail(self, student_id: int, *, parent_id: Optional[str] = None) -> dict:
        """Full history of one student. A parent may only open their own child."""
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Siswa tidak ditemukan")
        if parent_id is not None and student.parent_id != parent_id:
            raise AuthorizationError("Anda tidak memiliki akses ke data siswa ini")

        records = self._attendance.list_for_students([student.student_id])
        summary = summarize_student(records, student, empty_percentage=STUDENT_DETAIL_EMPTY_PERCENTAGE)
        return {
            "student": student.to_dict(),
            "summary": summary.to_dict(),
            "classification": classify_presence(summary.presence_percentage).to_dict(),
            "history": [_history_item(r) for r in student_history(records, student.student_id)],
        }

    def parent_overview(self, parent_id: str) -> list[dict]:
        children = list(self._students.list_by_parent(parent_id))
        records = self._attendance.list_for_students([s.student_id for s in children])

        overview = []
        for child in children:
            summary = summarize_student(records, child, empty_percentage=PARENT_OVERVIEW_EMPTY_PERCENTAGE)
            history = student_history(records, child.student_id)
            overview.append(
                {
                    "student": child.to_dict(),
                    "summary": summary.to_dict(),
                    "warning": needs_warning(summary.presence_percentage),
                    "recent": [_history_item(r) for r in history[:PARENT_HISTORY_PREVIEW]],
                }
            )
        return overview

    def daily_dashboard(self, day: date) -> dict:
        return daily_overview(self._students.list_all(), self._attendance.list_all(), day)
