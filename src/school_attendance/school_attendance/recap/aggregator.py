"""Pure attendance aggregation.

Nothing here touches the database: callers load students and records
through the repositories and pass them in.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import DateInterval
from ..core.constants import ALL_CLASSES, CLASS_RECAP_EMPTY_PERCENTAGE
from ..core.enums import AttendanceStatus, STATUS_ORDER
from ..students.model import Student
from .model import RecapRow


def presence_percentage(present: int, total: int, *, empty: int) -> int:
    """``present / total * 100`` with halves rounded up; ``empty`` when total is 0."""
    if total <= 0:
        return int(empty)
    return int(math.floor(present * 100 / total + 0.5))


def _row(student: Student, records: Iterable[AttendanceRecord], *, empty_percentage: int) -> RecapRow:
    counts = Counter(r.status for r in records)
    total = sum(counts[s] for s in STATUS_ORDER)
    present = counts[AttendanceStatus.PRESENT]
    return RecapRow(
        student_id=student.student_id,
        name=student.name,
        class_name=student.class_name,
        present=present,
        sick=counts[AttendanceStatus.SICK],
        excused=counts[AttendanceStatus.EXCUSED],
        absent=counts[AttendanceStatus.ABSENT],
        sleeping=counts[AttendanceStatus.SLEEPING],
        total_hours=total,
        presence_percentage=presence_percentage(present, total, empty=empty_percentage),
    )


def build_recap(
    records: Sequence[AttendanceRecord],
    students: Sequence[Student],
    interval: DateInterval,
    class_name: Optional[str] = None,
    *,
    empty_percentage: int = CLASS_RECAP_EMPTY_PERCENTAGE,
) -> list[RecapRow]:
    """One RecapRow per student matching the class filter, in input order."""
    by_student: dict[int, list[AttendanceRecord]] = {}
    for r in records:
        if interval.contains(r.work_date):
            by_student.setdefault(r.student_id, []).append(r)

    selected = students
    if class_name and class_name != ALL_CLASSES:
        selected = [s for s in students if s.class_name == class_name]

    return [_row(s, by_student.get(s.student_id, []), empty_percentage=empty_percentage) for s in selected]


def student_history(records: Sequence[AttendanceRecord], student_id: int) -> list[AttendanceRecord]:
    """Records of one student, newest date first (lesson hour ascending within a day)."""
    own = [r for r in records if r.student_id == student_id]
    own.sort(key=lambda r: r.lesson_hour)
    own.sort(key=lambda r: r.work_date, reverse=True)
    return own


def summarize_student(records: Sequence[AttendanceRecord], student: Student, *, empty_percentage: int) -> RecapRow:
    return _row(student, student_history(records, student.student_id), empty_percentage=empty_percentage)


def daily_overview(students: Sequence[Student], records: Sequence[AttendanceRecord], day: date) -> dict:
    """Today's dashboard numbers: who is present and who is not."""
    todays = [r for r in records if r.work_date == day]
    present_ids = {r.student_id for r in todays if r.status is AttendanceStatus.PRESENT}
    total = len(students)
    by_id = {s.student_id: s for s in students}

    absences = []
    for r in todays:
        if r.status is AttendanceStatus.PRESENT or r.student_id not in by_id:
            continue
        student = by_id[r.student_id]
        absences.append(
            {
                "student_id": student.student_id,
                "name": student.name,
                "class": student.class_name,
                "lesson_hour": r.lesson_hour,
                "status": r.status.value,
            }
        )

    return {
        "date": day.isoformat(),
        "present_count": len(present_ids),
        "total_students": total,
        "presence_percentage": presence_percentage(len(present_ids), total, empty=0),
        "absences": absences,
    }
