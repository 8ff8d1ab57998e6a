from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import AttendanceEntry, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, student_id, work_date, lesson_hour, status, taken_by"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        work_date=r["work_date"],
        lesson_hour=int(r["lesson_hour"]),
        status=AttendanceStatus.parse(r["status"]),
        taken_by=r.get("taken_by"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY work_date DESC, lesson_hour ASC")
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        if not student_ids:
            return []
        ids = [int(i) for i in student_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE student_id IN ({in_clause(ids)})
                ORDER BY work_date DESC, lesson_hour ASC
                """,
                tuple(ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def upsert_many(self, entries: Sequence[AttendanceEntry]) -> int:
        if not entries:
            return 0
        # One transaction: either the whole class sheet lands or nothing does.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(student_id, work_date, lesson_hour, status, taken_by)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), taken_by=VALUES(taken_by)
                """,
                [(e.student_id, e.work_date, e.lesson_hour, e.status.value, e.taken_by) for e in entries],
            )
            return len(entries)
