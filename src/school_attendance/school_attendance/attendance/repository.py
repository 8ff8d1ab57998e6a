from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceEntry, AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_students(self, student_ids: Sequence[int]) -> Sequence[AttendanceRecord]:
        """Records of the given students, newest date first."""
        raise NotImplementedError

    def upsert_many(self, entries: Sequence[AttendanceEntry]) -> int:
        """Insert or replace the status per (student, date, lesson hour), atomically."""
        raise NotImplementedError
