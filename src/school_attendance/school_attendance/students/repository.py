from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewStudent, Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this Protocol, never on a concrete database.
    """

    def list_all(self) -> Sequence[Student]:
        """All students ordered by name."""
        raise NotImplementedError

    def list_by_parent(self, parent_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def insert_one(self, student: NewStudent) -> int:
        raise NotImplementedError

    def insert_many(self, students: Sequence[NewStudent]) -> int:
        """Bulk insert in one call; returns the number of inserted rows."""
        raise NotImplementedError

    def update(self, student_id: int, student: NewStudent) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        """Attendance records of the student go with it (cascade)."""
        raise NotImplementedError
