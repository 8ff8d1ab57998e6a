from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..audit.service import AuditService
from ..common.validators import optional_text, require_non_empty
from ..core.enums import Gender
from ..core.exceptions import NotFoundError, ValidationError
from ..roster.factory import RosterLayoutFactory
from ..roster.model import ImportResult, SpreadsheetTable
from ..roster.normalizer import build_name_list, first_column, normalize_roster
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def class_names(students: Sequence[Student]) -> list[str]:
    """Distinct class designators, sorted."""
    return sorted({s.class_name for s in students})


class StudentService:
    """Use cases: manage the roster (manual entry, edit, delete, bulk import)."""

    def __init__(
        self,
        students: StudentRepository,
        audit: AuditService,
        *,
        layout_factory: Optional[RosterLayoutFactory] = None,
    ):
        self._students = students
        self._audit = audit
        self._layouts = layout_factory or RosterLayoutFactory()

    def list_students(self, *, search: Optional[str] = None) -> list[Student]:
        students = list(self._students.list_all())
        query = (search or "").strip().lower()
        if not query:
            return students
        return [s for s in students if query in s.name.lower() or query in s.class_name.lower()]

    def list_children(self, parent_id: str) -> list[Student]:
        return list(self._students.list_by_parent(parent_id))

    def get_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError("Siswa tidak ditemukan")
        return student

    def _build(self, *, name=None, class_name=None, nis=None, email=None, gender=None, parent_id=None) -> NewStudent:
        gender_value = None
        if gender:
            gender_value = Gender.from_code(str(gender))
            if gender_value is None:
                raise ValidationError("Jenis kelamin harus L atau P")

        return NewStudent(
            name=require_non_empty(name, "Nama siswa"),
            class_name=require_non_empty(class_name, "Kelas"),
            nis=optional_text(nis) or "",
            email=optional_text(email),
            gender=gender_value,
            parent_id=optional_text(parent_id),
        )

    def add_student(self, *, actor_email: str, **fields) -> Student:
        new = self._build(**fields)
        student_id = self._students.insert_one(new)
        self._audit.record(f"Menambahkan siswa baru: {new.name}", actor_email)
        return Student(student_id=student_id, **vars(new))

    def update_student(self, student_id: int, *, actor_email: str, **fields) -> Student:
        """Partial update: fields left out keep their stored value."""
        current = self.get_student(student_id)
        merged = {
            "name": current.name,
            "class_name": current.class_name,
            "nis": current.nis,
            "email": current.email,
            "gender": current.gender.value if current.gender else None,
            "parent_id": current.parent_id,
        }
        merged.update(fields)
        updated = self._build(**merged)
        self._students.update(int(student_id), updated)
        self._audit.record(f"Memperbarui data siswa: {updated.name}", actor_email)
        return Student(student_id=int(student_id), **vars(updated))

    def delete_student(self, student_id: int, *, actor_email: str) -> None:
        student = self.get_student(student_id)
        if not self._students.delete_by_id(student.student_id):
            raise NotFoundError("Siswa tidak ditemukan")
        self._audit.record(f"Menghapus siswa: {student.name}", actor_email)

    def preview_roster(self, table: SpreadsheetTable, *, layout: Optional[str] = None) -> ImportResult:
        strategy = self._layouts.for_name(layout) if layout else self._layouts.detect(table)
        return normalize_roster(table, strategy)

    def import_roster(
        self,
        table: SpreadsheetTable,
        *,
        actor_email: str,
        filename: str,
        layout: Optional[str] = None,
    ) -> ImportResult:
        result = self.preview_roster(table, layout=layout)
        self._students.insert_many(result.students)
        logger.info("Imported %s students from %s", result.count, filename)
        self._audit.record(f"Mengunggah {result.count} data siswa baru dari file {filename}.", actor_email)
        return result

    def quick_import(self, class_name: str, table: SpreadsheetTable, *, actor_email: str) -> ImportResult:
        result = build_name_list(class_name, first_column(table.all_rows()))
        self._students.insert_many(result.students)
        target = result.students[0].class_name
        self._audit.record(f'Menambahkan {result.count} siswa ke kelas "{target}".', actor_email)
        return result
