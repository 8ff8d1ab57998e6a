from __future__ import annotations

from typing import Mapping, Optional

from ...core.enums import Gender
from ...students.model import NewStudent
from .base import RosterLayout


class GradeGenderLayout(RosterLayout):
    """Columns ``nama``, ``kelas`` (grade number), ``jenis kelamin`` and optional ``nisn``.

    The section letter is derived from the gender code, so ``10`` + ``L``
    lands in class ``10A`` and ``10`` + ``P`` in ``10B``.
    """

    name = "grade_gender"
    required_headers = ("nama", "kelas", "jenis kelamin")
    optional_headers = ("nisn",)

    def build_record(self, values: Mapping[str, str]) -> Optional[NewStudent]:
        full_name = values.get("nama", "")
        grade_text = values.get("kelas", "")
        gender = Gender.from_code(values.get("jenis kelamin", ""))

        if not full_name or not grade_text or gender is None:
            return None
        try:
            grade = int(grade_text)
        except ValueError:
            return None

        return NewStudent(
            name=full_name,
            class_name=f"{grade}{gender.class_letter}",
            nis=values.get("nisn", ""),
            gender=gender,
        )
