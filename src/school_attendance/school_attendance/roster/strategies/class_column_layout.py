from __future__ import annotations

from typing import Mapping, Optional

from ...students.model import NewStudent
from .base import RosterLayout


class ClassColumnLayout(RosterLayout):
    """Columns ``nama`` and ``kelas`` (free-form class), optional ``nis`` and ``email``."""

    name = "class_column"
    required_headers = ("nama", "kelas")
    optional_headers = ("nis", "email")

    def build_record(self, values: Mapping[str, str]) -> Optional[NewStudent]:
        full_name = values.get("nama", "")
        class_name = values.get("kelas", "")
        if not full_name or not class_name:
            return None

        return NewStudent(
            name=full_name,
            class_name=class_name,
            nis=values.get("nis", ""),
            email=values.get("email") or None,
        )
