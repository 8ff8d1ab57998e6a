from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Gender


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the school roster."""

    student_id: int
    name: str
    class_name: str
    nis: str = ""
    email: Optional[str] = None
    gender: Optional[Gender] = None
    parent_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "class": self.class_name,
            "nis": self.nis,
            "email": self.email,
            "gender": self.gender.value if self.gender else None,
            "parent_id": self.parent_id,
        }


@dataclass(frozen=True)
class NewStudent:
    """Insertion record (no id yet). Produced by forms and roster imports."""

    name: str
    class_name: str
    nis: str = ""
    email: Optional[str] = None
    gender: Optional[Gender] = None
    parent_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "class": self.class_name,
            "nis": self.nis,
            "email": self.email,
            "gender": self.gender.value if self.gender else None,
        }
