from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Profile role used for client-side authorization."""

    TEACHER = "teacher"
    PARENT = "parent"


class AttendanceStatus(str, Enum):
    """Canonical attendance status stored in the database."""

    PRESENT = "Hadir"
    SICK = "Sakit"
    EXCUSED = "Izin"
    ABSENT = "Alfa"
    SLEEPING = "Tidur"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        """Accept canonical values, the legacy ``Alpa`` spelling and any casing."""
        text = (value or "").strip().lower()
        if text == "alpa":
            return cls.ABSENT
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        raise ValueError(f"Unknown attendance status: {value!r}")


# Fixed column order for recaps and exports.
STATUS_ORDER = (
    AttendanceStatus.PRESENT,
    AttendanceStatus.SICK,
    AttendanceStatus.EXCUSED,
    AttendanceStatus.ABSENT,
    AttendanceStatus.SLEEPING,
)


class Gender(str, Enum):
    MALE = "L"
    FEMALE = "P"

    @classmethod
    def from_code(cls, value: str) -> Optional["Gender"]:
        code = (value or "").strip().upper()[:1]
        for member in cls:
            if member.value == code:
                return member
        return None

    @property
    def class_letter(self) -> str:
        # Boys are placed in section A, girls in section B.
        return "A" if self is Gender.MALE else "B"


class RecapPeriod(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class ExportFormat(str, Enum):
    XLSX = "xlsx"
    CSV = "csv"
    PDF = "pdf"
