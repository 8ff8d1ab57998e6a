from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import ValidationError
from .model import SpreadsheetTable
from .normalizer import normalize_header
from .strategies.base import RosterLayout
from .strategies.class_column_layout import ClassColumnLayout
from .strategies.grade_gender_layout import GradeGenderLayout


@dataclass
class RosterLayoutFactory:
    """Factory Pattern: pick the roster layout by name or by the sheet's header."""

    def for_name(self, name: Optional[str]) -> RosterLayout:
        if name == GradeGenderLayout.name:
            return GradeGenderLayout()
        if name == ClassColumnLayout.name:
            return ClassColumnLayout()
        raise ValidationError(f"Format impor tidak dikenal: {name!r}")

    def detect(self, table: SpreadsheetTable) -> RosterLayout:
        header = {normalize_header(h) for h in table.header}
        if "jenis kelamin" in header:
            return GradeGenderLayout()
        return ClassColumnLayout()
