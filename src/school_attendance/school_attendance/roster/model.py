from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from ..students.model import NewStudent

Cell = Any


@dataclass(frozen=True)
class SpreadsheetTable:
    """Parsed sheet: header row plus data rows of primitive cell values."""

    header: tuple[Cell, ...]
    rows: tuple[tuple[Cell, ...], ...] = field(default_factory=tuple)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "SpreadsheetTable":
        if not rows:
            return cls(header=())
        return cls(header=tuple(rows[0]), rows=tuple(tuple(r) for r in rows[1:]))

    def all_rows(self) -> list[tuple[Cell, ...]]:
        """Header row included, for files that carry no header."""
        return [self.header, *self.rows] if self.header else list(self.rows)


@dataclass(frozen=True)
class ImportResult:
    students: tuple[NewStudent, ...]

    @property
    def count(self) -> int:
        return len(self.students)
