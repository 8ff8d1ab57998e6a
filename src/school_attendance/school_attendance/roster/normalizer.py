"""Turn parsed spreadsheet rows into validated student insertion records.

Rows with a blank required field (or an invalid controlled value) are
dropped silently; a missing header or an import that ends up empty fails
loudly so the caller can show a targeted message.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import EmptyImportError, MissingColumnsError
from ..students.model import NewStudent
from .model import Cell, ImportResult, SpreadsheetTable
from .strategies.base import RosterLayout


def cell_text(value: Cell) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        # openpyxl hands numeric cells back as floats (10.0 for grade 10).
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def normalize_header(value: Cell) -> str:
    return cell_text(value).lower()


def normalize_roster(table: SpreadsheetTable, layout: RosterLayout) -> ImportResult:
    header = [normalize_header(h) for h in table.header]

    missing = [h for h in layout.required_headers if h not in header]
    if missing:
        raise MissingColumnsError(missing, list(layout.required_headers))

    index = {h: header.index(h) for h in (*layout.required_headers, *layout.optional_headers) if h in header}

    records: list[NewStudent] = []
    for row in table.rows:
        values = {h: cell_text(row[i]) if i < len(row) else "" for h, i in index.items()}
        record = layout.build_record(values)
        if record is not None:
            records.append(record)

    if not records:
        raise EmptyImportError("Tidak ada data siswa yang valid ditemukan di dalam file.")
    return ImportResult(students=tuple(records))


def first_column(rows: Iterable[Sequence[Cell]]) -> list[Cell]:
    return [row[0] if len(row) > 0 else None for row in rows]


_NUMBER = re.compile(r"[+-]?\d+(?:[.,]\d+)?")


def _is_name(value: Cell) -> bool:
    # CSV cells are always strings, so numeric text is treated like an xlsx number cell.
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(text) and not _NUMBER.fullmatch(text)


def build_name_list(class_name: str, names: Iterable[Cell]) -> ImportResult:
    """Quick import: every non-blank text cell becomes a student of ``class_name``."""
    class_name = require_non_empty(class_name, "Nama kelas")

    cleaned = [n.strip() for n in names if _is_name(n)]
    if not cleaned:
        raise EmptyImportError("Tidak ada nama siswa yang valid ditemukan di file Excel.")

    return ImportResult(students=tuple(NewStudent(name=n, class_name=class_name) for n in cleaned))
