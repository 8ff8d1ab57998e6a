from __future__ import annotations

import re
from typing import Sequence

from ..core.enums import ExportFormat, STATUS_ORDER
from .model import RecapRow

SHEET_NAME = "Rekap Absensi"

SHEET_KEYS = (
    "Nama Siswa",
    "Kelas",
    *[s.value for s in STATUS_ORDER],
    "Total Jam",
    "Persentase Kehadiran (%)",
)

PDF_HEADERS = (
    "Nama Siswa",
    "Kelas",
    *[s.value for s in STATUS_ORDER],
    "Total",
    "Kehadiran (%)",
)


def _row_values(row: RecapRow) -> tuple:
    return (
        row.name,
        row.class_name,
        *[row.count(s) for s in STATUS_ORDER],
        row.total_hours,
        row.presence_percentage,
    )


def to_sheet_records(rows: Sequence[RecapRow]) -> list[dict]:
    return [dict(zip(SHEET_KEYS, _row_values(r))) for r in rows]


def to_pdf_table(rows: Sequence[RecapRow]) -> tuple[list[str], list[list]]:
    body = []
    for r in rows:
        values = list(_row_values(r))
        values[-1] = f"{values[-1]}%"
        body.append(values)
    return list(PDF_HEADERS), body


def export_filename(class_name: str, period: str, fmt: ExportFormat) -> str:
    safe_class = re.sub(r"[^A-Za-z0-9_-]+", "_", class_name).strip("_") or "kelas"
    return f"rekap-absensi-{safe_class}-{period}.{fmt.value}"
