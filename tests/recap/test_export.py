from __future__ import annotations

import csv
import io
from datetime import date

from openpyxl import load_workbook

from src.school_attendance.school_attendance.core.enums import ExportFormat
from src.school_attendance.school_attendance.recap.export import (
    SHEET_KEYS,
    export_filename,
    to_pdf_table,
    to_sheet_records,
)
from src.school_attendance.school_attendance.recap.model import RecapRow
from src.school_attendance.school_attendance.recap.writers import write_csv, write_pdf, write_xlsx


def _rows():
    return [
        RecapRow(1, "Ani", "10-A", present=3, sick=1, excused=0, absent=0, sleeping=0, total_hours=4, presence_percentage=75),
        RecapRow(2, "Budi", "10-A", present=0, sick=0, excused=0, absent=0, sleeping=0, total_hours=0, presence_percentage=0),
    ]


def test_sheet_records_have_stable_key_order():
    records = to_sheet_records(_rows())
    assert list(records[0].keys()) == [
        "Nama Siswa",
        "Kelas",
        "Hadir",
        "Sakit",
        "Izin",
        "Alfa",
        "Tidur",
        "Total Jam",
        "Persentase Kehadiran (%)",
    ]
    assert records[0]["Hadir"] == 3
    assert records[0]["Persentase Kehadiran (%)"] == 75


def test_pdf_table_matches_sheet_values():
    records = to_sheet_records(_rows())
    headers, body = to_pdf_table(_rows())

    assert headers == ["Nama Siswa", "Kelas", "Hadir", "Sakit", "Izin", "Alfa", "Tidur", "Total", "Kehadiran (%)"]
    for record, line in zip(records, body):
        assert list(record.values())[:-1] == line[:-1]
        assert line[-1] == f"{record['Persentase Kehadiran (%)']}%"


def test_export_filename():
    assert export_filename("10-A", "2025-03", ExportFormat.XLSX) == "rekap-absensi-10-A-2025-03.xlsx"
    assert export_filename("all", "2025-03", ExportFormat.PDF) == "rekap-absensi-all-2025-03.pdf"
    assert export_filename("10 A/B", "2025-03", ExportFormat.CSV) == "rekap-absensi-10_A_B-2025-03.csv"


def test_write_xlsx_roundtrips_through_openpyxl():
    content = write_xlsx(to_sheet_records(_rows()), "Rekap Absensi", columns=SHEET_KEYS)

    wb = load_workbook(io.BytesIO(content))
    ws = wb["Rekap Absensi"]
    values = list(ws.iter_rows(values_only=True))
    assert values[0] == SHEET_KEYS
    assert values[1][0] == "Ani"
    assert values[1][-1] == 75


def test_write_xlsx_with_no_rows_keeps_header():
    content = write_xlsx([], "Rekap Absensi", columns=SHEET_KEYS)
    ws = load_workbook(io.BytesIO(content)).active
    assert next(ws.iter_rows(values_only=True)) == SHEET_KEYS


def test_write_csv_has_bom_and_header():
    content = write_csv(to_sheet_records(_rows()), columns=SHEET_KEYS)
    assert content.startswith(b"\xef\xbb\xbf")

    reader = csv.DictReader(io.StringIO(content.decode("utf-8-sig")))
    rows = list(reader)
    assert reader.fieldnames == list(SHEET_KEYS)
    assert rows[1]["Nama Siswa"] == "Budi"


def test_write_pdf_produces_paginated_document():
    headers, body = to_pdf_table(_rows() * 40)
    content = write_pdf(f"Rekap Absensi Kelas 10-A - {date(2025, 3, 1):%B %Y}", headers, body)

    assert content.startswith(b"%PDF")
    # 80 rows do not fit on one landscape page.
    assert content.count(b"/Type /Page") >= 3
