from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from src.school_attendance.school_attendance.core.exceptions import ValidationError
from src.school_attendance.school_attendance.roster.normalizer import build_name_list, first_column
from src.school_attendance.school_attendance.roster.reader import parse_spreadsheet


def _xlsx(rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    for r in rows:
        ws.append(r)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_reads_first_sheet_of_xlsx():
    data = _xlsx([["nama", "kelas"], ["Ani", 10], [None, None], ["Budi", 11]])

    table = parse_spreadsheet("siswa.xlsx", data)

    assert table.header == ("nama", "kelas")
    assert table.rows == (("Ani", 10), ("Budi", 11))


def test_reads_csv_with_bom_and_semicolons():
    data = "nama;kelas\nAni;10-A\nBudi;10-B\n".encode("utf-8-sig")

    table = parse_spreadsheet("siswa.CSV", data)

    assert table.header == ("nama", "kelas")
    assert table.rows[1] == ("Budi", "10-B")


def test_headerless_sheet_keeps_every_row_for_quick_import():
    table = parse_spreadsheet("nama.xlsx", _xlsx([["Siti"], ["Umar"]]))
    assert [r[0] for r in table.all_rows()] == ["Siti", "Umar"]


def test_rejects_unknown_extension():
    with pytest.raises(ValidationError):
        parse_spreadsheet("siswa.txt", b"nama,kelas\n")


def test_rejects_broken_or_empty_files():
    with pytest.raises(ValidationError):
        parse_spreadsheet("siswa.xlsx", b"not a zip file")
    with pytest.raises(ValidationError):
        parse_spreadsheet("siswa.csv", b"")


def test_legacy_xls_is_rejected_by_name():
    with pytest.raises(ValidationError) as exc:
        parse_spreadsheet("siswa.xls", b"\xd0\xcf\x11\xe0")
    assert ".xls" in str(exc.value)
    assert ".xlsx" in str(exc.value)


def test_quick_import_drops_numbers_from_csv_and_xlsx_alike():
    csv_table = parse_spreadsheet("nama.csv", b"Siti\n42\nUmar\n")
    xlsx_table = parse_spreadsheet("nama.xlsx", _xlsx([["Siti"], [42], ["Umar"]]))

    for table in (csv_table, xlsx_table):
        result = build_name_list("10-A", first_column(table.all_rows()))
        assert [s.name for s in result.students] == ["Siti", "Umar"]
