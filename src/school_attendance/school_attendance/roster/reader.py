from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..core.exceptions import ValidationError
from .model import SpreadsheetTable

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".xlsx", ".csv")


def _is_blank_row(row) -> bool:
    return all(c is None or (isinstance(c, str) and not c.strip()) for c in row)


def _read_xlsx(data: bytes) -> list[tuple]:
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise ValidationError(f"Gagal memproses file Excel: {e}")
    try:
        ws = wb.worksheets[0]
        return [tuple(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _read_csv(data: bytes) -> list[tuple]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise ValidationError("File CSV harus berenkode UTF-8")

    try:
        dialect = csv.Sniffer().sniff(text[:2048], delimiters=",;\t")
    except csv.Error:
        dialect = csv.excel
    return [tuple(r) for r in csv.reader(io.StringIO(text), dialect)]


def parse_spreadsheet(filename: str, data: bytes) -> SpreadsheetTable:
    """Read an uploaded file into a header row plus data rows.

    Only the first worksheet is read; fully blank rows are skipped.
    """
    ext = Path(filename or "").suffix.lower()
    if ext == ".xlsx":
        rows = _read_xlsx(data)
    elif ext == ".csv":
        rows = _read_csv(data)
    elif ext == ".xls":
        raise ValidationError(
            "Format .xls (Excel 97-2003) tidak didukung. Simpan ulang file sebagai .xlsx atau .csv."
        )
    else:
        raise ValidationError(f"Format file tidak didukung. Gunakan {', '.join(SUPPORTED_EXTENSIONS)}.")

    rows = [r for r in rows if not _is_blank_row(r)]
    if not rows:
        raise ValidationError("File tidak berisi data.")

    logger.debug("Parsed %s: %s rows", filename, len(rows))
    return SpreadsheetTable.from_rows(rows)
