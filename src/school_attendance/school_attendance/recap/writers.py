"""Export sinks: turn already formatted recap data into file bytes."""

from __future__ import annotations

import csv
import io
from typing import Any, Mapping, Optional, Sequence

import pandas as pd
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas

# Header band color of the PDF table (RGB 0-255).
PDF_HEADER_FILL = (30, 46, 112)


def write_xlsx(
    records: Sequence[Mapping[str, Any]],
    sheet_name: str,
    *,
    columns: Optional[Sequence[str]] = None,
) -> bytes:
    df = pd.DataFrame(list(records), columns=list(columns) if columns else None)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    return output.getvalue()


def write_csv(records: Sequence[Mapping[str, Any]], *, columns: Optional[Sequence[str]] = None) -> bytes:
    fieldnames = list(columns) if columns else (list(records[0].keys()) if records else [])
    sio = io.StringIO()
    writer = csv.DictWriter(sio, fieldnames=fieldnames)
    writer.writeheader()
    for r in records:
        writer.writerow(r)
    # BOM so Excel opens the file as UTF-8.
    return sio.getvalue().encode("utf-8-sig")


def write_pdf(title: str, headers: Sequence[str], body: Sequence[Sequence[Any]]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A4))
    c.setTitle(title)
    width, height = landscape(A4)

    x0 = 30
    row_h = 16
    bottom = 30
    n_cols = max(len(headers), 1)
    # Name column gets the leftover space.
    narrow_w = 62
    first_w = max(width - 2 * x0 - narrow_w * (n_cols - 1), narrow_w)
    col_x = [x0] + [x0 + first_w + narrow_w * i for i in range(n_cols - 1)]

    def _cell(v: Any) -> str:
        if v is None:
            return ""
        return str(v)[:48]

    def _header(y: float) -> float:
        c.setFillColorRGB(*[v / 255 for v in PDF_HEADER_FILL])
        c.rect(x0 - 4, y - 4, width - 2 * x0 + 8, row_h, stroke=0, fill=1)
        c.setFillColorRGB(1, 1, 1)
        c.setFont("Helvetica-Bold", 9)
        for i, h in enumerate(headers):
            c.drawString(col_x[i], y, str(h))
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        return y - row_h

    c.setFont("Helvetica-Bold", 14)
    c.drawString(x0, height - 36, title)
    y = _header(height - 62)

    for row in body:
        if y < bottom:
            c.showPage()
            y = _header(height - 36)
        for i in range(min(len(row), n_cols)):
            c.drawString(col_x[i], y, _cell(row[i]))
        y -= row_h

    c.showPage()
    c.save()
    return buf.getvalue()
