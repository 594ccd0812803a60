from __future__ import annotations

import io

import pandas as pd

from ..core.constants import EXPORT_COLUMNS, EXPORT_SHEET_NAME
from .service import ExportReport

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Signatures are images and are left out of the spreadsheet.
COLUMN_WIDTHS = {"A": 20, "B": 25, "C": 20, "D": 20}


def render_excel(report: ExportReport) -> io.BytesIO:
    df = pd.DataFrame(report.rows(), columns=list(EXPORT_COLUMNS))

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET_NAME)
        sheet = writer.sheets[EXPORT_SHEET_NAME]
        for column, width in COLUMN_WIDTHS.items():
            sheet.column_dimensions[column].width = width
    out.seek(0)
    return out
