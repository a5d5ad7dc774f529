"""
Output Formatting

Renders a ReportIndex as a single-sheet Excel workbook:
- Results sheet, one row per resolved record
- Rows follow the index: date buckets in order, records in scan order
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .engine import report_to_frame
from .models import REPORT_COLUMNS, ReportIndex


# =============================================================================
# Style Constants
# =============================================================================

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)

# Same order as REPORT_COLUMNS
COLUMN_WIDTHS = [15, 30, 15, 15, 15, 15]

SHEET_TITLE = "Results"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# =============================================================================
# Main Output Function
# =============================================================================

def write_report_xlsx(output: Union[io.BytesIO, Path, str], index: ReportIndex) -> None:
    """Write the report workbook to a buffer or a file path."""
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    for col, header in enumerate(REPORT_COLUMNS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.border = THIN_BORDER

    frame = report_to_frame(index)
    for row, values in enumerate(frame.itertuples(index=False), 2):
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value)

    for col, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(col)].width = width
    ws.freeze_panes = "A2"

    if isinstance(output, io.BytesIO):
        wb.save(output)
        output.seek(0)
    else:
        wb.save(str(output))


def report_xlsx_bytes(index: ReportIndex) -> bytes:
    bio = io.BytesIO()
    write_report_xlsx(bio, index)
    return bio.getvalue()
