"""Tabular export helpers (CSV and Excel) for report downloads."""
import csv
from io import BytesIO

import openpyxl
from django.http import HttpResponse
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Spreadsheet apps evaluate text cells starting with these as formulas
FORMULA_PREFIXES = ("=", "+", "-", "@")


def _cell_value(row, field):
    if callable(field):
        return field(row)
    if isinstance(row, dict):
        return row.get(field, "")
    return getattr(row, field, "")


def _csv_text(value):
    if value is None:
        return ""
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return str(value)


def rows_to_csv_response(rows, columns, filename):
    """Write *rows* to a CSV download.

    Args:
        rows: iterable of dicts or objects
        columns: list of (field_name_or_callable, header_label) tuples.
            Strings are looked up as dict keys / attributes; callables get the row.
        filename: download filename (without extension)
    """
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}.csv"'
    # UTF-8 BOM so Excel opens the rupee sign correctly
    response.write("\ufeff")

    writer = csv.writer(response)
    writer.writerow([label for _, label in columns])
    for row in rows:
        values = []
        for field, _ in columns:
            value = _cell_value(row, field)
            values.append(_csv_text(value))
        writer.writerow(values)
    return response


def rows_to_xlsx_response(rows, columns, filename, sheet_title="Report"):
    """Write *rows* to a single-sheet ``.xlsx`` download with a styled header."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_title[:31]

    headers = [label for _, label in columns]
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="7A1F3D", end_color="7A1F3D", fill_type="solid")
    for col_num, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for row_num, row in enumerate(rows, start=2):
        for col_num, (field, _) in enumerate(columns, 1):
            value = _cell_value(row, field)
            if value is not None and not isinstance(value, (int, float, str)):
                value = str(value)
            ws.cell(row=row_num, column=col_num, value=value)

    for col_num, header in enumerate(headers, 1):
        col_letter = get_column_letter(col_num)
        max_length = len(header)
        for (cell,) in ws.iter_rows(min_row=2, min_col=col_num, max_col=col_num):
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 4, 50)

    buffer = BytesIO()
    wb.save(buffer)
    response = HttpResponse(buffer.getvalue(), content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{filename}.xlsx"'
    return response
