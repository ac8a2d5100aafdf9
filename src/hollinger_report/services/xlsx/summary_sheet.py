from __future__ import annotations

from datetime import date

from openpyxl.worksheet.worksheet import Worksheet

from hollinger_report.models.views import ReportData
from hollinger_report.services.xlsx.styles import (
    BOLD_FONT,
    CENTER,
    DATE_FONT,
    LIGHT_BLUE_FILL,
    LIGHT_GRAY_FILL,
    RIGHT,
    THIN_BORDER,
    TITLE_FONT,
    autofit_columns,
    merge_row,
    style_range,
)

SUMMARY_SHEET_TITLE = "Hollinger Box Summary"
SUMMARY_COLUMNS = 7
SUMMARY_HEADERS = ["Inquiry", "Long Name", "Total Boxes", "Filling", "Adjust", "Closed", "Printed"]


def write_summary_sheet(
    ws: Worksheet,
    report: ReportData,
    *,
    today: date,
    date_format: str = "%m/%d/%Y",
    title: str = SUMMARY_SHEET_TITLE,
) -> None:
    row = 1

    ws.cell(row=row, column=1, value=title)
    merge_row(ws, row, SUMMARY_COLUMNS)
    style_range(ws, row, 1, 1, font=TITLE_FONT, alignment=CENTER)
    row += 1

    ws.cell(row=row, column=1, value=f"Date: {today.strftime(date_format)}")
    merge_row(ws, row, SUMMARY_COLUMNS)
    style_range(ws, row, 1, 1, font=DATE_FONT, alignment=RIGHT)
    row += 1

    totals = report.totals
    for label, value in (
        ("Congresses:", totals.congresses),
        ("Inquiries:", totals.inquiries),
        ("Hollinger Boxes:", totals.archive_boxes),
    ):
        ws.cell(row=row, column=1, value=label)
        ws.cell(row=row, column=2, value=value)
        style_range(ws, row, 1, 2, fill=LIGHT_GRAY_FILL, border=THIN_BORDER)
        row += 1

    row += 1  # blank

    for group in report.summary_groups:
        ws.cell(row=row, column=1, value=group.heading)
        merge_row(ws, row, SUMMARY_COLUMNS)
        style_range(ws, row, 1, SUMMARY_COLUMNS, font=BOLD_FONT, fill=LIGHT_BLUE_FILL)
        row += 1

        for col, header in enumerate(SUMMARY_HEADERS, start=1):
            ws.cell(row=row, column=col, value=header)
        style_range(ws, row, 1, SUMMARY_COLUMNS, font=BOLD_FONT, fill=LIGHT_GRAY_FILL, alignment=CENTER)
        row += 1

        for item in group.rows:
            values = [
                item.subcommittee,
                item.long_name,
                item.total_boxes,
                item.filling_count,
                item.adjust_count,
                item.closed_not_printed,
                item.closed_printed,
            ]
            for col, value in enumerate(values, start=1):
                ws.cell(row=row, column=col, value=value)
            style_range(ws, row, 3, SUMMARY_COLUMNS, alignment=RIGHT)
            row += 1

        row += 2  # two blank rows before the next congress

    autofit_columns(ws)
