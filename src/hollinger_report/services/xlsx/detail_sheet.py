from __future__ import annotations

from openpyxl.worksheet.worksheet import Worksheet

from hollinger_report.models.records import Congress
from hollinger_report.models.views import DetailInquiryGroup
from hollinger_report.services.status import classify_status
from hollinger_report.services.xlsx.styles import (
    BOLD_FONT,
    CENTER,
    LIGHT_GRAY_FILL,
    TITLE_FONT,
    autofit_columns,
    merge_row,
    style_range,
    tone_font,
)

DETAIL_COLUMNS = 14
DETAIL_HEADER_ROW = 3
DETAIL_HEADERS = [
    "Short Inquiry",
    "Long Name",
    "Total Count",
    "HASC Key",
    "Archive No",
    "Hollinger Box Key",
    "Box Label without congress",
    "Status",
    "Doc",
    "Note",
    "Label1",
    "Label2",
    "Label3",
    "Label4",
]
STATUS_COLUMN = DETAIL_HEADERS.index("Status") + 1


def detail_title(congress: Congress) -> str:
    return f"Congress: {congress.year_label} ({congress.years})"


def write_detail_sheet(ws: Worksheet, congress: Congress, groups: list[DetailInquiryGroup]) -> None:
    ws.cell(row=1, column=1, value=detail_title(congress))
    merge_row(ws, 1, DETAIL_COLUMNS)
    style_range(ws, 1, 1, 1, font=TITLE_FONT, alignment=CENTER)

    row = DETAIL_HEADER_ROW
    for col, header in enumerate(DETAIL_HEADERS, start=1):
        ws.cell(row=row, column=col, value=header)
    style_range(ws, row, 1, DETAIL_COLUMNS, font=BOLD_FONT, fill=LIGHT_GRAY_FILL, alignment=CENTER)
    row += 1

    for group in groups:
        for i, box in enumerate(group.boxes):
            display = classify_status(box.status, box.printed)
            values = [
                group.subcommittee,
                group.long_name,
                # the group's count is shown on its first row only
                group.total_count if i == 0 else None,
                box.hasc_key,
                box.archive_no,
                box.hollinger_box_key,
                box.box_label_without_congress,
                display.label,
                box.doc_count,
                box.note,
                box.label1,
                box.label2,
                box.label3,
                box.label4,
            ]
            for col, value in enumerate(values, start=1):
                ws.cell(row=row, column=col, value=value)
            font = tone_font(display.tone)
            if font is not None:
                ws.cell(row=row, column=STATUS_COLUMN).font = font
            row += 1
        row += 1  # blank row between inquiries

    autofit_columns(ws)
