from __future__ import annotations

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from hollinger_report.services.status import StatusTone

TITLE_FONT = Font(bold=True, size=16)
DATE_FONT = Font(italic=True)
BOLD_FONT = Font(bold=True)

LIGHT_GRAY_FILL = PatternFill("solid", fgColor="D3D3D3")
LIGHT_BLUE_FILL = PatternFill("solid", fgColor="ADD8E6")

CENTER = Alignment(horizontal="center")
RIGHT = Alignment(horizontal="right")

_THIN = Side(style="thin")
THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)

_TONE_FONTS: dict[StatusTone, Font | None] = {
    StatusTone.SUCCESS: Font(color="008000"),
    StatusTone.ATTENTION: Font(color="FF0000"),
    StatusTone.NEUTRAL: None,
}


def tone_font(tone: StatusTone) -> Font | None:
    return _TONE_FONTS[tone]


def merge_row(ws: Worksheet, row: int, last_col: int) -> None:
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=last_col)


def style_range(
    ws: Worksheet,
    row: int,
    first_col: int,
    last_col: int,
    *,
    font: Font | None = None,
    fill: PatternFill | None = None,
    alignment: Alignment | None = None,
    border: Border | None = None,
) -> None:
    for col in range(first_col, last_col + 1):
        cell = ws.cell(row=row, column=col)
        if font is not None:
            cell.font = font
        if fill is not None:
            cell.fill = fill
        if alignment is not None:
            cell.alignment = alignment
        if border is not None:
            cell.border = border


def autofit_columns(ws: Worksheet, *, min_width: int = 8, max_width: int = 80) -> None:
    """Size each column to its longest value.

    Cells inside multi-column merges (titles, headings) do not widen columns.
    """
    merged: set[tuple[int, int]] = set()
    for rng in ws.merged_cells.ranges:
        if rng.min_col == rng.max_col:
            continue
        for r in range(rng.min_row, rng.max_row + 1):
            for c in range(rng.min_col, rng.max_col + 1):
                merged.add((r, c))

    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is None or (cell.row, cell.column) in merged:
                continue
            n = max(len(line) for line in str(cell.value).splitlines() or [""])
            widths[cell.column] = max(widths.get(cell.column, 0), n)

    for col, n in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = max(min_width, min(max_width, n + 2))
