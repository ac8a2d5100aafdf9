import io
from datetime import date

import pytest
from conftest import box, make_records
from openpyxl import load_workbook

from hollinger_report.config import WorkbookOptions
from hollinger_report.errors import SheetNameCollisionError
from hollinger_report.services.aggregate import build_report_data
from hollinger_report.services.xlsx.detail_sheet import DETAIL_HEADERS
from hollinger_report.services.xlsx.summary_sheet import SUMMARY_HEADERS
from hollinger_report.services.xlsx.workbook import build_report_xlsx_bytes, build_workbook

TODAY = date(2024, 3, 5)


def _reload(report, **kw):
    return load_workbook(io.BytesIO(build_report_xlsx_bytes(report, today=TODAY, **kw)))


def _merged(ws) -> set[str]:
    return {str(r) for r in ws.merged_cells.ranges}


def _row(ws, row: int, ncols: int) -> list:
    return [ws.cell(row=row, column=c).value for c in range(1, ncols + 1)]


def _font_rgb(cell) -> str:
    color = cell.font.color
    if color is None or color.type != "rgb":
        return ""
    return color.rgb


def test_sheet_order(mixed_records):
    wb = _reload(build_report_data(mixed_records))
    # summary first, then congresses by number descending; empty label -> "C117"
    assert wb.sheetnames == ["Hollinger Box Summary", "118th", "C117", "116th"]


def test_summary_sheet_layout(small_records):
    ws = _reload(build_report_data(small_records))["Hollinger Box Summary"]

    assert ws["A1"].value == "Hollinger Box Summary"
    assert ws["A1"].font.bold
    assert ws["A1"].font.size == 16
    assert ws["A1"].alignment.horizontal == "center"
    assert ws["A2"].value == "Date: 03/05/2024"
    assert ws["A2"].font.italic
    assert ws["A2"].alignment.horizontal == "right"
    assert {"A1:G1", "A2:G2", "A7:G7"} <= _merged(ws)

    assert _row(ws, 3, 2) == ["Congresses:", 1]
    assert _row(ws, 4, 2) == ["Inquiries:", 2]
    assert _row(ws, 5, 2) == ["Hollinger Boxes:", 3]
    for r in (3, 4, 5):
        for c in ("A", "B"):
            cell = ws[f"{c}{r}"]
            assert cell.border.left.style == "thin"
            assert cell.fill.fgColor.rgb.endswith("D3D3D3")

    assert _row(ws, 6, 7) == [None] * 7
    assert ws["A7"].value == "118th (2023-2024)"
    assert ws["A7"].font.bold
    assert ws["A7"].fill.fgColor.rgb.endswith("ADD8E6")

    assert _row(ws, 8, 7) == SUMMARY_HEADERS
    assert all(ws.cell(row=8, column=c).font.bold for c in range(1, 8))
    assert ws["C8"].alignment.horizontal == "center"

    assert _row(ws, 9, 7) == ["ADM", "Administration", 2, 2, 0, 0, 0]
    assert _row(ws, 10, 7) == ["INV", "Investigations", 1, 0, 0, 0, 1]
    assert ws["C9"].alignment.horizontal == "right"
    assert ws["G10"].alignment.horizontal == "right"
    assert ws["A9"].alignment.horizontal != "right"


def test_summary_groups_separated_by_two_blank_rows(mixed_records):
    ws = _reload(build_report_data(mixed_records))["Hollinger Box Summary"]

    # 118th: heading 7, header 8, rows 9-10; blank 11-12; 116th heading 13
    assert ws["A7"].value == "118th (2023-2024)"
    assert _row(ws, 9, 3) == ["ADM", "Administration", 3]
    assert _row(ws, 10, 3) == ["ZED", "Zoning", 1]
    assert _row(ws, 11, 7) == [None] * 7
    assert _row(ws, 12, 7) == [None] * 7
    assert ws["A13"].value == "116th (2019-2020)"
    assert "A13:G13" in _merged(ws)
    assert _row(ws, 15, 7) == ["INV", "Investigations", 2, 1, 0, 1, 0]


def test_detail_sheet_layout(small_records):
    ws = _reload(build_report_data(small_records))["118th"]

    assert ws["A1"].value == "Congress: 118th (2023-2024)"
    assert ws["A1"].font.bold and ws["A1"].font.size == 16
    assert "A1:N1" in _merged(ws)
    assert _row(ws, 2, 14) == [None] * 14
    assert _row(ws, 3, 14) == DETAIL_HEADERS
    assert ws["N3"].font.bold
    assert ws["H3"].fill.fgColor.rgb.endswith("D3D3D3")

    first = _row(ws, 4, 9)
    assert first[:5] == ["ADM", "Administration", 2, "H-3", 3]
    assert first[7:9] == ["Filling", 0]
    second = _row(ws, 5, 5)
    assert second == ["ADM", "Administration", None, "H-12", 12]
    assert _row(ws, 6, 14) == [None] * 14

    inv = _row(ws, 7, 9)
    assert inv[:5] == ["INV", "Investigations", 1, "H-7", 7]
    assert inv[7:9] == ["Closed & Printed", 4]


def test_status_cell_colors(small_records):
    ws = _reload(build_report_data(small_records))["118th"]

    assert _font_rgb(ws["H4"]).endswith("FF0000")
    assert _font_rgb(ws["H7"]).endswith("008000")


def test_neutral_status_has_no_color():
    records = make_records(
        congresses=[{"congress_no": 1, "year_label": "1st"}],
        inquiries=[{"subcommittee": "A"}],
        archives=[box(1, 1, "A", "Lost", 0), box(2, 1, "A", "Filling", 1)],
    )
    ws = _reload(build_report_data(records))["1st"]

    for cell in (ws["H4"], ws["H5"]):
        assert not _font_rgb(cell).endswith(("FF0000", "008000"))
    assert [ws["H4"].value, ws["H5"].value] == ["Lost", "Filling"]


def test_total_count_only_on_first_row_of_each_group(mixed_records):
    report = build_report_data(mixed_records)
    ws = _reload(report)["118th"]

    row = 4
    for group in report.details_for(118):
        for i, _ in enumerate(group.boxes):
            expected = group.total_count if i == 0 else None
            assert ws.cell(row=row, column=3).value == expected
            assert ws.cell(row=row, column=1).value in (group.subcommittee, None)
            row += 1
        assert _row(ws, row, 14) == [None] * 14
        row += 1


def test_columns_are_autosized(small_records):
    ws = _reload(build_report_data(small_records))["118th"]
    width_g = ws.column_dimensions["G"].width
    assert width_g >= len("Box Label without congress")
    # the merged title does not widen column A
    assert ws.column_dimensions["A"].width < len("Congress: 118th (2023-2024)")


def test_congress_without_boxes_still_gets_a_sheet(mixed_records):
    ws = _reload(build_report_data(mixed_records))["C117"]
    assert ws["A1"].value == "Congress:  (2021-2022)"
    assert _row(ws, 3, 14) == DETAIL_HEADERS
    assert ws.max_row == 3


def test_colliding_labels_are_disambiguated():
    label = "Session of the Congress Label"
    records = make_records(
        congresses=[{"congress_no": 2, "year_label": label + " 2"}, {"congress_no": 1, "year_label": label + " 1"}]
    )
    wb = build_workbook(build_report_data(records), today=TODAY)
    assert wb.sheetnames[1] == label[:25]
    assert wb.sheetnames[2] == label[:23] + "~1"


def test_colliding_labels_error_policy():
    records = make_records(congresses=[{"congress_no": 2, "year_label": "X"}, {"congress_no": 1, "year_label": "x"}])
    with pytest.raises(SheetNameCollisionError):
        build_workbook(build_report_data(records), options=WorkbookOptions(sheet_name_collision="error"))


def test_date_format_option(small_records):
    wb = build_workbook(build_report_data(small_records), options=WorkbookOptions(date_format="%Y-%m-%d"), today=TODAY)
    assert wb["Hollinger Box Summary"]["A2"].value == "Date: 2024-03-05"


def test_structure_is_deterministic(mixed_records):
    report = build_report_data(mixed_records)
    a = _reload(report)
    b = _reload(report)

    assert a.sheetnames == b.sheetnames
    for name in a.sheetnames:
        wa, wb_ = a[name], b[name]
        assert _merged(wa) == _merged(wb_)
        assert [[c.value for c in r] for r in wa.iter_rows()] == [[c.value for c in r] for r in wb_.iter_rows()]
