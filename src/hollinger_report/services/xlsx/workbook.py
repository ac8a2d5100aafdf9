from __future__ import annotations

import io
import logging
import os
from datetime import date, datetime
from pathlib import Path

from openpyxl import Workbook

from hollinger_report.config import WorkbookOptions
from hollinger_report.errors import ReportWriteError
from hollinger_report.models.views import ReportData
from hollinger_report.services.xlsx.detail_sheet import write_detail_sheet
from hollinger_report.services.xlsx.sheet_names import SheetNamer, derive_sheet_name
from hollinger_report.services.xlsx.summary_sheet import SUMMARY_SHEET_TITLE, write_summary_sheet

logger = logging.getLogger(__name__)


def build_workbook(
    report: ReportData,
    *,
    options: WorkbookOptions | None = None,
    today: date | None = None,
) -> Workbook:
    """Summary sheet first, then one sheet per congress (congress number descending)."""
    options = options or WorkbookOptions()
    today = today or date.today()

    wb = Workbook()
    summary_ws = wb.active
    summary_ws.title = SUMMARY_SHEET_TITLE
    write_summary_sheet(summary_ws, report, today=today, date_format=options.date_format)

    namer = SheetNamer(
        max_length=options.sheet_name_max_length,
        policy=options.sheet_name_collision,
        reserved=(SUMMARY_SHEET_TITLE,),
    )
    for congress in report.congresses:
        name = namer.assign(congress)
        if name != derive_sheet_name(congress, options.sheet_name_max_length):
            logger.warning("sheet name clash: congress %s written to sheet %r", congress.congress_no, name)
        ws = wb.create_sheet(name)
        write_detail_sheet(ws, congress, report.details_for(congress.congress_no))

    return wb


def build_report_xlsx_bytes(
    report: ReportData,
    *,
    options: WorkbookOptions | None = None,
    today: date | None = None,
) -> bytes:
    wb = build_workbook(report, options=options, today=today)
    bio = io.BytesIO()
    wb.save(bio)
    return bio.getvalue()


def save_workbook(wb: Workbook, path: str | Path) -> Path:
    """Write `wb` to `path` all-or-nothing, creating parent directories.

    The workbook goes to a temporary file next to the target which then
    replaces it, so a failed write never leaves a partial file behind.
    """
    out = Path(path).expanduser()
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ReportWriteError(out, f"cannot create directory {out.parent}: {e.strerror or e}") from e

    # Created by a plain open(), so the report gets the usual umask-based mode.
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    tmp_out: Path | None = out.with_suffix(f".tmp.{ts}.xlsx")
    try:
        wb.save(tmp_out)
        os.replace(tmp_out, out)
        tmp_out = None
    except OSError as e:
        raise ReportWriteError(out, e.strerror or str(e)) from e
    finally:
        if tmp_out is not None:
            tmp_out.unlink(missing_ok=True)
    return out
