from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from hollinger_report.config import SourceConfig, WorkbookOptions
from hollinger_report.models.views import ReportTotals
from hollinger_report.services.aggregate import HollingerAggregator
from hollinger_report.services.xlsx.workbook import build_workbook, save_workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportResult:
    path: Path
    sheet_names: list[str]
    totals: ReportTotals


def generate_report(
    target_path: str | Path,
    *,
    source: SourceConfig,
    options: WorkbookOptions | None = None,
    today: date | None = None,
) -> ReportResult:
    """Build the Hollinger box workbook from `source` and write it to `target_path`.

    Raises a `ReportError` subclass on failure (unreadable source, sheet-name
    clash under the `error` policy, or a failed write); an existing file at
    `target_path` is left untouched in that case.
    """
    report = HollingerAggregator(source).aggregate()
    wb = build_workbook(report, options=options, today=today)
    out = save_workbook(wb, target_path)
    logger.info("wrote %s (%d sheets)", out, len(wb.sheetnames))
    return ReportResult(path=out, sheet_names=list(wb.sheetnames), totals=report.totals)
