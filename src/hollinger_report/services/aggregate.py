from __future__ import annotations

import logging
from collections import defaultdict

from hollinger_report.config import SourceConfig
from hollinger_report.models.records import ArchiveBox, Congress, PrintedState, RecordSet
from hollinger_report.models.views import (
    CongressSubcommitteeKey,
    CongressSummaryGroup,
    DetailInquiryGroup,
    ReportData,
    ReportTotals,
    SubcommitteeSummaryRow,
)
from hollinger_report.services.loaders import load_records
from hollinger_report.services.status import ADJUST, CLOSED, FILLING

logger = logging.getLogger(__name__)


def compute_totals(records: RecordSet, *, excluded_from_summary: int = 0) -> ReportTotals:
    return ReportTotals(
        congresses=len(records.congresses),
        inquiries=len(records.inquiries),
        archive_boxes=len(records.archives),
        excluded_from_summary=excluded_from_summary,
    )


def _summary_row(key: CongressSubcommitteeKey, long_name: str, boxes: list[ArchiveBox]) -> SubcommitteeSummaryRow:
    filling = adjust = closed_not_printed = closed_printed = 0
    for b in boxes:
        if b.status == FILLING:
            filling += 1
        elif b.status == ADJUST:
            adjust += 1
        elif b.status == CLOSED:
            if b.printed.effective is PrintedState.PRINTED:
                closed_printed += 1
            else:
                closed_not_printed += 1
    return SubcommitteeSummaryRow(
        congress_no=key.congress_no,
        subcommittee=key.subcommittee,
        long_name=long_name,
        total_boxes=len(boxes),
        filling_count=filling,
        adjust_count=adjust,
        closed_not_printed=closed_not_printed,
        closed_printed=closed_printed,
    )


def _code_order(code: str) -> tuple[str, str]:
    # "a" before "B"; codes differing only in case keep a stable ordinal order
    return code.casefold(), code


def summarize_archives(records: RecordSet) -> tuple[list[CongressSummaryGroup], int]:
    """Group boxes by (congress, subcommittee) into per-congress summary groups.

    Boxes whose congress or subcommittee does not resolve are left out.
    Returns the groups (congress descending, subcommittee ascending) and the
    number of boxes left out.
    """
    congresses = records.congress_index()
    inquiries = records.inquiry_index()

    buckets: dict[CongressSubcommitteeKey, list[ArchiveBox]] = defaultdict(list)
    excluded = 0
    for box in records.archives:
        congress = congresses.get(box.congress_no) if box.congress_no is not None else None
        inquiry = inquiries.get(box.subcommittee) if box.subcommittee is not None else None
        if congress is None or inquiry is None:
            excluded += 1
            continue
        buckets[CongressSubcommitteeKey(congress.congress_no, inquiry.subcommittee)].append(box)

    if excluded:
        logger.warning("%d archive box(es) with unresolved congress/subcommittee left out of the summary", excluded)

    rows = [_summary_row(key, inquiries[key.subcommittee].long_name, boxes) for key, boxes in buckets.items()]
    rows.sort(key=lambda r: _code_order(r.subcommittee))
    rows.sort(key=lambda r: r.congress_no, reverse=True)

    groups: list[CongressSummaryGroup] = []
    for row in rows:
        if not groups or groups[-1].congress.congress_no != row.congress_no:
            groups.append(CongressSummaryGroup(congress=congresses[row.congress_no], rows=[]))
        groups[-1].rows.append(row)
    return groups, excluded


def ordered_congresses(records: RecordSet) -> list[Congress]:
    return sorted(records.congresses, key=lambda c: c.congress_no, reverse=True)


def detail_groups_for(records: RecordSet, congress_no: int) -> list[DetailInquiryGroup]:
    """Boxes of one congress grouped by subcommittee code, both levels sorted ascending."""
    inquiries = records.inquiry_index()

    members: dict[str, list[ArchiveBox]] = defaultdict(list)
    for box in records.archives:
        if box.congress_no == congress_no:
            members[box.subcommittee or ""].append(box)

    groups: list[DetailInquiryGroup] = []
    for code, boxes in members.items():
        # long name comes from the group's first member
        first = inquiries.get(boxes[0].subcommittee) if boxes[0].subcommittee is not None else None
        groups.append(
            DetailInquiryGroup(
                subcommittee=code,
                long_name=first.long_name if first is not None else "",
                boxes=sorted(boxes, key=lambda b: b.archive_no),
            )
        )
    groups.sort(key=lambda g: _code_order(g.subcommittee))
    return groups


def build_report_data(records: RecordSet) -> ReportData:
    summary_groups, excluded = summarize_archives(records)
    congresses = ordered_congresses(records)
    return ReportData(
        totals=compute_totals(records, excluded_from_summary=excluded),
        summary_groups=summary_groups,
        congresses=congresses,
        detail_groups={c.congress_no: detail_groups_for(records, c.congress_no) for c in congresses},
    )


class HollingerAggregator:
    """Loads the archive records once per call and derives the report views."""

    def __init__(self, source: SourceConfig) -> None:
        self.source = source

    def load(self) -> RecordSet:
        return load_records(self.source)

    def aggregate(self) -> ReportData:
        records = self.load()
        logger.info(
            "aggregating %d archive boxes across %d congresses (%s)",
            len(records.archives),
            len(records.congresses),
            self.source.kind,
        )
        return build_report_data(records)
