from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, NamedTuple

from hollinger_report.models.records import ArchiveBox, Congress


class CongressSubcommitteeKey(NamedTuple):
    congress_no: int
    subcommittee: str


@dataclass(frozen=True)
class SubcommitteeSummaryRow:
    congress_no: int
    subcommittee: str
    long_name: str

    total_boxes: int
    filling_count: int
    adjust_count: int
    closed_not_printed: int
    closed_printed: int

    @property
    def key(self) -> CongressSubcommitteeKey:
        return CongressSubcommitteeKey(self.congress_no, self.subcommittee)

    @property
    def unclassified_count(self) -> int:
        return self.total_boxes - (
            self.filling_count + self.adjust_count + self.closed_not_printed + self.closed_printed
        )


@dataclass(frozen=True)
class CongressSummaryGroup:
    congress: Congress
    rows: list[SubcommitteeSummaryRow]

    @property
    def heading(self) -> str:
        return f"{self.congress.year_label} ({self.congress.years})"

    @property
    def total_boxes(self) -> int:
        return sum(r.total_boxes for r in self.rows)


@dataclass(frozen=True)
class DetailInquiryGroup:
    subcommittee: str
    long_name: str
    boxes: list[ArchiveBox]

    @property
    def total_count(self) -> int:
        return len(self.boxes)


@dataclass(frozen=True)
class ReportTotals:
    congresses: int
    inquiries: int
    archive_boxes: int
    excluded_from_summary: int = 0


@dataclass(frozen=True)
class ReportData:
    """Everything the workbook builder needs; no further data-source access."""

    totals: ReportTotals
    summary_groups: list[CongressSummaryGroup]
    congresses: list[Congress]
    detail_groups: dict[int, list[DetailInquiryGroup]] = field(default_factory=dict)

    def details_for(self, congress_no: int) -> list[DetailInquiryGroup]:
        return self.detail_groups.get(congress_no, [])

    def to_dict(self) -> dict[str, Any]:
        return {
            "totals": asdict(self.totals),
            "congresses": [
                {
                    "congress_no": g.congress.congress_no,
                    "year_label": g.congress.year_label,
                    "years": g.congress.years,
                    "subcommittees": [
                        {k: v for k, v in asdict(r).items() if k != "congress_no"} for r in g.rows
                    ],
                }
                for g in self.summary_groups
            ],
        }
