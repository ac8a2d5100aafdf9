from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from hollinger_report.models.records import PrintedState

FILLING = "Filling"
ADJUST = "Adjust"
CLOSED = "Closed"

RECOGNIZED_STATUSES = frozenset({FILLING, ADJUST, CLOSED})
CLOSED_AND_PRINTED_LABEL = "Closed & Printed"


class StatusTone(Enum):
    SUCCESS = "success"
    ATTENTION = "attention"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class StatusDisplay:
    label: str
    tone: StatusTone


def classify_status(status: str | None, printed: PrintedState | int | None) -> StatusDisplay:
    """Map a box's (status, printed) pair to its display label and tone.

    - ("Closed", printed) -> "Closed & Printed", SUCCESS
    - ("Filling" | "Adjust" | "Closed", unprinted) -> raw status, ATTENTION
    - anything else -> raw status, NEUTRAL

    A missing (or unrecognized) printed flag counts as unprinted.
    """
    raw = status or ""
    state = PrintedState.coerce(printed).effective
    if raw == CLOSED and state is PrintedState.PRINTED:
        return StatusDisplay(CLOSED_AND_PRINTED_LABEL, StatusTone.SUCCESS)
    if raw in RECOGNIZED_STATUSES and state is PrintedState.UNPRINTED:
        return StatusDisplay(raw, StatusTone.ATTENTION)
    return StatusDisplay(raw, StatusTone.NEUTRAL)
