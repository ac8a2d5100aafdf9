from __future__ import annotations

import re

from hollinger_report.config import CollisionPolicy
from hollinger_report.errors import SheetNameCollisionError
from hollinger_report.models.records import Congress

# Characters Excel rejects in sheet titles.
_INVALID_CHARS_RE = re.compile(r"[\[\]:*?/\\]")


def derive_sheet_name(congress: Congress, max_length: int = 25) -> str:
    """Tab name for a congress: its year label, else "C{congress_no}", cut to `max_length`."""
    name = congress.year_label
    if not name:
        name = f"C{congress.congress_no}"
    name = _INVALID_CHARS_RE.sub("_", name)
    # Excel also rejects leading/trailing apostrophes.
    name = name.strip("'") or f"C{congress.congress_no}"
    return name[:max_length]


class SheetNamer:
    """Hands out unique sheet names for one workbook.

    Excel compares sheet names case-insensitively. On a clash the `suffix`
    policy appends "~{congress_no}" (then "~{congress_no}-2", ...), cutting
    the base so the result still fits; the `error` policy raises.
    """

    def __init__(
        self,
        *,
        max_length: int = 25,
        policy: CollisionPolicy = "suffix",
        reserved: tuple[str, ...] = (),
    ) -> None:
        self.max_length = max_length
        self.policy = policy
        self._taken: set[str] = {r.casefold() for r in reserved}

    def _free(self, name: str) -> bool:
        return name.casefold() not in self._taken

    def _take(self, name: str) -> str:
        self._taken.add(name.casefold())
        return name

    def assign(self, congress: Congress) -> str:
        name = derive_sheet_name(congress, self.max_length)
        if self._free(name):
            return self._take(name)
        if self.policy == "error":
            raise SheetNameCollisionError(name, congress.congress_no)

        n = 1
        while True:
            suffix = f"~{congress.congress_no}" if n == 1 else f"~{congress.congress_no}-{n}"
            candidate = name[: max(0, self.max_length - len(suffix))] + suffix
            if self._free(candidate):
                return self._take(candidate)
            n += 1
