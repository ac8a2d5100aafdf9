from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _text(v: Any) -> str:
    return "" if v is None else str(v)


class PrintedState(Enum):
    UNPRINTED = 0
    PRINTED = 1
    UNKNOWN = None

    @classmethod
    def coerce(cls, v: Any) -> "PrintedState":
        if isinstance(v, PrintedState):
            return v
        if isinstance(v, bool):
            return cls.PRINTED if v else cls.UNPRINTED
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return cls.UNKNOWN
        try:
            n = int(v)
        except (TypeError, ValueError):
            return cls.UNKNOWN
        if n == 1:
            return cls.PRINTED
        if n == 0:
            return cls.UNPRINTED
        return cls.UNKNOWN

    @property
    def effective(self) -> "PrintedState":
        # A missing flag counts as not printed.
        return PrintedState.UNPRINTED if self is PrintedState.UNKNOWN else self


class Congress(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    congress_no: int = Field(validation_alias=AliasChoices("congress_no", "congressNo", "CongressNo"))
    year_label: str = Field(default="", validation_alias=AliasChoices("year_label", "yearLabel", "YearLabel"))
    years: str = Field(default="", validation_alias=AliasChoices("years", "Years"))

    @field_validator("year_label", "years", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return _text(v)


class Inquiry(BaseModel):
    """A subcommittee; the archive database calls them inquiries."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    subcommittee: str = Field(validation_alias=AliasChoices("subcommittee", "Subcommittee"))
    long_name: str = Field(default="", validation_alias=AliasChoices("long_name", "longName", "LongName"))

    @field_validator("long_name", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return _text(v)


_LABEL_FIELDS = (
    "status",
    "hasc_key",
    "hollinger_box_key",
    "box_label_without_congress",
    "note",
    "label1",
    "label2",
    "label3",
    "label4",
)


class ArchiveBox(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    archive_no: int = Field(validation_alias=AliasChoices("archive_no", "archiveNo", "ArchiveNo"))
    congress_no: int | None = Field(
        default=None, validation_alias=AliasChoices("congress_no", "congressNo", "congress", "Congress")
    )
    subcommittee: str | None = Field(default=None, validation_alias=AliasChoices("subcommittee", "Subcommittee"))
    status: str = Field(default="", validation_alias=AliasChoices("status", "Status"))
    printed: PrintedState = Field(default=PrintedState.UNKNOWN, validation_alias=AliasChoices("printed", "Printed"))
    hasc_key: str = Field(default="", validation_alias=AliasChoices("hasc_key", "hascKey", "HascKey"))
    hollinger_box_key: str = Field(
        default="", validation_alias=AliasChoices("hollinger_box_key", "hollingerBoxKey", "HollingerBoxKey")
    )
    box_label_without_congress: str = Field(
        default="",
        validation_alias=AliasChoices(
            "box_label_without_congress", "boxLabelWithoutCongress", "BoxLabelWithoutCongress"
        ),
    )
    note: str = Field(default="", validation_alias=AliasChoices("note", "Note"))
    label1: str = Field(default="", validation_alias=AliasChoices("label1", "Label1"))
    label2: str = Field(default="", validation_alias=AliasChoices("label2", "Label2"))
    label3: str = Field(default="", validation_alias=AliasChoices("label3", "Label3"))
    label4: str = Field(default="", validation_alias=AliasChoices("label4", "Label4"))
    doc_count: int = Field(default=0, ge=0, validation_alias=AliasChoices("doc_count", "docCount", "DocCount"))

    @field_validator(*_LABEL_FIELDS, mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        return _text(v)

    @field_validator("subcommittee", mode="before")
    @classmethod
    def _blank_subcommittee(cls, v: Any) -> str | None:
        if v is None:
            return None
        s = str(v)
        return s if s.strip() else None

    @field_validator("printed", mode="before")
    @classmethod
    def _coerce_printed(cls, v: Any) -> PrintedState:
        return PrintedState.coerce(v)

    @field_validator("doc_count", mode="before")
    @classmethod
    def _none_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class RecordSet(BaseModel):
    """All records one report is built from, materialized in memory."""

    model_config = ConfigDict(extra="ignore")

    congresses: list[Congress] = Field(default_factory=list)
    inquiries: list[Inquiry] = Field(default_factory=list)
    archives: list[ArchiveBox] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            out = dict(v)
            # accept the database's table names as top-level keys
            for src, dst in (("Congresses", "congresses"), ("Inquiries", "inquiries"), ("Archives", "archives")):
                if src in out and dst not in out:
                    out[dst] = out.pop(src)
            for key in ("congresses", "inquiries", "archives"):
                if out.get(key) is None:
                    out[key] = []
            return out
        raise ValueError("Invalid record set structure (expected a mapping)")

    def congress(self, congress_no: int | None) -> Congress | None:
        if congress_no is None:
            return None
        return self.congress_index().get(congress_no)

    def inquiry(self, subcommittee: str | None) -> Inquiry | None:
        if subcommittee is None:
            return None
        return self.inquiry_index().get(subcommittee)

    def congress_index(self) -> dict[int, Congress]:
        return {c.congress_no: c for c in self.congresses}

    def inquiry_index(self) -> dict[str, Inquiry]:
        return {i.subcommittee: i for i in self.inquiries}
