from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from sqlalchemy import create_engine, text

from hollinger_report.models.records import RecordSet


def make_records(congresses=(), inquiries=(), archives=()) -> RecordSet:
    return RecordSet.model_validate(
        {"congresses": list(congresses), "inquiries": list(inquiries), "archives": list(archives)}
    )


def box(archive_no: int, congress_no, subcommittee, status: str = "Filling", printed=0, **extra) -> dict:
    return {
        "archive_no": archive_no,
        "congress_no": congress_no,
        "subcommittee": subcommittee,
        "status": status,
        "printed": printed,
        **extra,
    }


@pytest.fixture
def small_records() -> RecordSet:
    """One congress, two subcommittees, three boxes (2 Filling/unprinted, 1 Closed/printed)."""
    return make_records(
        congresses=[{"congress_no": 118, "year_label": "118th", "years": "2023-2024"}],
        inquiries=[
            {"subcommittee": "ADM", "long_name": "Administration"},
            {"subcommittee": "INV", "long_name": "Investigations"},
        ],
        archives=[
            box(12, 118, "ADM", "Filling", 0, hasc_key="H-12"),
            box(3, 118, "ADM", "Filling", None, hasc_key="H-3"),
            box(7, 118, "INV", "Closed", 1, hasc_key="H-7", doc_count=4),
        ],
    )


@pytest.fixture
def mixed_records() -> RecordSet:
    return make_records(
        congresses=[
            {"congress_no": 116, "year_label": "116th", "years": "2019-2020"},
            {"congress_no": 118, "year_label": "118th", "years": "2023-2024"},
            {"congress_no": 117, "year_label": "", "years": "2021-2022"},
        ],
        inquiries=[
            {"subcommittee": "ZED", "long_name": "Zoning"},
            {"subcommittee": "ADM", "long_name": "Administration"},
            {"subcommittee": "INV", "long_name": "Investigations"},
        ],
        archives=[
            box(5, 118, "ZED", "Adjust", 0),
            box(4, 118, "ADM", "Closed", 0),
            box(9, 118, "ADM", "Closed", 1),
            box(2, 118, "ADM", "Lost", 0),
            box(1, 116, "INV", "Filling", 0),
            box(8, 116, "INV", "Closed", None),
            # unresolved links: counted in totals, left out of the summary
            box(20, 999, "ADM", "Filling", 0),
            box(21, 118, "NOPE", "Filling", 0),
            box(22, 118, None, "Filling", 0),
        ],
    )


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.yaml"
    data = {
        "congresses": [
            {"congressNo": 118, "yearLabel": "118th", "years": "2023-2024"},
            {"congressNo": 117, "yearLabel": "117th", "years": "2021-2022"},
        ],
        "inquiries": [
            {"subcommittee": "ADM", "longName": "Administration"},
            {"subcommittee": "INV", "longName": "Investigations"},
        ],
        "archives": [
            {"archiveNo": 1, "congressNo": 118, "subcommittee": "ADM", "status": "Filling", "printed": 0},
            {"archiveNo": 2, "congressNo": 118, "subcommittee": "INV", "status": "Closed", "printed": 1},
            {"archiveNo": 3, "congressNo": 117, "subcommittee": "INV", "status": "Adjust"},
        ],
    }
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


_SCHEMA = [
    'CREATE TABLE "Congress" (CongressNo INTEGER PRIMARY KEY, YearLabel TEXT, Years TEXT)',
    'CREATE TABLE "Inquiry" (Subcommittee TEXT PRIMARY KEY, LongName TEXT, Password TEXT)',
    """CREATE TABLE "Archive" (
        ArchiveNo INTEGER PRIMARY KEY, Congress INTEGER, Subcommittee TEXT, Status TEXT, Printed INTEGER,
        HascKey TEXT, HollingerBoxKey TEXT, BoxLabelWithoutCongress TEXT, Note TEXT,
        Label1 TEXT, Label2 TEXT, Label3 TEXT, Label4 TEXT
    )""",
    'CREATE TABLE "Doc" ("Key" INTEGER PRIMARY KEY, DocDescrip TEXT NOT NULL, Action TEXT, HascKey TEXT, UserId TEXT)',
]


@pytest.fixture
def database_file(tmp_path: Path) -> Path:
    path = tmp_path / "ethics.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for stmt in _SCHEMA:
            conn.execute(text(stmt))
        conn.execute(
            text('INSERT INTO "Congress" VALUES (:no, :label, :years)'),
            [
                {"no": 118, "label": "118th", "years": "2023-2024"},
                {"no": 117, "label": None, "years": "2021-2022"},
            ],
        )
        conn.execute(
            text('INSERT INTO "Inquiry" VALUES (:sub, :name, NULL)'),
            [{"sub": "ADM", "name": "Administration"}, {"sub": "INV", "name": None}],
        )
        conn.execute(
            text(
                'INSERT INTO "Archive" (ArchiveNo, Congress, Subcommittee, Status, Printed, HascKey, Note) '
                "VALUES (:no, :congress, :sub, :status, :printed, :hasc, :note)"
            ),
            [
                {"no": 1, "congress": 118, "sub": "ADM", "status": "Filling", "printed": None, "hasc": "H1", "note": None},
                {"no": 2, "congress": 118, "sub": "ADM", "status": "Closed", "printed": 1, "hasc": "H2", "note": "x"},
                {"no": 3, "congress": 117, "sub": "INV", "status": "Adjust", "printed": 0, "hasc": None, "note": None},
            ],
        )
        conn.execute(
            text('INSERT INTO "Doc" (DocDescrip, HascKey) VALUES (:d, :hasc)'),
            [{"d": "a", "hasc": "H2"}, {"d": "b", "hasc": "H2"}, {"d": "c", "hasc": "H1"}, {"d": "d", "hasc": None}],
        )
    engine.dispose()
    return path
