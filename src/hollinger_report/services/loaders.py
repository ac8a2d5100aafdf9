from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from hollinger_report.config import SourceConfig
from hollinger_report.errors import DataSourceError
from hollinger_report.models.records import RecordSet

logger = logging.getLogger(__name__)

_REQUIRED_TABLES = ("Congress", "Inquiry", "Archive")

_CONGRESS_SQL = 'SELECT CongressNo, YearLabel, Years FROM "Congress"'
_INQUIRY_SQL = 'SELECT Subcommittee, LongName FROM "Inquiry"'
_ARCHIVE_SQL = """
SELECT a.ArchiveNo, a.Congress, a.Subcommittee, a.Status, a.Printed,
       a.HascKey, a.HollingerBoxKey, a.BoxLabelWithoutCongress, a.Note,
       a.Label1, a.Label2, a.Label3, a.Label4
FROM "Archive" AS a
"""
# Docs reference their box through the box's HASC key.
_DOC_COUNT_SQL = 'SELECT HascKey, COUNT(*) AS n FROM "Doc" WHERE HascKey IS NOT NULL GROUP BY HascKey'


def load_yaml(path: str | Path) -> Any:
    p = Path(path)
    raw = p.read_text(encoding="utf-8")
    return yaml.safe_load(raw)


def load_records_yaml(path: str | Path) -> RecordSet:
    p = Path(path)
    if not p.exists():
        raise DataSourceError(f"snapshot not found: {p}")
    try:
        data = load_yaml(p)
    except (OSError, UnicodeDecodeError) as e:
        raise DataSourceError(f"cannot read snapshot {p}: {e}") from e
    except yaml.YAMLError as e:
        raise DataSourceError(f"invalid YAML in {p}: {e}") from e
    try:
        return RecordSet.model_validate(data or {})
    except ValidationError as e:
        raise DataSourceError(f"invalid snapshot {p}: {e.error_count()} validation error(s)\n{e}") from e


def _rows(conn, sql: str) -> list[dict[str, Any]]:
    return [dict(r) for r in conn.execute(text(sql)).mappings()]


def load_records_database(url: str) -> RecordSet:
    """Materialize Congress/Inquiry/Archive rows (plus per-box doc counts) from a database."""
    if url.startswith("sqlite:///"):
        db_file = Path(url.removeprefix("sqlite:///"))
        # create_engine would silently create an empty file
        if not db_file.exists():
            raise DataSourceError(f"database not found: {db_file}")

    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            tables = set(inspect(conn).get_table_names())
            missing = [t for t in _REQUIRED_TABLES if t not in tables]
            if missing:
                raise DataSourceError(f"database is missing tables: {', '.join(missing)}")

            congresses = _rows(conn, _CONGRESS_SQL)
            inquiries = _rows(conn, _INQUIRY_SQL)
            archives = _rows(conn, _ARCHIVE_SQL)
            doc_counts: dict[str, int] = {}
            if "Doc" in tables:
                doc_counts = {str(r["HascKey"]): int(r["n"]) for r in _rows(conn, _DOC_COUNT_SQL)}
            else:
                logger.warning("database has no Doc table; document counts default to 0")
    except SQLAlchemyError as e:
        raise DataSourceError(f"failed to read {engine.url.render_as_string(hide_password=True)}: {e}") from e
    finally:
        engine.dispose()

    for a in archives:
        a["DocCount"] = doc_counts.get(str(a.get("HascKey") or ""), 0)

    logger.debug(
        "loaded %d congresses, %d inquiries, %d archive boxes",
        len(congresses),
        len(inquiries),
        len(archives),
    )
    try:
        return RecordSet.model_validate(
            {"congresses": congresses, "inquiries": inquiries, "archives": archives}
        )
    except ValidationError as e:
        raise DataSourceError(f"unexpected rows in database: {e}") from e


def load_records(source: SourceConfig) -> RecordSet:
    if source.kind == "database":
        return load_records_database(source.location)
    if source.kind == "yaml":
        return load_records_yaml(source.location)
    raise DataSourceError(f"unsupported source kind: {source.kind}")
