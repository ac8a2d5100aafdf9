from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict

from hollinger_report.errors import ConfigError

SourceKind = Literal["database", "yaml"]
CollisionPolicy = Literal["suffix", "error"]


def _default_env_files() -> tuple[Path, ...]:
    """Return dotenv candidates for pydantic-settings (missing files are ignored).

    Precedence (later overrides earlier):
    1) repo-root `.env`, `.env.local`
    2) CWD `.env`, `.env.local`
    """

    def _repo_root() -> Path:
        here = Path(__file__).resolve()
        # Typical dev layout: <repo>/src/hollinger_report/config.py
        for cand in [here.parent] + list(here.parents):
            if (cand / "pyproject.toml").exists() and (cand / "src").exists():
                return cand
        return here.parents[2] if len(here.parents) > 2 else here.parent

    repo_root = _repo_root()
    cwd = Path.cwd()
    return (
        repo_root / ".env",
        repo_root / ".env.local",
        cwd / ".env",
        cwd / ".env.local",
    )


def sqlite_url(path: str | Path) -> str:
    return f"sqlite:///{Path(path).expanduser().resolve()}"


class SourceConfig(BaseModel):
    """Where the archive records come from.

    `location` is a SQLAlchemy URL for `database`, a file path for `yaml`.
    Passed explicitly to the aggregator; nothing below the CLI/API reads `settings`.
    """

    kind: SourceKind
    location: str

    @classmethod
    def database(cls, url: str) -> "SourceConfig":
        return cls(kind="database", location=url)

    @classmethod
    def sqlite(cls, path: str | Path) -> "SourceConfig":
        return cls(kind="database", location=sqlite_url(path))

    @classmethod
    def yaml(cls, path: str | Path) -> "SourceConfig":
        return cls(kind="yaml", location=str(path))


class WorkbookOptions(BaseModel):
    sheet_name_max_length: int = Field(default=25, ge=4, le=31)
    sheet_name_collision: CollisionPolicy = "suffix"
    date_format: str = "%m/%d/%Y"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HOLLINGER_REPORT_",
        extra="ignore",
        env_file=_default_env_files(),
        env_file_encoding="utf-8",
    )

    database_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("HOLLINGER_REPORT_DATABASE_URL", "DATABASE_URL"),
    )
    snapshot_path: Path | None = None
    output_path: Path = Path("output/HollingerBoxSummary.xlsx")

    # Excel caps sheet titles at 31 characters; congress tabs stay shorter.
    sheet_name_max_length: int = 25
    sheet_name_collision: CollisionPolicy = "suffix"
    date_format: str = "%m/%d/%Y"

    def source_config(self, *, database: Path | None = None, snapshot: Path | None = None) -> SourceConfig:
        """Resolve the data source: explicit arguments first, then settings."""
        if database is not None and snapshot is not None:
            raise ConfigError("pass either a database or a snapshot, not both")
        if database is not None:
            return SourceConfig.sqlite(database)
        if snapshot is not None:
            return SourceConfig.yaml(snapshot)
        if self.database_url:
            return SourceConfig.database(self.database_url)
        if self.snapshot_path is not None:
            return SourceConfig.yaml(self.snapshot_path)
        raise ConfigError(
            "no data source configured (set HOLLINGER_REPORT_DATABASE_URL or HOLLINGER_REPORT_SNAPSHOT_PATH)"
        )

    def workbook_options(self) -> WorkbookOptions:
        try:
            return WorkbookOptions(
                sheet_name_max_length=self.sheet_name_max_length,
                sheet_name_collision=self.sheet_name_collision,
                date_format=self.date_format,
            )
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            raise ConfigError(f"invalid workbook settings ({problems})") from e


settings = Settings()
