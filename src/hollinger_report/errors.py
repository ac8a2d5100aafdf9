from __future__ import annotations


class ReportError(Exception):
    """Base class for failures surfaced by report generation."""


class ConfigError(ReportError):
    pass


class DataSourceError(ReportError):
    pass


class SheetNameCollisionError(ReportError):
    def __init__(self, name: str, congress_no: int) -> None:
        super().__init__(f"sheet name {name!r} for congress {congress_no} is already taken")
        self.name = name
        self.congress_no = congress_no


class ReportWriteError(ReportError):
    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"failed to write {path}: {reason}")
        self.path = path
        self.reason = reason
