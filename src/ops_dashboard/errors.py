"""Exception types raised by the dashboard data layer."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for errors surfaced to callers of the report pipeline."""


class ConfigurationError(DashboardError):
    """Spreadsheet credentials or identifiers are missing."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "Invalid configuration")


class SourceFetchError(DashboardError):
    """A read from the tabular data source failed."""

    def __init__(self, message: str, sheet: str = "") -> None:
        self.sheet = sheet
        super().__init__(message)


class ReportDateError(DashboardError, ValueError):
    """The requested report date is not a YYYY-MM-DD calendar date."""
