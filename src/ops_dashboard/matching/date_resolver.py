"""Report date resolution: the keys a row may match for a given report date."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ops_dashboard.errors import ReportDateError

REPORT_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class DateCriteria:
    """Matching keys derived from one report date.

    ``registry_date`` is the calendar day (UTC) a Registro's own date must
    fall on; it differs from the report date when the sheet is filled in
    ``offset_days`` after the day it reports on. ``fragment`` is the
    digits-only report date as embedded in identifiers (20250804-01).
    """

    report_date: date
    offset_days: int = 0

    @property
    def registry_date(self) -> date:
        return self.report_date + timedelta(days=self.offset_days)

    @property
    def fragment(self) -> str:
        return self.report_date.strftime("%Y%m%d")

    def matches_date(self, value: Optional[datetime]) -> bool:
        if value is None:
            return False
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date() == self.registry_date

    def matches_fragment(self, identifier: str) -> bool:
        return bool(identifier) and self.fragment in identifier


def resolve_report_date(text: str, offset_days: int = 0) -> DateCriteria:
    """Validate a YYYY-MM-DD report date and build its matching criteria.

    Raises ReportDateError for anything else, including surrounding
    whitespace, so a bad request never silently matches every row.
    """
    if not isinstance(text, str) or not REPORT_DATE_PATTERN.fullmatch(text):
        raise ReportDateError(f"Invalid report date {text!r}, expected YYYY-MM-DD")
    try:
        parsed = date.fromisoformat(text)
    except ValueError as exc:
        raise ReportDateError(f"Invalid report date {text!r}: {exc}") from exc
    return DateCriteria(report_date=parsed, offset_days=offset_days)
