"""Report aggregation: fetch all sheets, parse, match, assemble."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Callable, Optional

from ops_dashboard.config.settings import DashboardConfig
from ops_dashboard.config.sheet_layout import ALL_SHEETS, DMAS, NAVES, REGISTROS, ROVS
from ops_dashboard.errors import ConfigurationError, SourceFetchError
from ops_dashboard.ingestion.parsers import parse_dmas, parse_naves, parse_registros, parse_rovs
from ops_dashboard.matching.date_resolver import resolve_report_date
from ops_dashboard.matching.matcher import RecordMatcher
from ops_dashboard.reporting.models import DailyReport
from ops_dashboard.source.base import Rows, TabularSource

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportAggregator:
    """Builds the daily report for one report date.

    The four ranges are read concurrently and the aggregator waits for all
    of them. A failed range leaves its collection empty; only a failure of
    every range is raised to the caller.
    """

    def __init__(
        self,
        source: TabularSource,
        matcher: Optional[RecordMatcher] = None,
        offset_days: int = 0,
        dayfirst: bool = False,
        max_workers: int = 4,
        log: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._log = log or logger
        self._matcher = matcher or RecordMatcher(log=self._log)
        self._offset_days = offset_days
        self._dayfirst = dayfirst
        self._max_workers = max(1, max_workers)
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: DashboardConfig,
        source: TabularSource,
        log: Optional[logging.Logger] = None,
    ) -> ReportAggregator:
        matcher = RecordMatcher(
            policy=config.match_policy,
            legacy_fallback=config.legacy_fallback,
            log=log,
        )
        return cls(
            source,
            matcher=matcher,
            offset_days=config.offset_days,
            dayfirst=config.dayfirst,
            max_workers=config.fetch_workers,
            log=log,
        )

    def fetch_ranges(self) -> tuple[dict[str, Rows], dict[str, str]]:
        """Read every sheet range. Returns (rows by sheet, errors by sheet)."""
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {
                layout.name: pool.submit(self._source.get_range, layout.range_name)
                for layout in ALL_SHEETS
            }
            wait(futures.values())

        rows: dict[str, Rows] = {}
        errors: dict[str, str] = {}
        for sheet, future in futures.items():
            exc = future.exception()
            if exc is None:
                rows[sheet] = future.result() or []
                if len(rows[sheet]) < 2:
                    self._log.warning("No data rows in %s sheet", sheet, extra={"sheet": sheet})
                continue
            if isinstance(exc, ConfigurationError):
                raise exc
            self._log.error("Failed to read %s: %s", sheet, exc, extra={"sheet": sheet})
            errors[sheet] = str(exc)

        if not rows:
            detail = "; ".join(f"{sheet}: {msg}" for sheet, msg in errors.items())
            raise SourceFetchError(f"Every sheet range failed ({detail})")
        return rows, errors

    def build(self, report_date: str) -> DailyReport:
        """Assemble the report for a YYYY-MM-DD date."""
        criteria = resolve_report_date(report_date, offset_days=self._offset_days)
        self._log.info(
            "Building report for %s (registry date %s)",
            report_date,
            criteria.registry_date,
            extra={"report_date": report_date},
        )
        raw, errors = self.fetch_ranges()
        self._log.info(
            "Raw rows: %s",
            ", ".join(f"{sheet}={len(values)}" for sheet, values in raw.items()),
            extra={"report_date": report_date},
        )

        registros = (
            parse_registros(raw[REGISTROS.name], dayfirst=self._dayfirst)
            if REGISTROS.name in raw
            else None
        )
        match = self._matcher.reconcile(
            criteria,
            registros,
            dmas=parse_dmas(raw.get(DMAS.name)),
            naves=parse_naves(raw.get(NAVES.name)),
            rovs=parse_rovs(raw.get(ROVS.name)),
        )
        return DailyReport(
            report_date=criteria.report_date,
            registros=match.registros,
            dmas=match.dmas,
            naves=match.naves,
            rovs=match.rovs,
            last_update=self._clock(),
            strategy=match.strategy,
            errors=errors,
        )
