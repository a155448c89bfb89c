"""Request entry point used by the presentation layer."""

from __future__ import annotations

import logging

from ops_dashboard.errors import DashboardError
from ops_dashboard.reporting.aggregator import ReportAggregator

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error al obtener datos"


def error_payload(exc: DashboardError) -> dict:
    return {"error": f"{ERROR_PREFIX}: {exc}", "kind": type(exc).__name__}


def build_payload(report_date: str, aggregator: ReportAggregator) -> dict:
    """Report payload for a date, or an error payload with an ``error`` key.

    An empty report is a successful payload with empty collections.
    """
    try:
        report = aggregator.build(report_date)
    except DashboardError as exc:
        logger.error("Report request for %r failed: %s", report_date, exc)
        return error_payload(exc)
    logger.info(
        "Report for %s: registros=%d dmas=%d naves=%d rovs=%d",
        report_date,
        len(report.registros),
        len(report.dmas),
        len(report.naves),
        len(report.rovs),
    )
    return report.to_dict()
