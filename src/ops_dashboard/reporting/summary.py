"""Fleet status totals shown alongside the daily report."""

from __future__ import annotations

from dataclasses import dataclass

from ops_dashboard.reporting.models import DailyReport


@dataclass(frozen=True)
class FleetSummary:
    dmas_total: int = 0
    dmas_pumping: int = 0
    dmas_inoperative: int = 0
    dmas_standby: int = 0
    pumping_hours: float = 0.0
    rovs_total: int = 0
    rovs_operational: int = 0
    naves_total: int = 0
    # Counters as typed into the first Registro of the day
    declared_equipment: int = 0
    declared_inoperative: int = 0
    declared_pumping: int = 0

    @property
    def rovs_other(self) -> int:
        return self.rovs_total - self.rovs_operational


def summarize(report: DailyReport) -> FleetSummary:
    """Count equipment states in an assembled report."""
    first = report.registros[0] if report.registros else None
    return FleetSummary(
        dmas_total=len(report.dmas),
        dmas_pumping=sum(1 for d in report.dmas if d.is_pumping),
        dmas_inoperative=sum(1 for d in report.dmas if d.is_inoperative),
        dmas_standby=sum(1 for d in report.dmas if d.is_standby),
        pumping_hours=round(sum(d.horas_bombeo for d in report.dmas), 2),
        rovs_total=len(report.rovs),
        rovs_operational=sum(1 for r in report.rovs if r.is_operational),
        naves_total=len(report.naves),
        declared_equipment=first.num_equipos if first else 0,
        declared_inoperative=first.num_equipos_inoperativos if first else 0,
        declared_pumping=first.num_equipos_bombeando if first else 0,
    )
