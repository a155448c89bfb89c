"""Combined daily report returned to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from ops_dashboard.ingestion.models import DMA, ROV, Nave, Registro
from ops_dashboard.matching.matcher import MatchStrategy


@dataclass(frozen=True)
class DailyReport:
    report_date: date
    registros: list[Registro]
    dmas: list[DMA]
    naves: list[Nave]
    rovs: list[ROV]
    last_update: datetime  # assembly time, not taken from the sheet
    strategy: MatchStrategy = MatchStrategy.NONE
    # Sheet name -> failure message for ranges that could not be read
    errors: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not (self.registros or self.dmas or self.naves or self.rovs)

    def to_dict(self) -> dict:
        payload = {
            "registros": [r.to_dict() for r in self.registros],
            "dmas": [d.to_dict() for d in self.dmas],
            "naves": [n.to_dict() for n in self.naves],
            "rovs": [r.to_dict() for r in self.rovs],
            "lastUpdate": self.last_update.isoformat(),
        }
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload
