"""Two-stage record matching for a report date.

Stage one selects the Registros belonging to the report date under the
configured policy. Stage two keeps DMA/Nave/ROV rows whose identifier is one
of the selected Registro identifiers (exact membership). When no Registro
matched at all, the dependent sheets fall back to matching the date
fragment inside their own identifiers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence, TypeVar

from ops_dashboard.ingestion.models import DMA, ROV, Nave, Registro
from ops_dashboard.matching.date_resolver import DateCriteria

logger = logging.getLogger(__name__)

R = TypeVar("R", DMA, Nave, ROV)


class MatchPolicy(str, Enum):
    """How a Registro is tied to a report date."""

    FALLBACK = "fallback"  # exact date, then identifier fragment
    EXACT = "exact"
    FRAGMENT = "fragment"


class MatchStrategy(str, Enum):
    """Which rule produced the final result set."""

    EXACT = "exact"
    FRAGMENT = "fragment"
    LEGACY_FRAGMENT = "legacy_fragment"
    NONE = "none"


@dataclass(frozen=True)
class MatchResult:
    registros: list[Registro] = field(default_factory=list)
    dmas: list[DMA] = field(default_factory=list)
    naves: list[Nave] = field(default_factory=list)
    rovs: list[ROV] = field(default_factory=list)
    linkage_keys: frozenset[str] = frozenset()
    strategy: MatchStrategy = MatchStrategy.NONE


class RecordMatcher:
    """Applies the report-date matching policy to parsed records."""

    def __init__(
        self,
        policy: MatchPolicy | str = MatchPolicy.FALLBACK,
        legacy_fallback: bool = True,
        log: Optional[logging.Logger] = None,
    ) -> None:
        self._policy = MatchPolicy(policy)
        self._legacy_fallback = legacy_fallback
        self._log = log or logger

    @property
    def policy(self) -> MatchPolicy:
        return self._policy

    def match_registros(
        self, registros: Sequence[Registro], criteria: DateCriteria
    ) -> tuple[list[Registro], MatchStrategy]:
        """Select Registros for the report date, keeping sheet order."""
        if self._policy in (MatchPolicy.EXACT, MatchPolicy.FALLBACK):
            matched = [r for r in registros if criteria.matches_date(r.fecha)]
            for r in matched:
                self._log.debug(
                    "Registro %s matched by date %s", r.id_registro, criteria.registry_date
                )
            if matched or self._policy is MatchPolicy.EXACT:
                return matched, MatchStrategy.EXACT if matched else MatchStrategy.NONE

        matched = [r for r in registros if criteria.matches_fragment(r.id_registro)]
        for r in matched:
            self._log.debug("Registro %s matched by fragment %s", r.id_registro, criteria.fragment)
        return matched, MatchStrategy.FRAGMENT if matched else MatchStrategy.NONE

    @staticmethod
    def linkage_keys(registros: Iterable[Registro]) -> frozenset[str]:
        return frozenset(r.id_registro for r in registros if r.id_registro)

    @staticmethod
    def filter_linked(records: Sequence[R], keys: frozenset[str]) -> list[R]:
        return [r for r in records if r.id_registro and r.id_registro in keys]

    @staticmethod
    def filter_by_fragment(records: Sequence[R], criteria: DateCriteria) -> list[R]:
        return [r for r in records if criteria.matches_fragment(r.id_registro)]

    def reconcile(
        self,
        criteria: DateCriteria,
        registros: Optional[Sequence[Registro]],
        dmas: Sequence[DMA] = (),
        naves: Sequence[Nave] = (),
        rovs: Sequence[ROV] = (),
    ) -> MatchResult:
        """Run both matching stages.

        ``registros=None`` means the Registros sheet could not be read; the
        dependent sheets then stay empty since no linkage can be established.
        """
        report_date = criteria.report_date.isoformat()
        if registros is None:
            self._log.warning(
                "Registros unavailable for %s; dependent sheets left empty",
                report_date,
                extra={"report_date": report_date},
            )
            return MatchResult()

        matched, strategy = self.match_registros(registros, criteria)
        keys = self.linkage_keys(matched)

        if matched:
            result = MatchResult(
                registros=matched,
                dmas=self.filter_linked(dmas, keys),
                naves=self.filter_linked(naves, keys),
                rovs=self.filter_linked(rovs, keys),
                linkage_keys=keys,
                strategy=strategy,
            )
        elif self._legacy_fallback:
            self._log.info(
                "No Registro for %s; matching dependent sheets by fragment %s",
                report_date,
                criteria.fragment,
                extra={"report_date": report_date},
            )
            fallback_dmas = self.filter_by_fragment(dmas, criteria)
            fallback_naves = self.filter_by_fragment(naves, criteria)
            fallback_rovs = self.filter_by_fragment(rovs, criteria)
            found = bool(fallback_dmas or fallback_naves or fallback_rovs)
            result = MatchResult(
                dmas=fallback_dmas,
                naves=fallback_naves,
                rovs=fallback_rovs,
                strategy=MatchStrategy.LEGACY_FRAGMENT if found else MatchStrategy.NONE,
            )
        else:
            result = MatchResult()

        self._log.info(
            "Matched for %s via %s: registros=%d dmas=%d naves=%d rovs=%d",
            report_date,
            result.strategy.value,
            len(result.registros),
            len(result.dmas),
            len(result.naves),
            len(result.rovs),
            extra={"report_date": report_date},
        )
        return result
