"""Tests for report date resolution and record matching."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

import pytest

from ops_dashboard.errors import ReportDateError
from ops_dashboard.ingestion.models import DMA, ROV, Nave, Registro
from ops_dashboard.matching.date_resolver import resolve_report_date
from ops_dashboard.matching.matcher import MatchPolicy, MatchStrategy, RecordMatcher


def _utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestResolveReportDate:
    """Test report date validation and offsets."""

    def test_valid_date(self):
        criteria = resolve_report_date("2025-08-04")
        assert criteria.report_date == date(2025, 8, 4)
        assert criteria.registry_date == date(2025, 8, 4)
        assert criteria.fragment == "20250804"

    def test_offset_moves_registry_date_only(self):
        criteria = resolve_report_date("2025-08-31", offset_days=1)
        assert criteria.registry_date == date(2025, 9, 1)
        assert criteria.fragment == "20250831"

    @pytest.mark.parametrize(
        "text",
        ["not-a-date", "", " 2025-08-04", "2025-08-04 ", "2025/08/04", "04-08-2025", "2025-02-30", "2025-8-4"],
    )
    def test_malformed_dates_rejected(self, text):
        with pytest.raises(ReportDateError):
            resolve_report_date(text)

    def test_non_string_rejected(self):
        with pytest.raises(ReportDateError):
            resolve_report_date(None)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_report_date("tomorrow")

    def test_date_match_truncates_to_utc_day(self):
        criteria = resolve_report_date("2025-08-05")
        late_local = datetime.fromisoformat("2025-08-04T23:30:00-04:00")
        assert criteria.matches_date(late_local)
        assert not criteria.matches_date(None)

    def test_fragment_requires_identifier(self):
        criteria = resolve_report_date("2025-08-04")
        assert criteria.matches_fragment("REG-20250804-01")
        assert not criteria.matches_fragment("")
        assert not criteria.matches_fragment("20250805-01")


class TestMatchRegistros:
    """Test Registro selection under each match policy."""

    def setup_method(self):
        self.criteria = resolve_report_date("2025-08-04")
        self.dated = Registro("A-1", _utc(2025, 8, 4, 10, 0))
        self.undated = Registro("20250804-01", None)
        self.other = Registro("20250805-01", _utc(2025, 8, 5))

    def test_exact_date_preferred(self):
        matcher = RecordMatcher()
        matched, strategy = matcher.match_registros(
            [self.dated, self.undated, self.other], self.criteria
        )
        assert matched == [self.dated]
        assert strategy is MatchStrategy.EXACT

    def test_falls_back_to_fragment(self):
        matcher = RecordMatcher()
        matched, strategy = matcher.match_registros([self.undated, self.other], self.criteria)
        assert matched == [self.undated]
        assert strategy is MatchStrategy.FRAGMENT

    def test_exact_policy_never_falls_back(self):
        matcher = RecordMatcher(policy=MatchPolicy.EXACT)
        matched, strategy = matcher.match_registros([self.undated, self.other], self.criteria)
        assert matched == []
        assert strategy is MatchStrategy.NONE

    def test_fragment_policy_ignores_dates(self):
        matcher = RecordMatcher(policy="fragment")
        matched, _ = matcher.match_registros(
            [self.dated, self.undated, self.other], self.criteria
        )
        assert matched == [self.undated]

    def test_duplicates_kept_in_order(self):
        twin = Registro("A-2", _utc(2025, 8, 4, 18, 0))
        matched, _ = RecordMatcher().match_registros([self.dated, self.other, twin], self.criteria)
        assert matched == [self.dated, twin]

    def test_offset_registry_date(self):
        criteria = resolve_report_date("2025-08-04", offset_days=1)
        matched, strategy = RecordMatcher().match_registros([self.dated, self.other], criteria)
        assert matched == [self.other]
        assert strategy is MatchStrategy.EXACT

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValueError):
            RecordMatcher(policy="fuzzy")


class TestReconcile:
    """Test linkage of dependent sheets to matched Registros."""

    def setup_method(self):
        self.criteria = resolve_report_date("2025-08-04")
        self.matcher = RecordMatcher()

    def test_dependents_filtered_by_linkage_keys(self):
        registros = [Registro("A-1", _utc(2025, 8, 4))]
        dmas = [DMA("A-1", dma_numero="1"), DMA("A-10", dma_numero="2"), DMA("", dma_numero="3")]
        naves = [Nave("A-1", "Don Pedro"), Nave("B-1", "Otra")]
        rovs = [ROV("a-1", "ROV-1"), ROV("A-1", "ROV-2")]

        result = self.matcher.reconcile(self.criteria, registros, dmas, naves, rovs)

        assert result.linkage_keys == frozenset({"A-1"})
        assert [d.dma_numero for d in result.dmas] == ["1"]
        assert [n.nave_nombre for n in result.naves] == ["Don Pedro"]
        assert [r.rov_numero for r in result.rovs] == ["ROV-2"]
        assert result.strategy is MatchStrategy.EXACT

    def test_linkage_is_exact_membership_not_substring(self):
        registros = [Registro("20250804-01", None)]
        dmas = [DMA("20250804-01"), DMA("20250804-012"), DMA("20250804-02")]
        result = self.matcher.reconcile(self.criteria, registros, dmas)
        assert [d.id_registro for d in result.dmas] == ["20250804-01"]
        assert result.strategy is MatchStrategy.FRAGMENT

    def test_empty_registro_identifier_gives_no_key(self):
        registros = [Registro("", _utc(2025, 8, 4))]
        result = self.matcher.reconcile(self.criteria, registros, [DMA("")])
        assert result.registros == registros
        assert result.linkage_keys == frozenset()
        assert result.dmas == []

    def test_legacy_fragment_fallback_without_registros(self):
        dmas = [DMA("DMA-20250804-1"), DMA("DMA-20250803-1")]
        naves = [Nave("20250804")]
        rovs = [ROV("")]
        result = self.matcher.reconcile(self.criteria, [], dmas, naves, rovs)
        assert result.registros == []
        assert [d.id_registro for d in result.dmas] == ["DMA-20250804-1"]
        assert len(result.naves) == 1
        assert result.rovs == []
        assert result.strategy is MatchStrategy.LEGACY_FRAGMENT

    def test_legacy_fallback_can_be_disabled(self):
        matcher = RecordMatcher(legacy_fallback=False)
        result = matcher.reconcile(self.criteria, [], [DMA("20250804-1")])
        assert result.dmas == []

    def test_nothing_matches(self):
        result = self.matcher.reconcile(
            self.criteria, [Registro("X", None)], [DMA("Y")], [Nave("Z")], [ROV("W")]
        )
        assert (result.registros, result.dmas, result.naves, result.rovs) == ([], [], [], [])
        assert result.strategy is MatchStrategy.NONE

    def test_registros_unavailable(self):
        result = self.matcher.reconcile(self.criteria, None, [DMA("20250804-01")])
        assert result.dmas == []
        assert result.strategy is MatchStrategy.NONE

    def test_uses_injected_logger(self, caplog):
        log = logging.getLogger("tests.matcher")
        matcher = RecordMatcher(log=log)
        with caplog.at_level(logging.DEBUG, logger="tests.matcher"):
            matcher.reconcile(self.criteria, [Registro("20250804-01", None)])
        assert any(rec.name == "tests.matcher" for rec in caplog.records)
        assert any("20250804-01" in rec.getMessage() for rec in caplog.records)
