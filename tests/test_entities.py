"""Tests for domain entities."""

from datetime import date
from decimal import Decimal

import pytest
from dataclasses import FrozenInstanceError

from churchbooks.domain.entities import (
    HarvestFestivalBaseEntry,
    LedgerLine,
    LedgerReport,
    LedgerSection,
    MonthSummary,
    MonthTotals,
)


class TestMonthTotals:
    """Tests for MonthTotals entity."""

    def test_defaults_are_zero(self):
        totals = MonthTotals(month="April")
        assert totals.income == Decimal("0")
        assert totals.net == Decimal("0")

    def test_income_and_net(self):
        totals = MonthTotals(
            month="May",
            offertory=Decimal("500"),
            receipts=Decimal("50"),
            sangam=Decimal("75"),
            harvest_festival=Decimal("25"),
            expenses=Decimal("300"),
        )
        assert totals.income == Decimal("650")
        assert totals.net == Decimal("350")

    def test_immutable(self):
        totals = MonthTotals(month="May")
        with pytest.raises(FrozenInstanceError):
            totals.receipts = Decimal("1")


def test_month_summary_closing_balance():
    summary = MonthSummary(
        month="June", opening_balance=Decimal("1400"), income=Decimal("625"), expenses=Decimal("300")
    )
    assert summary.closing_balance == Decimal("1725")


def test_harvest_festival_balance():
    entry = HarvestFestivalBaseEntry(
        id=1,
        pastorate_name="Nallur",
        year="2024-2025",
        name="Rani",
        auction_amount=Decimal("1000"),
        total_paid=Decimal("400"),
    )
    assert entry.balance == Decimal("600")


class TestLedgerReport:
    """Tests for LedgerReport entity."""

    @pytest.fixture
    def report(self):
        lines = (
            LedgerLine(date(2024, 4, 7), "Zion - service offertory", LedgerSection.OFFERTORY,
                       Decimal("500"), None, Decimal("1500"), church_id=1),
            LedgerLine(date(2024, 4, 9), "Receipt #1 - A", LedgerSection.RECEIPT,
                       Decimal("200"), None, Decimal("1700")),
            LedgerLine(date(2024, 4, 20), "VNo: 1 - Rent", LedgerSection.EXPENSE,
                       None, Decimal("300"), Decimal("1400")),
        )
        return LedgerReport(
            pastorate_name="Nallur",
            year="2024-2025",
            month="April",
            opening_balance=Decimal("1000"),
            lines=lines,
            church_offertory_total=Decimal("500"),
            receipts_total=Decimal("200"),
            expenses_total=Decimal("300"),
            final_balance=Decimal("1400"),
        )

    def test_totals(self, report):
        assert report.total_income == Decimal("700")
        assert report.total_receipts == Decimal("1700")
        assert report.church_totals == ()

    def test_lines_for(self, report):
        (expense,) = report.lines_for(LedgerSection.EXPENSE)
        assert expense.debit_amount == Decimal("300")
        assert len(report.lines_for(LedgerSection.OFFERTORY)) == 1

    def test_section_values(self):
        assert [s.value for s in LedgerSection] == ["offertory", "receipt", "expense"]
