"""Tests for cash book exports."""

import csv
import json
from datetime import date
from decimal import Decimal

import pytest

from churchbooks.domain.cashbook_export import CSV_COLUMNS, report_rows, report_to_dict, write_csv, write_json

from conftest import PASTORATE, YEAR


@pytest.fixture
def april_report(ledger_service, april_scenario):
    return ledger_service.build_register(PASTORATE, YEAR, "April")


def test_report_rows(april_report):
    rows = report_rows(april_report)

    assert rows[0] == ["", "Opening Balance", "1000.00", "", "1000.00"]
    assert rows[1] == ["2024-04-07", "St. Peter's - service offertory", "500.00", "", "1500.00"]
    assert rows[3] == ["2024-04-20", "VNo: 1 - Electricity", "", "300.00", "1400.00"]
    assert rows[-1] == ["", "GRAND TOTAL", "1700.00", "300.00", "1400.00"]


def test_write_csv(april_report, tmp_output):
    path = write_csv(april_report, tmp_output / "april.csv")

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == CSV_COLUMNS
    assert len(rows) == 1 + 1 + len(april_report.lines) + 1
    assert rows[-1][-1] == "1400.00"


def test_write_json(april_report, sample_categories, tmp_output):
    names = {category_id: name for name, category_id in sample_categories.items()}
    path = write_json(april_report, tmp_output / "april.json", names)

    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["month"] == "April"
    assert data["opening_balance"] == "1000.00"
    assert data["final_balance"] == "1400.00"
    assert data["total_receipts"] == "1700.00"
    assert [line["section"] for line in data["lines"]] == ["offertory", "receipt", "expense"]
    assert data["lines"][0]["categories"] == {"Sunday Offering": "500.00"}
    assert data["lines"][2]["credit_amount"] is None
    assert data["church_totals"][0]["church_name"] == "St. Peter's"


def test_export_matches_register(ledger_service, april_scenario):
    """Exported balances come straight from the register."""
    report = ledger_service.build_register(PASTORATE, YEAR, "April")
    data = report_to_dict(report)

    assert [line["running_balance"] for line in data["lines"]] == [
        f"{line.running_balance:.2f}" for line in report.lines
    ]
    assert Decimal(data["final_balance"]) == report.final_balance


def test_export_empty_month(ledger_service, tmp_output):
    report = ledger_service.build_register(PASTORATE, YEAR, "September")
    rows = report_rows(report)
    assert rows == [
        ["", "Opening Balance", "0.00", "", "0.00"],
        ["", "GRAND TOTAL", "0.00", "0.00", "0.00"],
    ]
    assert write_csv(report, tmp_output / "empty.csv").exists()
