"""Export of cash book registers.

Exports serialise a LedgerReport produced by LedgerService.build_register;
they never recompute balances.
"""

import csv
import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

from churchbooks.domain.entities import LedgerLine, LedgerReport

CSV_COLUMNS = ["Date", "Details", "Receipts", "Expenses", "Balance"]


def _money(amount: Optional[Decimal]) -> str:
    return "" if amount is None else f"{amount:.2f}"


def line_to_dict(line: LedgerLine, category_names: Optional[dict[int, str]] = None) -> dict[str, Any]:
    """JSON-shaped dict of a ledger line."""
    data: dict[str, Any] = {
        "date": line.date.isoformat() if line.date else None,
        "description": line.description,
        "section": line.section.value,
        "credit_amount": _money(line.credit_amount) or None,
        "debit_amount": _money(line.debit_amount) or None,
        "running_balance": _money(line.running_balance),
    }
    if line.service is not None:
        names = category_names or {}
        data["church_id"] = line.church_id
        data["categories"] = {
            names.get(category_id, f"Category {category_id}"): _money(amount)
            for category_id, amount in line.service.category_amounts.items()
        }
    return data


def report_to_dict(
    report: LedgerReport, category_names: Optional[dict[int, str]] = None
) -> dict[str, Any]:
    """JSON-shaped dict of a register; amounts are two-place strings."""
    return {
        "pastorate": report.pastorate_name,
        "year": report.year,
        "month": report.month,
        "opening_balance": _money(report.opening_balance),
        "lines": [line_to_dict(line, category_names) for line in report.lines],
        "church_totals": [
            {"church_id": t.church_id, "church_name": t.church_name, "total": _money(t.total)}
            for t in report.church_totals
        ],
        "church_offertory_total": _money(report.church_offertory_total),
        "receipts_total": _money(report.receipts_total),
        "expenses_total": _money(report.expenses_total),
        "total_receipts": _money(report.total_receipts),
        "final_balance": _money(report.final_balance),
    }


def report_rows(report: LedgerReport) -> list[list[str]]:
    """Cash book table rows: opening row, ledger lines, totals row."""
    rows = [["", "Opening Balance", _money(report.opening_balance), "", _money(report.opening_balance)]]
    for line in report.lines:
        rows.append(
            [
                line.date.isoformat() if line.date else "",
                line.description,
                _money(line.credit_amount),
                _money(line.debit_amount),
                _money(line.running_balance),
            ]
        )
    rows.append(
        [
            "",
            "GRAND TOTAL",
            _money(report.total_receipts),
            _money(report.expenses_total),
            _money(report.final_balance),
        ]
    )
    return rows


def write_csv(report: LedgerReport, output_path: str | Path) -> Path:
    """Write a register as CSV. Returns the written path."""
    path = Path(output_path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        writer.writerows(report_rows(report))
    return path


def write_json(
    report: LedgerReport,
    output_path: str | Path,
    category_names: Optional[dict[int, str]] = None,
) -> Path:
    """Write a register as JSON. Returns the written path."""
    path = Path(output_path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report_to_dict(report, category_names), f, indent=2, ensure_ascii=False)
    return path
