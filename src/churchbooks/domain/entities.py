"""Domain model entities for churchbooks.

These are pure data classes representing business concepts, independent of
database schema. Source records are owned by the store; ledger structures
(``MonthTotals``, ``LedgerLine``, ``LedgerReport``) are derived on every read
and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


ZERO = Decimal("0")


@dataclass(frozen=True)
class Church:
    """Church domain entity. Churches belong to a pastorate."""

    id: int
    name: str
    pastorate_name: str
    created_at: datetime


@dataclass(frozen=True)
class FinancialYear:
    """Financial year registered for a pastorate, labelled 'YYYY-YYYY+1'."""

    id: int
    pastorate_name: str
    label: str
    created_at: datetime


@dataclass(frozen=True)
class OffertoryCategory:
    """Offertory collection category (e.g. 'Thanks Offering')."""

    id: int
    pastorate_name: str
    name: str
    created_at: datetime


@dataclass(frozen=True)
class ServiceEntry:
    """Collection taken at one service, itemised by offertory category."""

    date: date
    category_amounts: dict[int, Decimal]
    total: Decimal


@dataclass(frozen=True)
class ChurchOffertory:
    """Offertory of one church for one month."""

    id: int
    pastorate_name: str
    year: str
    month: str
    church_id: int
    church_name: str
    services: tuple[ServiceEntry, ...]
    total_amount: Decimal


@dataclass(frozen=True)
class Receipt:
    """Receipt book entry."""

    id: int
    pastorate_name: str
    year: str
    month: str
    receipt_no: int
    date: date
    name: str
    amount: Decimal
    area: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class SangamPayment:
    """Payment towards a sangam collection scheme."""

    id: int
    pastorate_name: str
    year: str
    month: str
    receipt_no: int
    member_name: str
    date: date
    amount: Decimal
    family_name: Optional[str] = None
    church_id: Optional[int] = None
    service_date: Optional[date] = None


@dataclass(frozen=True)
class HarvestFestivalBaseEntry:
    """Harvest festival auction pledge; payments draw its balance down."""

    id: int
    pastorate_name: str
    year: str
    name: str
    auction_amount: Decimal
    total_paid: Decimal

    @property
    def balance(self) -> Decimal:
        return self.auction_amount - self.total_paid


@dataclass(frozen=True)
class HarvestFestivalPayment:
    """Payment against a harvest festival base entry.

    ``month`` is the month of ``service_date``, not of ``date``.
    """

    id: int
    pastorate_name: str
    year: str
    month: str
    base_entry_id: int
    name: str
    date: date
    service_date: date
    amount: Decimal


@dataclass(frozen=True)
class Expense:
    """Pastorate cash book expense voucher."""

    id: int
    pastorate_name: str
    year: str
    month: str
    vno: str
    date: date
    expense_details: str
    amount: Decimal


@dataclass(frozen=True)
class OpeningBalance:
    """User-entered April opening balance of a financial year."""

    pastorate_name: str
    year: str
    amount: Decimal


@dataclass(frozen=True)
class MonthTotals:
    """Per-source aggregates of one month."""

    month: str
    offertory: Decimal = ZERO
    receipts: Decimal = ZERO
    sangam: Decimal = ZERO
    harvest_festival: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def income(self) -> Decimal:
        return self.offertory + self.receipts + self.sangam + self.harvest_festival

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class MonthSummary:
    """One row of the financial year overview."""

    month: str
    opening_balance: Decimal
    income: Decimal
    expenses: Decimal

    @property
    def closing_balance(self) -> Decimal:
        return self.opening_balance + self.income - self.expenses


class LedgerSection(str, Enum):
    """Cash book section of a ledger line, in presentation order."""

    OFFERTORY = "offertory"
    RECEIPT = "receipt"
    EXPENSE = "expense"


@dataclass(frozen=True)
class LedgerLine:
    """One row of the cash book register."""

    date: Optional[date]
    description: str
    section: LedgerSection
    credit_amount: Optional[Decimal]
    debit_amount: Optional[Decimal]
    running_balance: Decimal
    church_id: Optional[int] = None
    service: Optional[ServiceEntry] = None


@dataclass(frozen=True)
class ChurchTotal:
    """Offertory subtotal of one church within a register."""

    church_id: int
    church_name: str
    total: Decimal


@dataclass(frozen=True)
class LedgerReport:
    """PC Cash Book register for one month."""

    pastorate_name: str
    year: str
    month: str
    opening_balance: Decimal
    lines: tuple[LedgerLine, ...]
    church_offertory_total: Decimal
    receipts_total: Decimal
    expenses_total: Decimal
    final_balance: Decimal
    church_totals: tuple[ChurchTotal, ...] = field(default_factory=tuple)

    @property
    def total_income(self) -> Decimal:
        return self.church_offertory_total + self.receipts_total

    @property
    def total_receipts(self) -> Decimal:
        """Opening balance plus the month's income, the 'Total Receipts' row."""
        return self.opening_balance + self.total_income

    def lines_for(self, section: LedgerSection) -> tuple[LedgerLine, ...]:
        return tuple(line for line in self.lines if line.section == section)
