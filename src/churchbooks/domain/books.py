"""Book entry domain service.

Validates and records the source documents the cash book is built from:
church offertories, receipts, sangam and harvest festival payments,
expenses, and the April opening balance.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from churchbooks.database.base import Database
from churchbooks.domain.entities import (
    ZERO,
    ChurchOffertory,
    HarvestFestivalBaseEntry,
    OpeningBalance,
    Receipt,
    Expense,
    ServiceEntry,
)
from churchbooks.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_precision,
    church_not_found,
    harvest_payment_exceeds_balance,
    opening_balance_locked,
)
from churchbooks.domain.financial_year import (
    financial_year_for_date,
    month_name_for_date,
    normalize_year_label,
    validate_period,
)


PAISA = Decimal("0.01")


def _require_paise(amount: Decimal, what: str) -> None:
    if amount != amount.quantize(PAISA):
        raise ValidationError(amount_precision(what, amount))


def _require_positive(amount: Decimal, what: str) -> None:
    if amount is None or amount <= 0:
        raise ValidationError(f"{what} must be greater than zero")
    _require_paise(amount, what)


def build_service_entry(service_date: date, category_amounts: dict[int, Decimal]) -> ServiceEntry:
    """Build a service entry whose total is the sum of its category amounts.

    Raises:
        ValidationError: If no category has an amount, or an amount is
            negative or finer than one paisa
    """
    amounts = {int(k): Decimal(v) for k, v in category_amounts.items() if Decimal(v) != 0}
    if not amounts:
        raise ValidationError(f"Service on {service_date} has no category amounts")
    if any(amount < 0 for amount in amounts.values()):
        raise ValidationError(f"Service on {service_date} has a negative category amount")
    for amount in amounts.values():
        _require_paise(amount, f"Service on {service_date} category amount")
    return ServiceEntry(date=service_date, category_amounts=amounts, total=sum(amounts.values(), ZERO))


class BookService:
    """Service for entering cash book source records."""

    def __init__(self, db: Database):
        """Initialize book service.

        Args:
            db: Database instance
        """
        self.db = db

    def save_church_offertory(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        church_id: int,
        services: list[ServiceEntry],
    ) -> int:
        """Record the offertory of a church for a month.

        Saving again for the same church and month replaces the earlier
        services. The offertory total is the sum of the service totals.

        Returns:
            Offertory ID

        Raises:
            ValidationError: If there is no service or a service total is inconsistent
            NotFoundError: If the church doesn't exist
        """
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        church = self.db.get_church(church_id)
        if church is None:
            raise NotFoundError(church_not_found(church_id))
        if church.pastorate_name != pastorate_name:
            raise ValidationError(f"Church '{church.name}' is not in {pastorate_name}")
        if not services:
            raise ValidationError("At least one service is required")
        for service in services:
            for amount in service.category_amounts.values():
                _require_paise(amount, f"Service on {service.date} category amount")
            if service.total != sum(service.category_amounts.values(), ZERO):
                raise ValidationError(
                    f"Service on {service.date} total does not match its category amounts"
                )

        ordered = sorted(services, key=lambda s: s.date)
        total_amount = sum((s.total for s in ordered), ZERO)
        return self.db.save_church_offertory(
            pastorate_name=pastorate_name,
            year=year,
            month=month,
            church_id=church_id,
            services=ordered,
            total_amount=total_amount,
        )

    def add_offertory_service(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        church_id: int,
        service: ServiceEntry,
    ) -> int:
        """Add a service to a church's offertory, replacing one on the same date."""
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        services = [service]
        for offertory in self.db.get_church_offertories(pastorate_name, year, month):
            if offertory.church_id == church_id:
                services.extend(s for s in offertory.services if s.date != service.date)
        return self.save_church_offertory(pastorate_name, year, month, church_id, services)

    def list_church_offertories(
        self, pastorate_name: str, year: str, month: str
    ) -> list[ChurchOffertory]:
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        return self.db.get_church_offertories(pastorate_name, year, month)

    def create_receipt(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        date: date,
        name: str,
        amount: Decimal,
        receipt_no: Optional[int] = None,
        area: Optional[str] = None,
        category: Optional[str] = None,
    ) -> int:
        """Create a receipt, numbering it automatically if receipt_no is None."""
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        _require_positive(amount, "Receipt amount")
        if receipt_no is None:
            receipt_no = self.db.get_next_receipt_number(pastorate_name, year)
        return self.db.create_receipt(
            pastorate_name=pastorate_name,
            year=year,
            month=month,
            receipt_no=receipt_no,
            date=date,
            name=name,
            amount=amount,
            area=area,
            category=category,
        )

    def list_receipts(self, pastorate_name: str, year: str, month: str) -> list[Receipt]:
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        return self.db.get_receipts(pastorate_name, year, month)

    def delete_receipt(self, receipt_id: int) -> None:
        self.db.delete_receipt(receipt_id)

    def create_sangam_payment(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        member_name: str,
        date: date,
        amount: Decimal,
        receipt_no: Optional[int] = None,
        family_name: Optional[str] = None,
        church_id: Optional[int] = None,
        service_date: Optional[date] = None,
    ) -> int:
        """Create a sangam payment, numbering it automatically if receipt_no is None."""
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        _require_positive(amount, "Sangam payment amount")
        if church_id is not None and self.db.get_church(church_id) is None:
            raise NotFoundError(church_not_found(church_id))
        if receipt_no is None:
            receipt_no = self.db.get_next_sangam_receipt_number(pastorate_name, year)
        return self.db.create_sangam_payment(
            pastorate_name=pastorate_name,
            year=year,
            month=month,
            receipt_no=receipt_no,
            member_name=member_name,
            date=date,
            amount=amount,
            family_name=family_name,
            church_id=church_id,
            service_date=service_date,
        )

    def create_harvest_festival_base_entry(
        self,
        pastorate_name: str,
        year: str,
        name: str,
        auction_amount: Decimal,
        initial_payment: Optional[Decimal] = None,
        payment_date: Optional[date] = None,
        service_date: Optional[date] = None,
    ) -> int:
        """Create a harvest festival auction pledge.

        An initial payment, when given, is recorded against the new pledge
        like any later payment, in the month of its service date.

        Raises:
            ValidationError: If an amount is not positive, the initial payment
                exceeds the auction amount, or its service date is outside the
                financial year
        """
        pastorate_name, year, _ = validate_period(pastorate_name, year, "April")
        _require_positive(auction_amount, "Auction amount")
        if initial_payment is not None:
            _require_positive(initial_payment, "Initial payment")
            if payment_date is None or service_date is None:
                raise ValidationError("Initial payment needs a payment date and a service date")
            if initial_payment > auction_amount:
                raise ValidationError(
                    f"Initial payment {initial_payment} cannot exceed auction amount {auction_amount}"
                )
            if financial_year_for_date(service_date) != year:
                raise ValidationError(f"Service date {service_date} is outside financial year {year}")

        entry_id = self.db.create_harvest_festival_base_entry(
            pastorate_name=pastorate_name, year=year, name=name, auction_amount=auction_amount
        )
        if initial_payment is not None:
            self.create_harvest_festival_payment(
                base_entry_id=entry_id, date=payment_date, service_date=service_date, amount=initial_payment
            )
        return entry_id

    def list_harvest_festival_base_entries(
        self, pastorate_name: str, year: str
    ) -> list[HarvestFestivalBaseEntry]:
        pastorate_name, year, _ = validate_period(pastorate_name, year, "April")
        return self.db.list_harvest_festival_base_entries(pastorate_name, year)

    def create_harvest_festival_payment(
        self,
        base_entry_id: int,
        date: date,
        service_date: date,
        amount: Decimal,
    ) -> int:
        """Pay towards a harvest festival pledge.

        The payment lands in the month of its service date, which must fall
        within the pledge's financial year.

        Raises:
            NotFoundError: If the base entry doesn't exist
            ValidationError: If the amount exceeds the outstanding balance or
                the service date is outside the financial year
        """
        entry = self.db.get_harvest_festival_base_entry(base_entry_id)
        if entry is None:
            raise NotFoundError(f"Harvest festival entry {base_entry_id} not found")
        _require_positive(amount, "Payment amount")
        if amount > entry.balance:
            raise ValidationError(harvest_payment_exceeds_balance(base_entry_id, entry.balance))
        if financial_year_for_date(service_date) != entry.year:
            raise ValidationError(
                f"Service date {service_date} is outside financial year {entry.year}"
            )

        return self.db.create_harvest_festival_payment(
            pastorate_name=entry.pastorate_name,
            year=entry.year,
            month=month_name_for_date(service_date),
            base_entry_id=entry.id,
            name=entry.name,
            date=date,
            service_date=service_date,
            amount=amount,
        )

    def create_expense(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        vno: str,
        date: date,
        expense_details: str,
        amount: Decimal,
    ) -> int:
        """Create a cash book expense.

        Raises:
            ValidationError: If amount is not positive
        """
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        _require_positive(amount, "Expense amount")
        return self.db.create_expense(
            pastorate_name=pastorate_name,
            year=year,
            month=month,
            vno=vno,
            date=date,
            expense_details=expense_details,
            amount=amount,
        )

    def list_expenses(self, pastorate_name: str, year: str, month: str) -> list[Expense]:
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        return self.db.get_expenses(pastorate_name, year, month)

    def delete_expense(self, expense_id: int) -> None:
        self.db.delete_expense(expense_id)

    def get_opening_balance(self, pastorate_name: str, year: str) -> Optional[OpeningBalance]:
        """Get the entered April opening balance, if any."""
        return self.db.get_opening_balance(pastorate_name, normalize_year_label(year))

    def save_opening_balance(
        self, pastorate_name: str, year: str, amount: Decimal, active_month: str = "April"
    ) -> None:
        """Enter the April opening balance of a financial year.

        Raises:
            ValidationError: If active_month is not April
        """
        pastorate_name, year, active_month = validate_period(pastorate_name, year, active_month)
        if active_month != "April":
            raise ValidationError(opening_balance_locked(active_month))
        _require_paise(amount, "Opening balance")
        self.db.save_opening_balance(pastorate_name, year, amount)
