"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, keeping the ledger engine unaware
of how records are stored.
"""

from decimal import Decimal

from churchbooks.domain import entities as domain
from churchbooks.database.models import (
    Church as ORMChurch,
    FinancialYear as ORMFinancialYear,
    OffertoryCategory as ORMOffertoryCategory,
    ChurchOffertory as ORMChurchOffertory,
    OffertoryService as ORMOffertoryService,
    Receipt as ORMReceipt,
    SangamPayment as ORMSangamPayment,
    HarvestFestivalBaseEntry as ORMHarvestFestivalBaseEntry,
    HarvestFestivalPayment as ORMHarvestFestivalPayment,
    Expense as ORMExpense,
    OpeningBalance as ORMOpeningBalance,
)


def _money(value) -> Decimal:
    """Normalise a stored amount to a two-place Decimal."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"))


def church_to_domain(orm_church: ORMChurch) -> domain.Church:
    """Convert SQLAlchemy Church model to domain Church entity."""
    return domain.Church(
        id=orm_church.id,
        name=orm_church.name,
        pastorate_name=orm_church.pastorate_name,
        created_at=orm_church.created_at,
    )


def financial_year_to_domain(orm_year: ORMFinancialYear) -> domain.FinancialYear:
    return domain.FinancialYear(
        id=orm_year.id,
        pastorate_name=orm_year.pastorate_name,
        label=orm_year.label,
        created_at=orm_year.created_at,
    )


def offertory_category_to_domain(
    orm_category: ORMOffertoryCategory,
) -> domain.OffertoryCategory:
    return domain.OffertoryCategory(
        id=orm_category.id,
        pastorate_name=orm_category.pastorate_name,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def category_amounts_to_storage(category_amounts: dict[int, Decimal]) -> dict[str, str]:
    """JSON columns only hold string keys; amounts are stored as strings."""
    return {str(category_id): str(amount) for category_id, amount in category_amounts.items()}


def service_to_domain(orm_service: ORMOffertoryService) -> domain.ServiceEntry:
    """Convert SQLAlchemy OffertoryService model to domain ServiceEntry."""
    amounts = {
        int(category_id): _money(amount)
        for category_id, amount in (orm_service.category_amounts or {}).items()
    }
    return domain.ServiceEntry(
        date=orm_service.date,
        category_amounts=amounts,
        total=_money(orm_service.total),
    )


def church_offertory_to_domain(orm_offertory: ORMChurchOffertory) -> domain.ChurchOffertory:
    """Convert SQLAlchemy ChurchOffertory model to domain ChurchOffertory entity."""
    return domain.ChurchOffertory(
        id=orm_offertory.id,
        pastorate_name=orm_offertory.pastorate_name,
        year=orm_offertory.year,
        month=orm_offertory.month,
        church_id=orm_offertory.church_id,
        church_name=orm_offertory.church.name,
        services=tuple(service_to_domain(s) for s in orm_offertory.services),
        total_amount=_money(orm_offertory.total_amount),
    )


def receipt_to_domain(orm_receipt: ORMReceipt) -> domain.Receipt:
    return domain.Receipt(
        id=orm_receipt.id,
        pastorate_name=orm_receipt.pastorate_name,
        year=orm_receipt.year,
        month=orm_receipt.month,
        receipt_no=orm_receipt.receipt_no,
        date=orm_receipt.date,
        name=orm_receipt.name,
        amount=_money(orm_receipt.amount),
        area=orm_receipt.area,
        category=orm_receipt.category,
    )


def sangam_payment_to_domain(orm_payment: ORMSangamPayment) -> domain.SangamPayment:
    return domain.SangamPayment(
        id=orm_payment.id,
        pastorate_name=orm_payment.pastorate_name,
        year=orm_payment.year,
        month=orm_payment.month,
        receipt_no=orm_payment.receipt_no,
        member_name=orm_payment.member_name,
        date=orm_payment.date,
        amount=_money(orm_payment.amount),
        family_name=orm_payment.family_name,
        church_id=orm_payment.church_id,
        service_date=orm_payment.service_date,
    )


def harvest_festival_base_entry_to_domain(
    orm_entry: ORMHarvestFestivalBaseEntry,
) -> domain.HarvestFestivalBaseEntry:
    """Convert a base entry; total_paid is summed from its payments."""
    total_paid = sum((_money(p.amount) for p in orm_entry.payments), Decimal("0.00"))
    return domain.HarvestFestivalBaseEntry(
        id=orm_entry.id,
        pastorate_name=orm_entry.pastorate_name,
        year=orm_entry.year,
        name=orm_entry.name,
        auction_amount=_money(orm_entry.auction_amount),
        total_paid=total_paid,
    )


def harvest_festival_payment_to_domain(
    orm_payment: ORMHarvestFestivalPayment,
) -> domain.HarvestFestivalPayment:
    return domain.HarvestFestivalPayment(
        id=orm_payment.id,
        pastorate_name=orm_payment.pastorate_name,
        year=orm_payment.year,
        month=orm_payment.month,
        base_entry_id=orm_payment.base_entry_id,
        name=orm_payment.name,
        date=orm_payment.date,
        service_date=orm_payment.service_date,
        amount=_money(orm_payment.amount),
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        pastorate_name=orm_expense.pastorate_name,
        year=orm_expense.year,
        month=orm_expense.month,
        vno=orm_expense.vno,
        date=orm_expense.date,
        expense_details=orm_expense.expense_details,
        amount=_money(orm_expense.amount),
    )


def opening_balance_to_domain(orm_balance: ORMOpeningBalance) -> domain.OpeningBalance:
    return domain.OpeningBalance(
        pastorate_name=orm_balance.pastorate_name,
        year=orm_balance.year,
        amount=_money(orm_balance.amount),
    )
