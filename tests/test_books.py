"""Tests for entering cash book records."""

from datetime import date
from decimal import Decimal

import pytest

from churchbooks.domain.books import build_service_entry
from churchbooks.domain.entities import ServiceEntry
from churchbooks.domain.errors import (
    ConflictError,
    MissingYearOrMonthError,
    NotFoundError,
    ValidationError,
)
from churchbooks.utils.church_resolver import resolve_church

from conftest import PASTORATE, YEAR


class TestServiceEntry:
    def test_total_is_sum_of_categories(self):
        service = build_service_entry(date(2024, 4, 7), {1: Decimal("100"), 2: Decimal("25.50")})
        assert service.total == Decimal("125.50")

    def test_zero_amounts_are_dropped(self):
        service = build_service_entry(date(2024, 4, 7), {1: Decimal("100"), 2: Decimal("0")})
        assert service.category_amounts == {1: Decimal("100")}

    def test_empty_service_rejected(self):
        with pytest.raises(ValidationError):
            build_service_entry(date(2024, 4, 7), {1: Decimal("0")})

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            build_service_entry(date(2024, 4, 7), {1: Decimal("100"), 2: Decimal("-5")})

    def test_fraction_of_paisa_rejected(self):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            build_service_entry(date(2024, 4, 7), {1: Decimal("0.125"), 2: Decimal("0.125")})

    def test_trailing_zeros_allowed(self):
        service = build_service_entry(date(2024, 4, 7), {1: Decimal("10.500")})
        assert service.total == Decimal("10.50")


class TestChurchOffertory:
    """Tests for recording church offertories."""

    def test_save_and_list(self, book_service, sample_churches, sample_categories):
        church_id = sample_churches["St. Peter's"]
        services = [
            build_service_entry(date(2024, 4, 14), {sample_categories["Sunday Offering"]: Decimal("200")}),
            build_service_entry(
                date(2024, 4, 7),
                {
                    sample_categories["Sunday Offering"]: Decimal("150"),
                    sample_categories["Thanks Offering"]: Decimal("50"),
                },
            ),
        ]
        book_service.save_church_offertory(PASTORATE, YEAR, "april", church_id, services)

        (offertory,) = book_service.list_church_offertories(PASTORATE, YEAR, "April")
        assert offertory.church_name == "St. Peter's"
        assert offertory.month == "April"
        assert offertory.total_amount == Decimal("400")
        assert [s.date for s in offertory.services] == [date(2024, 4, 7), date(2024, 4, 14)]
        assert offertory.services[0].category_amounts == {
            sample_categories["Sunday Offering"]: Decimal("150"),
            sample_categories["Thanks Offering"]: Decimal("50"),
        }

    def test_save_again_replaces(self, book_service, sample_churches, sample_categories):
        church_id = sample_churches["St. Peter's"]
        category = sample_categories["Sunday Offering"]
        book_service.save_church_offertory(
            PASTORATE, YEAR, "April", church_id,
            [build_service_entry(date(2024, 4, 7), {category: Decimal("150")})],
        )
        book_service.save_church_offertory(
            PASTORATE, YEAR, "April", church_id,
            [build_service_entry(date(2024, 4, 21), {category: Decimal("90")})],
        )

        (offertory,) = book_service.list_church_offertories(PASTORATE, YEAR, "April")
        assert offertory.total_amount == Decimal("90")
        assert len(offertory.services) == 1

    def test_add_service_merges(self, book_service, sample_churches, record_service):
        church_id = sample_churches["St. Paul's"]
        record_service(church_id, "April", date(2024, 4, 7), "100")
        record_service(church_id, "April", date(2024, 4, 14), "60")
        record_service(church_id, "April", date(2024, 4, 7), "110", category="Building Fund")

        (offertory,) = book_service.list_church_offertories(PASTORATE, YEAR, "April")
        assert [s.total for s in offertory.services] == [Decimal("110"), Decimal("60")]
        assert offertory.total_amount == Decimal("170")

    def test_inconsistent_service_total(self, book_service, sample_churches, sample_categories):
        service = ServiceEntry(
            date=date(2024, 4, 7),
            category_amounts={sample_categories["Sunday Offering"]: Decimal("100")},
            total=Decimal("120"),
        )
        with pytest.raises(ValidationError):
            book_service.save_church_offertory(
                PASTORATE, YEAR, "April", sample_churches["St. Peter's"], [service]
            )

    def test_fraction_of_paisa_in_saved_service(self, book_service, sample_churches, sample_categories):
        service = ServiceEntry(
            date=date(2024, 4, 7),
            category_amounts={
                sample_categories["Sunday Offering"]: Decimal("0.125"),
                sample_categories["Thanks Offering"]: Decimal("0.125"),
            },
            total=Decimal("0.25"),
        )
        with pytest.raises(ValidationError, match="more than two decimal places"):
            book_service.save_church_offertory(
                PASTORATE, YEAR, "April", sample_churches["St. Peter's"], [service]
            )
        assert book_service.list_church_offertories(PASTORATE, YEAR, "April") == []

    def test_no_services(self, book_service, sample_churches):
        with pytest.raises(ValidationError):
            book_service.save_church_offertory(PASTORATE, YEAR, "April", sample_churches["St. Peter's"], [])

    def test_unknown_church(self, book_service, sample_categories):
        service = build_service_entry(date(2024, 4, 7), {sample_categories["Sunday Offering"]: Decimal("1")})
        with pytest.raises(NotFoundError):
            book_service.save_church_offertory(PASTORATE, YEAR, "April", 999, [service])

    def test_church_of_another_pastorate(self, book_service, church_service, sample_categories):
        other = church_service.create_church("CSI Christ Church", "Other Pastorate")
        service = build_service_entry(date(2024, 4, 7), {sample_categories["Sunday Offering"]: Decimal("1")})
        with pytest.raises(ValidationError):
            book_service.save_church_offertory(PASTORATE, YEAR, "April", other, [service])


class TestReceiptsAndExpenses:
    def test_receipts_are_numbered_per_year(self, book_service):
        book_service.create_receipt(PASTORATE, YEAR, "April", date(2024, 4, 2), "A", Decimal("10"))
        book_service.create_receipt(PASTORATE, YEAR, "May", date(2024, 5, 2), "B", Decimal("20"))
        book_service.create_receipt(PASTORATE, "2025-2026", "April", date(2025, 4, 2), "C", Decimal("5"))

        (receipt,) = book_service.list_receipts(PASTORATE, YEAR, "May")
        assert receipt.receipt_no == 2
        assert receipt.amount == Decimal("20")
        (next_year,) = book_service.list_receipts(PASTORATE, "2025-2026", "April")
        assert next_year.receipt_no == 1

    def test_receipt_amount_must_be_positive(self, book_service):
        with pytest.raises(ValidationError):
            book_service.create_receipt(PASTORATE, YEAR, "April", date(2024, 4, 2), "A", Decimal("0"))

    def test_delete_receipt(self, book_service):
        receipt_id = book_service.create_receipt(
            PASTORATE, YEAR, "April", date(2024, 4, 2), "A", Decimal("10")
        )
        book_service.delete_receipt(receipt_id)
        assert book_service.list_receipts(PASTORATE, YEAR, "April") == []
        with pytest.raises(NotFoundError):
            book_service.delete_receipt(receipt_id)

    def test_expense(self, book_service):
        book_service.create_expense(
            PASTORATE, YEAR, "June", "14", date(2024, 6, 3), "Choir books", Decimal("450.75")
        )
        (expense,) = book_service.list_expenses(PASTORATE, YEAR, "June")
        assert expense.vno == "14"
        assert expense.amount == Decimal("450.75")

    def test_negative_expense_rejected(self, book_service):
        with pytest.raises(ValidationError):
            book_service.create_expense(
                PASTORATE, YEAR, "June", "14", date(2024, 6, 3), "Refund", Decimal("-10")
            )

    def test_expense_fraction_of_paisa_rejected(self, book_service):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            book_service.create_expense(
                PASTORATE, YEAR, "June", "14", date(2024, 6, 3), "Choir books", Decimal("100.005")
            )
        assert book_service.list_expenses(PASTORATE, YEAR, "June") == []

    def test_bad_period_rejected(self, book_service):
        with pytest.raises(MissingYearOrMonthError):
            book_service.create_expense(
                PASTORATE, "2024-25", "June", "14", date(2024, 6, 3), "Choir books", Decimal("1")
            )

    def test_sangam_payment_unknown_church(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.create_sangam_payment(
                PASTORATE, YEAR, "May", "D. Joseph", date(2024, 5, 19), Decimal("75"), church_id=42
            )


class TestHarvestFestival:
    """Tests for harvest festival pledges and payments."""

    @pytest.fixture
    def entry_id(self, book_service):
        return book_service.create_harvest_festival_base_entry(PASTORATE, YEAR, "Rani", Decimal("1000"))

    def test_payment_reduces_balance(self, book_service, entry_id):
        book_service.create_harvest_festival_payment(
            entry_id, date(2024, 9, 1), date(2024, 9, 1), Decimal("300")
        )
        (entry,) = book_service.list_harvest_festival_base_entries(PASTORATE, YEAR)
        assert entry.total_paid == Decimal("300")
        assert entry.balance == Decimal("700")

    def test_payment_cannot_exceed_balance(self, book_service, entry_id):
        book_service.create_harvest_festival_payment(
            entry_id, date(2024, 9, 1), date(2024, 9, 1), Decimal("800")
        )
        with pytest.raises(ValidationError, match="cannot exceed balance"):
            book_service.create_harvest_festival_payment(
                entry_id, date(2024, 9, 8), date(2024, 9, 8), Decimal("200.01")
            )
        book_service.create_harvest_festival_payment(
            entry_id, date(2024, 9, 8), date(2024, 9, 8), Decimal("200")
        )

    def test_payment_month_follows_service_date(self, book_service, temp_db, entry_id):
        book_service.create_harvest_festival_payment(
            entry_id, date(2024, 8, 30), date(2024, 9, 1), Decimal("100")
        )
        assert temp_db.get_harvest_festival_payments(PASTORATE, YEAR, "August") == []
        (payment,) = temp_db.get_harvest_festival_payments(PASTORATE, YEAR, "September")
        assert payment.name == "Rani"
        assert payment.date == date(2024, 8, 30)

    def test_service_date_outside_year(self, book_service, entry_id):
        with pytest.raises(ValidationError):
            book_service.create_harvest_festival_payment(
                entry_id, date(2025, 4, 6), date(2025, 4, 6), Decimal("100")
            )

    def test_unknown_entry(self, book_service):
        with pytest.raises(NotFoundError):
            book_service.create_harvest_festival_payment(
                99, date(2024, 9, 1), date(2024, 9, 1), Decimal("100")
            )

    def test_initial_payment(self, book_service, temp_db):
        entry_id = book_service.create_harvest_festival_base_entry(
            PASTORATE, YEAR, "Mary", Decimal("1000"),
            initial_payment=Decimal("250"), payment_date=date(2024, 8, 30), service_date=date(2024, 9, 1),
        )
        (entry,) = book_service.list_harvest_festival_base_entries(PASTORATE, YEAR)
        assert entry.id == entry_id
        assert entry.total_paid == Decimal("250")
        assert entry.balance == Decimal("750")
        (payment,) = temp_db.get_harvest_festival_payments(PASTORATE, YEAR, "September")
        assert payment.base_entry_id == entry_id
        assert payment.date == date(2024, 8, 30)

    def test_initial_payment_counts_as_income(self, book_service, ledger_service):
        book_service.create_harvest_festival_base_entry(
            PASTORATE, YEAR, "Mary", Decimal("1000"),
            initial_payment=Decimal("250"), payment_date=date(2024, 9, 1), service_date=date(2024, 9, 1),
        )
        assert ledger_service.sum_income(PASTORATE, YEAR, "September") == Decimal("250")
        assert ledger_service.resolve_opening_balance(PASTORATE, YEAR, "October") == Decimal("250")

    @pytest.mark.parametrize(
        "amount,service_date",
        [
            (Decimal("1000.01"), date(2024, 9, 1)),
            (Decimal("0"), date(2024, 9, 1)),
            (Decimal("10.001"), date(2024, 9, 1)),
            (Decimal("100"), date(2025, 4, 6)),
        ],
    )
    def test_invalid_initial_payment_creates_nothing(self, book_service, amount, service_date):
        with pytest.raises(ValidationError):
            book_service.create_harvest_festival_base_entry(
                PASTORATE, YEAR, "Mary", Decimal("1000"),
                initial_payment=amount, payment_date=service_date, service_date=service_date,
            )
        assert book_service.list_harvest_festival_base_entries(PASTORATE, YEAR) == []


class TestOpeningBalanceEntry:
    def test_save_in_april(self, book_service):
        book_service.save_opening_balance(PASTORATE, YEAR, Decimal("5000"))
        book_service.save_opening_balance(PASTORATE, YEAR, Decimal("5200"), active_month="april")
        assert book_service.get_opening_balance(PASTORATE, YEAR).amount == Decimal("5200")

    def test_locked_outside_april(self, book_service):
        with pytest.raises(ValidationError, match="only be entered in April"):
            book_service.save_opening_balance(PASTORATE, YEAR, Decimal("5000"), active_month="May")
        assert book_service.get_opening_balance(PASTORATE, YEAR) is None

    def test_fraction_of_paisa_rejected(self, book_service):
        with pytest.raises(ValidationError, match="more than two decimal places"):
            book_service.save_opening_balance(PASTORATE, YEAR, Decimal("1.001"))


class TestChurchesCategoriesYears:
    def test_create_and_list_churches(self, church_service, sample_churches):
        churches = church_service.list_churches(PASTORATE)
        assert [c.name for c in churches] == ["St. Peter's", "St. Paul's"]
        assert church_service.list_pastorates() == [PASTORATE]

    def test_duplicate_church(self, church_service, sample_churches):
        with pytest.raises(ConflictError):
            church_service.create_church("St. Peter's", PASTORATE)

    def test_same_name_in_other_pastorate(self, church_service, sample_churches):
        church_service.create_church("St. Peter's", "Other Pastorate")
        assert len(church_service.list_churches()) == 3

    def test_blank_church_name(self, church_service):
        with pytest.raises(ValidationError):
            church_service.create_church("  ", PASTORATE)

    def test_resolve_church(self, church_service, sample_churches):
        peter = sample_churches["St. Peter's"]
        assert resolve_church(church_service, "st. peter's", PASTORATE) == peter
        assert resolve_church(church_service, str(peter)) == peter
        with pytest.raises(NotFoundError):
            resolve_church(church_service, "St. John's", PASTORATE)

    def test_require_category(self, category_service, sample_categories):
        category = category_service.require_category_by_name(PASTORATE, "thanks offering")
        assert category.id == sample_categories["Thanks Offering"]
        assert category_service.require_category_by_name(PASTORATE, str(category.id)) == category
        with pytest.raises(ValidationError):
            category_service.require_category_by_name(PASTORATE, "Tithe")

    def test_duplicate_category(self, category_service, sample_categories):
        with pytest.raises(ConflictError):
            category_service.create_category(PASTORATE, "Sunday Offering")

    def test_add_year(self, year_service):
        year_service.add_year(PASTORATE, " 2024-2025")
        year_service.add_year(PASTORATE, "2023-2024")
        assert [y.label for y in year_service.list_years(PASTORATE)] == ["2023-2024", "2024-2025"]
        with pytest.raises(ConflictError):
            year_service.add_year(PASTORATE, "2024-2025")

    def test_add_year_rejects_malformed(self, year_service):
        with pytest.raises(MissingYearOrMonthError):
            year_service.add_year(PASTORATE, "2024-2027")
