"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from churchbooks.domain.entities import (
    Church,
    FinancialYear,
    OffertoryCategory,
    ServiceEntry,
    ChurchOffertory,
    Receipt,
    SangamPayment,
    HarvestFestivalBaseEntry,
    HarvestFestivalPayment,
    Expense,
    OpeningBalance,
)


class Database(ABC):
    """Abstract database interface for churchbooks.

    The ledger engine only uses the read queries in the "Ledger sources"
    section, and may call them concurrently from worker threads.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Church operations
    @abstractmethod
    def create_church(self, name: str, pastorate_name: str) -> int:
        """Create a church. Returns church ID."""
        pass

    @abstractmethod
    def get_church(self, church_id: int) -> Optional[Church]:
        """Get church by ID."""
        pass

    @abstractmethod
    def list_churches(self, pastorate_name: Optional[str] = None) -> list[Church]:
        """List churches in display order, optionally filtered by pastorate."""
        pass

    # Financial year operations
    @abstractmethod
    def create_financial_year(self, pastorate_name: str, label: str) -> int:
        """Register a financial year for a pastorate. Returns year ID."""
        pass

    @abstractmethod
    def list_financial_years(self, pastorate_name: str) -> list[FinancialYear]:
        """List financial years of a pastorate, oldest first."""
        pass

    # Offertory category operations
    @abstractmethod
    def create_offertory_category(self, pastorate_name: str, name: str) -> int:
        """Create an offertory category. Returns category ID."""
        pass

    @abstractmethod
    def list_offertory_categories(self, pastorate_name: str) -> list[OffertoryCategory]:
        """List offertory categories of a pastorate."""
        pass

    # Ledger sources
    @abstractmethod
    def get_church_offertories(
        self, pastorate_name: str, year: str, month: str
    ) -> list[ChurchOffertory]:
        """Get church offertories of a month, churches in display order."""
        pass

    @abstractmethod
    def get_receipts(self, pastorate_name: str, year: str, month: str) -> list[Receipt]:
        """Get receipt book entries of a month in entry order."""
        pass

    @abstractmethod
    def get_sangam_payments(
        self, pastorate_name: str, year: str, month: str
    ) -> list[SangamPayment]:
        """Get sangam payments of a month."""
        pass

    @abstractmethod
    def get_harvest_festival_payments(
        self, pastorate_name: str, year: str, month: str
    ) -> list[HarvestFestivalPayment]:
        """Get harvest festival payments attributed to a month."""
        pass

    @abstractmethod
    def get_expenses(self, pastorate_name: str, year: str, month: str) -> list[Expense]:
        """Get cash book expenses of a month in entry order."""
        pass

    @abstractmethod
    def get_opening_balance(self, pastorate_name: str, year: str) -> Optional[OpeningBalance]:
        """Get the April opening balance, or None if never entered."""
        pass

    # Record entry
    @abstractmethod
    def save_church_offertory(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        church_id: int,
        services: list[ServiceEntry],
        total_amount: Decimal,
    ) -> int:
        """Create or replace the offertory of a church for a month. Returns offertory ID."""
        pass

    @abstractmethod
    def create_receipt(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        receipt_no: int,
        date: date,
        name: str,
        amount: Decimal,
        area: Optional[str] = None,
        category: Optional[str] = None,
    ) -> int:
        """Create a receipt. Returns receipt ID."""
        pass

    @abstractmethod
    def get_next_receipt_number(self, pastorate_name: str, year: str) -> int:
        """Next receipt number within a financial year."""
        pass

    @abstractmethod
    def delete_receipt(self, receipt_id: int) -> None:
        """Delete a receipt."""
        pass

    @abstractmethod
    def create_sangam_payment(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        receipt_no: int,
        member_name: str,
        date: date,
        amount: Decimal,
        family_name: Optional[str] = None,
        church_id: Optional[int] = None,
        service_date: Optional[date] = None,
    ) -> int:
        """Create a sangam payment. Returns payment ID."""
        pass

    @abstractmethod
    def get_next_sangam_receipt_number(self, pastorate_name: str, year: str) -> int:
        """Next sangam receipt number within a financial year."""
        pass

    @abstractmethod
    def create_harvest_festival_base_entry(
        self, pastorate_name: str, year: str, name: str, auction_amount: Decimal
    ) -> int:
        """Create a harvest festival pledge. Returns base entry ID."""
        pass

    @abstractmethod
    def get_harvest_festival_base_entry(
        self, base_entry_id: int
    ) -> Optional[HarvestFestivalBaseEntry]:
        """Get harvest festival base entry by ID."""
        pass

    @abstractmethod
    def list_harvest_festival_base_entries(
        self, pastorate_name: str, year: str
    ) -> list[HarvestFestivalBaseEntry]:
        """List harvest festival base entries of a financial year."""
        pass

    @abstractmethod
    def create_harvest_festival_payment(
        self,
        pastorate_name: str,
        year: str,
        month: str,
        base_entry_id: int,
        name: str,
        date: date,
        service_date: date,
        amount: Decimal,
    ) -> int:
        """Create a harvest festival payment. Returns payment ID."""
        pass

    @abstractmethod
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
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense."""
        pass

    @abstractmethod
    def save_opening_balance(self, pastorate_name: str, year: str, amount: Decimal) -> None:
        """Create or update the April opening balance."""
        pass
