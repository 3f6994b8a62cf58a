"""Financial year domain service."""

from datetime import date
from typing import Optional

from churchbooks.database.base import Database
from churchbooks.domain.entities import FinancialYear
from churchbooks.domain.errors import ValidationError, missing_pastorate
from churchbooks.domain.financial_year import financial_year_for_date, normalize_year_label


class YearService:
    """Service for the financial years registered for a pastorate."""

    def __init__(self, db: Database):
        """Initialize year service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_year(self, pastorate_name: str, label: Optional[str] = None) -> int:
        """Register a financial year.

        Args:
            pastorate_name: Pastorate name
            label: 'YYYY-YYYY+1' label; defaults to the financial year of today

        Returns:
            Financial year ID

        Raises:
            MissingYearOrMonthError: If label is malformed
            ConflictError: If the year is already registered
        """
        if not (pastorate_name or "").strip():
            raise ValidationError(missing_pastorate())
        if label is None:
            label = financial_year_for_date(date.today())
        return self.db.create_financial_year(pastorate_name.strip(), normalize_year_label(label))

    def list_years(self, pastorate_name: str) -> list[FinancialYear]:
        return self.db.list_financial_years(pastorate_name)
