"""Shared pytest fixtures for churchbooks tests."""

import tempfile
import os
import time
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from churchbooks.database.factories import create_sqlite_database
from churchbooks.domain.books import BookService, build_service_entry
from churchbooks.domain.category import CategoryService
from churchbooks.domain.church import ChurchService
from churchbooks.domain.ledger import LedgerService
from churchbooks.domain.year import YearService

PASTORATE = "Tenkasi North Zion Nagar Pastorate"
YEAR = "2024-2025"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def church_service(temp_db):
    """Create a ChurchService with a temporary database."""
    return ChurchService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def year_service(temp_db):
    """Create a YearService with a temporary database."""
    return YearService(temp_db)


@pytest.fixture
def book_service(temp_db):
    """Create a BookService with a temporary database."""
    return BookService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def sample_churches(church_service):
    """Create two churches in display order and return their IDs by name."""
    return {
        "St. Peter's": church_service.create_church("St. Peter's", PASTORATE),
        "St. Paul's": church_service.create_church("St. Paul's", PASTORATE),
    }


@pytest.fixture
def sample_categories(category_service):
    """Create offertory categories and return their IDs by name."""
    return {
        name: category_service.create_category(PASTORATE, name)
        for name in ("Sunday Offering", "Thanks Offering", "Building Fund")
    }


@pytest.fixture
def record_service(book_service, sample_categories):
    """Return a helper that records one service collection for a church."""

    def record(church_id, month, service_date, amount, category="Sunday Offering"):
        service = build_service_entry(
            service_date, {sample_categories[category]: Decimal(str(amount))}
        )
        return book_service.add_offertory_service(PASTORATE, YEAR, month, church_id, service)

    return record


@pytest.fixture
def april_scenario(book_service, sample_churches, record_service):
    """April 2024: opening 1000, offertory 500, receipts 200, expenses 300."""
    book_service.save_opening_balance(PASTORATE, YEAR, Decimal("1000"))
    record_service(sample_churches["St. Peter's"], "April", date(2024, 4, 7), "500")
    book_service.create_receipt(
        PASTORATE, YEAR, "April", date(2024, 4, 12), "J. Samuel", Decimal("200")
    )
    book_service.create_expense(
        PASTORATE, YEAR, "April", "1", date(2024, 4, 20), "Electricity", Decimal("300")
    )


class StubbedDatabase:
    """Wraps a database, replacing selected query methods."""

    def __init__(self, db, **overrides):
        self._db = db
        self._overrides = overrides

    def __getattr__(self, name):
        if name in self._overrides:
            return self._overrides[name]
        return getattr(self._db, name)


@pytest.fixture
def failing_db(temp_db):
    """Return a factory for databases whose given query raises."""

    def make(query_name, error=None):
        def fail(*args, **kwargs):
            raise error or ConnectionError("database file is locked")

        return StubbedDatabase(temp_db, **{query_name: fail})

    return make


@pytest.fixture
def slow_db(temp_db):
    """Return a factory for databases whose given query stalls."""

    def make(query_name, delay=1.0):
        original = getattr(temp_db, query_name)

        def stall(*args, **kwargs):
            time.sleep(delay)
            return original(*args, **kwargs)

        return StubbedDatabase(temp_db, **{query_name: stall})

    return make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def tmp_output(tmp_path) -> Path:
    return tmp_path
