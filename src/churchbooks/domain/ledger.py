"""PC Cash Book ledger engine.

Aggregates a pastorate's monthly income and expenses, derives the opening
balance of any month from the April seed, and builds the running-balance
register shown on screen and exported.

Store queries for every month involved in a request are issued concurrently
on a thread pool; balances are then folded strictly in financial-year order.
A failed or timed-out query aborts the whole computation.
"""

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, Sequence

from churchbooks.database.base import Database
from churchbooks.domain.entities import (
    ZERO,
    ChurchOffertory,
    ChurchTotal,
    Expense,
    LedgerLine,
    LedgerReport,
    LedgerSection,
    MonthSummary,
    MonthTotals,
    Receipt,
)
from churchbooks.domain.errors import (
    LedgerInvariantError,
    SourceFetchError,
    fetch_failed,
    running_balance_mismatch,
)
from churchbooks.domain.financial_year import (
    FINANCIAL_YEAR_MONTHS,
    prior_months,
    validate_period,
    normalize_year_label,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Source:
    """A per-month store query feeding one MonthTotals field."""

    field: str
    label: str
    query: str
    amount: Callable[[Any], Decimal]


# Order here is the order failures are reported in
_SOURCES: tuple[_Source, ...] = (
    _Source("offertory", "church offertories", "get_church_offertories", lambda o: o.total_amount),
    _Source("receipts", "receipts", "get_receipts", lambda r: r.amount),
    _Source("sangam", "sangam payments", "get_sangam_payments", lambda p: p.amount),
    _Source(
        "harvest_festival",
        "harvest festival payments",
        "get_harvest_festival_payments",
        lambda p: p.amount,
    ),
    _Source("expenses", "expenses", "get_expenses", lambda e: e.amount),
)


@dataclass(frozen=True)
class _Query:
    label: str
    month: Optional[str]
    call: Callable[[], Any]


def _sum(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


class LedgerService:
    """Service computing PC Cash Book balances and registers."""

    def __init__(
        self,
        db: Database,
        max_workers: int = 4,
        fetch_timeout: Optional[float] = None,
    ):
        """Initialize ledger service.

        Args:
            db: Database instance
            max_workers: Number of threads issuing store queries
            fetch_timeout: Seconds to wait for the store queries of one request;
                None waits indefinitely
        """
        self.db = db
        self.max_workers = max(1, max_workers)
        self.fetch_timeout = fetch_timeout

    # Aggregators
    def month_totals(self, pastorate_name: str, year: str, month: str) -> MonthTotals:
        """Per-source income and expense totals of one month."""
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        results = self._run(self._month_queries(pastorate_name, year, (month,)))
        return self._totals_for_months((month,), results)[0]

    def sum_income(self, pastorate_name: str, year: str, month: str) -> Decimal:
        """Sum of offertory, receipt, sangam and harvest festival income of a month."""
        return self.month_totals(pastorate_name, year, month).income

    def sum_expenses(self, pastorate_name: str, year: str, month: str) -> Decimal:
        """Sum of cash book expenses of a month."""
        return self.month_totals(pastorate_name, year, month).expenses

    # Opening balance
    def resolve_opening_balance(self, pastorate_name: str, year: str, month: str) -> Decimal:
        """Opening balance of a month.

        April returns the user-entered seed unchanged. Any later month is the
        seed plus income minus expenses of every preceding month.

        Raises:
            MissingYearOrMonthError: If the period is malformed
            SourceFetchError: If any store query fails or times out
        """
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        months = prior_months(month)
        queries = [self._opening_balance_query(pastorate_name, year)]
        queries.extend(self._month_queries(pastorate_name, year, months))
        results = self._run(queries)

        april_opening = results[0]
        balance = self._fold(april_opening, self._totals_for_months(months, results[1:]))
        logger.debug(
            "Opening balance for %s %s %s: %s (seed %s, %d prior months)",
            pastorate_name,
            year,
            month,
            balance,
            april_opening,
            len(months),
        )
        return balance

    # Register
    def build_register(self, pastorate_name: str, year: str, month: str) -> LedgerReport:
        """Build the running-balance cash book register of a month.

        Raises:
            MissingYearOrMonthError: If the period is malformed
            SourceFetchError: If any store query fails or times out
            LedgerInvariantError: If the running balance disagrees with the totals
        """
        pastorate_name, year, month = validate_period(pastorate_name, year, month)
        months = prior_months(month)

        queries = [self._opening_balance_query(pastorate_name, year)]
        queries.extend(self._month_queries(pastorate_name, year, months))
        queries.extend(
            [
                _Query("church offertories", month, lambda: self.db.get_church_offertories(pastorate_name, year, month)),
                _Query("receipts", month, lambda: self.db.get_receipts(pastorate_name, year, month)),
                _Query("expenses", month, lambda: self.db.get_expenses(pastorate_name, year, month)),
            ]
        )
        results = self._run(queries)

        prior_count = len(months) * len(_SOURCES)
        opening = self._fold(
            results[0], self._totals_for_months(months, results[1 : 1 + prior_count])
        )
        offertories, receipts, expenses = results[1 + prior_count :]

        report = build_running_register(
            pastorate_name=pastorate_name,
            year=year,
            month=month,
            opening_balance=opening,
            offertories=offertories,
            receipts=receipts,
            expenses=expenses,
        )
        logger.debug(
            "Built register for %s %s %s: %d lines, final balance %s",
            pastorate_name,
            year,
            month,
            len(report.lines),
            report.final_balance,
        )
        return report

    def year_overview(self, pastorate_name: str, year: str) -> list[MonthSummary]:
        """Opening, income, expenses and closing balance of every month of a year."""
        pastorate_name, year, _ = validate_period(pastorate_name, year, "April")
        queries = [self._opening_balance_query(pastorate_name, year)]
        queries.extend(self._month_queries(pastorate_name, year, FINANCIAL_YEAR_MONTHS))
        results = self._run(queries)

        summaries = []
        balance = results[0]
        for totals in self._totals_for_months(FINANCIAL_YEAR_MONTHS, results[1:]):
            summary = MonthSummary(
                month=totals.month,
                opening_balance=balance,
                income=totals.income,
                expenses=totals.expenses,
            )
            summaries.append(summary)
            balance = summary.closing_balance
        return summaries

    # Internals
    def _opening_balance_query(self, pastorate_name: str, year: str) -> _Query:
        def fetch() -> Decimal:
            record = self.db.get_opening_balance(pastorate_name, year)
            return record.amount if record is not None else ZERO

        return _Query("opening balance", "April", fetch)

    def _month_queries(
        self, pastorate_name: str, year: str, months: Sequence[str]
    ) -> list[_Query]:
        queries = []
        for month in months:
            for source in _SOURCES:
                method = getattr(self.db, source.query)
                queries.append(
                    _Query(
                        source.label,
                        month,
                        lambda method=method, month=month: method(pastorate_name, year, month),
                    )
                )
        return queries

    def _totals_for_months(
        self, months: Sequence[str], results: Sequence[list]
    ) -> list[MonthTotals]:
        """Reduce query results, laid out month by month, to MonthTotals."""
        totals = []
        width = len(_SOURCES)
        for index, month in enumerate(months):
            chunk = results[index * width : (index + 1) * width]
            sums = {
                source.field: _sum(source.amount(record) for record in records or [])
                for source, records in zip(_SOURCES, chunk)
            }
            totals.append(MonthTotals(month=month, **sums))
        return totals

    @staticmethod
    def _fold(opening: Decimal, totals: Sequence[MonthTotals]) -> Decimal:
        balance = opening
        for month_totals in totals:
            balance += month_totals.income - month_totals.expenses
        return balance

    def _run(self, queries: list[_Query]) -> list[Any]:
        """Run store queries concurrently and return results in query order.

        Raises:
            SourceFetchError: On the first failing query or when the timeout expires
        """
        if not queries:
            return []

        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(queries)),
            thread_name_prefix="ledger-fetch",
        )
        try:
            futures = [executor.submit(query.call) for query in queries]
            done, not_done = wait(futures, timeout=self.fetch_timeout, return_when=FIRST_EXCEPTION)

            for query, future in zip(queries, futures):
                if future in done and future.exception() is not None:
                    error = future.exception()
                    logger.warning("Ledger query for %s (%s) failed: %s", query.label, query.month, error)
                    raise SourceFetchError(
                        query.label, query.month, fetch_failed(query.label, query.month, error)
                    ) from error

            if not_done:
                query = next(q for q, f in zip(queries, futures) if f in not_done)
                error = TimeoutError(f"no response within {self.fetch_timeout} seconds")
                logger.warning("Ledger query for %s (%s) timed out", query.label, query.month)
                raise SourceFetchError(
                    query.label, query.month, fetch_failed(query.label, query.month, error)
                ) from error

            return [future.result() for future in futures]
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def build_running_register(
    pastorate_name: str,
    year: str,
    month: str,
    opening_balance: Decimal,
    offertories: Sequence[ChurchOffertory],
    receipts: Sequence[Receipt],
    expenses: Sequence[Expense],
) -> LedgerReport:
    """Walk a month's records into running-balance ledger lines.

    Credits come first (offertory services church by church, then receipts),
    then debits (expenses). Records keep their given order within a section,
    except services which are ordered by date within their church.

    Raises:
        LedgerInvariantError: If the last running balance disagrees with
            opening + income - expenses
    """
    lines: list[LedgerLine] = []
    church_totals: list[ChurchTotal] = []
    running = opening_balance

    for offertory in offertories:
        church_total = ZERO
        for service in sorted(offertory.services, key=lambda s: s.date):
            running += service.total
            church_total += service.total
            lines.append(
                LedgerLine(
                    date=service.date,
                    description=f"{offertory.church_name} - service offertory",
                    section=LedgerSection.OFFERTORY,
                    credit_amount=service.total,
                    debit_amount=None,
                    running_balance=running,
                    church_id=offertory.church_id,
                    service=service,
                )
            )
        church_totals.append(ChurchTotal(offertory.church_id, offertory.church_name, church_total))

    for receipt in receipts:
        running += receipt.amount
        lines.append(
            LedgerLine(
                date=receipt.date,
                description=f"Receipt #{receipt.receipt_no} - {receipt.name or 'N/A'}",
                section=LedgerSection.RECEIPT,
                credit_amount=receipt.amount,
                debit_amount=None,
                running_balance=running,
            )
        )

    for expense in expenses:
        running -= expense.amount
        lines.append(
            LedgerLine(
                date=expense.date,
                description=f"VNo: {expense.vno} - {expense.expense_details}",
                section=LedgerSection.EXPENSE,
                credit_amount=None,
                debit_amount=expense.amount,
                running_balance=running,
            )
        )

    church_offertory_total = _sum(
        service.total for offertory in offertories for service in offertory.services
    )
    receipts_total = _sum(r.amount for r in receipts)
    expenses_total = _sum(e.amount for e in expenses)

    report = LedgerReport(
        pastorate_name=pastorate_name,
        year=normalize_year_label(year),
        month=month,
        opening_balance=opening_balance,
        lines=tuple(lines),
        church_offertory_total=church_offertory_total,
        receipts_total=receipts_total,
        expenses_total=expenses_total,
        final_balance=opening_balance + church_offertory_total + receipts_total - expenses_total,
        church_totals=tuple(church_totals),
    )
    check_balance_identity(report)
    return report


def check_balance_identity(report: LedgerReport) -> None:
    """Raise LedgerInvariantError if the register's balances disagree."""
    expected = (
        report.opening_balance
        + report.church_offertory_total
        + report.receipts_total
        - report.expenses_total
    )
    actual = report.lines[-1].running_balance if report.lines else report.opening_balance
    if expected != report.final_balance or actual != report.final_balance:
        message = running_balance_mismatch(expected, actual)
        logger.error(
            "Ledger invariant violated for %s %s %s: %s",
            report.pastorate_name,
            report.year,
            report.month,
            message,
        )
        raise LedgerInvariantError(message)
