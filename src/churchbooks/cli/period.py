"""CLI helpers for pastorate, financial year and month selection."""

from datetime import date
from typing import Callable

import click

from churchbooks.domain.errors import MissingYearOrMonthError
from churchbooks.domain.financial_year import FINANCIAL_YEAR_MONTHS, month_date_range, validate_period


def pastorate_year_options(func: Callable) -> Callable:
    """Add --pastorate and --year options to a command."""
    func = click.option(
        "--year",
        required=True,
        envvar="CHURCHBOOKS_YEAR",
        help="Financial year (e.g., 2024-2025)",
    )(func)
    func = click.option(
        "--pastorate",
        required=True,
        envvar="CHURCHBOOKS_PASTORATE",
        help="Pastorate name",
    )(func)
    return func


def period_options(func: Callable) -> Callable:
    """Add --pastorate, --year and --month options to a command."""
    func = click.option(
        "--month",
        required=True,
        type=click.Choice(FINANCIAL_YEAR_MONTHS, case_sensitive=False),
        help="Month of the financial year",
    )(func)
    return pastorate_year_options(func)


def resolve_period_or_exit(
    ctx: click.Context, pastorate: str, year: str, month: str = "April"
) -> tuple[str, str, str]:
    """Validate the selected period, or exit with a CLI error."""
    try:
        return validate_period(pastorate, year, month)
    except MissingYearOrMonthError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def warn_if_outside_month(year: str, month: str, day: date) -> None:
    """Warn when an entry date falls outside the month it is booked under."""
    first, last = month_date_range(year, month)
    if not first <= day <= last:
        click.echo(f"Warning: {day} is outside {month} {year} ({first} to {last})", err=True)
