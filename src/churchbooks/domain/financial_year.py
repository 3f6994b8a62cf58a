"""Financial year calendar.

A financial year runs April to March and is labelled ``"YYYY-YYYY+1"``.
April..December fall in the first calendar year of the label,
January..March in the second.
"""

import re
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from churchbooks.domain.errors import (
    MissingYearOrMonthError,
    malformed_year,
    missing_pastorate,
    unknown_month,
)


FINANCIAL_YEAR_MONTHS: tuple[str, ...] = (
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
    "January",
    "February",
    "March",
)

_CALENDAR_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_YEAR_LABEL = re.compile(r"^(\d{4})-(\d{4})$")


def normalize_month(month: str | None) -> str:
    """Return the canonical month name.

    Raises:
        MissingYearOrMonthError: If month is absent or not a month name
    """
    if not month or not isinstance(month, str):
        raise MissingYearOrMonthError(unknown_month(month))
    name = month.strip().title()
    if name not in FINANCIAL_YEAR_MONTHS:
        raise MissingYearOrMonthError(unknown_month(month))
    return name


def month_index(month: str) -> int:
    """Position of month in the financial year (April=0 .. March=11)."""
    return FINANCIAL_YEAR_MONTHS.index(normalize_month(month))


def prior_months(month: str) -> tuple[str, ...]:
    """Months preceding month in the financial year; empty for April."""
    return FINANCIAL_YEAR_MONTHS[: month_index(month)]


def parse_year_label(label: str | None) -> tuple[int, int]:
    """Parse 'YYYY-YYYY+1' into its two calendar years.

    Raises:
        MissingYearOrMonthError: If label is absent or malformed
    """
    if not label or not isinstance(label, str):
        raise MissingYearOrMonthError(malformed_year(label))
    match = _YEAR_LABEL.match(label.strip())
    if match is None:
        raise MissingYearOrMonthError(malformed_year(label))
    start, end = int(match.group(1)), int(match.group(2))
    if end != start + 1:
        raise MissingYearOrMonthError(malformed_year(label))
    return start, end


def normalize_year_label(label: str | None) -> str:
    start, end = parse_year_label(label)
    return f"{start}-{end}"


def year_label_for(start_year: int) -> str:
    return f"{start_year}-{start_year + 1}"


def validate_period(pastorate_name: str | None, year: str | None, month: str | None) -> tuple[str, str, str]:
    """Validate a (pastorate, year, month) triple and return it normalised.

    Raises:
        MissingYearOrMonthError: If any part is absent or malformed
    """
    if not pastorate_name or not pastorate_name.strip():
        raise MissingYearOrMonthError(missing_pastorate())
    return pastorate_name.strip(), normalize_year_label(year), normalize_month(month)


def month_date_range(year: str, month: str) -> tuple[date, date]:
    """First and last calendar day of month within financial year."""
    start_year, end_year = parse_year_label(year)
    name = normalize_month(month)
    calendar_year = start_year if month_index(name) < 9 else end_year
    first = date(calendar_year, _CALENDAR_MONTHS.index(name) + 1, 1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def month_name_for_date(day: date) -> str:
    """Calendar month name of a date (e.g. 'September')."""
    return _CALENDAR_MONTHS[day.month - 1]


def financial_year_for_date(day: date) -> str:
    """Label of the financial year containing day."""
    if day.month >= 4:
        return year_label_for(day.year)
    return year_label_for(day.year - 1)
