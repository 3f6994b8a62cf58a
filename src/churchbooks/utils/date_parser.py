"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU

_WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-04-07"
    - Register dates, read day first: "07/04/2024", "7-4-2024"
    - Written dates: "April 7, 2024"
    - Relative dates: "today", "yesterday", "last sunday", "this sunday",
      "next sunday", "last month", "this month", "next month"

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    fixed = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "last month": today.replace(day=1) - relativedelta(months=1),
        "this month": today.replace(day=1),
        "next month": today.replace(day=1) + relativedelta(months=1),
        "this sunday": next_sunday(today),
    }
    if date_str in fixed:
        return fixed[date_str]

    direction, _, weekday = date_str.partition(" ")
    if weekday in _WEEKDAYS:
        if direction == "last":
            return today + relativedelta(days=-1, weekday=_WEEKDAYS[weekday](-1))
        if direction == "next":
            return today + relativedelta(days=+1, weekday=_WEEKDAYS[weekday](+1))

    # ISO dates are unambiguous; everything else is day first
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def next_sunday(day: date) -> date:
    """The Sunday on or after day; services are held on Sundays."""
    return day + relativedelta(weekday=SU(+1))
