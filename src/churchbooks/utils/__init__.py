"""Utility functions for churchbooks."""

from churchbooks.utils.date_parser import parse_date
from churchbooks.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
