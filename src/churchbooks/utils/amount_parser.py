"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45", "Rs. 123.45", "INR 123.45"
    - "-123.45"
    - "1,23,456.78" (Indian grouping) and "123,456.78"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is finer than one paisa
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"(?i)^(-?)\s*(₹|rs\.?|inr|\$)\s*", r"\1", amount_str.strip())

    # Remove grouping commas
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    # Rupee amounts are kept to the paisa
    if amount.as_tuple().exponent < -2 and amount != amount.quantize(Decimal("0.01")):
        raise ValueError(f"Amount '{amount_str}' has more than two decimal places")
    if is_negative:
        amount = -amount
    return amount


def parse_category_amount(pair: str) -> tuple[str, Decimal]:
    """Parse a 'CATEGORY=AMOUNT' option value.

    Raises:
        ValueError: If there is no '=' or the amount is invalid
    """
    if "=" not in pair:
        raise ValueError(f"Expected CATEGORY=AMOUNT, got '{pair}'")
    category, amount = pair.rsplit("=", 1)
    if not category.strip():
        raise ValueError(f"Missing category in '{pair}'")
    return category.strip(), parse_amount(amount)
