"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

_AMOUNT_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Only plain decimal literals are accepted:
    - "123.45"
    - "-123.45"
    - "1E+3"

    Currency symbols, digit grouping ("1,000" or "1_000") and NaN/Infinity
    are rejected, since amounts in transaction files are exact values.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()
    if not _AMOUNT_RE.fullmatch(amount_str):
        raise ValueError(f"Could not parse amount '{amount_str}'")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def format_amount(amount: Decimal) -> str:
    """Format an amount with two decimals and thousands separators."""
    return f"{amount:,.2f}"
