import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional


def to_minor_units(amount: float) -> int:
    """Convert a currency amount to its smallest unit (cents), rounding half up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_price(amount: float, symbol: str = "€") -> str:
    """Format an amount with two decimals and a fixed currency symbol."""
    return f"{symbol}{amount:.2f}"


def coerce_quantity(value: Any) -> Optional[int]:
    """
    Coerce user input to an integer quantity.

    Numbers are floored, numeric strings are parsed. Returns None when the
    value is not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return math.floor(number)
