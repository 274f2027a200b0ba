"""Rental price computation"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

# Product prices are quoted for this many hours
PRICING_UNIT_HOURS = 4

ALLOWED_DURATIONS = (3, 4, 5, 6, 8)
DEFAULT_DURATION = 4


def calculate_total_price(base_price: Optional[Union[int, float, Decimal]], duration: int) -> int:
    """
    Compute the total rental price for a duration.

    The base price covers a 4-hour rental and scales linearly with the
    duration. Halves round up (750 for 3 hours is 562.5, billed 563).

    Args:
        base_price: Product price for 4 hours, or None when no product is selected
        duration: Rental length in hours

    Returns:
        Whole currency amount
    """
    if base_price is None:
        return 0

    total = Decimal(str(base_price)) * Decimal(duration) / Decimal(PRICING_UNIT_HOURS)
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
