"""Output formatting shared by CLI commands."""

from decimal import Decimal
from typing import Optional

UNAVAILABLE = "unavailable"


def format_amount(amount: Optional[Decimal]) -> str:
    """Format an amount with two decimals, or 'unavailable' when unknown."""
    if amount is None:
        return UNAVAILABLE
    return f"{amount:,.2f}"
