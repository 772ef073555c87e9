"""Investment valuation: market value and unrealized gain."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from finledger.domain.balances import LedgerLine, compute_balance, compute_units
from finledger.domain.entities import Account, AccountPrice, InvestmentValuation
from finledger.domain.prices import latest_price

ZERO = Decimal("0")
PERCENT_PLACES = Decimal("0.01")


def value_investment(
    balance: Decimal, units: Decimal, price: Optional[Decimal]
) -> InvestmentValuation:
    """Value a holding from its invested balance, units and latest price.

    Without a price the market value falls back to the invested balance, so
    the holding keeps showing its cost basis. With a price, market value is
    ``units * price`` while units are positive, and zero otherwise.

    Args:
        balance: Signed net cash invested (money in minus money out)
        units: Units held
        price: Latest known price per unit, or None

    Returns:
        InvestmentValuation
    """
    total_invested = max(balance, ZERO)

    if price is None:
        market_value = balance
    elif units > 0:
        market_value = units * price
    else:
        market_value = ZERO

    unrealized_gain = market_value - total_invested
    if total_invested > 0:
        percentage = (unrealized_gain / total_invested * 100).quantize(
            PERCENT_PLACES, rounding=ROUND_HALF_UP
        )
    else:
        percentage = ZERO

    return InvestmentValuation(
        units=units,
        net_invested=balance,
        total_invested=total_invested,
        price=price,
        market_value=market_value,
        unrealized_gain=unrealized_gain,
        unrealized_gain_percentage=percentage,
    )


def value_account(
    account: Account,
    entries: Iterable[LedgerLine],
    prices: Iterable[AccountPrice],
) -> InvestmentValuation:
    """Value one investment account from its entry and price snapshot."""
    entries = list(entries)
    balance = compute_balance(account, entries)
    units = compute_units(account, entries)
    price = latest_price(prices, account_id=account.id)
    return value_investment(balance, units, price)
