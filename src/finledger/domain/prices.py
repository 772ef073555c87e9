"""Latest price lookup for investment accounts."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finledger.domain.entities import AccountPrice


def _recency_key(record: AccountPrice) -> tuple[date, float, int]:
    # Same-day records are ordered by creation time, then id.
    created = record.created_at.timestamp() if record.created_at else float("-inf")
    return (record.price_date, created, record.id)


def latest_price_record(
    prices: Iterable[AccountPrice],
    account_id: Optional[int] = None,
    as_of: Optional[date] = None,
) -> Optional[AccountPrice]:
    """Return the most recent price record dated on or before ``as_of``.

    Args:
        prices: Price records, in any order
        account_id: If given, only records for this account are considered
        as_of: Cut-off date, defaults to today

    Returns:
        The latest record, or None when nothing qualifies
    """
    cutoff = as_of or date.today()
    candidates = [
        record
        for record in prices
        if record.price_date <= cutoff
        and (account_id is None or record.account_id == account_id)
    ]
    if not candidates:
        return None
    return max(candidates, key=_recency_key)


def latest_price(
    prices: Iterable[AccountPrice],
    account_id: Optional[int] = None,
    as_of: Optional[date] = None,
) -> Optional[Decimal]:
    """Return the latest price, or None when no price is available."""
    record = latest_price_record(prices, account_id=account_id, as_of=as_of)
    return record.price if record is not None else None
