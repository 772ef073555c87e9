"""Price domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from finledger.database.base import Database
from finledger.domain.account import AccountService
from finledger.domain.entities import AccountPrice
from finledger.domain.errors import ValidationError
from finledger.domain.prices import latest_price_record

logger = logging.getLogger(__name__)


class PriceService:
    """Service for recording mark-to-market prices of investment accounts."""

    def __init__(self, db: Database, owner_id: Optional[str] = None):
        self.db = db
        self.owner_id = owner_id
        self.accounts = AccountService(db, owner_id=owner_id)

    def record_price(
        self,
        account_id: int,
        price: Decimal,
        price_date: date,
        notes: Optional[str] = None,
    ) -> int:
        """Record the price of one unit on a date.

        A second price for the same account and date replaces the first.

        Args:
            account_id: Investment account ID
            price: Price per unit
            price_date: Observation date
            notes: Optional notes

        Returns:
            Price record ID

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If the price is negative
        """
        self.accounts.require_account(account_id)
        if price < 0:
            raise ValidationError("Price cannot be negative")

        existing = self.db.get_account_price_by_date(account_id, price_date)
        if existing is not None:
            self.db.update_account_price(existing.id, price, notes=notes)
            logger.info(
                "Updated price of account %d on %s: %s -> %s",
                account_id,
                price_date,
                existing.price,
                price,
            )
            return existing.id

        price_id = self.db.create_account_price(
            account_id=account_id,
            price=price,
            price_date=price_date,
            owner_id=self.owner_id,
            notes=notes,
        )
        logger.info("Recorded price of account %d on %s: %s", account_id, price_date, price)
        return price_id

    def list_prices(self, account_id: int) -> list[AccountPrice]:
        """List an account's prices, newest first."""
        self.accounts.require_account(account_id)
        return self.db.list_account_prices(account_ids=[account_id])

    def latest_price(
        self, account_id: int, as_of: Optional[date] = None
    ) -> Optional[AccountPrice]:
        """Return the most recent price record on or before ``as_of`` (default today)."""
        return latest_price_record(self.list_prices(account_id), account_id=account_id, as_of=as_of)
