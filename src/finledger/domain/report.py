"""Report domain service.

Every figure is recomputed from the entry log on request; nothing here
reads the cached account balance column.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from finledger.database.base import Database
from finledger.domain.account import AccountService
from finledger.domain.balance_sheet import (
    CURRENT_ASSET_MARKERS,
    build_balance_sheet,
    build_income_statement,
)
from finledger.domain.balances import compute_balances, compute_units, is_investment_account
from finledger.domain.entities import (
    Account,
    AccountCategory,
    AccountPrice,
    BalanceSheetReport,
    DashboardStats,
    EntrySide,
    IncomeStatement,
    InvestmentValuation,
    TransactionEntry,
)
from finledger.domain.errors import ValidationError
from finledger.domain.prices import latest_price
from finledger.domain.valuation import value_account, value_investment

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _is_liquid(account: Account) -> bool:
    names = [account.name.lower()]
    if account.account_type is not None:
        names.append(account.account_type.name.lower())
    return any(marker in name for name in names for marker in CURRENT_ASSET_MARKERS)


def _type_name(account: Account) -> str:
    return account.account_type.name.lower() if account.account_type else ""


class ReportService:
    """Service producing balances, valuations and financial statements."""

    def __init__(self, db: Database, owner_id: Optional[str] = None):
        """Initialize report service.

        Args:
            db: Database instance
            owner_id: Owner whose accounts (plus shared ones) are reported
        """
        self.db = db
        self.owner_id = owner_id
        self.accounts = AccountService(db, owner_id=owner_id)

    def _snapshot(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        include_inactive: bool = False,
    ) -> tuple[list[Account], list[TransactionEntry]]:
        accounts = self.accounts.list_accounts(include_inactive=include_inactive)
        entries = self.db.list_entries(
            account_ids=[acc.id for acc in accounts],
            start_date=start_date,
            end_date=end_date,
        )
        return accounts, entries

    def _balances(
        self, accounts: list[Account], entries: list[TransactionEntry]
    ) -> tuple[dict[int, Decimal], list[Account]]:
        balances, unavailable = compute_balances(accounts, entries)
        for acc in unavailable:
            logger.warning(
                "Balance unavailable for account %d '%s': account type not resolved",
                acc.id,
                acc.name,
            )
        return balances, unavailable

    def _market_values(
        self,
        accounts: Iterable[Account],
        entries: list[TransactionEntry],
        balances: dict[int, Decimal],
        as_of: Optional[date] = None,
    ) -> dict[int, Decimal]:
        investments = [
            acc for acc in accounts if is_investment_account(acc) and acc.id in balances
        ]
        if not investments:
            return {}

        # One read for every investment account, resolved per account in memory.
        prices: list[AccountPrice] = self.db.list_account_prices(
            account_ids=[acc.id for acc in investments]
        )
        market_values = {}
        for acc in investments:
            units = compute_units(acc, entries)
            price = latest_price(prices, account_id=acc.id, as_of=as_of)
            if price is None:
                logger.debug("No price for account %d, valuing at balance", acc.id)
            market_values[acc.id] = value_investment(balances[acc.id], units, price).market_value
        return market_values

    def account_balances(
        self, as_of: Optional[date] = None, include_inactive: bool = False
    ) -> tuple[dict[int, Decimal], list[Account]]:
        """Compute the balance of every visible account.

        Args:
            as_of: Only entries dated on or before this date count
            include_inactive: Include deactivated accounts

        Returns:
            Tuple of (balance per account id, accounts whose balance is unavailable)
        """
        accounts, entries = self._snapshot(end_date=as_of, include_inactive=include_inactive)
        return self._balances(accounts, entries)

    def investment_summary(
        self, account_id: int, as_of: Optional[date] = None
    ) -> InvestmentValuation:
        """Value one investment account.

        Raises:
            NotFoundError: If the account doesn't exist
            DataIntegrityError: If the account type cannot be resolved
        """
        account = self.accounts.require_account(account_id)
        entries = self.db.list_entries(account_ids=[account_id], end_date=as_of)
        prices = [
            record
            for record in self.db.list_account_prices(account_ids=[account_id])
            if as_of is None or record.price_date <= as_of
        ]
        return value_account(account, entries, prices)

    def balance_sheet(self, as_of: Optional[date] = None) -> BalanceSheetReport:
        """Build the balance sheet as of a date (default: today).

        Entries dated after ``as_of`` are left out, and prices are the latest
        on or before it.
        """
        if as_of is None:
            as_of = date.today()
        accounts, entries = self._snapshot(end_date=as_of)
        balances, _ = self._balances(accounts, entries)
        market_values = self._market_values(accounts, entries, balances, as_of=as_of)
        report = build_balance_sheet(accounts, balances, market_values)
        if not report.is_balanced:
            logger.warning(
                "Balance sheet does not balance: assets %s, liabilities %s, equity %s, "
                "unrealized gains %s, net income %s",
                report.total_assets,
                report.total_liabilities,
                report.total_equity,
                report.unrealized_gains,
                report.net_income,
            )
        return report

    def income_statement(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> IncomeStatement:
        """Build the income statement for a period.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must not be after end date")
        accounts, entries = self._snapshot(start_date=start_date, end_date=end_date)
        balances, _ = self._balances(accounts, entries)
        return build_income_statement(accounts, balances)

    def dashboard_stats(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> DashboardStats:
        """Compute headline dashboard figures.

        Balances, assets and investments are as of ``end_date``; income and
        expenses only count entries inside the period.
        """
        accounts, entries = self._snapshot(end_date=end_date)
        balances, _ = self._balances(accounts, entries)
        market_values = self._market_values(accounts, entries, balances, as_of=end_date)
        sheet = build_balance_sheet(accounts, balances, market_values)

        total_balance = sum(
            (
                balances[acc.id]
                for acc in accounts
                if acc.category is AccountCategory.ASSET and acc.id in balances and _is_liquid(acc)
            ),
            ZERO,
        )

        by_id = {acc.id: acc for acc in accounts}
        period_entries = entries
        if start_date is not None:
            period_entries = self.db.list_entries(
                account_ids=list(by_id), start_date=start_date, end_date=end_date
            )
        income = ZERO
        expenses = ZERO
        for entry in period_entries:
            account = by_id.get(entry.account_id)
            if account is None:
                continue
            if account.category is AccountCategory.INCOME and entry.entry_side is EntrySide.CREDIT:
                income += entry.amount
            elif account.category is AccountCategory.EXPENSE and entry.entry_side is EntrySide.DEBIT:
                expenses += entry.amount

        stocks = ZERO
        mutual_funds = ZERO
        for account_id, value in market_values.items():
            type_name = _type_name(by_id[account_id])
            if "stock" in type_name:
                stocks += value
            elif "mutual fund" in type_name:
                mutual_funds += value

        return DashboardStats(
            total_balance=total_balance,
            income=income,
            expenses=expenses,
            net_worth=sheet.net_worth,
            assets=sheet.total_assets,
            liabilities=sheet.total_liabilities,
            total_investments=stocks + mutual_funds,
            stocks=stocks,
            mutual_funds=mutual_funds,
        )
