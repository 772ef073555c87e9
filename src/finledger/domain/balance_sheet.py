"""Balance sheet and income statement aggregation."""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from finledger.domain.balances import is_investment_account
from finledger.domain.entities import (
    Account,
    AccountCategory,
    BalanceSheetLine,
    BalanceSheetReport,
    BalanceSheetSection,
    IncomeStatement,
)
from finledger.domain.validation import within_tolerance

ZERO = Decimal("0")

# Name-based sub-classification is a display heuristic only.
CURRENT_ASSET_MARKERS = ("bank", "cash", "checking", "savings")
NON_CURRENT_ASSET_MARKERS = ("investment", "mutual", "stock", "property", "equipment")
CURRENT_LIABILITY_MARKERS = ("payable", "credit card", "short")


def _name_matches(account: Account, markers: Iterable[str]) -> bool:
    name = account.name.lower()
    return any(marker in name for marker in markers)


def is_current_asset(account: Account) -> bool:
    return _name_matches(account, CURRENT_ASSET_MARKERS)


def is_non_current_asset(account: Account) -> bool:
    return not is_current_asset(account) and _name_matches(account, NON_CURRENT_ASSET_MARKERS)


def is_current_liability(account: Account) -> bool:
    return _name_matches(account, CURRENT_LIABILITY_MARKERS)


def _section(
    lines: list[BalanceSheetLine],
    total: Decimal,
    current: Optional[list[BalanceSheetLine]] = None,
    non_current: Optional[list[BalanceSheetLine]] = None,
) -> BalanceSheetSection:
    return BalanceSheetSection(
        lines=tuple(lines),
        total=total,
        current=tuple(current or ()),
        non_current=tuple(non_current or ()),
    )


def _group_lines(
    accounts: Iterable[Account],
    balances: Mapping[int, Decimal],
    market_values: Mapping[int, Decimal],
) -> tuple[dict[AccountCategory, list[BalanceSheetLine]], list[Account]]:
    grouped: dict[AccountCategory, list[BalanceSheetLine]] = {
        category: [] for category in AccountCategory
    }
    unavailable: list[Account] = []

    for account in accounts:
        if not account.is_active:
            continue
        if account.account_type is None or account.id not in balances:
            unavailable.append(account)
            continue
        balance = balances[account.id]
        if balance == 0:
            continue
        market_value = None
        if account.category is AccountCategory.ASSET and is_investment_account(account):
            market_value = market_values.get(account.id, balance)
        grouped[account.category].append(
            BalanceSheetLine(account=account, balance=balance, market_value=market_value)
        )

    return grouped, unavailable


def build_balance_sheet(
    accounts: Iterable[Account],
    balances: Mapping[int, Decimal],
    market_values: Optional[Mapping[int, Decimal]] = None,
) -> BalanceSheetReport:
    """Build a balance sheet from computed balances and market values.

    Args:
        accounts: Accounts with resolved account types; inactive ones are skipped
        balances: Computed balance per account id
        market_values: Market value per investment account id. Investment
            accounts missing from the mapping are reported at their balance.

    Returns:
        BalanceSheetReport. Accounts without a resolved type or a computed
        balance are listed in ``unavailable`` and left out of every total.
    """
    grouped, unavailable = _group_lines(accounts, balances, market_values or {})

    assets = grouped[AccountCategory.ASSET]
    liabilities = grouped[AccountCategory.LIABILITY]
    equity = grouped[AccountCategory.EQUITY]
    income = grouped[AccountCategory.INCOME]
    expenses = grouped[AccountCategory.EXPENSE]

    total_assets = sum((line.reported_value for line in assets), ZERO)
    total_liabilities = sum((abs(line.balance) for line in liabilities), ZERO)
    total_equity = sum((abs(line.balance) for line in equity), ZERO)
    total_income = sum((abs(line.balance) for line in income), ZERO)
    total_expenses = sum((abs(line.balance) for line in expenses), ZERO)
    net_income = total_income - total_expenses
    unrealized_gains = sum(
        (line.market_value - line.balance for line in assets if line.market_value is not None),
        ZERO,
    )
    net_worth = total_assets - total_liabilities
    is_balanced = within_tolerance(
        total_assets, total_liabilities + total_equity + unrealized_gains + net_income
    )

    current_liabilities = [line for line in liabilities if is_current_liability(line.account)]
    return BalanceSheetReport(
        assets=_section(
            assets,
            total_assets,
            current=[line for line in assets if is_current_asset(line.account)],
            non_current=[line for line in assets if is_non_current_asset(line.account)],
        ),
        liabilities=_section(
            liabilities,
            total_liabilities,
            current=current_liabilities,
            non_current=[line for line in liabilities if line not in current_liabilities],
        ),
        equity=_section(equity, total_equity),
        income=_section(income, total_income),
        expenses=_section(expenses, total_expenses),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_equity=total_equity,
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=net_income,
        unrealized_gains=unrealized_gains,
        net_worth=net_worth,
        is_balanced=is_balanced,
        unavailable=tuple(unavailable),
    )


def build_income_statement(
    accounts: Iterable[Account], balances: Mapping[int, Decimal]
) -> IncomeStatement:
    """Build income and expense totals from computed balances."""
    grouped, _ = _group_lines(accounts, balances, {})
    income = grouped[AccountCategory.INCOME]
    expenses = grouped[AccountCategory.EXPENSE]
    total_income = sum((abs(line.balance) for line in income), ZERO)
    total_expenses = sum((abs(line.balance) for line in expenses), ZERO)
    return IncomeStatement(
        income=_section(income, total_income),
        expenses=_section(expenses, total_expenses),
        net_income=total_income - total_expenses,
    )
