"""Tests for balance sheet and income statement aggregation."""

from decimal import Decimal

from finledger.domain.balance_sheet import (
    build_balance_sheet,
    build_income_statement,
    is_current_asset,
    is_current_liability,
    is_non_current_asset,
)
from finledger.domain.entities import Account, AccountCategory, AccountType, EntrySide

TYPES = {
    "Bank": AccountType(1, "Bank", AccountCategory.ASSET, EntrySide.DEBIT),
    "Stock": AccountType(2, "Stock", AccountCategory.ASSET, EntrySide.DEBIT),
    "Credit Card": AccountType(3, "Credit Card", AccountCategory.LIABILITY, EntrySide.CREDIT),
    "Equity": AccountType(4, "Equity", AccountCategory.EQUITY, EntrySide.CREDIT),
    "Income": AccountType(5, "Income", AccountCategory.INCOME, EntrySide.CREDIT),
    "Expenses": AccountType(6, "Expenses", AccountCategory.EXPENSE, EntrySide.DEBIT),
}


def _account(account_id, name, type_name, **kwargs):
    account_type = TYPES[type_name]
    return Account(
        id=account_id,
        name=name,
        account_type_id=account_type.id,
        account_type=account_type,
        **kwargs,
    )


def _ledger():
    accounts = [
        _account(1, "Savings Bank", "Bank"),
        _account(2, "ACME Stock", "Stock"),
        _account(3, "Credit Card", "Credit Card"),
        _account(4, "Opening Equity", "Equity"),
        _account(5, "Salary", "Income"),
        _account(6, "Groceries", "Expenses"),
    ]
    balances = {
        1: Decimal("5000"),
        2: Decimal("4000"),
        3: Decimal("2000"),
        4: Decimal("5000"),
        5: Decimal("3000"),
        6: Decimal("1000"),
    }
    return accounts, balances


def test_balanced_sheet_with_unrealized_gain():
    accounts, balances = _ledger()

    report = build_balance_sheet(accounts, balances, {2: Decimal("5000")})

    assert report.total_assets == Decimal("10000")
    assert report.total_liabilities == Decimal("2000")
    assert report.total_equity == Decimal("5000")
    assert report.net_income == Decimal("2000")
    assert report.unrealized_gains == Decimal("1000")
    assert report.net_worth == Decimal("8000")
    assert report.is_balanced


def test_investment_without_market_value_uses_balance():
    accounts, balances = _ledger()

    report = build_balance_sheet(accounts, balances)

    assert report.total_assets == Decimal("9000")
    assert report.unrealized_gains == Decimal("0")
    assert report.is_balanced


def test_unbalanced_sheet_is_flagged():
    accounts, balances = _ledger()
    balances[1] = Decimal("5000.02")

    assert not build_balance_sheet(accounts, balances).is_balanced


def test_zero_balance_and_inactive_accounts_are_excluded():
    accounts, balances = _ledger()
    accounts.append(_account(7, "Old Wallet", "Bank", is_active=False))
    accounts.append(_account(8, "Empty Checking", "Bank"))
    balances[7] = Decimal("999")
    balances[8] = Decimal("0")

    report = build_balance_sheet(accounts, balances)

    names = [line.account.name for line in report.assets.lines]
    assert "Old Wallet" not in names
    assert "Empty Checking" not in names
    assert report.total_assets == Decimal("9000")


def test_unresolved_accounts_are_unavailable_not_zero():
    accounts, balances = _ledger()
    orphan = Account(id=9, name="Mystery", account_type_id=42)
    accounts.append(orphan)

    report = build_balance_sheet(accounts, balances)

    assert report.unavailable == (orphan,)
    assert report.is_balanced


def test_current_and_non_current_grouping():
    accounts, balances = _ledger()

    report = build_balance_sheet(accounts, balances)

    assert [line.account.name for line in report.assets.current] == ["Savings Bank"]
    assert [line.account.name for line in report.assets.non_current] == ["ACME Stock"]
    assert [line.account.name for line in report.liabilities.current] == ["Credit Card"]
    assert report.liabilities.non_current == ()


def test_name_heuristics():
    assert is_current_asset(_account(1, "Cash Wallet", "Bank"))
    assert not is_non_current_asset(_account(1, "Cash Investment", "Bank"))
    assert is_non_current_asset(_account(1, "House Property", "Bank"))
    assert is_current_liability(_account(1, "Accounts Payable", "Credit Card"))
    assert not is_current_liability(_account(1, "Mortgage", "Credit Card"))


def test_income_statement():
    accounts, balances = _ledger()

    statement = build_income_statement(accounts, balances)

    assert statement.income.total == Decimal("3000")
    assert statement.expenses.total == Decimal("1000")
    assert statement.net_income == Decimal("2000")


def test_repeated_builds_give_identical_reports():
    accounts, balances = _ledger()
    market_values = {2: Decimal("5000")}

    first = build_balance_sheet(accounts, balances, market_values)
    second = build_balance_sheet(accounts, balances, market_values)

    for field in (
        "total_assets",
        "total_liabilities",
        "total_equity",
        "total_income",
        "total_expenses",
        "net_income",
        "unrealized_gains",
        "net_worth",
        "is_balanced",
        "unavailable",
    ):
        assert getattr(first, field) == getattr(second, field), field
    assert first == second
