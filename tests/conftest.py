"""Shared pytest fixtures for finledger tests."""

import logging
import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from finledger.database.factories import create_sqlite_database
from finledger.domain.account import AccountService
from finledger.domain.account_type import AccountTypeService
from finledger.domain.price import PriceService
from finledger.domain.report import ReportService
from finledger.domain.tag import TagService
from finledger.domain.transaction import TransactionService


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by CLI runs; they hold the runner's closed streams."""
    yield
    logger = logging.getLogger("finledger")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_type_service(temp_db):
    return AccountTypeService(temp_db)


@pytest.fixture
def seeded_types(account_type_service):
    """Seed the default account types and return them by name."""
    account_type_service.seed_defaults()
    return {t.name: t for t in account_type_service.list_account_types()}


@pytest.fixture
def account_service(temp_db, seeded_types):
    """Create an AccountService with a temporary database and default types."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db, seeded_types):
    return TransactionService(temp_db)


@pytest.fixture
def price_service(temp_db, seeded_types):
    return PriceService(temp_db)


@pytest.fixture
def report_service(temp_db, seeded_types):
    return ReportService(temp_db)


@pytest.fixture
def tag_service(temp_db):
    return TagService(temp_db)


@pytest.fixture
def sample_accounts(account_service):
    """Create a small chart of accounts and return account IDs by name."""
    ids = {}
    ids["Bank"] = account_service.create_account("Savings Bank", "Bank")
    ids["Card"] = account_service.create_account("Credit Card", "Credit Card")
    ids["Equity"] = account_service.create_account("Opening Equity", "Opening Balances")
    ids["Salary"] = account_service.create_account("Salary", "Income")
    ids["Groceries"] = account_service.create_account("Groceries", "Expenses")
    ids["Household"] = account_service.create_account("Household", "Expenses")
    ids["ACME"] = account_service.create_account("ACME Corp", "Stock")
    ids["Index Fund"] = account_service.create_account("Index Fund", "Mutual Fund")
    return ids


@pytest.fixture
def posted_ledger(transaction_service, sample_accounts):
    """Post a small, balanced ledger.

    Resulting balances: bank 5000, ACME 4000 (40 units), card 2000,
    equity 5000, salary 3000, groceries 1000.
    """
    a = sample_accounts
    post = transaction_service.post_transaction
    post("Opening balance", date(2024, 1, 1), a["Bank"], a["Equity"], Decimal("5000"))
    post("Salary", date(2024, 1, 31), a["Bank"], a["Salary"], Decimal("3000"))
    post("Groceries", date(2024, 2, 5), a["Groceries"], a["Bank"], Decimal("1000"))
    post("Card advance", date(2024, 2, 10), a["Bank"], a["Card"], Decimal("2000"))
    post(
        "Buy ACME",
        date(2024, 2, 15),
        a["ACME"],
        a["Bank"],
        Decimal("4000"),
        quantity=Decimal("40"),
        price=Decimal("100"),
    )
    return a


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
