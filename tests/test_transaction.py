"""Tests for posting and transaction commands."""

from finledger.cli.main import cli


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_add_transaction(cli_runner, temp_db, sample_accounts):
    """Test posting a simple transaction."""
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Weekly shop",
        "--debit", "Groceries",
        "--credit", "Savings Bank",
        "--amount", "$1,234.50",
        "--tag", "food",
    )

    assert result.exit_code == 0
    assert "Posted transaction" in result.output
    assert "1,234.50" in result.output

    listing = _invoke(cli_runner, temp_db, "transaction", "list", "--tag", "food")
    assert "Weekly shop" in listing.output
    assert "expense" in listing.output


def test_add_investment_from_quantity_and_price(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Buy ACME",
        "--debit", "ACME Corp",
        "--credit", "Savings Bank",
        "--quantity", "10",
        "--price", "12.5",
    )

    assert result.exit_code == 0
    assert "for 125.00" in result.output


def test_add_rejects_amount_that_disagrees_with_quantity_and_price(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Buy ACME",
        "--debit", "ACME Corp",
        "--credit", "Savings Bank",
        "--amount", "100",
        "--quantity", "10",
        "--price", "12.5",
    )

    assert result.exit_code == 1
    assert "does not match quantity" in result.output
    assert temp_db.list_entries() == []


def test_add_requires_amount(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Nothing",
        "--debit", "Groceries",
        "--credit", "Savings Bank",
    )

    assert result.exit_code == 1
    assert "Provide --amount" in result.output


def test_add_rejects_invalid_amount(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Shop",
        "--debit", "Groceries",
        "--credit", "Savings Bank",
        "--amount", "-5",
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_add_rejects_invalid_date(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "not-a-date",
        "--description", "Shop",
        "--debit", "Groceries",
        "--credit", "Savings Bank",
        "--amount", "5",
    )

    assert result.exit_code == 1
    assert "Invalid date format" in result.output


def test_add_to_placeholder_fails(cli_runner, temp_db, account_service, sample_accounts):
    account_service.create_account("Living", "Expenses", is_placeholder=True)

    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Shop",
        "--debit", "Living",
        "--credit", "Savings Bank",
        "--amount", "5",
    )

    assert result.exit_code == 1
    assert "Cannot post to placeholder account 'Living'" in result.output


def test_add_unknown_account(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "add",
        "--date", "2024-03-01",
        "--description", "Shop",
        "--debit", "Nowhere",
        "--credit", "Savings Bank",
        "--amount", "5",
    )

    assert result.exit_code == 1
    assert "Account 'Nowhere' not found" in result.output


def test_split_transaction(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "split",
        "--date", "2024-03-02",
        "--description", "Supermarket",
        "--account", "Credit Card",
        "--split", "Groceries=80",
        "--split", "Household=40:cleaning",
    )

    assert result.exit_code == 0
    assert "with 2 split(s) for 120.00" in result.output

    show = _invoke(cli_runner, temp_db, "transaction", "show", "1")
    assert "Split: yes" in show.output
    assert "cleaning" in show.output
    assert "Kind: expense" in show.output


def test_split_amount_mismatch(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "split",
        "--date", "2024-03-02",
        "--description", "Supermarket",
        "--account", "Credit Card",
        "--amount", "100",
        "--split", "Groceries=80",
    )

    assert result.exit_code == 1
    assert "Primary entry amount must equal sum of split entries" in result.output


def test_split_bad_format(cli_runner, temp_db, sample_accounts):
    result = _invoke(
        cli_runner,
        temp_db,
        "split",
        "--date", "2024-03-02",
        "--description", "Supermarket",
        "--account", "Credit Card",
        "--split", "Groceries",
    )

    assert result.exit_code == 1
    assert "expected ACCOUNT=AMOUNT" in result.output


def test_transaction_list(cli_runner, temp_db, posted_ledger):
    result = _invoke(cli_runner, temp_db, "transaction", "list")

    assert result.exit_code == 0
    assert "Found 5 transaction(s)" in result.output
    assert "TOTAL" in result.output


def test_transaction_list_date_range(cli_runner, temp_db, posted_ledger):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "list",
        "--start-date", "2024-01-01",
        "--end-date", "2024-01-31",
        "--verbose",
    )

    assert result.exit_code == 0
    assert "Found 2 transaction(s)" in result.output
    assert "Opening balance" in result.output
    assert "Buy ACME" not in result.output
    assert "DEBIT" in result.output


def test_transaction_list_by_account(cli_runner, temp_db, posted_ledger):
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--account", "Salary")

    assert "Found 1 transaction(s)" in result.output
    assert "income" in result.output


def test_transaction_list_empty(cli_runner, temp_db, posted_ledger):
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--search", "wedding")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_transaction_show(cli_runner, temp_db, posted_ledger):
    result = _invoke(cli_runner, temp_db, "transaction", "show", "5")

    assert result.exit_code == 0
    assert "Transaction ID: 5" in result.output
    assert "Description: Buy ACME" in result.output
    assert "ACME Corp" in result.output
    assert "@ 100.00" in result.output


def test_transaction_show_missing(cli_runner, temp_db, posted_ledger):
    result = _invoke(cli_runner, temp_db, "transaction", "show", "99")

    assert result.exit_code == 1
    assert "Transaction 99 not found" in result.output


def test_transaction_update(cli_runner, temp_db, posted_ledger):
    result = _invoke(
        cli_runner,
        temp_db,
        "transaction", "update", "3",
        "--notes", "monthly",
        "--tag", "home",
    )

    assert result.exit_code == 0
    assert "Updated transaction 3" in result.output

    show = _invoke(cli_runner, temp_db, "transaction", "show", "3")
    assert "Notes: monthly" in show.output
    assert "Tags: home" in show.output
