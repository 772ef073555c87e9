"""Tests for AccountService."""

from datetime import date
from decimal import Decimal

import pytest

from finledger.domain.account import AccountService
from finledger.domain.errors import (
    ConflictError,
    CyclicHierarchyError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from finledger.domain.hierarchy import rollup_balance


def test_create_account(account_service):
    """Test creating an account."""
    account_id = account_service.create_account("Checking", "Bank", code="1010")

    account = account_service.get_account(account_id)
    assert account.name == "Checking"
    assert account.code == "1010"
    assert account.account_type.name == "Bank"
    assert account.category.value == "ASSET"


def test_create_account_by_type_id(account_service, seeded_types):
    account_id = account_service.create_account("Wallet", seeded_types["Cash"].id)
    assert account_service.get_account(account_id).account_type.name == "Cash"


def test_create_account_rejects_empty_name(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account("  ", "Bank")


def test_create_account_unknown_type(account_service):
    with pytest.raises(NotFoundError, match="Account type 'Crypto' not found"):
        account_service.create_account("Wallet", "Crypto")


def test_duplicate_sibling_name_rejected(account_service):
    account_service.create_account("Checking", "Bank")

    with pytest.raises(ConflictError, match="already exists at this level"):
        account_service.create_account("checking", "Bank")


def test_same_name_under_different_parents(account_service):
    home = account_service.create_account("Home", "Expenses", is_placeholder=True)
    car = account_service.create_account("Car", "Expenses", is_placeholder=True)

    account_service.create_account("Insurance", "Expenses", parent_id=home)
    account_service.create_account("Insurance", "Expenses", parent_id=car)

    names = [acc.name for acc in account_service.list_accounts()]
    assert names.count("Insurance") == 2


def test_missing_parent_rejected(account_service):
    with pytest.raises(NotFoundError, match="Account 999 not found"):
        account_service.create_account("Child", "Bank", parent_id=999)


def test_require_account_not_found(account_service):
    with pytest.raises(NotFoundError):
        account_service.require_account(999)


def test_update_account_fields(account_service):
    account_id = account_service.create_account("Checking", "Bank")

    account_service.update_account(account_id, name="Main Checking", description="Daily")

    account = account_service.get_account(account_id)
    assert account.name == "Main Checking"
    assert account.description == "Daily"


def test_reparent_and_clear_parent(account_service):
    parent = account_service.create_account("Assets", "Assets", is_placeholder=True)
    child = account_service.create_account("Checking", "Bank")

    account_service.update_account(child, parent_id=parent)
    assert account_service.get_account(child).parent_id == parent

    account_service.update_account(child, clear_parent=True)
    assert account_service.get_account(child).parent_id is None


def test_parent_cannot_be_self(account_service):
    account_id = account_service.create_account("Checking", "Bank")

    with pytest.raises(CyclicHierarchyError):
        account_service.update_account(account_id, parent_id=account_id)


def test_reparent_under_descendant_rejected(account_service):
    top = account_service.create_account("Top", "Assets", is_placeholder=True)
    middle = account_service.create_account("Middle", "Assets", parent_id=top)
    bottom = account_service.create_account("Bottom", "Bank", parent_id=middle)

    with pytest.raises(CyclicHierarchyError):
        account_service.update_account(top, parent_id=bottom)

    assert account_service.get_account(top).parent_id is None


def test_type_change_allowed_without_entries(account_service):
    account_id = account_service.create_account("Wallet", "Bank")

    account_service.update_account(account_id, account_type="Cash")

    assert account_service.get_account(account_id).account_type.name == "Cash"


def test_type_change_blocked_with_entries(account_service, posted_ledger):
    with pytest.raises(DependencyError, match="Cannot change the type of account"):
        account_service.update_account(posted_ledger["Bank"], account_type="Cash")


def test_placeholder_blocked_with_entries(account_service, posted_ledger):
    with pytest.raises(DependencyError, match="a placeholder"):
        account_service.update_account(posted_ledger["Groceries"], is_placeholder=True)

    account_service.update_account(posted_ledger["Household"], is_placeholder=True)
    assert account_service.get_account(posted_ledger["Household"]).is_placeholder


def test_deactivate_and_activate(account_service):
    account_id = account_service.create_account("Old Savings", "Bank")

    account_service.deactivate_account(account_id)
    assert account_service.list_accounts() == []
    assert not account_service.get_account(account_id).is_active

    account_service.activate_account(account_id)
    assert [acc.id for acc in account_service.list_accounts()] == [account_id]


def test_owner_visibility(temp_db, seeded_types):
    alice = AccountService(temp_db, owner_id="alice")
    bob = AccountService(temp_db, owner_id="bob")
    shared = AccountService(temp_db)

    alice_id = alice.create_account("Alice Bank", "Bank")
    shared_id = shared.create_account("Household Cash", "Cash")

    assert bob.get_account(alice_id) is None
    assert bob.get_account(shared_id) is not None
    assert [acc.name for acc in alice.list_accounts()] == ["Alice Bank", "Household Cash"]


def test_account_tree_rolls_up_leaves(account_service, transaction_service):
    expenses = account_service.create_account("Living", "Expenses", is_placeholder=True)
    food = account_service.create_account("Food", "Expenses", parent_id=expenses)
    rent = account_service.create_account("Rent", "Expenses", parent_id=expenses)
    bank = account_service.create_account("Checking", "Bank")
    equity = account_service.create_account("Opening", "Opening Balances")

    post = transaction_service.post_transaction
    post("Opening", date(2024, 1, 1), bank, equity, Decimal("2000"))
    post("Food", date(2024, 1, 2), food, bank, Decimal("150"))
    post("Rent", date(2024, 1, 3), rent, bank, Decimal("900"))

    roots = account_service.get_account_tree()
    living = next(node for node in roots if node.name == "Living")

    assert [child.name for child in living.children] == ["Food", "Rent"]
    assert rollup_balance(living) == Decimal("1050")
    checking = next(node for node in roots if node.name == "Checking")
    assert checking.balance == Decimal("950")


def test_account_tree_marks_unavailable_branch(temp_db, account_service, transaction_service):
    parent = account_service.create_account("Holdings", "Assets", is_placeholder=True)
    checking = account_service.create_account("Checking", "Bank", parent_id=parent)
    equity = account_service.create_account("Opening", "Opening Balances")
    transaction_service.post_transaction("Opening", date(2024, 1, 1), checking, equity, Decimal("100"))
    temp_db.create_account(name="Mystery", account_type_id=999, parent_id=parent)

    roots = account_service.get_account_tree()

    holdings = next(node for node in roots if node.name == "Holdings")
    mystery = next(node for node in holdings.children if node.name == "Mystery")
    assert mystery.balance is None
    assert rollup_balance(holdings) is None
