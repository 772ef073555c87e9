"""Tests for the account hierarchy builder."""

from decimal import Decimal

import pytest

from finledger.domain.entities import Account
from finledger.domain.errors import CyclicHierarchyError
from finledger.domain.hierarchy import build_hierarchy, find_cycle, rollup_balance, walk


def _account(account_id, name, parent_id=None, **kwargs):
    return Account(id=account_id, name=name, account_type_id=1, parent_id=parent_id, **kwargs)


def test_builds_sorted_forest():
    accounts = [
        _account(1, "Expenses"),
        _account(2, "Assets"),
        _account(3, "rent", parent_id=1),
        _account(4, "Groceries", parent_id=1),
        _account(5, "Bank", parent_id=2),
    ]

    roots = build_hierarchy(accounts)

    assert [node.name for node in roots] == ["Assets", "Expenses"]
    assert [node.name for node in roots[1].children] == ["Groceries", "rent"]
    assert [(node.name, depth) for node, depth in walk(roots)] == [
        ("Assets", 0),
        ("Bank", 1),
        ("Expenses", 0),
        ("Groceries", 1),
        ("rent", 1),
    ]


def test_missing_parent_becomes_root():
    roots = build_hierarchy([_account(1, "Lost", parent_id=99)])
    assert [node.name for node in roots] == ["Lost"]


def test_every_account_appears_once():
    accounts = [_account(i, f"A{i}", parent_id=i - 1 if i > 1 else None) for i in range(1, 6)]
    roots = build_hierarchy(accounts)
    assert sorted(node.id for node, _ in walk(roots)) == [1, 2, 3, 4, 5]


def test_cycle_is_rejected():
    accounts = [_account(1, "A"), _account(2, "B", parent_id=3), _account(3, "C", parent_id=2)]

    with pytest.raises(CyclicHierarchyError) as excinfo:
        build_hierarchy(accounts)

    assert set(excinfo.value.cycle) == {2, 3}
    assert "cycle" in str(excinfo.value)


def test_find_cycle():
    assert find_cycle({1: None, 2: 1, 3: 2}) is None
    assert find_cycle({1: 1}) == [1, 1]
    assert find_cycle({1: 2, 2: 3, 3: 1}) is not None


def test_rollup_sums_leaves():
    accounts = [
        _account(1, "Expenses", is_placeholder=True),
        _account(2, "Food", parent_id=1),
        _account(3, "Rent", parent_id=1),
        _account(4, "Unused", parent_id=1, is_placeholder=True),
    ]
    balances = {2: Decimal("120"), 3: Decimal("800"), 4: Decimal("5")}

    roots = build_hierarchy(accounts, balances)

    assert rollup_balance(roots[0]) == Decimal("920")
    assert roots[0].children[0].balance == Decimal("120")


def test_unavailable_leaf_makes_rollup_unavailable():
    accounts = [
        _account(1, "Assets", is_placeholder=True),
        _account(2, "Checking", parent_id=1),
        _account(3, "Savings", parent_id=1),
        _account(4, "Cash"),
    ]
    balances = {2: Decimal("100"), 4: Decimal("20")}

    roots = build_hierarchy(accounts, balances, unavailable=[3])

    assets, cash = roots
    assert assets.children[1].balance is None
    assert rollup_balance(assets) is None
    assert rollup_balance(assets.children[0]) == Decimal("100")
    assert rollup_balance(cash) == Decimal("20")
