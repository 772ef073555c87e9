"""Account hierarchy builder."""

from decimal import Decimal
from typing import Iterable, Iterator, Mapping, Optional

from finledger.domain.entities import Account, AccountNode
from finledger.domain.errors import CyclicHierarchyError


def find_cycle(parent_map: Mapping[int, Optional[int]]) -> Optional[list[int]]:
    """Return the ids forming a parent cycle, or None if the graph is a forest.

    Parents missing from ``parent_map`` end a walk; they are not an error.
    """
    resolved: set[int] = set()
    for start in parent_map:
        path: list[int] = []
        on_path: set[int] = set()
        current: Optional[int] = start
        while current is not None and current in parent_map and current not in resolved:
            if current in on_path:
                return path[path.index(current):] + [current]
            path.append(current)
            on_path.add(current)
            current = parent_map[current]
        resolved.update(path)
    return None


def _sort_key(node: AccountNode) -> tuple[str, str]:
    return (node.name.casefold(), node.name)


def _sort_nodes(nodes: list[AccountNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        _sort_nodes(node.children)


def build_hierarchy(
    accounts: Iterable[Account],
    balances: Optional[Mapping[int, Decimal]] = None,
    unavailable: Iterable[int] = (),
) -> list[AccountNode]:
    """Assemble a flat account list into a forest sorted by name.

    An account whose parent is not in the input becomes a root.

    Args:
        accounts: Accounts to arrange
        balances: Optional computed balance per account id; accounts missing
            from it carry a zero balance
        unavailable: Ids of accounts whose balance cannot be computed; their
            nodes carry None

    Returns:
        Root nodes, with children sorted alphabetically at every level

    Raises:
        CyclicHierarchyError: If parent links form a cycle
    """
    accounts = list(accounts)
    balances = balances or {}
    unavailable = set(unavailable)
    parent_map = {account.id: account.parent_id for account in accounts}

    cycle = find_cycle(parent_map)
    if cycle is not None:
        raise CyclicHierarchyError(cycle)

    nodes = {
        account.id: AccountNode(
            account=account,
            balance=None if account.id in unavailable else balances.get(account.id, Decimal("0")),
        )
        for account in accounts
    }
    roots: list[AccountNode] = []
    for account in accounts:
        node = nodes[account.id]
        if account.parent_id is not None and account.parent_id in nodes:
            nodes[account.parent_id].children.append(node)
        else:
            roots.append(node)

    _sort_nodes(roots)
    return roots


def rollup_balance(node: AccountNode) -> Optional[Decimal]:
    """Return the sum of leaf balances under a node.

    A leaf contributes its own balance, or zero if it is a placeholder. The
    result is None when any leaf below the node has an unavailable balance.
    """
    if node.is_leaf:
        return Decimal("0") if node.account.is_placeholder else node.balance
    total = Decimal("0")
    for child in node.children:
        child_total = rollup_balance(child)
        if child_total is None:
            return None
        total += child_total
    return total


def walk(nodes: Iterable[AccountNode], depth: int = 0) -> Iterator[tuple[AccountNode, int]]:
    """Yield (node, depth) pairs in display order."""
    for node in nodes:
        yield node, depth
        yield from walk(node.children, depth + 1)
