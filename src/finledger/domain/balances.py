"""Balance and unit calculators.

Every balance in finledger is derived here from the entry log; the cached
``Account.balance`` column is never trusted.
"""

from decimal import Decimal
from typing import Iterable, Protocol

from finledger.domain.entities import Account, EntrySide
from finledger.domain.errors import DataIntegrityError, account_type_unresolved

INVESTMENT_TYPE_MARKERS = ("stock", "mutual fund")


class LedgerLine(Protocol):
    """Anything carrying an account, a side, an amount and a quantity."""

    account_id: int
    entry_side: EntrySide
    amount: Decimal
    quantity: Decimal


def signed_total(
    normal_balance: EntrySide, lines: Iterable[LedgerLine], field: str = "amount"
) -> Decimal:
    """Sum ``field`` over lines, adding the normal side and subtracting the other."""
    total = Decimal("0")
    for line in lines:
        value = getattr(line, field) or Decimal("0")
        if EntrySide.parse(line.entry_side) == normal_balance:
            total += value
        else:
            total -= value
    return total


def _normal_balance(account: Account) -> EntrySide:
    if account.account_type is None:
        raise DataIntegrityError(account_type_unresolved(account.id))
    return account.account_type.normal_balance


def _own_lines(account: Account, lines: Iterable[LedgerLine]) -> list[LedgerLine]:
    return [line for line in lines if line.account_id == account.id]


def compute_balance(account: Account, entries: Iterable[LedgerLine]) -> Decimal:
    """Compute the signed balance of an account from its entries.

    Args:
        account: Account with a resolved account type
        entries: Ledger lines; lines for other accounts are ignored

    Returns:
        Balance, positive when the account holds its normal balance.
        Placeholder accounts always report zero.

    Raises:
        DataIntegrityError: If the account type is not resolved
    """
    normal_balance = _normal_balance(account)
    if account.is_placeholder:
        return Decimal("0")
    return signed_total(normal_balance, _own_lines(account, entries), "amount")


def compute_units(account: Account, entries: Iterable[LedgerLine]) -> Decimal:
    """Compute units held in an account, using the same polarity as balances.

    Raises:
        DataIntegrityError: If the account type is not resolved
    """
    normal_balance = _normal_balance(account)
    if account.is_placeholder:
        return Decimal("0")
    return signed_total(normal_balance, _own_lines(account, entries), "quantity")


def is_investment_account(account: Account) -> bool:
    """Return True for accounts whose type name marks a stock or mutual fund."""
    if account.account_type is None:
        return False
    type_name = account.account_type.name.lower()
    return any(marker in type_name for marker in INVESTMENT_TYPE_MARKERS)


def compute_balances(
    accounts: Iterable[Account], entries: Iterable[LedgerLine]
) -> tuple[dict[int, Decimal], list[Account]]:
    """Compute balances for many accounts in one pass over the entries.

    Returns:
        Tuple of (balance per account id, accounts whose balance is unknown
        because their type cannot be resolved)
    """
    by_account: dict[int, list[LedgerLine]] = {}
    for entry in entries:
        by_account.setdefault(entry.account_id, []).append(entry)

    balances: dict[int, Decimal] = {}
    unavailable: list[Account] = []
    for account in accounts:
        try:
            balances[account.id] = compute_balance(account, by_account.get(account.id, []))
        except DataIntegrityError:
            unavailable.append(account)
    return balances, unavailable
