"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Iterable


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class UnbalancedTransactionError(ValidationError):
    """Debit and credit totals of a transaction differ beyond tolerance."""

    def __init__(self, debit_total: Decimal, credit_total: Decimal):
        self.debit_total = debit_total
        self.credit_total = credit_total
        super().__init__(unbalanced_transaction(debit_total, credit_total))


class InvalidSplitError(ValidationError):
    """A split transaction broke one of the split rules."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DataIntegrityError(DomainError):
    """Referenced account or account type cannot be resolved."""


class CyclicHierarchyError(DomainError):
    """Parent/child links between accounts form a cycle."""

    def __init__(self, cycle: Iterable[int]):
        self.cycle = tuple(cycle)
        super().__init__(cyclic_hierarchy(self.cycle))


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_type_not_found(account_type: int | str) -> str:
    """Return message for missing account type."""
    if isinstance(account_type, int):
        return f"Account type {account_type} not found"
    return f"Account type '{account_type}' not found"


def account_type_unresolved(account_id: int) -> str:
    """Return message for an account whose type cannot be resolved."""
    return f"Account {account_id} has no resolvable account type"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_account_name(name: str) -> str:
    """Return message for duplicate account name under the same parent."""
    return f"Account with name '{name}' already exists at this level"


def placeholder_posting(account_name: str) -> str:
    """Return message for a posting against a placeholder account."""
    return f"Cannot post to placeholder account '{account_name}'"


def inactive_posting(account_name: str) -> str:
    """Return message for a posting against an inactive account."""
    return f"Cannot post to inactive account '{account_name}'"


def unbalanced_transaction(debit_total: Decimal, credit_total: Decimal) -> str:
    """Return message for debits that do not equal credits."""
    return (
        f"Debits must equal credits (debits {debit_total:.2f}, "
        f"credits {credit_total:.2f})"
    )


def cyclic_hierarchy(cycle: Iterable[int]) -> str:
    """Return message for a cycle in the account hierarchy."""
    return "Account hierarchy contains a cycle: " + " -> ".join(str(i) for i in cycle)


def account_type_change_blocked(account_id: int, entry_count: int) -> str:
    """Return message when an account type change is refused."""
    return (
        f"Cannot change the type of account {account_id}: it has "
        f"{entry_count} entr{'ies' if entry_count != 1 else 'y'}"
    )


def placeholder_change_blocked(account_id: int, entry_count: int) -> str:
    """Return message when an account with entries is made a placeholder."""
    return (
        f"Cannot make account {account_id} a placeholder: it has "
        f"{entry_count} entr{'ies' if entry_count != 1 else 'y'}"
    )
