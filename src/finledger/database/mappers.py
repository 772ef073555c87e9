"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic. Side names are normalised here,
so BUY/SELL rows surface as DEBIT/CREDIT entries.
"""

from decimal import Decimal
from typing import Optional

from finledger.domain import entities as domain
from finledger.database.models import (
    Account as ORMAccount,
    AccountPrice as ORMAccountPrice,
    AccountType as ORMAccountType,
    Tag as ORMTag,
    Transaction as ORMTransaction,
    TransactionEntry as ORMTransactionEntry,
)


def _decimal(value, default: Optional[Decimal] = None) -> Optional[Decimal]:
    if value is None:
        return default
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_type_to_domain(orm_type: ORMAccountType) -> domain.AccountType:
    """Convert SQLAlchemy AccountType model to domain AccountType entity."""
    return domain.AccountType(
        id=orm_type.id,
        name=orm_type.name,
        category=domain.AccountCategory.parse(orm_type.category),
        normal_balance=domain.EntrySide.parse(orm_type.normal_balance),
        created_at=orm_type.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    account_type = None
    if orm_account.account_type is not None:
        account_type = account_type_to_domain(orm_account.account_type)
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type_id=orm_account.account_type_id,
        account_type=account_type,
        owner_id=orm_account.owner_id,
        parent_id=orm_account.parent_id,
        code=orm_account.code,
        description=orm_account.description,
        is_placeholder=bool(orm_account.is_placeholder),
        is_active=orm_account.is_active is not False,
        balance=_decimal(orm_account.balance, Decimal("0")),
        created_at=orm_account.created_at,
    )


def entry_to_domain(orm_entry: ORMTransactionEntry) -> domain.TransactionEntry:
    """Convert SQLAlchemy TransactionEntry model to domain TransactionEntry entity."""
    return domain.TransactionEntry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        account_id=orm_entry.account_id,
        entry_side=domain.EntrySide.parse(orm_entry.entry_side),
        amount=_decimal(orm_entry.amount, Decimal("0")),
        quantity=_decimal(orm_entry.quantity, Decimal("1")),
        price=_decimal(orm_entry.price),
        line_number=orm_entry.line_number or 1,
        description=orm_entry.description,
    )


def tag_to_domain(orm_tag: ORMTag) -> domain.Tag:
    """Convert SQLAlchemy Tag model to domain Tag entity."""
    return domain.Tag(
        id=orm_tag.id,
        name=orm_tag.name,
        color=orm_tag.color,
        owner_id=orm_tag.owner_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        description=orm_transaction.description,
        transaction_date=orm_transaction.transaction_date,
        total_amount=_decimal(orm_transaction.total_amount, Decimal("0")),
        owner_id=orm_transaction.owner_id,
        reference_number=orm_transaction.reference_number,
        notes=orm_transaction.notes,
        is_split=bool(orm_transaction.is_split),
        created_at=orm_transaction.created_at,
        entries=tuple(
            entry_to_domain(entry)
            for entry in sorted(orm_transaction.entries, key=lambda e: (e.line_number or 1, e.id))
        ),
        tags=tuple(sorted((tag_to_domain(tag) for tag in orm_transaction.tags), key=lambda t: t.name)),
    )


def account_price_to_domain(orm_price: ORMAccountPrice) -> domain.AccountPrice:
    """Convert SQLAlchemy AccountPrice model to domain AccountPrice entity."""
    return domain.AccountPrice(
        id=orm_price.id,
        account_id=orm_price.account_id,
        price=_decimal(orm_price.price),
        price_date=orm_price.date,
        owner_id=orm_price.owner_id,
        notes=orm_price.notes,
        created_at=orm_price.created_at,
    )
