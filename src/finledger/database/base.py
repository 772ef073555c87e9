"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finledger.domain.entities import (
    Account,
    AccountCategory,
    AccountPrice,
    AccountType,
    EntrySide,
    Posting,
    Tag,
    Transaction,
    TransactionEntry,
)


class Database(ABC):
    """Abstract database interface for finledger."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account type operations
    @abstractmethod
    def create_account_type(
        self, name: str, category: AccountCategory, normal_balance: EntrySide
    ) -> int:
        """Create an account type. Returns account type ID."""
        pass

    @abstractmethod
    def get_account_type(self, account_type_id: int) -> Optional[AccountType]:
        """Get account type by ID."""
        pass

    @abstractmethod
    def get_account_type_by_name(self, name: str) -> Optional[AccountType]:
        """Get account type by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_account_types(self) -> list[AccountType]:
        """List all account types."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        account_type_id: int,
        owner_id: Optional[str] = None,
        parent_id: Optional[int] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        is_placeholder: bool = False,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(
        self, owner_id: Optional[str] = None, include_inactive: bool = False
    ) -> list[Account]:
        """List the owner's accounts plus shared accounts, ordered by name."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
        account_type_id: Optional[int] = None,
        is_placeholder: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update account fields. Only fields that are not None change."""
        pass

    @abstractmethod
    def get_account_entry_count(self, account_id: int) -> int:
        """Get count of ledger entries posted to an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        description: str,
        transaction_date: date,
        postings: Sequence[Posting],
        total_amount: Decimal,
        owner_id: Optional[str] = None,
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
        is_split: bool = False,
        tag_names: Sequence[str] = (),
    ) -> int:
        """Create a transaction with all of its entries atomically. Returns transaction ID.

        Tags named in ``tag_names`` that the owner does not have yet are created
        in the same commit.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, with entries and tags."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        search: Optional[str] = None,
        tag_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with filters, newest first."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update transaction metadata. Entries are never modified."""
        pass

    @abstractmethod
    def list_entries(
        self,
        account_ids: Optional[Sequence[int]] = None,
        transaction_id: Optional[int] = None,
        end_date: Optional[date] = None,
        start_date: Optional[date] = None,
    ) -> list[TransactionEntry]:
        """List ledger entries, optionally filtered by account, transaction or date."""
        pass

    # Price operations
    @abstractmethod
    def create_account_price(
        self,
        account_id: int,
        price: Decimal,
        price_date: date,
        owner_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a price record. Returns price ID."""
        pass

    @abstractmethod
    def update_account_price(
        self, price_id: int, price: Decimal, notes: Optional[str] = None
    ) -> None:
        """Update the price and notes of a price record."""
        pass

    @abstractmethod
    def get_account_price_by_date(
        self, account_id: int, price_date: date
    ) -> Optional[AccountPrice]:
        """Get the price record of an account for a date."""
        pass

    @abstractmethod
    def list_account_prices(
        self, account_ids: Optional[Sequence[int]] = None
    ) -> list[AccountPrice]:
        """List price records, newest date first."""
        pass

    # Tag operations
    @abstractmethod
    def create_tag(
        self, name: str, color: Optional[str] = None, owner_id: Optional[str] = None
    ) -> int:
        """Create a tag. Returns tag ID."""
        pass

    @abstractmethod
    def get_tag_by_name(self, name: str, owner_id: Optional[str] = None) -> Optional[Tag]:
        """Get an owner's tag by name."""
        pass

    @abstractmethod
    def list_tags(self, owner_id: Optional[str] = None) -> list[Tag]:
        """List an owner's tags."""
        pass

    @abstractmethod
    def add_transaction_tag(self, transaction_id: int, tag_id: int) -> None:
        """Attach a tag to a transaction."""
        pass
