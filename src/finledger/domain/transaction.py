"""Transaction domain service.

Transactions are posted once, as a balanced set of entries, and are never
edited afterwards except for their descriptive metadata.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

from finledger.database.base import Database
from finledger.domain.account import AccountService
from finledger.domain.balances import is_investment_account
from finledger.domain.entities import (
    Account,
    AccountCategory,
    EntrySide,
    Posting,
    Transaction as TransactionEntity,
    TransactionKind,
)
from finledger.domain.errors import (
    NotFoundError,
    ValidationError,
    inactive_posting,
    placeholder_posting,
    transaction_not_found,
)
from finledger.domain.tag import TagService
from finledger.domain.validation import (
    calculate_transaction_total,
    convert_split_to_entries,
    require_balanced,
    within_tolerance,
)

logger = logging.getLogger(__name__)


def classify_transaction(
    entries: Iterable, accounts: Mapping[int, Account]
) -> TransactionKind:
    """Classify a transaction for display.

    Any leg on an income account makes it income; otherwise any leg on an
    expense account makes it an expense; everything else is a transfer.
    """
    categories = set()
    for entry in entries:
        account = accounts.get(entry.account_id)
        if account is not None and account.category is not None:
            categories.add(account.category)
    if AccountCategory.INCOME in categories:
        return TransactionKind.INCOME
    if AccountCategory.EXPENSE in categories:
        return TransactionKind.EXPENSE
    return TransactionKind.TRANSFER


class TransactionService:
    """Service for posting and querying transactions."""

    def __init__(self, db: Database, owner_id: Optional[str] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            owner_id: Owner recorded on new transactions and used to filter queries
        """
        self.db = db
        self.owner_id = owner_id
        self.accounts = AccountService(db, owner_id=owner_id)

    def _require_postable(self, account_id: int) -> Account:
        account = self.accounts.require_account(account_id)
        if account.is_placeholder:
            raise ValidationError(placeholder_posting(account.name))
        if not account.is_active:
            raise ValidationError(inactive_posting(account.name))
        return account

    def post_postings(
        self,
        description: str,
        transaction_date: date,
        postings: Sequence[Posting],
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Sequence[str] = (),
        is_split: bool = False,
    ) -> int:
        """Post a balanced set of entries as one transaction.

        Args:
            description: Transaction description
            transaction_date: Transaction date
            postings: Entries to post; at least two are required
            reference_number: Optional reference number
            notes: Optional notes
            tags: Tag names, created on first use
            is_split: True when the entries came from a split

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the entries are malformed or an account cannot
                take postings
            UnbalancedTransactionError: If debits differ from credits by more
                than the tolerance
            NotFoundError: If an account does not exist
        """
        if not description or not description.strip():
            raise ValidationError("Transaction description cannot be empty")
        if len(postings) < 2:
            raise ValidationError("A transaction needs at least two entries")
        for posting in postings:
            if posting.amount <= 0:
                raise ValidationError("Entry amounts must be greater than zero")
        if any(not name or not name.strip() for name in tags):
            raise ValidationError("Tag name cannot be empty")

        require_balanced(postings)
        for posting in postings:
            self._require_postable(posting.account_id)

        total = calculate_transaction_total(postings)
        transaction_id = self.db.create_transaction(
            description=description.strip(),
            transaction_date=transaction_date,
            postings=postings,
            total_amount=total,
            owner_id=self.owner_id,
            reference_number=reference_number,
            notes=notes,
            is_split=is_split,
            tag_names=[name.strip() for name in tags],
        )
        logger.info(
            "Posted transaction %d '%s' with %d entries (total %s)",
            transaction_id,
            description,
            len(postings),
            total,
        )
        return transaction_id

    def post_transaction(
        self,
        description: str,
        transaction_date: date,
        debit_account_id: int,
        credit_account_id: int,
        amount: Decimal,
        quantity: Decimal = Decimal("1"),
        price: Optional[Decimal] = None,
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Sequence[str] = (),
    ) -> int:
        """Post a simple two-line transaction.

        ``quantity`` and ``price`` describe units bought or sold. They are
        recorded on the investment side(s) of the transaction; other lines
        carry a quantity of one.

        Raises:
            ValidationError: If both sides name the same account, or
                ``amount`` differs from ``quantity`` times ``price``
        """
        if debit_account_id == credit_account_id:
            raise ValidationError("Debit and credit accounts must differ")
        if price is not None and not within_tolerance(amount, quantity * price):
            raise ValidationError(
                f"Amount {amount} does not match quantity {quantity} x price {price}"
            )
        postings = []
        legs = [(debit_account_id, EntrySide.DEBIT), (credit_account_id, EntrySide.CREDIT)]
        for line_number, (account_id, side) in enumerate(legs, start=1):
            account = self.accounts.require_account(account_id)
            holds_units = is_investment_account(account)
            postings.append(
                Posting(
                    account_id=account_id,
                    entry_side=side,
                    amount=amount,
                    quantity=quantity if holds_units else Decimal("1"),
                    price=price if holds_units else None,
                    line_number=line_number,
                )
            )
        return self.post_postings(
            description,
            transaction_date,
            postings,
            reference_number=reference_number,
            notes=notes,
            tags=tags,
        )

    def post_split(
        self,
        description: str,
        transaction_date: date,
        primary: Posting,
        splits: Sequence[Posting],
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Sequence[str] = (),
    ) -> int:
        """Post a split transaction: one primary line against several opposite lines.

        Raises:
            InvalidSplitError: If the split fails validation
        """
        postings = convert_split_to_entries(primary, splits)
        return self.post_postings(
            description,
            transaction_date,
            postings,
            reference_number=reference_number,
            notes=notes,
            tags=tags,
            is_split=True,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Transactions of other owners are treated as missing.
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None or txn.owner_id != self.owner_id:
            return None
        return txn

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        txn = self.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        description: Optional[str] = None,
        reference_number: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update descriptive fields. Entries cannot be changed after posting.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the new description is empty
        """
        self.require_transaction(transaction_id)
        if description is not None and not description.strip():
            raise ValidationError("Transaction description cannot be empty")
        self.db.update_transaction(
            transaction_id,
            description=description.strip() if description is not None else None,
            reference_number=reference_number,
            notes=notes,
        )

    def tag_transaction(self, transaction_id: int, tag_name: str) -> None:
        """Attach a tag to a transaction, creating the tag on first use."""
        self.require_transaction(transaction_id)
        tag = TagService(self.db, owner_id=self.owner_id).get_or_create_tag(tag_name)
        self.db.add_transaction_tag(transaction_id, tag.id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        search: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            account_id: Only transactions touching this account
            search: Text matched against description, notes, reference and
                entry descriptions
            tag: Only transactions carrying this tag

        Raises:
            NotFoundError: If the tag doesn't exist
        """
        tag_id = None
        if tag is not None:
            tag_id = TagService(self.db, owner_id=self.owner_id).require_tag(tag).id
        return self.db.list_transactions(
            owner_id=self.owner_id,
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            search=search,
            tag_id=tag_id,
        )

    def get_transaction_kind(self, transaction: TransactionEntity) -> TransactionKind:
        accounts = {
            acc.id: acc for acc in self.accounts.list_accounts(include_inactive=True)
        }
        return classify_transaction(transaction.entries, accounts)
