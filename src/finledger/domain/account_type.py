"""Account type domain service."""

import logging
from typing import Optional

from finledger.database.base import Database
from finledger.domain.entities import AccountCategory, AccountType, EntrySide
from finledger.domain.errors import ConflictError, NotFoundError, account_type_not_found

logger = logging.getLogger(__name__)

# Default account types: (name, category, normal balance)
DEFAULT_ACCOUNT_TYPES = [
    ("Assets", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Bank", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Cash", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Stock", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Mutual Fund", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Fixed Deposit", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Property", AccountCategory.ASSET, EntrySide.DEBIT),
    ("Liabilities", AccountCategory.LIABILITY, EntrySide.CREDIT),
    ("Credit Card", AccountCategory.LIABILITY, EntrySide.CREDIT),
    ("Loan", AccountCategory.LIABILITY, EntrySide.CREDIT),
    ("Equity", AccountCategory.EQUITY, EntrySide.CREDIT),
    ("Opening Balances", AccountCategory.EQUITY, EntrySide.CREDIT),
    ("Income", AccountCategory.INCOME, EntrySide.CREDIT),
    ("Expenses", AccountCategory.EXPENSE, EntrySide.DEBIT),
    ("System", AccountCategory.SYSTEM, EntrySide.DEBIT),
]


class AccountTypeService:
    """Service for managing account types."""

    def __init__(self, db: Database):
        """Initialize account type service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account_type(
        self, name: str, category: AccountCategory | str, normal_balance: EntrySide | str
    ) -> int:
        """Create an account type.

        Args:
            name: Type name, unique case-insensitively
            category: Account category
            normal_balance: Side that increases balances of this type

        Returns:
            Account type ID

        Raises:
            ConflictError: If the name is already taken
        """
        if not isinstance(category, AccountCategory):
            category = AccountCategory.parse(category)
        normal_balance = EntrySide.parse(normal_balance)
        if self.db.get_account_type_by_name(name) is not None:
            raise ConflictError(f"Account type '{name}' already exists")
        return self.db.create_account_type(name=name, category=category, normal_balance=normal_balance)

    def get_account_type(self, account_type_id: int) -> Optional[AccountType]:
        return self.db.get_account_type(account_type_id)

    def require_account_type(self, account_type: int | str) -> AccountType:
        """Resolve an account type by ID or name.

        Raises:
            NotFoundError: If no such type exists
        """
        found = None
        if isinstance(account_type, int) or str(account_type).isdigit():
            found = self.db.get_account_type(int(account_type))
        if found is None and isinstance(account_type, str):
            found = self.db.get_account_type_by_name(account_type)
        if found is None:
            raise NotFoundError(account_type_not_found(account_type))
        return found

    def list_account_types(self) -> list[AccountType]:
        return self.db.list_account_types()

    def seed_defaults(self) -> int:
        """Create any missing default account types.

        Returns:
            Number of types created
        """
        created = 0
        for name, category, normal_balance in DEFAULT_ACCOUNT_TYPES:
            if self.db.get_account_type_by_name(name) is not None:
                continue
            self.db.create_account_type(name=name, category=category, normal_balance=normal_balance)
            created += 1
        logger.info("Seeded %d default account types", created)
        return created
