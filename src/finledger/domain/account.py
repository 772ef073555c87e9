"""Account domain service."""

import logging
from typing import Optional

from finledger.database.base import Database
from finledger.domain.account_type import AccountTypeService
from finledger.domain.balances import compute_balances
from finledger.domain.entities import Account as AccountEntity, AccountNode, AccountType
from finledger.domain.errors import (
    ConflictError,
    CyclicHierarchyError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_not_found,
    account_type_change_blocked,
    duplicate_account_name,
    placeholder_change_blocked,
)
from finledger.domain.hierarchy import build_hierarchy, find_cycle

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database, owner_id: Optional[str] = None):
        """Initialize account service.

        Args:
            db: Database instance
            owner_id: Owner whose accounts (plus shared ones) are visible
        """
        self.db = db
        self.owner_id = owner_id

    def _resolve_type(self, account_type: int | str) -> AccountType:
        return AccountTypeService(self.db).require_account_type(account_type)

    def _check_sibling_name(
        self, name: str, parent_id: Optional[int], exclude_id: Optional[int] = None
    ) -> None:
        for acc in self.db.list_accounts(owner_id=self.owner_id, include_inactive=True):
            if acc.id == exclude_id or acc.parent_id != parent_id:
                continue
            if acc.name.casefold() == name.casefold():
                raise ConflictError(duplicate_account_name(name))

    def create_account(
        self,
        name: str,
        account_type: int | str,
        parent_id: Optional[int] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        is_placeholder: bool = False,
    ) -> int:
        """Create a new account.

        Args:
            name: Account name, unique among its siblings
            account_type: Account type ID or name
            parent_id: Optional parent account ID
            code: Optional account code
            description: Optional description
            is_placeholder: True for organisational accounts that never carry postings

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is empty
            NotFoundError: If the account type or parent does not exist
            ConflictError: If a sibling already has this name
        """
        if not name or not name.strip():
            raise ValidationError("Account name cannot be empty")
        name = name.strip()
        resolved_type = self._resolve_type(account_type)
        if parent_id is not None:
            self.require_account(parent_id)
        self._check_sibling_name(name, parent_id)

        account_id = self.db.create_account(
            name=name,
            account_type_id=resolved_type.id,
            owner_id=self.owner_id,
            parent_id=parent_id,
            code=code,
            description=description,
            is_placeholder=is_placeholder,
        )
        logger.info("Created account %d '%s' (%s)", account_id, name, resolved_type.name)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Accounts owned by someone else are treated as missing.
        """
        account = self.db.get_account(account_id)
        if account is None:
            return None
        if account.owner_id is not None and account.owner_id != self.owner_id:
            return None
        return account

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, include_inactive: bool = False) -> list[AccountEntity]:
        """List visible accounts ordered by name."""
        return self.db.list_accounts(owner_id=self.owner_id, include_inactive=include_inactive)

    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        clear_parent: bool = False,
        account_type: Optional[int | str] = None,
        is_placeholder: Optional[bool] = None,
    ) -> None:
        """Update account fields.

        Raises:
            NotFoundError: If the account, new parent or new type does not exist
            ConflictError: If the new name clashes with a sibling
            DependencyError: If the type changes, or the account becomes a
                placeholder, while entries reference it
            CyclicHierarchyError: If the new parent would create a cycle
        """
        account = self.require_account(account_id)
        if clear_parent and parent_id is not None:
            raise ValidationError("Cannot set both parent_id and clear_parent")

        new_parent_id = account.parent_id
        if clear_parent:
            new_parent_id = None
        elif parent_id is not None:
            if parent_id == account_id:
                raise CyclicHierarchyError([account_id, account_id])
            self.require_account(parent_id)
            parent_map = {
                acc.id: acc.parent_id
                for acc in self.db.list_accounts(owner_id=self.owner_id, include_inactive=True)
            }
            parent_map[account_id] = parent_id
            cycle = find_cycle(parent_map)
            if cycle is not None:
                raise CyclicHierarchyError(cycle)
            new_parent_id = parent_id

        if name is not None or new_parent_id != account.parent_id:
            new_name = name.strip() if name is not None else account.name
            self._check_sibling_name(new_name, new_parent_id, exclude_id=account_id)

        account_type_id = None
        if account_type is not None:
            resolved_type = self._resolve_type(account_type)
            if resolved_type.id != account.account_type_id:
                entry_count = self.db.get_account_entry_count(account_id)
                if entry_count > 0:
                    raise DependencyError(account_type_change_blocked(account_id, entry_count))
                account_type_id = resolved_type.id

        if is_placeholder and not account.is_placeholder:
            entry_count = self.db.get_account_entry_count(account_id)
            if entry_count > 0:
                raise DependencyError(placeholder_change_blocked(account_id, entry_count))

        self.db.update_account(
            account_id=account_id,
            name=name.strip() if name is not None else None,
            code=code,
            description=description,
            parent_id=parent_id,
            clear_parent=clear_parent,
            account_type_id=account_type_id,
            is_placeholder=is_placeholder,
        )

    def deactivate_account(self, account_id: int) -> None:
        """Deactivate an account. Accounts are never deleted."""
        self.require_account(account_id)
        self.db.update_account(account_id=account_id, is_active=False)
        logger.info("Deactivated account %d", account_id)

    def activate_account(self, account_id: int) -> None:
        """Reactivate a deactivated account."""
        self.require_account(account_id)
        self.db.update_account(account_id=account_id, is_active=True)

    def get_account_tree(self, include_inactive: bool = False) -> list[AccountNode]:
        """Build the account tree with balances computed from the ledger."""
        accounts = self.list_accounts(include_inactive=include_inactive)
        entries = self.db.list_entries(account_ids=[acc.id for acc in accounts])
        balances, unavailable = compute_balances(accounts, entries)
        for acc in unavailable:
            logger.warning("Balance unavailable for account %d '%s'", acc.id, acc.name)
        return build_hierarchy(accounts, balances, unavailable=[acc.id for acc in unavailable])
