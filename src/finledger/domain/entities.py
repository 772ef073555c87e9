"""Domain model entities for finledger.

These are pure data classes representing ledger concepts, independent of
database schema. Rows are converted into these objects once, at the
persistence boundary, so the calculators never see ORM rows or dicts.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountCategory(str, Enum):
    """Top-level classification of an account type."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    SYSTEM = "SYSTEM"

    @classmethod
    def parse(cls, value: str) -> "AccountCategory":
        """Parse a category name, case-insensitively."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown account category '{value}'. Expected one of: {allowed}")


class EntrySide(str, Enum):
    """Side of a ledger line."""

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    @classmethod
    def parse(cls, value: "str | EntrySide") -> "EntrySide":
        """Parse an entry side, accepting BUY/SELL as DEBIT/CREDIT aliases."""
        if isinstance(value, EntrySide):
            return value
        normalized = value.strip().upper()
        if normalized == "BUY":
            return cls.DEBIT
        if normalized == "SELL":
            return cls.CREDIT
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown entry side '{value}'. Expected DEBIT, CREDIT, BUY or SELL"
            )

    @property
    def opposite(self) -> "EntrySide":
        return EntrySide.CREDIT if self is EntrySide.DEBIT else EntrySide.DEBIT


class TransactionKind(str, Enum):
    """Display classification of a posted transaction."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


@dataclass(frozen=True)
class AccountType:
    """Account type reference data."""

    id: int
    name: str
    category: AccountCategory
    normal_balance: EntrySide
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Account:
    """Chart of accounts node.

    ``balance`` is the cached figure stored with the row and is informational
    only; authoritative balances are recomputed from entries.
    """

    id: int
    name: str
    account_type_id: Optional[int]
    account_type: Optional[AccountType] = None
    owner_id: Optional[str] = None
    parent_id: Optional[int] = None
    code: Optional[str] = None
    description: Optional[str] = None
    is_placeholder: bool = False
    is_active: bool = True
    balance: Decimal = Decimal("0")
    created_at: Optional[datetime] = None

    @property
    def category(self) -> Optional[AccountCategory]:
        return self.account_type.category if self.account_type else None

    @property
    def is_shared(self) -> bool:
        """Shared (system) accounts have no owner."""
        return self.owner_id is None


@dataclass(frozen=True)
class Posting:
    """Unsaved ledger line, as submitted for posting."""

    account_id: int
    entry_side: EntrySide
    amount: Decimal
    quantity: Decimal = Decimal("1")
    price: Optional[Decimal] = None
    line_number: int = 1
    description: Optional[str] = None


@dataclass(frozen=True)
class TransactionEntry:
    """Posted ledger line within a transaction."""

    id: int
    transaction_id: int
    account_id: int
    entry_side: EntrySide
    amount: Decimal
    quantity: Decimal = Decimal("1")
    price: Optional[Decimal] = None
    line_number: int = 1
    description: Optional[str] = None


@dataclass(frozen=True)
class Tag:
    """Free-form transaction label."""

    id: int
    name: str
    color: Optional[str] = None
    owner_id: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity with its posted entries."""

    id: int
    description: str
    transaction_date: date
    total_amount: Decimal
    owner_id: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    is_split: bool = False
    created_at: Optional[datetime] = None
    entries: tuple[TransactionEntry, ...] = ()
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class AccountPrice:
    """Mark-to-market observation for an investment account."""

    id: int
    account_id: int
    price: Decimal
    price_date: date
    owner_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class InvestmentValuation:
    """Market valuation of one investment holding.

    ``net_invested`` is the signed running total of money in minus money out;
    ``total_invested`` is the same figure clamped at zero and is the basis
    for gain figures.
    """

    units: Decimal
    net_invested: Decimal
    total_invested: Decimal
    price: Optional[Decimal]
    market_value: Decimal
    unrealized_gain: Decimal
    unrealized_gain_percentage: Decimal

    @property
    def has_price(self) -> bool:
        return self.price is not None


@dataclass(frozen=True)
class SplitValidationResult:
    """Outcome of validating a split transaction."""

    is_valid: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class BalanceSheetLine:
    """One account as it appears in a balance sheet section."""

    account: Account
    balance: Decimal
    market_value: Optional[Decimal] = None

    @property
    def reported_value(self) -> Decimal:
        """Market value when one is known, otherwise the ledger balance."""
        return self.market_value if self.market_value is not None else self.balance


@dataclass(frozen=True)
class BalanceSheetSection:
    """Accounts of one category plus their total."""

    lines: tuple[BalanceSheetLine, ...]
    total: Decimal
    current: tuple[BalanceSheetLine, ...] = ()
    non_current: tuple[BalanceSheetLine, ...] = ()


@dataclass(frozen=True)
class BalanceSheetReport:
    """Balance sheet with the accounting identity check."""

    assets: BalanceSheetSection
    liabilities: BalanceSheetSection
    equity: BalanceSheetSection
    income: BalanceSheetSection
    expenses: BalanceSheetSection
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal
    unrealized_gains: Decimal
    net_worth: Decimal
    is_balanced: bool
    unavailable: tuple[Account, ...] = ()


@dataclass(frozen=True)
class IncomeStatement:
    """Income and expense totals for a set of accounts."""

    income: BalanceSheetSection
    expenses: BalanceSheetSection
    net_income: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for the dashboard."""

    total_balance: Decimal
    income: Decimal
    expenses: Decimal
    net_worth: Decimal
    assets: Decimal
    liabilities: Decimal
    total_investments: Decimal
    stocks: Decimal
    mutual_funds: Decimal


@dataclass
class AccountNode:
    """Account tree node with its direct children.

    ``balance`` is None when the account's balance cannot be computed.
    """

    account: Account
    balance: Optional[Decimal] = Decimal("0")
    children: list["AccountNode"] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.account.id

    @property
    def name(self) -> str:
        return self.account.name

    @property
    def is_leaf(self) -> bool:
        return not self.children
