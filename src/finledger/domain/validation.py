"""Transaction validation: the double-entry balance rule and split rules."""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Protocol, Sequence

from finledger.domain.entities import EntrySide, Posting, SplitValidationResult
from finledger.domain.errors import InvalidSplitError, UnbalancedTransactionError

TOLERANCE = Decimal("0.01")

SPLIT_REQUIRES_LEGS = "Split transaction must have at least one split entry"
SPLIT_AMOUNT_MISMATCH = "Primary entry amount must equal sum of split entries"
SPLIT_NON_POSITIVE = "All amounts must be greater than zero"
SPLIT_DUPLICATE_ACCOUNT = "Cannot use the same account multiple times in a split transaction"


class SidedAmount(Protocol):
    entry_side: EntrySide
    amount: Decimal


def within_tolerance(left: Decimal, right: Decimal) -> bool:
    """Return True when two totals differ by no more than one cent."""
    return abs(left - right) <= TOLERANCE


def side_totals(entries: Iterable[SidedAmount]) -> tuple[Decimal, Decimal]:
    """Return (debit total, credit total) for a set of entries."""
    debit_total = Decimal("0")
    credit_total = Decimal("0")
    for entry in entries:
        if EntrySide.parse(entry.entry_side) is EntrySide.DEBIT:
            debit_total += entry.amount
        else:
            credit_total += entry.amount
    return debit_total, credit_total


def validate_transaction(entries: Iterable[SidedAmount]) -> bool:
    """Return True if debits equal credits within tolerance."""
    debit_total, credit_total = side_totals(entries)
    return within_tolerance(debit_total, credit_total)


def require_balanced(entries: Iterable[SidedAmount]) -> None:
    """Raise UnbalancedTransactionError unless debits equal credits."""
    debit_total, credit_total = side_totals(entries)
    if not within_tolerance(debit_total, credit_total):
        raise UnbalancedTransactionError(debit_total, credit_total)


def calculate_transaction_total(entries: Iterable[SidedAmount]) -> Decimal:
    """Return the transaction total, i.e. the debit side of a balanced set."""
    debit_total, _ = side_totals(entries)
    return debit_total


def validate_split_transaction(
    primary: Posting, splits: Sequence[Posting]
) -> SplitValidationResult:
    """Check a split transaction against the split rules.

    Rules are checked in order and the first failure is reported:
    at least one split, every split on the side opposite the primary,
    primary amount equal to the split total, all amounts positive, and no
    account used twice.
    """
    if not splits:
        return SplitValidationResult(False, SPLIT_REQUIRES_LEGS)

    primary_side = EntrySide.parse(primary.entry_side)
    opposite = primary_side.opposite
    if any(EntrySide.parse(split.entry_side) is not opposite for split in splits):
        return SplitValidationResult(
            False,
            f"All split entries must be {opposite.value} when primary is {primary_side.value}",
        )

    split_total = sum((split.amount for split in splits), Decimal("0"))
    if not within_tolerance(primary.amount, split_total):
        return SplitValidationResult(False, SPLIT_AMOUNT_MISMATCH)

    if primary.amount <= 0 or any(split.amount <= 0 for split in splits):
        return SplitValidationResult(False, SPLIT_NON_POSITIVE)

    account_ids = [primary.account_id] + [split.account_id for split in splits]
    if len(set(account_ids)) != len(account_ids):
        return SplitValidationResult(False, SPLIT_DUPLICATE_ACCOUNT)

    return SplitValidationResult(True)


def convert_split_to_entries(primary: Posting, splits: Sequence[Posting]) -> list[Posting]:
    """Flatten a valid split into ordered postings.

    The primary leg becomes line 1 and the splits follow as lines 2..n in
    the order given.

    Raises:
        InvalidSplitError: If the split breaks any split rule
    """
    result = validate_split_transaction(primary, splits)
    if not result.is_valid:
        raise InvalidSplitError(result.error or "Invalid split transaction")

    postings = [replace(primary, entry_side=EntrySide.parse(primary.entry_side), line_number=1)]
    for index, split in enumerate(splits, start=2):
        postings.append(
            replace(split, entry_side=EntrySide.parse(split.entry_side), line_number=index)
        )
    return postings
