"""Utility for resolving account references to IDs."""

from finledger.domain.account import AccountService
from finledger.domain.errors import NotFoundError, ValidationError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account ID, code or name to an account ID.

    Names and codes match case-insensitively. A name shared by several
    accounts (under different parents) must be given by ID or code instead.

    Args:
        account_service: AccountService instance
        account: Account ID (int or numeric string), code or name

    Returns:
        Account ID

    Raises:
        NotFoundError: If no visible account matches
        ValidationError: If a name matches more than one account
    """
    if isinstance(account, int) or str(account).strip().isdigit():
        return account_service.require_account(int(account)).id

    wanted = str(account).strip().casefold()
    accounts = account_service.list_accounts(include_inactive=True)

    for acc in accounts:
        if acc.code and acc.code.casefold() == wanted:
            return acc.id

    matches = [acc for acc in accounts if acc.name.casefold() == wanted]
    if len(matches) > 1:
        ids = ", ".join(str(acc.id) for acc in matches)
        raise ValidationError(f"Account name '{account}' is ambiguous (IDs {ids}); use an ID or code")
    if not matches:
        raise NotFoundError(f"Account '{account}' not found")
    return matches[0].id
