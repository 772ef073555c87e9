"""Commands for posting transactions."""

from decimal import Decimal

import click
from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.domain.account import AccountService
from finledger.domain.entities import EntrySide, Posting
from finledger.domain.errors import DomainError
from finledger.domain.transaction import TransactionService
from finledger.utils.amount_parser import parse_amount, parse_positive_amount
from finledger.utils.date_parser import parse_date


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str) -> Decimal:
    try:
        return parse_positive_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@click.command("add")
@click.option(
    "--date",
    "txn_date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", required=True, help="Transaction description")
@click.option("--debit", required=True, help="Account debited (name, code or ID)")
@click.option("--credit", required=True, help="Account credited (name, code or ID)")
@click.option("--amount", help="Transaction amount; defaults to quantity x price")
@click.option("--quantity", help="Units bought or sold, for investment accounts")
@click.option("--price", help="Price per unit, for investment accounts")
@click.option("--reference", help="Reference number")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag name (repeatable)")
@click.pass_context
def add_transaction(
    ctx,
    txn_date: str,
    description: str,
    debit: str,
    credit: str,
    amount: str | None,
    quantity: str | None,
    price: str | None,
    reference: str | None,
    notes: str | None,
    tags: tuple[str, ...],
):
    """Post a transaction that moves an amount from one account to another.

    Examples:
        finledger add --date today --description "Salary" --debit Bank --credit Salary --amount 5000
        finledger add --date 2024-01-15 --description "Buy ACME" --debit ACME --credit Bank --quantity 10 --price 100
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    account_service = AccountService(db, owner_id=owner_id)
    transaction_service = TransactionService(db, owner_id=owner_id)

    debit_id = resolve_account_or_exit(ctx, account_service, debit)
    credit_id = resolve_account_or_exit(ctx, account_service, credit)
    posted_on = _parse_date_or_exit(ctx, txn_date)

    units = _parse_amount_or_exit(ctx, quantity) if quantity is not None else Decimal("1")
    unit_price = _parse_amount_or_exit(ctx, price) if price is not None else None
    if amount is not None:
        txn_amount = _parse_amount_or_exit(ctx, amount)
    elif quantity is not None and unit_price is not None:
        txn_amount = units * unit_price
    else:
        click.echo("Error: Provide --amount, or both --quantity and --price", err=True)
        ctx.exit(1)

    try:
        transaction_id = transaction_service.post_transaction(
            description=description,
            transaction_date=posted_on,
            debit_account_id=debit_id,
            credit_account_id=credit_id,
            amount=txn_amount,
            quantity=units,
            price=unit_price,
            reference_number=reference,
            notes=notes,
            tags=tags,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Posted transaction {transaction_id} for {txn_amount:,.2f}")


def _parse_split(ctx, account_service: AccountService, split_text: str, side: EntrySide) -> Posting:
    account_ref, separator, rest = split_text.rpartition("=")
    if not separator or not account_ref:
        click.echo(f"Error: Invalid split '{split_text}', expected ACCOUNT=AMOUNT", err=True)
        ctx.exit(1)
    amount_text, _, line_description = rest.partition(":")
    try:
        amount = parse_amount(amount_text)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    return Posting(
        account_id=resolve_account_or_exit(ctx, account_service, account_ref),
        entry_side=side,
        amount=amount,
        description=line_description.strip() or None,
    )


@click.command("split")
@click.option(
    "--date",
    "txn_date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", required=True, help="Transaction description")
@click.option("--account", "primary_account", required=True, help="Primary account (name, code or ID)")
@click.option(
    "--side",
    type=click.Choice(["DEBIT", "CREDIT"], case_sensitive=False),
    default="CREDIT",
    show_default=True,
    help="Side of the primary account",
)
@click.option("--amount", help="Primary amount; defaults to the sum of the splits")
@click.option(
    "--split",
    "splits",
    multiple=True,
    required=True,
    help="Split line as ACCOUNT=AMOUNT or ACCOUNT=AMOUNT:description (repeatable)",
)
@click.option("--reference", help="Reference number")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag name (repeatable)")
@click.pass_context
def split_transaction(
    ctx,
    txn_date: str,
    description: str,
    primary_account: str,
    side: str,
    amount: str | None,
    splits: tuple[str, ...],
    reference: str | None,
    notes: str | None,
    tags: tuple[str, ...],
):
    """Post one primary line against several lines on the opposite side.

    Examples:
        finledger split --date today --description "Supermarket" --account "Credit Card" \\
            --split Groceries=80 --split "Household=20:cleaning"
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    account_service = AccountService(db, owner_id=owner_id)
    transaction_service = TransactionService(db, owner_id=owner_id)

    posted_on = _parse_date_or_exit(ctx, txn_date)
    primary_side = EntrySide.parse(side)
    split_lines = [
        _parse_split(ctx, account_service, split_text, primary_side.opposite)
        for split_text in splits
    ]

    if amount is not None:
        try:
            primary_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    else:
        primary_amount = sum((line.amount for line in split_lines), Decimal("0"))

    primary = Posting(
        account_id=resolve_account_or_exit(ctx, account_service, primary_account),
        entry_side=primary_side,
        amount=primary_amount,
    )

    try:
        transaction_id = transaction_service.post_split(
            description=description,
            transaction_date=posted_on,
            primary=primary,
            splits=split_lines,
            reference_number=reference,
            notes=notes,
            tags=tags,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Posted split transaction {transaction_id} with {len(split_lines)} split(s) "
        f"for {primary_amount:,.2f}"
    )


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(add_transaction)
    cli.add_command(split_transaction)
