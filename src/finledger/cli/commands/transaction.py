"""Transaction management commands."""

import click
from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.date_filters import period_options, resolve_cli_date_range
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.formatting import format_amount
from finledger.domain.account import AccountService
from finledger.domain.errors import DomainError
from finledger.domain.transaction import TransactionService, classify_transaction


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.option("--account", help="Only transactions touching this account (name, code or ID)")
@click.option("--search", help="Text to find in descriptions, notes and references")
@click.option("--tag", help="Only transactions with this tag")
@click.option("--verbose", "-v", is_flag=True, help="Show entries, notes, reference and tags")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    periods: tuple[str, ...],
    account: str | None,
    search: str | None,
    tag: str | None,
    verbose: bool,
):
    """View transactions with optional filters."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = TransactionService(db, owner_id=owner_id)
    account_service = AccountService(db, owner_id=owner_id)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, periods=periods
    )

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    try:
        transactions = service.list_transactions(
            start_date=start, end_date=end, account_id=account_id, search=search, tag=tag
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc for acc in account_service.list_accounts(include_inactive=True)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Date':<12} {'Kind':<10} {'Amount':>14}  {'Description':<40}")
    click.echo("-" * 100)
    for txn in transactions:
        kind = classify_transaction(txn.entries, accounts).value
        description = txn.description[:40]
        click.echo(
            f"{txn.id:<6} {str(txn.transaction_date):<12} {kind:<10} "
            f"{format_amount(txn.total_amount):>14}  {description:<40}"
        )
        if verbose:
            for entry in txn.entries:
                acc = accounts.get(entry.account_id)
                name = acc.name if acc else f"#{entry.account_id}"
                click.echo(
                    f"{'':<6} {entry.line_number:>3} {entry.entry_side.value:<6} "
                    f"{name:<30} {format_amount(entry.amount):>14}"
                )
            if txn.reference_number:
                click.echo(f"{'':<6} Reference: {txn.reference_number}")
            if txn.notes:
                click.echo(f"{'':<6} Notes: {txn.notes}")
            if txn.tags:
                click.echo(f"{'':<6} Tags: {', '.join(t.name for t in txn.tags)}")

    click.echo("-" * 100)
    total = sum(txn.total_amount for txn in transactions)
    click.echo(f"{'TOTAL':<6} Count: {len(transactions)} | Amount: {format_amount(total)}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a transaction with all of its entries."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = TransactionService(db, owner_id=owner_id)

    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    accounts = {
        acc.id: acc
        for acc in AccountService(db, owner_id=owner_id).list_accounts(include_inactive=True)
    }

    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.transaction_date}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Kind: {classify_transaction(txn.entries, accounts).value}")
    click.echo(f"  Total: {format_amount(txn.total_amount)}")
    if txn.is_split:
        click.echo("  Split: yes")
    if txn.reference_number:
        click.echo(f"  Reference: {txn.reference_number}")
    if txn.notes:
        click.echo(f"  Notes: {txn.notes}")
    if txn.tags:
        click.echo(f"  Tags: {', '.join(t.name for t in txn.tags)}")
    click.echo("  Entries:")
    for entry in txn.entries:
        acc = accounts.get(entry.account_id)
        name = acc.name if acc else f"#{entry.account_id}"
        line = (
            f"    {entry.line_number:>3} {entry.entry_side.value:<6} {name:<30} "
            f"{format_amount(entry.amount):>14}"
        )
        if entry.quantity != 1 or entry.price is not None:
            line += f"  ({entry.quantity} @ {format_amount(entry.price)})"
        if entry.description:
            line += f"  {entry.description}"
        click.echo(line)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--description", help="Transaction description")
@click.option("--reference", help="Reference number")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag to attach (repeatable)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    description: str | None,
    reference: str | None,
    notes: str | None,
    tags: tuple[str, ...],
) -> None:
    """Update a transaction's description, reference, notes or tags.

    Entries cannot be changed once posted; post a correcting transaction instead.

    Examples:
        finledger transaction update 1 --notes "Paid in cash"
        finledger transaction update 1 --tag holiday
    """
    service = TransactionService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])

    try:
        service.update_transaction(
            transaction_id,
            description=description,
            reference_number=reference,
            notes=notes,
        )
        for tag in tags:
            service.tag_transaction(transaction_id, tag)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
