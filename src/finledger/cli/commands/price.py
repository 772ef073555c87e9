"""Price commands."""

import click
from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.formatting import format_amount
from finledger.domain.account import AccountService
from finledger.domain.errors import DomainError
from finledger.domain.price import PriceService
from finledger.utils.amount_parser import parse_amount
from finledger.utils.date_parser import parse_date


@click.group()
def price_group():
    """Record and list investment prices."""
    pass


@price_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.argument("price")
@click.option("--date", "price_date", default="today", show_default=True, help="Price date")
@click.option("--notes", help="Notes")
@click.pass_context
def add_price(ctx, account: str, price: str, price_date: str, notes: str | None):
    """Record the price of one unit of ACCOUNT.

    A second price for the same date replaces the first.

    Examples:
        finledger price add "ACME" 120.50
        finledger price add 7 98.10 --date 2024-03-31
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    account_id = resolve_account_or_exit(ctx, AccountService(db, owner_id=owner_id), account)

    try:
        unit_price = parse_amount(price)
        observed_on = parse_date(price_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    try:
        PriceService(db, owner_id=owner_id).record_price(account_id, unit_price, observed_on, notes=notes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded price {format_amount(unit_price)} for account {account_id} on {observed_on}")


@price_group.command("list")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def list_prices(ctx, account: str):
    """List recorded prices of ACCOUNT, newest first."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    account_id = resolve_account_or_exit(ctx, AccountService(db, owner_id=owner_id), account)

    prices = PriceService(db, owner_id=owner_id).list_prices(account_id)
    if not prices:
        click.echo("No prices found.")
        return

    click.echo(f"\n{'Date':<12} {'Price':>14}  Notes")
    click.echo("-" * 60)
    for record in prices:
        click.echo(f"{str(record.price_date):<12} {format_amount(record.price):>14}  {record.notes or ''}")


def register_commands(cli):
    """Register price commands with main CLI."""
    cli.add_command(price_group, name="price")
