"""Account management commands."""

import click
from finledger.cli.account_resolution import resolve_account_or_exit
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.formatting import format_amount
from finledger.domain.account import AccountService
from finledger.domain.balances import is_investment_account
from finledger.domain.errors import DomainError
from finledger.domain.hierarchy import rollup_balance, walk
from finledger.domain.report import ReportService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", required=True, help="Account type name or ID")
@click.option("--parent", help="Parent account name, code or ID")
@click.option("--code", help="Account code")
@click.option("--description", help="Description")
@click.option("--placeholder", is_flag=True, help="Organisational account that takes no postings")
@click.pass_context
def create_account(
    ctx,
    name: str,
    account_type: str,
    parent: str | None,
    code: str | None,
    description: str | None,
    placeholder: bool,
):
    """Create a new account.

    Examples:
        finledger account create "Savings" --type Bank
        finledger account create "Groceries" --type Expenses --parent "Household"
        finledger account create "Investments" --type Assets --placeholder
    """
    service = AccountService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent)

    try:
        account_id = service.create_account(
            name=name,
            account_type=account_type,
            parent_id=parent_id,
            code=code,
            description=description,
            is_placeholder=placeholder,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated accounts")
@click.option("--tree", is_flag=True, help="Show the account hierarchy with rolled-up balances")
@click.pass_context
def list_accounts(ctx, include_inactive: bool, tree: bool):
    """List accounts with their balances."""
    service = AccountService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])

    if tree:
        try:
            roots = service.get_account_tree(include_inactive=include_inactive)
        except DomainError as e:
            handle_domain_error(ctx, e)
        if not roots:
            click.echo("No accounts found.")
            return
        click.echo("\nAccounts:")
        click.echo("-" * 60)
        for node, depth in walk(roots):
            balance = rollup_balance(node)
            label = "  " * depth + node.name
            click.echo(f"{label:40s} {format_amount(balance):>15s}")
        return

    accounts = service.list_accounts(include_inactive=include_inactive)
    if not accounts:
        click.echo("No accounts found.")
        return

    balances, _ = ReportService(
        ctx.obj["db"], owner_id=ctx.obj["owner_id"]
    ).account_balances(include_inactive=include_inactive)

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        type_name = acc.account_type.name if acc.account_type else "?"
        flags = ""
        if acc.is_placeholder:
            flags += " [placeholder]"
        if not acc.is_active:
            flags += " [inactive]"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {type_name:15s} | "
            f"{format_amount(balances.get(acc.id)):>15s}{flags}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show account details, balance and investment valuation.

    ACCOUNT can be an account name, code or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db, owner_id=ctx.obj["owner_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    click.echo(f"Account ID: {acc.id}")
    click.echo(f"  Name: {acc.name}")
    click.echo(f"  Type: {acc.account_type.name if acc.account_type else 'unavailable'}")
    if acc.code:
        click.echo(f"  Code: {acc.code}")
    if acc.parent_id is not None:
        parent = service.get_account(acc.parent_id)
        click.echo(f"  Parent: {parent.name if parent else acc.parent_id}")
    if acc.description:
        click.echo(f"  Description: {acc.description}")
    click.echo(f"  Placeholder: {'yes' if acc.is_placeholder else 'no'}")
    click.echo(f"  Active: {'yes' if acc.is_active else 'no'}")

    reports = ReportService(db, owner_id=ctx.obj["owner_id"])
    balances, _ = reports.account_balances(include_inactive=True)
    click.echo(f"  Balance: {format_amount(balances.get(acc.id))}")

    if is_investment_account(acc):
        valuation = reports.investment_summary(acc.id)
        click.echo(f"  Units: {valuation.units}")
        click.echo(f"  Invested: {format_amount(valuation.total_invested)}")
        click.echo(f"  Latest price: {format_amount(valuation.price) if valuation.has_price else 'none'}")
        click.echo(f"  Market value: {format_amount(valuation.market_value)}")
        click.echo(
            f"  Unrealized gain: {format_amount(valuation.unrealized_gain)} "
            f"({valuation.unrealized_gain_percentage}%)"
        )


@account_group.command("edit")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New name")
@click.option("--code", help="New code")
@click.option("--description", help="New description")
@click.option("--parent", help="New parent account name, code or ID")
@click.option("--no-parent", is_flag=True, help="Move the account to the top level")
@click.option("--type", "account_type", help="New account type (only while the account has no entries)")
@click.option("--placeholder/--no-placeholder", default=None, help="Change the placeholder flag")
@click.pass_context
def edit_account(
    ctx,
    account: str,
    name: str | None,
    code: str | None,
    description: str | None,
    parent: str | None,
    no_parent: bool,
    account_type: str | None,
    placeholder: bool | None,
):
    """Edit an account.

    Examples:
        finledger account edit "Savings" --name "Emergency Fund"
        finledger account edit 7 --parent "Investments"
    """
    service = AccountService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])
    account_id = resolve_account_or_exit(ctx, service, account)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent)

    try:
        service.update_account(
            account_id,
            name=name,
            code=code,
            description=description,
            parent_id=parent_id,
            clear_parent=no_parent,
            account_type=account_type,
            is_placeholder=placeholder,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {account_id}")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str):
    """Deactivate an account so it no longer takes postings."""
    service = AccountService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    service.deactivate_account(account_id)
    click.echo(f"Deactivated account {account_id}")


@account_group.command("activate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def activate_account(ctx, account: str):
    """Reactivate a deactivated account."""
    service = AccountService(ctx.obj["db"], owner_id=ctx.obj["owner_id"])
    account_id = resolve_account_or_exit(ctx, service, account)
    service.activate_account(account_id)
    click.echo(f"Activated account {account_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
