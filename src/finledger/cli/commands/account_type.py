"""Account type commands."""

import click
from finledger.cli.error_handling import handle_domain_error
from finledger.domain.account_type import AccountTypeService
from finledger.domain.entities import AccountCategory, EntrySide
from finledger.domain.errors import DomainError


@click.command("init-types")
@click.option("--force", is_flag=True, help="Add missing defaults even if types already exist")
@click.pass_context
def init_types(ctx, force: bool):
    """Initialize database with the default account types."""
    db = ctx.obj["db"]
    service = AccountTypeService(db)

    if service.list_account_types() and not force:
        click.echo("Account types already exist. Use --force to add missing defaults.")
        return

    created = service.seed_defaults()
    click.echo(f"Successfully created {created} account types.")


@click.group()
def type_group():
    """Manage account types."""
    pass


@type_group.command("list")
@click.pass_context
def list_types(ctx):
    """List all account types."""
    service = AccountTypeService(ctx.obj["db"])

    types = service.list_account_types()
    if not types:
        click.echo("No account types found. Run 'finledger init-types' first.")
        return

    click.echo("\nAccount types:")
    click.echo("-" * 60)
    for account_type in types:
        click.echo(
            f"ID: {account_type.id:3d} | {account_type.name:20s} | "
            f"{account_type.category.value:9s} | normal {account_type.normal_balance.value}"
        )


@type_group.command("create")
@click.argument("name")
@click.option(
    "--category",
    required=True,
    type=click.Choice([c.value for c in AccountCategory], case_sensitive=False),
    help="Account category",
)
@click.option(
    "--normal-balance",
    required=True,
    type=click.Choice([s.value for s in EntrySide], case_sensitive=False),
    help="Side that increases balances of this type",
)
@click.pass_context
def create_type(ctx, name: str, category: str, normal_balance: str):
    """Create a new account type.

    Examples:
        finledger type create "Crypto" --category ASSET --normal-balance DEBIT
    """
    service = AccountTypeService(ctx.obj["db"])
    try:
        type_id = service.create_account_type(name, category, normal_balance)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account type '{name}' (ID: {type_id})")


def register_commands(cli):
    """Register account type commands with main CLI."""
    cli.add_command(init_types)
    cli.add_command(type_group, name="type")
