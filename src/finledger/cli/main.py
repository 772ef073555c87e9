"""Main CLI entry point."""

import logging

import click
from finledger.database.factories import create_sqlite_database
from finledger.logging_config import configure_logging

# Import and register all commands at module level
from finledger.cli.commands import (
    account,
    account_type,
    add,
    price,
    report,
    tag,
    transaction,
)

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINLEDGER_DB_PATH environment variable)",
    envvar="FINLEDGER_DB_PATH",
)
@click.option(
    "--user",
    "owner_id",
    help="Owner whose ledger is used (overrides FINLEDGER_USER environment variable)",
    envvar="FINLEDGER_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, owner_id: str | None, verbose: bool):
    """Finledger - double-entry personal finance ledger.

    Keep accounts, post balanced transactions, record investment prices and
    produce balance sheets and income statements from the entry log.
    """
    ctx.ensure_object(dict)
    try:
        configure_logging(verbose=verbose)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["owner_id"] = owner_id
        ctx.call_on_close(db.disconnect)
        logger.debug("Running '%s' for owner %r", ctx.invoked_subcommand, owner_id)


# Register all commands
account_type.register_commands(cli)
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
price.register_commands(cli)
tag.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
