"""Report commands."""

from datetime import date

import click
from finledger.cli.date_filters import period_options, resolve_cli_date_range
from finledger.cli.error_handling import handle_domain_error
from finledger.cli.formatting import UNAVAILABLE, format_amount
from finledger.domain.entities import BalanceSheetLine, BalanceSheetSection
from finledger.domain.errors import DomainError
from finledger.domain.report import ReportService
from finledger.utils.date_parser import parse_date

NAME_WIDTH = 50
AMOUNT_WIDTH = 20


def _row(label: str, amount, indent: int = 0) -> None:
    indent_str = " " * (4 * indent)
    text = format_amount(amount) if not isinstance(amount, str) else amount
    click.echo(f"{indent_str}{label:<{NAME_WIDTH - 4 * indent}} {text:>{AMOUNT_WIDTH}}")


def _line_label(line: BalanceSheetLine) -> str:
    if line.market_value is not None and line.market_value != line.balance:
        return f"{line.account.name} (cost {format_amount(line.balance)})"
    return line.account.name


def _section(title: str, section: BalanceSheetSection, use_market_value: bool = False) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * (NAME_WIDTH + AMOUNT_WIDTH + 1))
    for line in section.lines:
        value = line.reported_value if use_market_value else abs(line.balance)
        _row(_line_label(line) if use_market_value else line.account.name, value, indent=1)
    _row(f"Total {title.lower()}", section.total)


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (YYYY-MM-DD or relative like 'last month'); defaults to today")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show assets, liabilities and equity, with investments at market value."""
    as_of_date = date.today()
    if as_of:
        try:
            as_of_date = parse_date(as_of)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    try:
        report = ReportService(ctx.obj["db"], owner_id=ctx.obj["owner_id"]).balance_sheet(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Balance sheet as of {as_of_date}")
    _section("Assets", report.assets, use_market_value=True)
    _section("Liabilities", report.liabilities)
    _section("Equity", report.equity)

    click.echo()
    _row("Net income", report.net_income)
    _row("Unrealized gains", report.unrealized_gains)
    _row("Net worth", report.net_worth)
    _row(
        "Liabilities + equity + gains + net income",
        report.total_liabilities + report.total_equity + report.unrealized_gains + report.net_income,
    )
    click.echo(f"\nBalanced: {'yes' if report.is_balanced else 'NO'}")

    if report.unavailable:
        click.echo("\nNot included (account type could not be resolved):")
        for acc in report.unavailable:
            _row(acc.name, UNAVAILABLE, indent=1)


@report_group.command("income")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@period_options
@click.pass_context
def income_statement(ctx, start_date: str | None, end_date: str | None, periods: tuple[str, ...]):
    """Show income, expenses and net income for a period."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, periods=periods
    )
    try:
        statement = ReportService(ctx.obj["db"], owner_id=ctx.obj["owner_id"]).income_statement(
            start, end
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    period = f"{start or 'beginning'} to {end or 'today'}"
    click.echo(f"Income statement, {period}")
    _section("Income", statement.income)
    _section("Expenses", statement.expenses)
    click.echo()
    _row("Net income", statement.net_income)


@report_group.command("dashboard")
@click.option("--start-date", help="Start date for income and expenses")
@click.option("--end-date", help="End date for income and expenses")
@period_options
@click.pass_context
def dashboard(ctx, start_date: str | None, end_date: str | None, periods: tuple[str, ...]):
    """Show headline figures: cash, income, expenses, net worth and investments."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, periods=periods
    )
    stats = ReportService(ctx.obj["db"], owner_id=ctx.obj["owner_id"]).dashboard_stats(start, end)

    _row("Total balance", stats.total_balance)
    _row("Income", stats.income)
    _row("Expenses", stats.expenses)
    _row("Assets", stats.assets)
    _row("Liabilities", stats.liabilities)
    _row("Net worth", stats.net_worth)
    _row("Investments", stats.total_investments)
    _row("Stocks", stats.stocks, indent=1)
    _row("Mutual funds", stats.mutual_funds, indent=1)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
