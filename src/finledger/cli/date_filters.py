"""CLI helpers for date range resolution."""

import functools
from datetime import date

import click

from finledger.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func):
    """Add one flag per named period (--this-month, --last-year, ...).

    The selected flags reach the command as a ``periods`` tuple.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        selected = tuple(p for p in PERIODS if kwargs.pop(p.replace("-", "_"), False))
        return func(*args, periods=selected, **kwargs)

    for period in reversed(list(PERIODS)):
        wrapper = click.option(
            f"--{period}", is_flag=True, help=f"Limit to {period.replace('-', ' ')}"
        )(wrapper)
    return wrapper


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    periods: tuple[str, ...] = (),
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    flags = ", ".join(f"--{name}" for name in PERIODS)
    if len(periods) > 1:
        click.echo(f"Error: Only one period option ({flags}) can be specified at a time.", err=True)
        ctx.exit(1)

    if periods and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if periods:
        return get_date_range(periods[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
