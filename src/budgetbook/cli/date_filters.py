"""CLI helpers for month selection."""

from datetime import date

import click
from dateutil.relativedelta import relativedelta

from budgetbook.utils.date_parser import parse_month


def resolve_cli_month(
    ctx: click.Context,
    *,
    month: str | None,
    this_month: bool = False,
    last_month: bool = False,
    today: date | None = None,
) -> date:
    """Resolve the selected month from --month or a period flag.

    Defaults to the current month. Returns the first day of the month.
    """
    today = today or date.today()
    flag_count = sum(1 for is_set in (this_month, last_month) if is_set)

    if flag_count > 1:
        click.echo("Error: Only one of --this-month and --last-month can be specified.", err=True)
        ctx.exit(1)

    if flag_count and month:
        click.echo("Error: --this-month/--last-month cannot be combined with --month.", err=True)
        ctx.exit(1)

    current = today.replace(day=1)
    if last_month:
        return current - relativedelta(months=1)
    if this_month or not month:
        return current

    try:
        return parse_month(month, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid month: {e}", err=True)
        ctx.exit(1)
