"""Yearly report command."""

from datetime import date
from decimal import Decimal

import click

from budgetbook.domain.summary import SummaryService
from budgetbook.utils.formatting import format_currency


@click.command("report")
@click.option("--year", type=int, help="Calendar year (defaults to the current year)")
@click.option("--top", default=10, show_default=True, help="Number of categories to show")
@click.pass_context
def report(ctx, year: int | None, top: int):
    """Show monthly income and expenses for a year and the biggest categories."""
    service = SummaryService(ctx.obj["store"])
    year = year or date.today().year

    monthly = service.monthly_totals(year)

    click.echo(f"\nMonthly totals for {year}")
    click.echo(f"{'Month':<10} {'Income':>14} {'Expenses':>14} {'Net':>15}")
    click.echo("-" * 56)
    for row in monthly:
        net_str = ("-" if row.net < 0 else "+") + format_currency(row.net)
        click.echo(
            f"{row.month.strftime('%b'):<10} {format_currency(row.income):>14} "
            f"{format_currency(row.expenses):>14} {net_str:>15}"
        )

    total_income = sum((row.income for row in monthly), Decimal("0"))
    total_expenses = sum((row.expenses for row in monthly), Decimal("0"))
    total_net = total_income - total_expenses
    click.echo("-" * 56)
    click.echo(
        f"{'TOTAL':<10} {format_currency(total_income):>14} {format_currency(total_expenses):>14} "
        f"{('-' if total_net < 0 else '+') + format_currency(total_net):>15}"
    )

    spending = service.category_spending(limit=top)
    if spending:
        click.echo("\nSpending by category (all time):")
        for item in spending:
            label = f"{item.icon} {item.category_name}" if item.icon else item.category_name
            click.echo(f"  {label:<30} {format_currency(item.amount):>14}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
