"""Budget summary and dashboard commands."""

from datetime import date
from decimal import Decimal

import click

from budgetbook.cli.date_filters import resolve_cli_month
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import BudgetSummary, TransactionType
from budgetbook.domain.summary import SummaryService
from budgetbook.utils.formatting import format_currency, format_month


def _signed(amount: Decimal) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{format_currency(amount)}"


def _display_budget_summary(summary: BudgetSummary) -> None:
    """Print per-category figures followed by totals."""
    click.echo(f"{'Category':<28} {'Budget':>14} {'Spent':>14} {'Remaining':>15} {'Used':>8}")
    click.echo("-" * 84)
    for category in summary.category_summaries:
        flag = "  OVER" if category.is_over_budget else ""
        click.echo(
            f"{category.category_name[:28]:<28} {format_currency(category.budget):>14} "
            f"{format_currency(category.spent):>14} {_signed(category.remaining):>15} "
            f"{category.percentage_used:>7.1f}%{flag}"
        )
    click.echo("-" * 84)
    click.echo(
        f"{'TOTAL':<28} {format_currency(summary.total_budget):>14} "
        f"{format_currency(summary.total_spent):>14} {_signed(summary.remaining):>15}"
    )


@click.command("summary")
@click.option("--month", help="Month to summarise (e.g., 2024-03, 'last month')")
@click.option("--this-month", is_flag=True, help="Summarise the current month")
@click.option("--last-month", is_flag=True, help="Summarise the previous month")
@click.pass_context
def summary(ctx, month: str | None, this_month: bool, last_month: bool):
    """Show budget versus spending per category for a month."""
    store = ctx.obj["store"]
    selected = resolve_cli_month(ctx, month=month, this_month=this_month, last_month=last_month)

    if not CategoryService(store).list_categories():
        click.echo("No categories found. Run 'init-categories' or 'category create' first.")
        return

    click.echo(f"\nBudget summary for {format_month(selected)}\n")
    _display_budget_summary(SummaryService(store).budget_summary(selected))


@click.command("dashboard")
@click.option("--month", help="Month to analyse (e.g., 2024-03, 'last month')")
@click.option("--this-month", is_flag=True, help="Analyse the current month")
@click.option("--last-month", is_flag=True, help="Analyse the previous month")
@click.pass_context
def dashboard(ctx, month: str | None, this_month: bool, last_month: bool):
    """Show spending insights, top categories and recent transactions."""
    store = ctx.obj["store"]
    selected = resolve_cli_month(ctx, month=month, this_month=this_month, last_month=last_month)
    category_service = CategoryService(store)

    view = SummaryService(store).dashboard(selected, date.today())
    insights = view.insights
    summary_data = view.summary

    click.echo(f"\nDashboard for {format_month(view.month)}")
    click.echo("=" * 60)
    click.echo(f"Total budget:        {format_currency(summary_data.total_budget)}")
    click.echo(f"Total spent:         {format_currency(summary_data.total_spent)}")
    click.echo(f"Remaining:           {_signed(summary_data.remaining)}")
    click.echo(
        f"Previous month:      {format_currency(view.previous_summary.total_spent)} spent of "
        f"{format_currency(view.previous_summary.total_budget)}"
    )
    click.echo()
    click.echo(f"Budget health score: {insights.budget_health_score}/100")
    click.echo(f"Days elapsed:        {insights.days_elapsed} of {insights.total_days_in_month}")
    click.echo(f"Daily spending:      {format_currency(insights.daily_spending_rate)}")
    click.echo(f"Daily budget:        {format_currency(insights.daily_budget_rate)}")
    click.echo(f"Spending velocity:   {insights.spending_velocity:.2f}x")
    click.echo(f"Projected spending:  {format_currency(insights.projected_monthly_spending)}")
    pace = "over budget pace" if insights.is_over_spending else "within budget pace"
    click.echo(f"Trend:               {insights.spending_trend.value} ({pace})")

    if insights.top_spending_categories:
        click.echo("\nTop spending categories:")
        for category in insights.top_spending_categories:
            click.echo(
                f"  {category.category_name:<28} {format_currency(category.spent):>14} "
                f"of {format_currency(category.budget)} ({category.percentage_used:.0f}%)"
            )

    if view.recent_transactions:
        click.echo("\nRecent transactions:")
        for txn in view.recent_transactions:
            sign = "+" if txn.type == TransactionType.INCOME else "-"
            click.echo(
                f"  {str(txn.date):<12} {category_service.category_name(txn.category_id)[:20]:<20} "
                f"{txn.description[:28]:<28} {sign}{format_currency(txn.amount)}"
            )


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(dashboard)
