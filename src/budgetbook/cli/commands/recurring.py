"""Recurring payment commands."""

from datetime import date, datetime

import click

from budgetbook.cli.category_resolution import resolve_category_or_exit
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.category import CategoryService
from budgetbook.domain.errors import DomainError
from budgetbook.domain.patches import UNSET, RecurringPaymentPatch
from budgetbook.domain.recurring import RecurringPaymentService, next_occurrence
from budgetbook.domain.scheduler import RecurringPaymentScheduler
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.formatting import format_currency, format_date, ordinal


@click.group()
def recurring_group():
    """Manage recurring payments."""
    pass


@recurring_group.command("list")
@click.pass_context
def list_payments(ctx):
    """List recurring payments with their next occurrence."""
    store = ctx.obj["store"]
    service = RecurringPaymentService(store)
    category_service = CategoryService(store)

    payments = service.list_payments()
    if not payments:
        click.echo("No recurring payments found.")
        return

    today = date.today()
    click.echo(
        f"\n{'ID':<14} {'Day':<6} {'Amount':>14}  {'Category':<20} {'Next':<14} {'Status':<8} Description"
    )
    click.echo("-" * 110)
    for payment in sorted(payments, key=lambda p: p.recurrence_date):
        status = "active" if payment.is_active else "paused"
        next_date = format_date(next_occurrence(payment.recurrence_date, today)) if payment.is_active else "-"
        category_name = category_service.category_name(payment.category_id)
        click.echo(
            f"{payment.id:<14} {ordinal(payment.recurrence_date):<6} "
            f"{format_currency(payment.amount):>14}  {category_name[:20]:<20} "
            f"{next_date:<14} {status:<8} {payment.description}"
        )
    click.echo("-" * 110)
    click.echo(f"Monthly total (active): {format_currency(service.monthly_total())}")


@recurring_group.command("add")
@click.option("--amount", required=True, help="Amount charged each month")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--description", required=True, help="Description")
@click.option("--day", "recurrence_date", required=True, type=int, help="Day of month (1-31)")
@click.option("--inactive", is_flag=True, help="Create the payment paused")
@click.pass_context
def add_payment(ctx, amount: str, category: str, description: str, recurrence_date: int, inactive: bool):
    """Add a recurring payment."""
    store = ctx.obj["store"]
    service = RecurringPaymentService(store)
    category_obj = resolve_category_or_exit(ctx, CategoryService(store), category)

    try:
        payment = service.create_payment(
            amount=parse_amount(amount),
            category_id=category_obj.id,
            description=description,
            recurrence_date=recurrence_date,
            is_active=not inactive,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created recurring payment {payment.id}: {format_currency(payment.amount)} "
        f"on the {ordinal(payment.recurrence_date)} of each month"
    )


@recurring_group.command("update")
@click.argument("payment_id")
@click.option("--amount", help="Amount charged each month")
@click.option("--category", help="Category name or ID")
@click.option("--description", help="Description")
@click.option("--day", "recurrence_date", type=int, help="Day of month (1-31)")
@click.pass_context
def update_payment(
    ctx,
    payment_id: str,
    amount: str | None,
    category: str | None,
    description: str | None,
    recurrence_date: int | None,
):
    """Update a recurring payment. Only provided fields change."""
    store = ctx.obj["store"]
    service = RecurringPaymentService(store)

    category_id = UNSET
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(store), category).id

    try:
        patch = RecurringPaymentPatch(
            amount=parse_amount(amount) if amount is not None else UNSET,
            category_id=category_id,
            description=description if description is not None else UNSET,
            recurrence_date=recurrence_date if recurrence_date is not None else UNSET,
        )
        service.update_payment(payment_id, patch)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated recurring payment {payment_id}")


@recurring_group.command("toggle")
@click.argument("payment_id")
@click.pass_context
def toggle_payment(ctx, payment_id: str):
    """Pause an active payment or resume a paused one."""
    service = RecurringPaymentService(ctx.obj["store"])

    try:
        payment = service.toggle_active(payment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    state = "resumed" if payment.is_active else "paused"
    click.echo(f"Recurring payment {payment_id} {state}")


@recurring_group.command("delete")
@click.argument("payment_id")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_payment(ctx, payment_id: str, yes: bool):
    """Delete a recurring payment."""
    service = RecurringPaymentService(ctx.obj["store"])

    if service.get_payment(payment_id) is None:
        click.echo(f"Error: Recurring payment {payment_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete recurring payment {payment_id}?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_payment(payment_id)
    click.echo(f"Deleted recurring payment {payment_id}")


@recurring_group.command("process")
@click.pass_context
def process_payments(ctx):
    """Record any recurring payments due today."""
    scheduler = RecurringPaymentScheduler(ctx.obj["store"])

    # The load hook in the main group may already have recorded today's payments
    created = list(ctx.obj.get("processed_on_load", [])) + scheduler.check(datetime.now())
    if not created:
        click.echo("No recurring payments due today.")
        return

    for transaction in created:
        click.echo(
            f"Recorded {transaction.description}: {format_currency(transaction.amount)} "
            f"(transaction {transaction.id})"
        )


def register_commands(cli):
    """Register recurring payment commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
