"""Add transaction command."""

import click

from budgetbook.cli.category_resolution import resolve_category_or_exit
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.category import CategoryService
from budgetbook.domain.transaction import TransactionService
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.date_parser import parse_date
from budgetbook.utils.formatting import format_currency


@click.command("add")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    category: str,
    description: str,
    date: str,
    transaction_type: str,
):
    """Add a transaction.

    Examples:
        budgetbook add --amount 450 --category Groceries --description "Weekly shop"
        budgetbook add --amount 50000 --category Savings --description Salary --type income
    """
    store = ctx.obj["store"]
    transaction_service = TransactionService(store)
    category_service = CategoryService(store)

    category_obj = resolve_category_or_exit(ctx, category_service, category)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction = transaction_service.create_transaction(
            amount=txn_amount,
            category_id=category_obj.id,
            description=description,
            date=txn_date,
            type=transaction_type,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction.id}")
    click.echo(f"  Date: {transaction.date}")
    click.echo(f"  Amount: {format_currency(transaction.amount)} ({transaction.type.value})")
    click.echo(f"  Category: {category_obj.name}")
    click.echo(f"  Description: {transaction.description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
