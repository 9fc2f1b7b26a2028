"""Transaction management commands."""

import click

from budgetbook.cli.category_resolution import resolve_category_or_exit
from budgetbook.cli.date_filters import resolve_cli_month
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import TransactionType
from budgetbook.domain.errors import DomainError
from budgetbook.domain.patches import UNSET, TransactionPatch
from budgetbook.domain.transaction import TransactionService
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.date_parser import get_month_range, parse_date
from budgetbook.utils.formatting import format_currency


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--search", help="Only transactions whose description contains this text")
@click.option("--category", help="Category name or ID")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["all", "expense", "income"], case_sensitive=False),
    default="all",
    show_default=True,
    help="Transaction type",
)
@click.option("--month", help="Only transactions in this month (e.g., 2024-03)")
@click.pass_context
def list_transactions(
    ctx, search: str | None, category: str | None, transaction_type: str, month: str | None
):
    """View transactions with optional filters."""
    store = ctx.obj["store"]
    service = TransactionService(store)
    category_service = CategoryService(store)

    category_id = None
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, category).id

    type_filter = None
    if transaction_type.lower() != "all":
        type_filter = TransactionType(transaction_type.lower())

    start = end = None
    if month:
        start, end = get_month_range(resolve_cli_month(ctx, month=month))

    transactions = service.list_transactions(
        search=search,
        category_id=category_id,
        type=type_filter,
        start_date=start,
        end_date=end,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<14} {'Date':<12} {'Type':<8} {'Amount':>14}  {'Category':<20} {'Description':<28}"
    )
    click.echo("-" * 100)

    for txn in transactions:
        category_name = category_service.category_name(txn.category_id)
        click.echo(
            f"{txn.id:<14} {str(txn.date):<12} {txn.type.value:<8} "
            f"{format_currency(txn.amount):>14}  {category_name[:20]:<20} {txn.description[:28]:<28}"
        )

    totals = service.totals(transactions)
    net_sign = "+" if totals.net >= 0 else "-"
    click.echo("-" * 100)
    click.echo(
        f"{'TOTAL':<14} Income: {format_currency(totals.income)} | "
        f"Expenses: {format_currency(totals.expenses)} | "
        f"Net: {net_sign}{format_currency(totals.net)} | Count: {len(transactions)}"
    )


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--amount", help="Transaction amount")
@click.option("--category", help="Category name or ID")
@click.option("--description", help="Transaction description")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["expense", "income"], case_sensitive=False),
    help="Transaction type",
)
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    amount: str | None,
    category: str | None,
    description: str | None,
    date: str | None,
    transaction_type: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        budgetbook transaction update 3f2a9c1b7d4e --amount 75.00
        budgetbook transaction update 3f2a9c1b7d4e --category Groceries --type expense
    """
    store = ctx.obj["store"]
    transaction_service = TransactionService(store)
    category_service = CategoryService(store)

    category_id = UNSET
    if category is not None:
        category_id = resolve_category_or_exit(ctx, category_service, category).id

    txn_date = UNSET
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = UNSET
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    patch = TransactionPatch(
        amount=txn_amount,
        category_id=category_id,
        description=description if description is not None else UNSET,
        date=txn_date,
        type=transaction_type if transaction_type is not None else UNSET,
    )

    try:
        transaction_service.update_transaction(transaction_id, patch)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction."""
    transaction_service = TransactionService(ctx.obj["store"])

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
