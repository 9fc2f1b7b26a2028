"""Category management commands."""

import click

from budgetbook.cli.category_resolution import resolve_category_or_exit
from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.category import CategoryService
from budgetbook.domain.errors import DomainError
from budgetbook.domain.patches import UNSET, CategoryPatch
from budgetbook.utils.amount_parser import parse_amount
from budgetbook.utils.formatting import format_currency


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with their monthly budgets."""
    service = CategoryService(ctx.obj["store"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to add the suggested categories.")
        return

    click.echo(f"\n{'ID':<14} {'Name':<28} {'Budget':>14}  {'Color':<8}")
    click.echo("-" * 68)
    for category in categories:
        name = f"{category.icon} {category.name}" if category.icon else category.name
        click.echo(
            f"{category.id:<14} {name:<28} {format_currency(category.budget):>14}  {category.color:<8}"
        )
    click.echo("-" * 68)
    click.echo(f"{'TOTAL':<14} {'':<28} {format_currency(service.total_budget()):>14}")


@category_group.command("create")
@click.argument("name")
@click.option("--budget", default="0", show_default=True, help="Monthly budget")
@click.option("--color", help="Display colour (e.g., '#4CAF50'); random if omitted")
@click.option("--icon", help="Display icon")
@click.pass_context
def create_category(ctx, name: str, budget: str, color: str | None, icon: str | None):
    """Create a new category."""
    service = CategoryService(ctx.obj["store"])

    try:
        category = service.create_category(
            name=name, budget=parse_amount(budget), color=color, icon=icon
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(
        f"Created category '{category.name}' with budget {format_currency(category.budget)} "
        f"(ID: {category.id})"
    )


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--budget", help="New monthly budget")
@click.option("--color", help="New display colour")
@click.option("--icon", help="New icon (empty string to clear)")
@click.pass_context
def update_category(
    ctx,
    category: str,
    name: str | None,
    budget: str | None,
    color: str | None,
    icon: str | None,
):
    """Update a category given by ID or name.

    Only the options that are provided are changed.
    """
    service = CategoryService(ctx.obj["store"])
    target = resolve_category_or_exit(ctx, service, category)

    try:
        patch = CategoryPatch(
            name=name if name is not None else UNSET,
            budget=parse_amount(budget) if budget is not None else UNSET,
            color=color if color is not None else UNSET,
            icon=icon if icon is not None else UNSET,
        )
        updated = service.update_category(target.id, patch)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated category '{updated.name}' (ID: {updated.id})")


@category_group.command("delete")
@click.argument("category")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category given by ID or name.

    Transactions in the category are kept and shown as uncategorized.
    """
    service = CategoryService(ctx.obj["store"])
    target = resolve_category_or_exit(ctx, service, category)

    if not yes and not click.confirm(f"Are you sure you want to delete category '{target.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_category(target.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted category '{target.name}'")


@category_group.command("suggestions")
@click.pass_context
def list_suggestions(ctx):
    """List suggested categories that have not been added yet."""
    service = CategoryService(ctx.obj["store"])

    suggestions = service.available_suggestions()
    if not suggestions:
        click.echo("All suggested categories have been added.")
        return

    for name, _color, icon in suggestions:
        click.echo(f"  {icon} {name}")


@category_group.command("quick-add")
@click.argument("name")
@click.pass_context
def quick_add(ctx, name: str):
    """Add a suggested category with a zero budget."""
    service = CategoryService(ctx.obj["store"])

    try:
        category = service.quick_add(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
