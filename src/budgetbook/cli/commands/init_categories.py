"""Initialize suggested categories."""

import click

from budgetbook.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Add every suggested category that does not exist yet (zero budget)."""
    service = CategoryService(ctx.obj["store"])

    suggestions = service.available_suggestions()
    if not suggestions:
        click.echo("Suggested categories already exist.")
        return

    click.echo("Creating suggested categories...")

    created = 0
    errors = 0
    for name, _color, _icon in suggestions:
        try:
            service.quick_add(name)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} categories.")
    else:
        click.echo(f"Created {created} categories with {errors} errors.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
