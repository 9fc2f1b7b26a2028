"""Clear all stored data."""

import click


@click.command("clear")
@click.option("--yes", is_flag=True, help="Clear without asking for confirmation")
@click.pass_context
def clear_data(ctx, yes: bool):
    """Delete all categories, transactions and recurring payments."""
    if not yes and not click.confirm("This deletes all budget data. Continue?"):
        click.echo("Clear cancelled.")
        return

    ctx.obj["store"].clear()
    click.echo("All data cleared.")


def register_commands(cli):
    """Register clear command with main CLI."""
    cli.add_command(clear_data)
