"""Main CLI entry point."""

import logging
import sys
from datetime import datetime

import click

from budgetbook.database.factories import DB_PATH_ENV_VAR, create_sqlite_database
from budgetbook.domain.scheduler import RecurringPaymentScheduler
from budgetbook.domain.store import EntityStore

# Import and register all commands at module level
from budgetbook.cli.commands import (
    add,
    category,
    clear,
    init_categories,
    recurring,
    report,
    summary,
    transaction,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure root logging for a CLI run.

    Args:
        level: Logging level (WARNING by default, INFO with --verbose, DEBUG with --debug)
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("--verbose", "-v", is_flag=True, help="Log informational messages")
@click.option("--debug", is_flag=True, help="Log debug messages")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool, debug: bool):
    """Budgetbook - Personal budget tracking.

    Define categories with monthly budgets, record income and expenses,
    schedule recurring payments and review monthly summaries.
    """
    ctx.ensure_object(dict)

    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging()

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        store = EntityStore(db)
        store.load()

        # Due recurring payments are recorded on every load
        processed = RecurringPaymentScheduler(store).check(datetime.now())
        if processed:
            logger.info("Recorded %d recurring payment(s) on load", len(processed))

        ctx.obj["db"] = db
        ctx.obj["store"] = store
        ctx.obj["processed_on_load"] = processed


# Register all commands
category.register_commands(cli)
init_categories.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)
summary.register_commands(cli)
report.register_commands(cli)
clear.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
