"""Turning service and parser errors into CLI exits."""

import logging

import click

from budgetbook.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: ValueError) -> None:
    """Print ``error`` to stderr and stop the command with exit status 1.

    Services raise DomainError subclasses; the amount and date parsers raise
    plain ValueError. Nothing is written to the store in either case.
    """
    kind = type(error).__name__ if isinstance(error, DomainError) else "InputError"
    logger.debug("%s failed with %s: %s", ctx.command_path, kind, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
