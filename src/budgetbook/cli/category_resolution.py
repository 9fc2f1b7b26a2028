"""CLI helpers for resolving categories given by ID or name."""

from __future__ import annotations

import click

from budgetbook.domain import errors
from budgetbook.domain.category import CategoryService
from budgetbook.domain.entities import Category
from budgetbook.domain.errors import NotFoundError


def resolve_category(category_service: CategoryService, category: str) -> Category:
    """Resolve a category ID or name (case-insensitive) to a Category.

    Raises:
        NotFoundError: If no category matches
    """
    by_id = category_service.get_category(category)
    if by_id is not None:
        return by_id

    by_name = category_service.get_category_by_name(category)
    if by_name is not None:
        return by_name

    raise NotFoundError(errors.category_name_not_found(category))


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, category: str
) -> Category:
    """Resolve a category ID or name, or exit with a CLI error."""
    try:
        return resolve_category(category_service, category)
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
