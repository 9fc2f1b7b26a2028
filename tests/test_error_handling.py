"""Tests for CLI error reporting."""

import click
import pytest

from budgetbook.cli.error_handling import handle_domain_error
from budgetbook.domain.errors import NotFoundError


def make_context():
    return click.Context(click.Command("add"), info_name="add")


def test_domain_error_exits_with_message(capsys, caplog):
    ctx = make_context()

    with caplog.at_level("DEBUG", logger="budgetbook.cli.error_handling"):
        with pytest.raises(click.exceptions.Exit) as exc_info:
            handle_domain_error(ctx, NotFoundError("Category c9 not found"))

    assert exc_info.value.exit_code == 1
    assert capsys.readouterr().err == "Error: Category c9 not found\n"
    assert "add failed with NotFoundError" in caplog.text


def test_parser_error_reported_as_input_error(capsys, caplog):
    ctx = make_context()

    with caplog.at_level("DEBUG", logger="budgetbook.cli.error_handling"):
        with pytest.raises(click.exceptions.Exit):
            handle_domain_error(ctx, ValueError("Invalid amount format: 'abc'"))

    assert "Invalid amount format" in capsys.readouterr().err
    assert "add failed with InputError" in caplog.text
