"""Tests for CLI month selection helper."""

from datetime import date

import click
import pytest

from budgetbook.cli.date_filters import resolve_cli_month

TODAY = date(2024, 3, 17)


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_month_rejects_both_flags(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_month(_ctx(), month=None, this_month=True, last_month=True, today=TODAY)

    assert excinfo.value.exit_code == 1
    assert "Only one of --this-month and --last-month" in capsys.readouterr().err


def test_resolve_cli_month_rejects_flag_with_month(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_month(_ctx(), month="2024-01", last_month=True, today=TODAY)

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_month_rejects_invalid_month(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_month(_ctx(), month="whenever", today=TODAY)

    assert "Invalid month" in capsys.readouterr().err


def test_resolve_cli_month_defaults_to_current_month():
    assert resolve_cli_month(_ctx(), month=None, today=TODAY) == date(2024, 3, 1)


def test_resolve_cli_month_this_month():
    assert resolve_cli_month(_ctx(), month=None, this_month=True, today=TODAY) == date(2024, 3, 1)


def test_resolve_cli_month_last_month():
    assert resolve_cli_month(_ctx(), month=None, last_month=True, today=TODAY) == date(2024, 2, 1)


def test_resolve_cli_month_explicit_month():
    assert resolve_cli_month(_ctx(), month="2023-11", today=TODAY) == date(2023, 11, 1)
