"""Tests for CLI date filter helper."""

from datetime import date

import click
import pytest

from ledgerbook.cli.date_filters import resolve_cli_date_range
from ledgerbook.utils.date_parser import get_date_range


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_rejects_period_with_explicit_dates(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(), start_date="2024-04-01", end_date=None, period="this-fy"
        )

    assert excinfo.value.exit_code == 1
    assert "--period cannot be combined" in capsys.readouterr().err


def test_period_resolves_to_range():
    start, end = resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period="last-fy")
    assert (start, end) == get_date_range("last-fy")


def test_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(), start_date="2024-04-01", end_date="2024-06-30", period=None
    )
    assert start == date(2024, 4, 1)
    assert end == date(2024, 6, 30)


def test_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(_ctx(), start_date="garbage", end_date=None, period=None)
    assert "Invalid start date" in capsys.readouterr().err


def test_start_after_end(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(), start_date="2024-06-30", end_date="2024-04-01", period=None
        )
    assert "must not be after" in capsys.readouterr().err


def test_default_range_when_nothing_given():
    default = (date(2024, 4, 1), date(2025, 3, 31))
    assert (
        resolve_cli_date_range(
            _ctx(), start_date=None, end_date=None, period=None, default_range=default
        )
        == default
    )
