"""Tests for CLI date filter helpers."""

from datetime import date

import click
import pytest
from click.testing import CliRunner

from fundledger.cli.date_filters import (
    collect_period_flags,
    period_options,
    resolve_cli_date_range,
)
from fundledger.utils.date_parser import PERIODS, get_date_range, parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-month": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date=None,
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    err = capsys.readouterr().err
    assert "Only one period option" in err


def test_resolve_cli_date_range_rejects_period_with_start_end(capsys):
    period_flags = {"this-quarter": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-01-01",
            end_date=None,
            period_flags=period_flags,
        )

    assert excinfo.value.exit_code == 1
    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    expected = get_date_range("last-quarter")
    result = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={"last-quarter": True, "this-month": False},
    )

    assert result == expected


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(),
        start_date="2024-01-02",
        end_date="2024-01-05",
        period_flags={},
    )

    assert start == parse_date("2024-01-02")
    assert end == parse_date("2024-01-05")


def test_resolve_cli_date_range_applies_default_range():
    default_range = (date(2020, 1, 1), date(2020, 1, 31))

    result = resolve_cli_date_range(
        _ctx(),
        start_date=None,
        end_date=None,
        period_flags={},
        default_range=default_range,
    )

    assert result == default_range


def test_resolve_cli_date_range_no_default_range():
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={}
    ) == (None, None)


def test_resolve_cli_date_range_invalid_start_date(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(
            _ctx(),
            start_date="not-a-date",
            end_date=None,
            period_flags={},
        )

    assert excinfo.value.exit_code == 1
    assert "Invalid start date" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_reversed_range(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(),
            start_date="2024-02-01",
            end_date="2024-01-01",
            period_flags={},
        )

    assert "Start date must not be after end date" in capsys.readouterr().err


def test_period_options_adds_one_flag_per_period():
    @click.command()
    @period_options
    def command(**kwargs):
        flags = collect_period_flags(kwargs)
        click.echo(",".join(period for period, is_set in flags.items() if is_set))
        click.echo(f"leftover={sorted(kwargs)}")

    assert {param.name for param in command.params} == {p.replace("-", "_") for p in PERIODS}

    result = CliRunner().invoke(command, ["--last-quarter"])
    assert result.exit_code == 0
    assert "last-quarter\n" in result.output
    assert "leftover=[]" in result.output
