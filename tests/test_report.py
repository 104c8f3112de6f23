"""Tests for the report command."""

from datetime import date
from decimal import Decimal

from fundledger.cli.main import cli


def run(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_report_all_time(cli_runner, temp_db, funded_ledger):
    funded_ledger.submit_expense(Decimal("60"), "personal", date(2024, 2, 1), "Groceries")
    funded_ledger.submit_expense(Decimal("15"), "misc", date(2024, 2, 2), "Cinema")

    result = run(cli_runner, temp_db, "report")

    assert result.exit_code == 0
    assert "Report: all time" in result.output
    assert "$1,000.00" in result.output
    assert "$700.00" in result.output
    assert "$75.00" in result.output
    assert "Profit distributed:" in result.output
    assert "Spent by fund:" in result.output
    lines = result.output.splitlines()
    top = lines.index("Top expenses:")
    assert "Groceries" in lines[top + 1]
    assert "Cinema" in lines[top + 2]


def test_report_date_range(cli_runner, temp_db, funded_ledger):
    funded_ledger.submit_expense(Decimal("60"), "personal", date(2024, 2, 1), "Groceries")

    result = run(
        cli_runner, temp_db, "report", "--start-date", "2024-02-01", "--end-date", "2024-02-29"
    )

    assert result.exit_code == 0
    assert "Report: 2024-02-01 to 2024-02-29" in result.output
    assert "Profit distributed:" not in result.output
    assert "Groceries" in result.output


def test_report_top_limit(cli_runner, temp_db, funded_ledger):
    funded_ledger.submit_expense(Decimal("60"), "personal", date(2024, 2, 1), "Groceries")
    funded_ledger.submit_expense(Decimal("15"), "misc", date(2024, 2, 2), "Cinema")

    result = run(cli_runner, temp_db, "report", "--top", "1")

    assert result.exit_code == 0
    assert "Groceries" in result.output
    assert "Cinema" not in result.output


def test_report_period_flag(cli_runner, temp_db, funded_ledger):
    result = run(cli_runner, temp_db, "report", "--this-month")

    assert result.exit_code == 0
    assert "Report:" in result.output
    assert "all time" not in result.output


def test_report_rejects_conflicting_periods(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "report", "--this-month", "--last-month")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_report_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "report")

    assert result.exit_code == 0
    assert "$0.00" in result.output
    assert "Top expenses:" not in result.output
