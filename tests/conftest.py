"""Shared pytest fixtures for fundledger tests."""

import tempfile
import os
from datetime import date, datetime, UTC
from decimal import Decimal
import pytest

from fundledger.database.factories import create_sqlite_database
from fundledger.domain.backup import BackupService
from fundledger.domain.budget import BudgetService
from fundledger.domain.defaults import default_state, new_fund
from fundledger.domain.entities import DistributionEntry, FinancialState
from fundledger.domain.fund import FundService
from fundledger.domain.report import ReportService
from fundledger.domain.settings import SettingsService
from fundledger.domain.transaction import TransactionService


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)
TODAY = date(2024, 6, 1)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fund_service(temp_db):
    """Create a FundService with a temporary database."""
    return FundService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def settings_service(temp_db):
    """Create a SettingsService with a temporary database."""
    return SettingsService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def default_ledger():
    """A freshly initialized ledger state with fixed timestamps."""
    return default_state(NOW)


@pytest.fixture
def two_fund_state():
    """Two empty funds A and B with a 60/40 distribution and no tax."""
    return FinancialState(
        funds={
            "A": new_fund("A", "Fund A", "", NOW),
            "B": new_fund("B", "Fund B", "", NOW),
        },
        transactions=(),
        profit_distribution=(
            DistributionEntry(fund_id="A", percentage=Decimal("60")),
            DistributionEntry(fund_id="B", percentage=Decimal("40")),
        ),
        tax_enabled=False,
        last_updated=NOW,
    )


@pytest.fixture
def funded_ledger(transaction_service):
    """Persisted default ledger after one income of 1000 with cost 300."""
    transaction_service.submit_income(
        amount=Decimal("1000"),
        cost_of_production=Decimal("300"),
        date=date(2024, 1, 15),
        description="Client A",
    )
    return transaction_service


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
