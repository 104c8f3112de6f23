"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, UTC
from decimal import Decimal

from fundledger.domain.entities import (
    Budget,
    BudgetAllocation,
    BudgetStatus,
    Fund,
    TransactionType,
)


NOW = datetime(2024, 6, 1, tzinfo=UTC)


def _budget(target="1000", saved="250"):
    return Budget(
        id="b1",
        name="Laptop",
        target_amount=Decimal(target),
        current_amount=Decimal(saved),
        status=BudgetStatus.ACTIVE,
        allocations=(BudgetAllocation(fund_id="personal", percentage=Decimal("100")),),
        created_at=NOW,
        updated_at=NOW,
    )


class TestFund:
    """Tests for Fund entity."""

    def test_fund_immutability(self):
        fund = Fund(
            id="f1",
            name="Savings",
            description="",
            current_balance=Decimal("0"),
            lifetime_inflow=Decimal("0"),
            lifetime_outflow=Decimal("0"),
            created_at=NOW,
            updated_at=NOW,
        )
        with pytest.raises(FrozenInstanceError):
            fund.current_balance = Decimal("10")

    def test_fund_defaults(self):
        fund = Fund("f1", "Savings", "", Decimal("0"), Decimal("0"), Decimal("0"), NOW, NOW)
        assert fund.color is None
        assert fund.is_tax_fund is False


class TestBudget:
    """Tests for Budget entity."""

    def test_progress_and_remaining(self):
        budget = _budget()
        assert budget.progress == Decimal("25")
        assert budget.remaining == Decimal("750")

    def test_remaining_never_negative(self):
        budget = _budget(saved="1200")
        assert budget.progress == Decimal("120")
        assert budget.remaining == Decimal("0")


def test_enum_values():
    assert TransactionType("INCOME") is TransactionType.INCOME
    assert TransactionType.EXPENSE.value == "EXPENSE"
    assert [status.value for status in BudgetStatus] == ["ACTIVE", "COMPLETED", "ARCHIVED"]
