"""Seed funds and distribution for a fresh ledger."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from fundledger.domain.entities import DistributionEntry, FinancialState, Fund
from fundledger.domain.tax import TAX_FUND_ID


# (id, name, description, color)
DEFAULT_FUNDS = [
    ("business-savings", "Business Savings", "Operational buffer", "#3B82F6"),
    ("reinvestment", "Reinvestment / Growth", "Business expansion", "#10B981"),
    ("personal", "Personal", "Owner's salary", "#8B5CF6"),
    ("emergency", "Emergency Fund", "Unexpected needs", "#EF4444"),
    ("baby", "Baby Fund", "Child-related expenses", "#F59E0B"),
    ("general-savings", "General Savings", "Long-term goals", "#6366F1"),
    ("misc", "Misc / Flex", "Discretionary spending", "#EC4899"),
    (TAX_FUND_ID, "Taxes", "Tax obligations", "#6B7280"),
]

DEFAULT_DISTRIBUTION = [
    ("business-savings", "20"),
    ("reinvestment", "15"),
    ("personal", "25"),
    ("emergency", "10"),
    ("baby", "5"),
    ("general-savings", "10"),
    ("misc", "10"),
    (TAX_FUND_ID, "5"),
]


def new_fund(
    fund_id: str,
    name: str,
    description: str,
    now: datetime,
    color: Optional[str] = None,
    is_tax_fund: bool = False,
) -> Fund:
    """Build a fund with zeroed balances."""
    return Fund(
        id=fund_id,
        name=name,
        description=description,
        current_balance=Decimal("0"),
        lifetime_inflow=Decimal("0"),
        lifetime_outflow=Decimal("0"),
        created_at=now,
        updated_at=now,
        color=color,
        is_tax_fund=is_tax_fund,
    )


def default_tax_fund(now: datetime) -> Fund:
    """Build the reserved tax fund."""
    fund_id, name, description, color = DEFAULT_FUNDS[-1]
    return new_fund(fund_id, name, description, now, color=color, is_tax_fund=True)


def default_funds(now: datetime) -> dict[str, Fund]:
    """Build the pre-configured fund collection."""
    funds = {
        fund_id: new_fund(fund_id, name, description, now, color=color)
        for fund_id, name, description, color in DEFAULT_FUNDS
        if fund_id != TAX_FUND_ID
    }
    funds[TAX_FUND_ID] = default_tax_fund(now)
    return funds


def default_distribution() -> tuple[DistributionEntry, ...]:
    """Build the default distribution, tax share included."""
    return tuple(
        DistributionEntry(fund_id=fund_id, percentage=Decimal(percentage))
        for fund_id, percentage in DEFAULT_DISTRIBUTION
    )


def default_state(now: datetime) -> FinancialState:
    """Build the state of a freshly initialized ledger."""
    return FinancialState(
        funds=default_funds(now),
        transactions=(),
        profit_distribution=default_distribution(),
        tax_enabled=True,
        last_updated=now,
    )
